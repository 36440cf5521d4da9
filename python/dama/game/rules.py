"""Higher-level game flow built on top of :mod:`dama.game.board`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from ..audio import AudioService, SilentAudioService
from ..geometry import Coord
from .board import Board, MoveOption, MoveResult
from .move_service import MoveService
from .pieces import Piece, Player, opponent
from .policies import DrawRule, KingsOnlyDrawRule, TurnPolicy

if TYPE_CHECKING:  # pragma: no cover
    from ..ai import Opponent


LOG = logging.getLogger("dama.game")


class Game:
    """Owns the board, whose turn it is and whether the match is over.

    Illegal requests never raise: :meth:`get_valid_moves` answers with an
    empty list and :meth:`move_piece` with ``False``, leaving the state
    untouched.
    """

    def __init__(
        self,
        board: Board,
        move_service: MoveService,
        turn_policy: TurnPolicy,
        starting_player: Player = Player.LIGHT,
        audio_service: Optional[AudioService] = None,
        require_capture: bool = False,
        draw_rule: Optional[DrawRule] = None,
    ) -> None:
        self._board = board
        self._move_service = move_service
        self._turn_policy = turn_policy
        self._starting_player = Player(starting_player)
        self._audio = audio_service if audio_service is not None else SilentAudioService()
        self.require_capture = require_capture
        self._draw_rule: DrawRule = draw_rule if draw_rule is not None else KingsOnlyDrawRule()

        self._current = self._starting_player
        self._debug = False
        self._ended = False
        self._winner: Optional[Player] = None
        self._draw = False
        self._last_result: Optional[MoveResult] = None
        self._ai_opponents: Dict[Player, "Opponent"] = {}

    # ------------------------------------------------------------------
    # Query surface
    # ------------------------------------------------------------------
    @property
    def size(self) -> int:
        return self._board.size

    @property
    def player(self) -> Player:
        return self._current

    @property
    def audio(self) -> AudioService:
        return self._audio

    @property
    def has_ended(self) -> bool:
        return self._ended

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    @property
    def is_draw(self) -> bool:
        return self._draw

    @property
    def is_debug_mode_enabled(self) -> bool:
        return self._debug

    @property
    def last_move_result(self) -> Optional[MoveResult]:
        return self._last_result

    def get_piece(self, row: int, col: int) -> Optional[Piece]:
        return self._board.get_piece(row, col)

    def remaining(self, owner: Player) -> int:
        return self._board.remaining(owner)

    def render(self) -> str:
        return self._board.render()

    # ------------------------------------------------------------------
    # Board mutation
    # ------------------------------------------------------------------
    def set_piece(self, row: int, col: int, piece: Optional[Piece]) -> None:
        self._board.set_piece(row, col, piece)

    def clear_board(self) -> None:
        self._board.clear_board()

    def reset_board(self) -> None:
        self._board.clear_board()
        self._board.setup_pieces()

    def reset(self) -> None:
        self.reset_board()
        self._current = self._starting_player
        self._ended = False
        self._winner = None
        self._draw = False
        self._last_result = None
        LOG.debug("Game reset, %s to move", self._current.value)

    def toggle_debug_mode(self) -> bool:
        self._debug = not self._debug
        return self._debug

    # ------------------------------------------------------------------
    # AI bindings
    # ------------------------------------------------------------------
    def set_ai_opponent(self, player: Player, ai_opponent: Optional["Opponent"]) -> None:
        if ai_opponent is None:
            self._ai_opponents.pop(Player(player), None)
        else:
            self._ai_opponents[Player(player)] = ai_opponent

    def get_ai_opponent(self, player: Player) -> Optional["Opponent"]:
        return self._ai_opponents.get(Player(player))

    def is_current_player_ai(self) -> bool:
        return self._current in self._ai_opponents

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------
    def get_valid_moves(self, origin: Coord) -> List[MoveOption]:
        piece = self._board.piece_at(origin)
        if piece is None or not self._turn_policy.can_move(piece, self._current):
            return []

        moves = self._move_service.get_valid_moves(origin)
        if self.require_capture and self._capture_available():
            moves = [move for move in moves if move.is_capture]
        return moves

    def all_moves(self) -> List[Tuple[Coord, MoveOption]]:
        """Every legal ``(origin, option)`` pair for the side to move."""

        moves: List[Tuple[Coord, MoveOption]] = []
        for origin, _ in list(self._board.pieces(self._current)):
            moves.extend((origin, option) for option in self.get_valid_moves(origin))
        return moves

    def move_piece(self, origin: Coord, target: Coord) -> bool:
        piece = self._board.piece_at(origin)
        if piece is None or not self._turn_policy.can_move(piece, self._current):
            LOG.debug("Rejected move %s -> %s: not movable by %s", origin, target, self._current.value)
            return False

        if self.require_capture and not any(move.to == target for move in self.get_valid_moves(origin)):
            LOG.debug("Rejected move %s -> %s: capture required", origin, target)
            return False

        result = self._move_service.move(origin, target)
        if not result.success:
            LOG.debug("Rejected move %s -> %s: not a legal destination", origin, target)
            return False

        self._last_result = result
        self._current = self._turn_policy.next(self._current)
        self._check_game_end()
        return True

    def snapshot(self) -> "Game":
        """Return an independent copy suitable for speculative play.

        Piece placement, ranks, the side to move and the end-of-game flags
        are copied; policies and the generator are stateless and shared.
        AI bindings and the audio sink are not carried over.
        """

        board = self._board.copy()
        service = MoveService(board, self._move_service.generator, self._move_service.promotion)
        clone = Game(
            board,
            service,
            self._turn_policy,
            starting_player=self._starting_player,
            require_capture=self.require_capture,
            draw_rule=self._draw_rule,
        )
        clone._current = self._current
        clone._ended = self._ended
        clone._winner = self._winner
        clone._draw = self._draw
        return clone

    # ------------------------------------------------------------------
    # End of game
    # ------------------------------------------------------------------
    def _capture_available(self) -> bool:
        # Quick scan for mandatory captures
        for origin, piece in list(self._board.pieces()):
            if not self._turn_policy.can_move(piece, self._current):
                continue
            if any(move.is_capture for move in self._move_service.get_valid_moves(origin)):
                return True
        return False

    def _current_player_has_valid_moves(self) -> bool:
        for origin, _ in list(self._board.pieces(self._current)):
            if self.get_valid_moves(origin):
                return True
        return False

    def _check_game_end(self) -> None:
        if self._ended:
            return

        if not self._current_player_has_valid_moves():
            self._ended = True
            self._winner = opponent(self._current)
            LOG.debug("Game over: %s has no moves, %s wins", self._current.value, self._winner.value)
            return

        if self._draw_rule.is_draw(self._board, self._current, self.get_valid_moves):
            self._ended = True
            self._draw = True
            LOG.debug("Game over: draw")
