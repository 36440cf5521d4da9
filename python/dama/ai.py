from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Type

from .game.board import MoveOption
from .game.pieces import Player
from .game.rules import Game
from .geometry import Coord
from .score import MaterialScorer, Scorer


LOG = logging.getLogger("dama.ai")

Score = float


class UnknownOpponentError(ValueError):
    pass


@dataclass(frozen=True)
class PlannedMove:
    origin: Coord
    target: Coord


class Opponent:
    """Chooses a move for whichever side is to move in ``game``."""

    name = "Opponent"

    def make_move(self, game: Game) -> Optional[PlannedMove]:
        raise NotImplementedError

    @property
    def description(self) -> str:
        return self.name


class RandomOpponent(Opponent):
    name = "Random Moves"

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def make_move(self, game: Game) -> Optional[PlannedMove]:
        return self._pick(game.all_moves())

    def _pick(self, moves: List[Tuple[Coord, MoveOption]]) -> Optional[PlannedMove]:
        if not moves:
            return None
        origin, option = self._rng.choice(moves)
        return PlannedMove(origin=origin, target=option.to)


class GreedyOpponent(RandomOpponent):
    """Random choice, but never passes up a capture."""

    name = "Greedy"

    def make_move(self, game: Game) -> Optional[PlannedMove]:
        moves = game.all_moves()
        captures = [(origin, option) for origin, option in moves if option.is_capture]
        return self._pick(captures or moves)


class MinimaxOpponent(Opponent):
    """Depth-limited minimax with alpha-beta pruning.

    Every candidate move is played on a :meth:`Game.snapshot`, so the game
    handed to :meth:`make_move` is never modified. Scores are always from
    the point of view of the side to move at the root.
    """

    name = "Minimax"

    def __init__(self, max_depth: int = 5, scorer: Optional[Scorer] = None) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.max_depth = max_depth
        self.scorer: Scorer = scorer or MaterialScorer()

    def make_move(self, game: Game) -> Optional[PlannedMove]:
        # Root of the search; alpha tightens as better moves are found
        root_player = game.player
        moves = game.all_moves()
        if not moves:
            return None

        best_score = -math.inf
        best_move: Optional[Tuple[Coord, MoveOption]] = None

        alpha = -math.inf
        beta = math.inf

        for origin, option in moves:
            child_state = game.snapshot()
            if not child_state.move_piece(origin, option.to):
                continue

            score = self._minimax(child_state, self.max_depth - 1, alpha, beta, root_player)

            if score > best_score or best_move is None:
                best_score = score
                best_move = (origin, option)

            alpha = max(alpha, best_score)

        if best_move is None:
            return None

        origin, option = best_move
        LOG.debug("%s picked %s -> %s (score %.2f)", self.description, origin, option.to, best_score)
        return PlannedMove(origin=origin, target=option.to)

    def _minimax(self, state: Game, depth: int, alpha: float, beta: float, root_player: Player) -> Score:
        # Depth-limited minimax core
        if state.has_ended or depth <= 0:
            return self.scorer.evaluate(state, root_player)

        moves = state.all_moves()
        if not moves:
            return self.scorer.evaluate(state, root_player)

        maximizing = state.player == root_player

        if maximizing:
            value = -math.inf
            legal_branch_found = False
            for origin, option in moves:
                child_state = state.snapshot()
                if not child_state.move_piece(origin, option.to):
                    continue

                legal_branch_found = True
                value = max(value, self._minimax(child_state, depth - 1, alpha, beta, root_player))
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            if not legal_branch_found:
                return self.scorer.evaluate(state, root_player)
            return value

        value = math.inf
        legal_branch_found = False
        for origin, option in moves:
            child_state = state.snapshot()
            if not child_state.move_piece(origin, option.to):
                continue

            legal_branch_found = True
            value = min(value, self._minimax(child_state, depth - 1, alpha, beta, root_player))
            beta = min(beta, value)
            if beta <= alpha:
                break
        if not legal_branch_found:
            return self.scorer.evaluate(state, root_player)
        return value

    @property
    def description(self) -> str:
        return f"Minimax(depth={self.max_depth})"


OPPONENTS: Dict[str, Type[Opponent]] = {
    "random": RandomOpponent,
    "greedy": GreedyOpponent,
    "minimax": MinimaxOpponent,
}


@dataclass(frozen=True)
class OpponentOption:
    id: str
    name: str
    opponent: Opponent


def create_opponent(opponent_id: str) -> Opponent:
    """Build a fresh opponent by its identifier.

    Raises
    ------
    UnknownOpponentError
        If ``opponent_id`` is not one of :data:`OPPONENTS` (case-insensitive).
    """

    key = opponent_id.strip().lower()
    if key not in OPPONENTS:
        available = ", ".join(OPPONENTS)
        raise UnknownOpponentError(f"Unknown opponent '{opponent_id}'. Available: {available}")
    return OPPONENTS[key]()


def opponent_name(opponent_id: str) -> str:
    return create_opponent(opponent_id).name


def available_opponents() -> List[OpponentOption]:
    return [OpponentOption(id=key, name=cls.name, opponent=cls()) for key, cls in OPPONENTS.items()]


__all__ = [
    "GreedyOpponent",
    "MinimaxOpponent",
    "OPPONENTS",
    "Opponent",
    "OpponentOption",
    "PlannedMove",
    "RandomOpponent",
    "UnknownOpponentError",
    "available_opponents",
    "create_opponent",
    "opponent_name",
]
