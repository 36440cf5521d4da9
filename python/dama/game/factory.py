from __future__ import annotations

from typing import Optional

from ..audio import AudioService, SilentAudioService
from ..config import DamaConfig
from .board import Board
from .handlers import DEFAULT_HANDLERS, HandlerChainGenerator, MoveGenerator
from .move_service import MoveService
from .pieces import Player
from .policies import AlternatingTurnPolicy, DamaPromotionPolicy, DrawRule, KingsOnlyDrawRule, PromotionPolicy, TurnPolicy
from .rules import Game


def create_game(
    board: Optional[Board] = None,
    move_generator: Optional[MoveGenerator] = None,
    promotion_policy: Optional[PromotionPolicy] = None,
    turn_policy: Optional[TurnPolicy] = None,
    starting_player: Optional[Player] = None,
    audio_service: Optional[AudioService] = None,
    require_capture: Optional[bool] = None,
    draw_rule: Optional[DrawRule] = None,
    config: Optional[DamaConfig] = None,
) -> Game:
    """Assemble a :class:`Game`, filling every missing collaborator.

    Defaults: a standard 8x8 board with 12 pawns a side, the full handler
    chain, promotion on the far row, alternating turns, light to move,
    silent audio, captures not forced and the kings-only draw rule. Values
    from ``config`` replace the built-in defaults for the board shape,
    starting player and forced captures.
    """

    config = config or DamaConfig()
    board = board or Board(config.board_size, config.rows_per_side)
    generator = move_generator or HandlerChainGenerator(DEFAULT_HANDLERS)
    promotion = promotion_policy or DamaPromotionPolicy()
    move_service = MoveService(board, generator, promotion)

    return Game(
        board,
        move_service,
        turn_policy or AlternatingTurnPolicy(),
        starting_player=starting_player or config.starting_player,
        audio_service=audio_service or SilentAudioService(),
        require_capture=config.require_capture if require_capture is None else require_capture,
        draw_rule=draw_rule or KingsOnlyDrawRule(),
    )
