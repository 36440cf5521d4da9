from __future__ import annotations

import logging
from typing import List

from ..geometry import Coord
from .board import Board, MoveOption, MoveResult
from .handlers import MoveGenerator
from .policies import PromotionPolicy


LOG = logging.getLogger("dama.game")


class MoveService:
    """Validates a requested move against the generator and applies it."""

    def __init__(self, board: Board, generator: MoveGenerator, promotion: PromotionPolicy) -> None:
        self.board = board
        self.generator = generator
        self.promotion = promotion

    def get_valid_moves(self, origin: Coord) -> List[MoveOption]:
        return self.generator.valid_moves(self.board, origin)

    def move(self, origin: Coord, target: Coord) -> MoveResult:
        piece = self.board.piece_at(origin)
        if piece is None:
            return MoveResult(success=False)

        options = self.get_valid_moves(origin)
        option = next((move for move in options if move.to == target), None)
        if option is None:
            return MoveResult(success=False)

        self.board.set_piece(target.row, target.col, piece)
        self.board.set_piece(origin.row, origin.col, None)

        for captured in option.captures:
            self.board.set_piece(captured.row, captured.col, None)

        promoted = False
        if self.promotion.should_promote(piece, target.row, self.board.size):
            piece.promote()
            promoted = True

        LOG.debug(
            "Moved %s %s -> %s captured=%s promoted=%s",
            piece.owner.value,
            origin,
            target,
            [str(c) for c in option.captures],
            promoted,
        )
        return MoveResult(success=True, captured=option.captured, promoted=promoted)
