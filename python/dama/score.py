"""Position scoring used by the search opponent and the score side bar."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

from .game.pieces import Piece, Player
from .game.rules import Game


class Scorer(Protocol):
    def evaluate(self, game: Game, player: Player) -> float:
        ...


@dataclass(frozen=True)
class ScoreBreakdown:
    light: float
    dark: float

    def delta_for(self, perspective: Player) -> float:
        if perspective == Player.LIGHT:
            return self.light - self.dark
        return self.dark - self.light


class MaterialScorer:
    """Material plus a small bonus for pawns that have marched forward.

    A king is worth ``king_value``, a pawn ``pawn_value`` plus
    ``pawn_advance_weight`` for every row it has covered toward promotion.
    Finished games score ``+inf`` for the winner, ``-inf`` for the loser and
    ``0`` for a draw.
    """

    def __init__(self, pawn_advance_weight: float = 0.1, king_value: float = 3, pawn_value: float = 1) -> None:
        self.pawn_advance_weight = pawn_advance_weight
        self.king_value = king_value
        self.pawn_value = pawn_value

    def evaluate(self, game: Game, player: Player) -> float:
        if game.has_ended:
            return self._evaluate_terminal(game, player)
        return self.breakdown(game).delta_for(player)

    def breakdown(self, game: Game) -> ScoreBreakdown:
        totals = {Player.LIGHT: 0.0, Player.DARK: 0.0}
        for row in range(game.size):
            for col in range(game.size):
                piece = game.get_piece(row, col)
                if piece is None:
                    continue
                totals[piece.owner] += self.piece_value(piece, row, game.size)
        return ScoreBreakdown(light=totals[Player.LIGHT], dark=totals[Player.DARK])

    def piece_value(self, piece: Piece, row: int, board_size: int) -> float:
        if piece.is_king:
            return self.king_value
        advanced = (board_size - 1 - row) if piece.owner == Player.LIGHT else row
        return self.pawn_value + advanced * self.pawn_advance_weight

    @staticmethod
    def _evaluate_terminal(game: Game, player: Player) -> float:
        if game.is_draw or game.winner is None:
            return 0.0
        return math.inf if game.winner == player else -math.inf
