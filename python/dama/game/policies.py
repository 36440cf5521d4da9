"""Pluggable rule policies: promotion, turn order and draw detection."""

from __future__ import annotations

from typing import Callable, Iterable, List, Protocol

from ..geometry import Coord
from .board import Board, MoveOption
from .pieces import Piece, Player, opponent


class PromotionPolicy(Protocol):
    def should_promote(self, piece: Piece, destination_row: int, board_size: int) -> bool:
        ...


class DamaPromotionPolicy:
    """Pawns become kings on the far row; kings stay kings."""

    def should_promote(self, piece: Piece, destination_row: int, board_size: int) -> bool:
        if piece.is_king:
            return False
        if piece.owner == Player.LIGHT:
            return destination_row == 0
        return destination_row == board_size - 1


class TurnPolicy(Protocol):
    def can_move(self, piece: Piece, current: Player) -> bool:
        ...

    def next(self, current: Player) -> Player:
        ...


class AlternatingTurnPolicy:
    def can_move(self, piece: Piece, current: Player) -> bool:
        return piece.owner == current

    def next(self, current: Player) -> Player:
        return opponent(current)


class FreeTurnPolicy:
    """Any piece may move and the turn never passes; handy for rule tests."""

    def can_move(self, piece: Piece, current: Player) -> bool:
        return True

    def next(self, current: Player) -> Player:
        return current


MovesFor = Callable[[Coord], List[MoveOption]]


class DrawRule(Protocol):
    def is_draw(self, board: Board, to_move: Player, moves_for: MovesFor) -> bool:
        ...


class KingsOnlyDrawRule:
    """Declare a draw once both sides are down to a handful of kings.

    The position is drawn when every remaining piece is a king, each side
    keeps between one and ``max_kings`` of them, and the side to move has
    no capture available. ``moves_for`` returns the legal moves of a square
    for the side to move.
    """

    def __init__(self, max_kings: int = 1) -> None:
        if max_kings < 1:
            raise ValueError("max_kings must be at least 1")
        self.max_kings = max_kings

    def is_draw(self, board: Board, to_move: Player, moves_for: MovesFor) -> bool:
        for side in (Player.LIGHT, Player.DARK):
            pieces = [piece for _, piece in board.pieces(side)]
            if not pieces or len(pieces) > self.max_kings:
                return False
            if not all(piece.is_king for piece in pieces):
                return False

        return not _any_capture(moves_for(square) for square, _ in board.pieces(to_move))


def _any_capture(move_lists: Iterable[List[MoveOption]]) -> bool:
    return any(option.is_capture for moves in move_lists for option in moves)
