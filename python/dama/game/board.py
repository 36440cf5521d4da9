from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from ..geometry import Coord
from .pieces import Piece, Player


BOARD_SIZE = 8
ROWS_PER_SIDE = 3

Captured = Union[Coord, Tuple[Coord, ...], None]


def _as_tuple(captured: Captured) -> Tuple[Coord, ...]:
    if captured is None:
        return ()
    if isinstance(captured, Coord):
        return (captured,)
    return tuple(captured)


@dataclass(frozen=True)
class MoveOption:
    to: Coord
    captured: Captured = None

    @property
    def captures(self) -> Tuple[Coord, ...]:
        return _as_tuple(self.captured)

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_multi_capture(self) -> bool:
        return len(self.captures) > 1


@dataclass
class MoveResult:
    success: bool
    captured: Captured = None
    promoted: bool = False

    @property
    def captures(self) -> Tuple[Coord, ...]:
        return _as_tuple(self.captured)


class Board:
    def __init__(self, size: int = BOARD_SIZE, rows_per_side: int = ROWS_PER_SIDE) -> None:
        if rows_per_side * 2 >= size:
            raise ValueError("rows_per_side must leave at least one empty row between the sides")
        self.size = size
        self.rows_per_side = rows_per_side
        self._grid: List[List[Optional[Piece]]] = self._empty_grid()
        self.setup_pieces()

    def _empty_grid(self) -> List[List[Optional[Piece]]]:
        return [[None] * self.size for _ in range(self.size)]

    def setup_pieces(self) -> None:
        # Rebuild the initial layout
        self._grid = self._empty_grid()
        for row in range(self.size):
            for col in range(self.size):
                if not self.is_dark_square(row, col):
                    continue
                if row < self.rows_per_side:
                    self._grid[row][col] = Piece(Player.DARK)
                elif row >= self.size - self.rows_per_side:
                    self._grid[row][col] = Piece(Player.LIGHT)

    def clear_board(self) -> None:
        self._grid = self._empty_grid()

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def is_dark_square(self, row: int, col: int) -> bool:
        return (row + col) % 2 == 1

    def is_playable(self, square: Coord) -> bool:
        return self.in_bounds(square.row, square.col) and self.is_dark_square(square.row, square.col)

    def get_piece(self, row: int, col: int) -> Optional[Piece]:
        if not self.in_bounds(row, col):
            return None
        return self._grid[row][col]

    def set_piece(self, row: int, col: int, piece: Optional[Piece]) -> None:
        # Writes outside the board or onto light squares are dropped
        if not self.in_bounds(row, col):
            return
        if piece is not None and not self.is_dark_square(row, col):
            return
        self._grid[row][col] = piece

    def piece_at(self, square: Coord) -> Optional[Piece]:
        return self.get_piece(square.row, square.col)

    def is_empty(self, square: Coord) -> bool:
        return self.piece_at(square) is None

    def pieces(self, owner: Optional[Player] = None) -> Iterator[Tuple[Coord, Piece]]:
        for row in range(self.size):
            for col in range(self.size):
                piece = self._grid[row][col]
                if piece is None:
                    continue
                if owner is not None and piece.owner != owner:
                    continue
                yield Coord(row, col), piece

    def remaining(self, owner: Player) -> int:
        return sum(1 for _ in self.pieces(owner))

    def copy(self) -> "Board":
        clone = Board.__new__(Board)
        clone.size = self.size
        clone.rows_per_side = self.rows_per_side
        clone._grid = [[piece.copy() if piece else None for piece in row] for row in self._grid]
        return clone

    def render(self) -> str:
        # Text diagram used by the CLI and debug logging
        symbols = {
            (Player.LIGHT, False): "l",
            (Player.LIGHT, True): "L",
            (Player.DARK, False): "d",
            (Player.DARK, True): "D",
        }
        lines = ["   " + " ".join(str(col) for col in range(self.size))]
        for row in range(self.size):
            cells = []
            for col in range(self.size):
                piece = self._grid[row][col]
                if piece is not None:
                    cells.append(symbols[(piece.owner, piece.is_king)])
                elif self.is_dark_square(row, col):
                    cells.append(".")
                else:
                    cells.append(" ")
            lines.append(f"{row:2} " + " ".join(cells))
        return "\n".join(lines)
