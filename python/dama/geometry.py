"""Coordinates and diagonal directions for the dama board grid.

Every piece lives on a dark square and only ever travels along diagonals,
so the move handlers share the direction tables defined here instead of
spelling out ``(dr, dc)`` pairs in each handler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


Direction = Tuple[int, int]


@dataclass(frozen=True)
class Coord:
    """A board square addressed by ``row`` and ``col`` (both zero based)."""

    row: int
    col: int

    def step(self, direction: Direction, count: int = 1) -> "Coord":
        """Return the square ``count`` steps away along ``direction``."""

        dr, dc = direction
        return Coord(self.row + dr * count, self.col + dc * count)

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


# fmt: off
UP_LEFT:    Direction = (-1, -1)
UP_RIGHT:   Direction = (-1, 1)
DOWN_LEFT:  Direction = (1, -1)
DOWN_RIGHT: Direction = (1, 1)
# fmt: on

ALL_DIAGONALS: Tuple[Direction, ...] = (UP_LEFT, UP_RIGHT, DOWN_LEFT, DOWN_RIGHT)

LIGHT_FORWARD: Tuple[Direction, ...] = (UP_LEFT, UP_RIGHT)
DARK_FORWARD: Tuple[Direction, ...] = (DOWN_LEFT, DOWN_RIGHT)


def forward_diagonals(owner: str) -> Tuple[Direction, ...]:
    """Return the two diagonals a pawn of ``owner`` may move along.

    Light starts at the bottom of the board and advances toward row 0.
    """

    if owner == "light":
        return LIGHT_FORWARD
    if owner == "dark":
        return DARK_FORWARD
    raise ValueError(f"Unknown owner: {owner}")
