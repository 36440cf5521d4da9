from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Player(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    def __str__(self) -> str:
        return self.value


class Rank(str, Enum):
    PAWN = "pawn"
    KING = "king"


# Flip between players
def opponent(player: Player) -> Player:
    return Player.DARK if player == Player.LIGHT else Player.LIGHT


@dataclass(eq=False)
class Piece:
    """A single dama piece.

    ``owner`` never changes; ``rank`` goes from pawn to king exactly once, in
    place, so every reference to the piece sees the promotion. Pieces
    compare by identity.
    """

    owner: Player
    rank: Rank = Rank.PAWN

    def __post_init__(self) -> None:
        self.owner = Player(self.owner)
        self.rank = Rank(self.rank)

    @property
    def is_king(self) -> bool:
        return self.rank == Rank.KING

    def promote(self) -> None:
        self.rank = Rank.KING

    def copy(self) -> "Piece":
        return Piece(self.owner, self.rank)

    def __repr__(self) -> str:
        return f"Piece({self.owner.value}, {self.rank.value})"


def pawn(owner: Player) -> Piece:
    return Piece(owner, Rank.PAWN)


def king(owner: Player) -> Piece:
    return Piece(owner, Rank.KING)
