from __future__ import annotations

import pytest

from dama.game.board import Board
from dama.game.factory import create_game


@pytest.fixture
def empty_board() -> Board:
    board = Board()
    board.clear_board()
    return board


@pytest.fixture
def empty_game():
    """Factory for games whose board starts empty."""

    def _make(**kwargs):
        game = create_game(**kwargs)
        game.clear_board()
        return game

    return _make
