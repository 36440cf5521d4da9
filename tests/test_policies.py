from __future__ import annotations

import pytest

from dama.game.board import Board
from dama.game.handlers import HandlerChainGenerator
from dama.game.move_service import MoveService
from dama.game.pieces import Player, king, pawn
from dama.game.policies import AlternatingTurnPolicy, DamaPromotionPolicy, FreeTurnPolicy, KingsOnlyDrawRule
from dama.geometry import Coord


LIGHT = Player.LIGHT
DARK = Player.DARK


def make_service(board):
    return MoveService(board, HandlerChainGenerator(), DamaPromotionPolicy())


@pytest.mark.parametrize(
    "piece,row,expected",
    [
        (pawn(LIGHT), 0, True),
        (pawn(LIGHT), 1, False),
        (pawn(LIGHT), 7, False),
        (pawn(DARK), 7, True),
        (pawn(DARK), 0, False),
        (king(LIGHT), 0, False),
        (king(DARK), 7, False),
    ],
)
def test_promotion_policy(piece, row, expected):
    assert DamaPromotionPolicy().should_promote(piece, row, 8) is expected


def test_promotion_respects_board_size():
    assert DamaPromotionPolicy().should_promote(pawn(DARK), 5, 6)


def test_alternating_turn_policy():
    policy = AlternatingTurnPolicy()

    assert policy.can_move(pawn(LIGHT), LIGHT)
    assert not policy.can_move(pawn(DARK), LIGHT)
    assert policy.next(LIGHT) == DARK
    assert policy.next(DARK) == LIGHT


def test_free_turn_policy():
    policy = FreeTurnPolicy()

    assert policy.can_move(pawn(DARK), LIGHT)
    assert policy.next(LIGHT) == LIGHT


class TestMoveService:
    def test_rejects_empty_origin(self, empty_board):
        result = make_service(empty_board).move(Coord(5, 2), Coord(4, 3))
        assert result.success is False

    def test_rejects_illegal_destination_without_mutation(self, empty_board):
        piece = pawn(LIGHT)
        empty_board.set_piece(5, 2, piece)

        result = make_service(empty_board).move(Coord(5, 2), Coord(3, 2))

        assert result.success is False
        assert empty_board.get_piece(5, 2) is piece
        assert empty_board.get_piece(3, 2) is None

    def test_relocates_piece(self, empty_board):
        piece = pawn(LIGHT)
        empty_board.set_piece(5, 2, piece)

        result = make_service(empty_board).move(Coord(5, 2), Coord(4, 1))

        assert result.success and result.captured is None
        assert empty_board.get_piece(4, 1) is piece
        assert empty_board.get_piece(5, 2) is None

    def test_removes_captured_piece(self, empty_board):
        empty_board.set_piece(5, 2, pawn(LIGHT))
        empty_board.set_piece(4, 3, pawn(DARK))

        result = make_service(empty_board).move(Coord(5, 2), Coord(3, 4))

        assert result.success
        assert result.captured == Coord(4, 3)
        assert empty_board.get_piece(4, 3) is None
        assert empty_board.get_piece(3, 4).owner == LIGHT

    def test_removes_every_piece_of_a_chain(self, empty_board):
        empty_board.set_piece(6, 1, pawn(LIGHT))
        empty_board.set_piece(5, 2, pawn(DARK))
        empty_board.set_piece(3, 4, pawn(DARK))

        result = make_service(empty_board).move(Coord(6, 1), Coord(2, 5))

        assert result.success
        assert result.captures == (Coord(5, 2), Coord(3, 4))
        assert empty_board.remaining(DARK) == 0

    def test_promotes_same_instance(self, empty_board):
        piece = pawn(LIGHT)
        empty_board.set_piece(1, 2, piece)

        result = make_service(empty_board).move(Coord(1, 2), Coord(0, 1))

        assert result.success and result.promoted
        assert empty_board.get_piece(0, 1) is piece
        assert piece.is_king and piece.owner == LIGHT

    def test_dark_promotes_on_last_row(self, empty_board):
        empty_board.set_piece(6, 1, pawn(DARK))

        result = make_service(empty_board).move(Coord(6, 1), Coord(7, 2))

        assert result.promoted
        assert empty_board.get_piece(7, 2).is_king

    def test_king_does_not_promote_again(self, empty_board):
        empty_board.set_piece(1, 2, king(LIGHT))

        result = make_service(empty_board).move(Coord(1, 2), Coord(0, 1))

        assert result.success and not result.promoted


class TestKingsOnlyDrawRule:
    @staticmethod
    def _no_moves(_square):
        return []

    def test_single_kings_draw(self, empty_board):
        empty_board.set_piece(6, 3, king(LIGHT))
        empty_board.set_piece(0, 1, king(DARK))

        assert KingsOnlyDrawRule().is_draw(empty_board, DARK, self._no_moves)

    def test_pawns_prevent_draw(self, empty_board):
        empty_board.set_piece(6, 3, pawn(LIGHT))
        empty_board.set_piece(0, 1, king(DARK))

        assert not KingsOnlyDrawRule().is_draw(empty_board, DARK, self._no_moves)

    def test_too_many_kings(self, empty_board):
        empty_board.set_piece(6, 3, king(LIGHT))
        empty_board.set_piece(6, 5, king(LIGHT))
        empty_board.set_piece(0, 1, king(DARK))

        assert not KingsOnlyDrawRule().is_draw(empty_board, DARK, self._no_moves)
        assert KingsOnlyDrawRule(max_kings=2).is_draw(empty_board, DARK, self._no_moves)

    def test_available_capture_prevents_draw(self, empty_board):
        empty_board.set_piece(4, 3, king(LIGHT))
        empty_board.set_piece(2, 5, king(DARK))
        service = make_service(empty_board)

        assert not KingsOnlyDrawRule().is_draw(empty_board, DARK, service.get_valid_moves)

    def test_empty_side_is_not_a_draw(self, empty_board):
        empty_board.set_piece(4, 3, king(LIGHT))

        assert not KingsOnlyDrawRule().is_draw(empty_board, DARK, self._no_moves)

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            KingsOnlyDrawRule(max_kings=0)
