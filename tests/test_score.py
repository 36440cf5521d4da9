from __future__ import annotations

import pytest

from dama.game.factory import create_game
from dama.game.pieces import Player, king, pawn
from dama.geometry import Coord
from dama.score import MaterialScorer, ScoreBreakdown


LIGHT = Player.LIGHT
DARK = Player.DARK


def test_initial_position_is_balanced():
    breakdown = MaterialScorer().breakdown(create_game())

    assert breakdown.light == pytest.approx(13.2)
    assert breakdown.dark == pytest.approx(13.2)
    assert breakdown.delta_for(LIGHT) == pytest.approx(0.0)


def test_king_and_pawn_values(empty_game):
    game = empty_game()
    game.set_piece(4, 3, king(LIGHT))
    game.set_piece(6, 1, pawn(DARK))

    scorer = MaterialScorer()
    breakdown = scorer.breakdown(game)

    assert breakdown.light == pytest.approx(3.0)
    assert breakdown.dark == pytest.approx(1.6)
    assert scorer.evaluate(game, LIGHT) == pytest.approx(1.4)
    assert scorer.evaluate(game, DARK) == pytest.approx(-1.4)


@pytest.mark.parametrize(
    "owner,row,expected",
    [(LIGHT, 7, 1.0), (LIGHT, 1, 1.6), (DARK, 0, 1.0), (DARK, 6, 1.6)],
)
def test_pawn_advance_bonus(owner, row, expected):
    assert MaterialScorer().piece_value(pawn(owner), row, 8) == pytest.approx(expected)


def test_custom_weights():
    scorer = MaterialScorer(pawn_advance_weight=0.0, king_value=5, pawn_value=2)

    assert scorer.piece_value(king(LIGHT), 3, 8) == 5
    assert scorer.piece_value(pawn(DARK), 6, 8) == 2


def test_draw_scores_zero(empty_game):
    game = empty_game()
    game.set_piece(7, 2, king(LIGHT))
    game.set_piece(0, 1, king(DARK))
    game.move_piece(Coord(7, 2), Coord(6, 3))

    assert game.is_draw
    assert MaterialScorer().evaluate(game, LIGHT) == 0.0


def test_breakdown_delta():
    breakdown = ScoreBreakdown(light=5.0, dark=3.5)
    assert breakdown.delta_for(LIGHT) == pytest.approx(1.5)
    assert breakdown.delta_for(DARK) == pytest.approx(-1.5)
