from __future__ import annotations

import math
import random

import pytest

from dama.ai import (
    OPPONENTS,
    GreedyOpponent,
    MinimaxOpponent,
    PlannedMove,
    RandomOpponent,
    UnknownOpponentError,
    available_opponents,
    create_opponent,
    opponent_name,
)
from dama.game.factory import create_game
from dama.game.pieces import Player, king, pawn
from dama.geometry import Coord
from dama.score import MaterialScorer


LIGHT = Player.LIGHT
DARK = Player.DARK


def capture_position(empty_game):
    game = empty_game()
    game.set_piece(5, 2, pawn(LIGHT))
    game.set_piece(5, 6, pawn(LIGHT))
    game.set_piece(4, 3, pawn(DARK))
    game.set_piece(0, 1, pawn(DARK))
    return game


def legal_pairs(game):
    return {(origin, option.to) for origin, option in game.all_moves()}


def test_random_opponent_returns_legal_move():
    game = create_game()
    agent = RandomOpponent(rng=random.Random(3))

    for _ in range(10):
        planned = agent.make_move(game)
        assert (planned.origin, planned.target) in legal_pairs(game)


def test_random_opponent_without_moves(empty_game):
    assert RandomOpponent().make_move(empty_game()) is None


@pytest.mark.parametrize("seed", range(5))
def test_greedy_prefers_captures(empty_game, seed):
    game = capture_position(empty_game)

    planned = GreedyOpponent(rng=random.Random(seed)).make_move(game)
    assert planned == PlannedMove(origin=Coord(5, 2), target=Coord(3, 4))


def test_greedy_falls_back_to_any_move():
    game = create_game()
    planned = GreedyOpponent(rng=random.Random(1)).make_move(game)
    assert (planned.origin, planned.target) in legal_pairs(game)


def test_greedy_without_moves(empty_game):
    assert GreedyOpponent().make_move(empty_game()) is None


def test_minimax_takes_material(empty_game):
    game = capture_position(empty_game)

    planned = MinimaxOpponent(max_depth=1).make_move(game)
    assert planned == PlannedMove(origin=Coord(5, 2), target=Coord(3, 4))


def test_minimax_finds_winning_capture(empty_game):
    game = empty_game()
    game.set_piece(5, 2, pawn(LIGHT))
    game.set_piece(4, 3, pawn(DARK))

    planned = MinimaxOpponent(max_depth=3).make_move(game)
    assert planned == PlannedMove(origin=Coord(5, 2), target=Coord(3, 4))


def test_minimax_plays_for_dark(empty_game):
    game = empty_game(starting_player=DARK)
    game.set_piece(3, 2, pawn(DARK))
    game.set_piece(4, 1, pawn(LIGHT))
    game.set_piece(7, 6, pawn(LIGHT))

    planned = MinimaxOpponent(max_depth=2).make_move(game)
    assert planned == PlannedMove(origin=Coord(3, 2), target=Coord(5, 0))


def test_minimax_does_not_mutate_game():
    game = create_game()
    before = game.render()

    planned = MinimaxOpponent(max_depth=2).make_move(game)

    assert planned is not None
    assert game.render() == before
    assert game.player == LIGHT
    assert not game.has_ended


def test_minimax_without_moves(empty_game):
    assert MinimaxOpponent(max_depth=2).make_move(empty_game()) is None


def test_minimax_uses_pluggable_scorer(empty_game):
    class PreferKingsScorer(MaterialScorer):
        def evaluate(self, game, player):
            if game.has_ended:
                return super().evaluate(game, player)
            return sum(1 for _, piece in game_pieces(game) if piece.is_king and piece.owner == player)

    def game_pieces(game):
        for row in range(game.size):
            for col in range(game.size):
                piece = game.get_piece(row, col)
                if piece is not None:
                    yield Coord(row, col), piece

    game = empty_game()
    game.set_piece(1, 2, pawn(LIGHT))
    game.set_piece(5, 6, pawn(LIGHT))
    game.set_piece(2, 7, pawn(DARK))

    planned = MinimaxOpponent(max_depth=1, scorer=PreferKingsScorer()).make_move(game)
    assert planned.origin == Coord(1, 2)
    assert planned.target.row == 0


def test_minimax_defaults_and_validation():
    agent = MinimaxOpponent()
    assert agent.max_depth == 5
    assert isinstance(agent.scorer, MaterialScorer)
    assert agent.description == "Minimax(depth=5)"

    with pytest.raises(ValueError):
        MinimaxOpponent(max_depth=0)


def test_terminal_scores_are_infinite(empty_game):
    game = empty_game()
    game.set_piece(5, 2, pawn(LIGHT))
    game.set_piece(4, 3, pawn(DARK))
    game.move_piece(Coord(5, 2), Coord(3, 4))

    scorer = MaterialScorer()
    assert scorer.evaluate(game, LIGHT) == math.inf
    assert scorer.evaluate(game, DARK) == -math.inf


@pytest.mark.parametrize(
    "opponent_id,cls",
    [("random", RandomOpponent), ("GREEDY", GreedyOpponent), (" Minimax ", MinimaxOpponent)],
)
def test_create_opponent(opponent_id, cls):
    assert isinstance(create_opponent(opponent_id), cls)


def test_unknown_opponent_raises():
    with pytest.raises(UnknownOpponentError):
        create_opponent("alphazero")
    with pytest.raises(ValueError):
        opponent_name("alphazero")


def test_available_opponents():
    options = available_opponents()

    assert [option.id for option in options] == list(OPPONENTS)
    assert [option.name for option in options] == ["Random Moves", "Greedy", "Minimax"]
    assert opponent_name("greedy") == "Greedy"
