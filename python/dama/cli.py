"""Command-line interface for playing dama against an AI opponent."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .ai import OPPONENTS, MinimaxOpponent, Opponent, UnknownOpponentError, create_opponent
from .config import DamaConfig
from .game.factory import create_game
from .game.pieces import Player, opponent
from .game.rules import Game
from .geometry import Coord


LOG = logging.getLogger("dama.cli")

QUIT_WORDS = {"q", "quit", "exit"}


def _render_board(state: Game) -> None:
    print("\nBoard state:")
    print(state.render())
    print(f"\n{state.player.value} to move.\n")


def parse_coord(text: str) -> Optional[Coord]:
    """Parse ``"row col"`` or ``"row,col"`` into a :class:`Coord`."""

    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        return None
    try:
        return Coord(int(parts[0]), int(parts[1]))
    except ValueError:
        return None


def _prompt_coord(prompt: str) -> Optional[Coord]:
    while True:
        try:
            value = input(prompt)
        except EOFError:
            return None

        value = value.strip()
        if value.lower() in QUIT_WORDS:
            return None

        coord = parse_coord(value)
        if coord is not None:
            return coord
        print("Please enter a square as 'row col' or 'q' to quit.")


def _describe(actor: str, origin: Coord, target: Coord, state: Game) -> None:
    print(f"{actor} moves {origin} -> {target}.")
    result = state.last_move_result
    if result is not None and result.captures:
        print("  Captured: " + ", ".join(str(c) for c in result.captures))
    if result is not None and result.promoted:
        print("  Promoted to king!")


def _human_turn(state: Game, player: Player) -> bool:
    while True:
        _render_board(state)
        print(f"You are playing as {player.value}.")

        origin = _prompt_coord("Select piece to move (row col, or q to quit): ")
        if origin is None:
            return False

        options = state.get_valid_moves(origin)
        if not options:
            print("That piece has no legal moves. Try again.")
            continue
        print("Destinations: " + ", ".join(str(option.to) for option in options))

        target = _prompt_coord("Select destination (row col): ")
        if target is None:
            return False

        if not state.move_piece(origin, target):
            print("Illegal move. Try again.")
            continue

        _describe("You", origin, target, state)
        return True


def _ai_turn(state: Game, agent: Opponent, label: str) -> bool:
    planned = agent.make_move(state)
    if planned is None:
        print(f"{label} has no legal moves.")
        return False

    if not state.move_piece(planned.origin, planned.target):
        print(f"{label} attempted an illegal move. Ending match.")
        return False

    _describe(label, planned.origin, planned.target, state)
    return True


def _announce_result(state: Game, names: dict) -> None:
    if state.is_draw:
        print("The game is a draw.")
    elif state.winner is not None:
        print(f"{names[state.winner]} wins the match!")


def _build_opponent(opponent_id: str, depth: int) -> Opponent:
    if opponent_id.lower() == "minimax":
        return MinimaxOpponent(max_depth=depth)
    return create_opponent(opponent_id)


def run_human_vs_ai(state: Game, human_player: Player, agent: Opponent) -> int:
    ai_player = opponent(human_player)
    state.set_ai_opponent(ai_player, agent)
    names = {human_player: "You", ai_player: f"AI ({agent.description})"}

    print("Game start! Enter 'q' at any prompt to quit.")

    while not state.has_ended:
        if state.is_current_player_ai():
            if not _ai_turn(state, agent, names[ai_player]):
                break
        elif not _human_turn(state, state.player):
            break

    _render_board(state)
    _announce_result(state, names)
    print("Thanks for playing!")
    return 0


def run_ai_vs_ai(state: Game, light: Opponent, dark: Opponent, show_board: bool, max_turns: int) -> int:
    state.set_ai_opponent(Player.LIGHT, light)
    state.set_ai_opponent(Player.DARK, dark)
    names = {Player.LIGHT: f"Light ({light.description})", Player.DARK: f"Dark ({dark.description})"}

    turn_counter = 1
    while not state.has_ended and turn_counter <= max_turns:
        player_to_move = state.player
        agent = state.get_ai_opponent(player_to_move)
        print(f"Turn {turn_counter}:", end=" ")
        if agent is None or not _ai_turn(state, agent, names[player_to_move]):
            break
        if show_board:
            _render_board(state)
        turn_counter += 1

    if not state.has_ended:
        print(f"No result after {max_turns} turns.")
    _announce_result(state, names)
    print("AI vs AI match complete.")
    return 0


def build_parser(config: DamaConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play dama in the terminal")
    parser.add_argument("--mode", choices=("human", "ai"), default="human", help="human vs AI or AI vs AI")
    parser.add_argument("--opponent", default="minimax", help=f"one of: {', '.join(OPPONENTS)}")
    parser.add_argument("--dark-opponent", default="greedy", help="dark side opponent in AI vs AI mode")
    parser.add_argument("--color", choices=("light", "dark"), default="light", help="your colour in human mode")
    parser.add_argument("--depth", type=int, default=config.ai_depth, help="minimax search depth")
    parser.add_argument("--require-capture", action="store_true", default=config.require_capture)
    parser.add_argument("--show-board", action="store_true")
    parser.add_argument("--max-turns", type=int, default=200)
    parser.add_argument("--log-level", default=config.log_level)
    return parser


def main(argv: List[str] | None = None) -> int:
    config = DamaConfig.from_env()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    if args.depth < 1:
        parser.error("--depth must be at least 1")

    try:
        first = _build_opponent(args.opponent, args.depth)
        second = _build_opponent(args.dark_opponent, args.depth)
    except UnknownOpponentError as exc:
        parser.error(str(exc))

    state = create_game(config=config, require_capture=args.require_capture)
    LOG.info("Starting %s game, forced capture=%s", args.mode, state.require_capture)

    if args.mode == "human":
        return run_human_vs_ai(state, Player(args.color), first)
    return run_ai_vs_ai(state, first, second, args.show_board, args.max_turns)


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    sys.exit(main())
