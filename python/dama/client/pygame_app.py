"""Pygame front-end for dama: a human against one of the AI opponents."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import List, Optional, Tuple

try:
    import pygame
except ImportError as exc:  # pragma: no cover - handled at runtime
    raise SystemExit(
        "Pygame is required for the graphical client. Install it with 'pip install pygame'."
    ) from exc

from ..ai import OPPONENTS, MinimaxOpponent, Opponent, create_opponent
from ..audio import SAMPLE_RATE, PygameAudioService
from ..config import DamaConfig
from ..game.board import MoveOption
from ..game.factory import create_game
from ..game.pieces import Player, opponent
from ..geometry import Coord
from ..score import MaterialScorer


LOG = logging.getLogger("dama.client")


# ---------------------------------------------------------------------------
# Rendering configuration
# ---------------------------------------------------------------------------

WINDOW_WIDTH = 1020
WINDOW_HEIGHT = 760
FPS = 30

BOARD_ORIGIN = (300, 30)
BOARD_PIXELS = 640

LIGHT_SQUARE = (240, 217, 181)
DARK_SQUARE = (120, 84, 60)
PIECE_COLORS = {Player.LIGHT: (245, 245, 240), Player.DARK: (40, 40, 48)}
PIECE_OUTLINE = (38, 50, 56)
KING_MARK = (255, 193, 7)
SELECTION_COLOR = (255, 152, 0)
HIGHLIGHT_MOVE = (129, 199, 132, 140)
HIGHLIGHT_CAPTURE = (239, 83, 80, 160)
TEXT_COLOR = (33, 33, 33)
BAR_LIGHT = (200, 200, 190)
BAR_DARK = (60, 60, 70)
BUTTON_FILL = (121, 85, 72)
BUTTON_ACTIVE = (46, 125, 50)
BUTTON_TEXT = (255, 248, 225)

DEPTH_CYCLE = (1, 3, 5)


@dataclass
class Button:
    label: str
    rect: pygame.Rect
    active: bool = False

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, hovered: bool) -> None:
        fill = BUTTON_ACTIVE if self.active else BUTTON_FILL
        if hovered:
            fill = tuple(min(channel + 30, 255) for channel in fill)
        pygame.draw.rect(surface, fill, self.rect, border_radius=8)
        pygame.draw.rect(surface, PIECE_OUTLINE, self.rect, width=2, border_radius=8)
        label = font.render(self.label, True, BUTTON_TEXT)
        surface.blit(label, label.get_rect(center=self.rect.center))

    def hit(self, pos: Tuple[int, int]) -> bool:
        return bool(self.rect.collidepoint(pos))


class DamaPygameApp:
    def __init__(self, config: DamaConfig, opponent_id: str = "minimax") -> None:
        pygame.mixer.pre_init(SAMPLE_RATE, -16, 1)
        pygame.init()
        pygame.display.set_caption("Dama - Human vs AI (Pygame)")
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        self.clock = pygame.time.Clock()

        self.font_small = pygame.font.Font(None, 24)
        self.font_medium = pygame.font.Font(None, 32)

        self.config = config
        self.depth = config.ai_depth
        self.opponent_id = opponent_id
        self.scorer = MaterialScorer()

        self.buttons = [
            Button("New Game", pygame.Rect(20, WINDOW_HEIGHT - 70, 120, 45)),
            Button(f"Depth: {self.depth}", pygame.Rect(150, WINDOW_HEIGHT - 70, 120, 45)),
            Button("Switch Color", pygame.Rect(20, WINDOW_HEIGHT - 130, 120, 45)),
            Button(f"AI: {opponent_id}", pygame.Rect(150, WINDOW_HEIGHT - 130, 120, 45)),
            Button("Debug", pygame.Rect(20, WINDOW_HEIGHT - 190, 120, 45)),
            Button("Mute", pygame.Rect(150, WINDOW_HEIGHT - 190, 120, 45)),
        ]

        self.audio = PygameAudioService()
        self.game = create_game(config=config, audio_service=self.audio)
        self.human_player: Player = config.starting_player

        self.selected_origin: Optional[Coord] = None
        self.highlight_moves: List[MoveOption] = []
        self.message: Optional[str] = None
        self.ai_due_at: Optional[int] = None

        self._bind_ai()

    @property
    def cell(self) -> int:
        return BOARD_PIXELS // self.game.size

    # ------------------------------------------------------------------
    # Game flow helpers
    # ------------------------------------------------------------------
    def _make_agent(self) -> Opponent:
        if self.opponent_id == "minimax":
            return MinimaxOpponent(max_depth=self.depth)
        return create_opponent(self.opponent_id)

    def _bind_ai(self) -> None:
        self.game.set_ai_opponent(self.human_player, None)
        self.game.set_ai_opponent(opponent(self.human_player), self._make_agent())
        self._schedule_ai()

    def _schedule_ai(self) -> None:
        # Give the board a chance to show the last move before the AI answers
        if self.game.is_current_player_ai() and not self.game.has_ended:
            self.ai_due_at = pygame.time.get_ticks() + self.config.ai_delay_ms
        else:
            self.ai_due_at = None

    def reset(self) -> None:
        self.game.reset()
        self.selected_origin = None
        self.highlight_moves = []
        self.message = None
        self._bind_ai()

    def toggle_player_color(self) -> None:
        self.human_player = opponent(self.human_player)
        self.reset()

    def cycle_depth(self) -> None:
        index = DEPTH_CYCLE.index(self.depth) if self.depth in DEPTH_CYCLE else -1
        self.depth = DEPTH_CYCLE[(index + 1) % len(DEPTH_CYCLE)]
        self.buttons[1].label = f"Depth: {self.depth}"
        self._bind_ai()

    def cycle_opponent(self) -> None:
        ids = list(OPPONENTS)
        self.opponent_id = ids[(ids.index(self.opponent_id) + 1) % len(ids)]
        self.buttons[3].label = f"AI: {self.opponent_id}"
        self._bind_ai()

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------
    def handle_click(self, pos: Tuple[int, int]) -> None:
        for button in self.buttons:
            if button.hit(pos):
                self._handle_button(button)
                return

        if self.game.has_ended or self.game.is_current_player_ai():
            return

        clicked = self._square_at(pos)
        if clicked is None:
            self.selected_origin = None
            self.highlight_moves = []
            return

        piece = self.game.get_piece(clicked.row, clicked.col)
        if piece is not None and piece.owner == self.game.player:
            self.selected_origin = clicked
            self.highlight_moves = self.game.get_valid_moves(clicked)
            return

        if self.selected_origin is None:
            return

        origin = self.selected_origin
        if not self.game.move_piece(origin, clicked):
            self.game.audio.play_illegal()
            self.message = f"Illegal move {origin} -> {clicked}"
            return

        self._after_move("You", origin, clicked)

    def _handle_button(self, button: Button) -> None:
        if button.label.startswith("New"):
            self.reset()
        elif button.label.startswith("Depth"):
            self.cycle_depth()
        elif button.label.startswith("Switch"):
            self.toggle_player_color()
        elif button.label.startswith("AI"):
            self.cycle_opponent()
        elif button.label.startswith("Debug"):
            enabled = self.game.toggle_debug_mode()
            button.active = enabled
            self.message = "Debug overlay on" if enabled else "Debug overlay off"
        elif button.label in ("Mute", "Unmute"):
            muted = self.game.audio.toggle_mute()
            button.active = muted
            button.label = "Unmute" if muted else "Mute"

    def _after_move(self, actor: str, origin: Coord, target: Coord) -> None:
        result = self.game.last_move_result
        audio = self.game.audio
        if result is not None and result.promoted:
            audio.play_promotion()
        elif result is not None and result.captures:
            audio.play_capture()
        else:
            audio.play_move()

        self.message = self._format_move_message(actor, origin, target, result.captures if result else ())
        self.selected_origin = None
        self.highlight_moves = []

        if self.game.has_ended:
            if self.game.is_draw:
                self.message = "Draw!"
            else:
                self.message = "You win!" if self.game.winner == self.human_player else "AI wins!"
        self._schedule_ai()

    # ------------------------------------------------------------------
    # AI turn
    # ------------------------------------------------------------------
    def update_ai(self) -> None:
        if self.ai_due_at is None or pygame.time.get_ticks() < self.ai_due_at:
            return
        self.ai_due_at = None

        agent = self.game.get_ai_opponent(self.game.player)
        if agent is None or self.game.has_ended:
            return

        planned = agent.make_move(self.game)
        if planned is None:
            self.message = "AI has no moves. You win!"
            return

        if not self.game.move_piece(planned.origin, planned.target):
            LOG.warning("AI proposed illegal move %s -> %s", planned.origin, planned.target)
            self.message = "AI attempted illegal move"
            return

        self._after_move("AI", planned.origin, planned.target)

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------
    def draw(self) -> None:
        self.screen.fill((250, 250, 250))
        self._draw_squares()
        self._draw_pieces()
        self._draw_highlights()
        self._draw_ui()

    def _square_rect(self, row: int, col: int) -> pygame.Rect:
        x0, y0 = BOARD_ORIGIN
        return pygame.Rect(x0 + col * self.cell, y0 + row * self.cell, self.cell, self.cell)

    def _draw_squares(self) -> None:
        for row in range(self.game.size):
            for col in range(self.game.size):
                color = DARK_SQUARE if (row + col) % 2 == 1 else LIGHT_SQUARE
                rect = self._square_rect(row, col)
                pygame.draw.rect(self.screen, color, rect)
                if self.game.is_debug_mode_enabled:
                    label = self.font_small.render(f"{row},{col}", True, (200, 200, 200))
                    self.screen.blit(label, (rect.x + 3, rect.y + 3))

    def _draw_pieces(self) -> None:
        radius = self.cell // 2 - 8
        for row in range(self.game.size):
            for col in range(self.game.size):
                piece = self.game.get_piece(row, col)
                if piece is None:
                    continue
                center = self._square_rect(row, col).center
                pygame.draw.circle(self.screen, PIECE_COLORS[piece.owner], center, radius)
                pygame.draw.circle(self.screen, PIECE_OUTLINE, center, radius, 3)
                if piece.is_king:
                    pygame.draw.circle(self.screen, KING_MARK, center, radius // 2, 4)

        if self.selected_origin is not None:
            rect = self._square_rect(self.selected_origin.row, self.selected_origin.col)
            pygame.draw.rect(self.screen, SELECTION_COLOR, rect, width=4)

    def _draw_highlights(self) -> None:
        radius = self.cell // 2 - 12
        for option in self.highlight_moves:
            rect = self._square_rect(option.to.row, option.to.col)
            surf = pygame.Surface((self.cell, self.cell), pygame.SRCALPHA)
            color = HIGHLIGHT_CAPTURE if option.is_capture else HIGHLIGHT_MOVE
            pygame.draw.circle(surf, color, (self.cell // 2, self.cell // 2), radius)
            self.screen.blit(surf, rect.topleft)

    def _draw_ui(self) -> None:
        mouse_pos = pygame.mouse.get_pos()
        for button in self.buttons:
            button.draw(self.screen, self.font_small, button.hit(mouse_pos))

        status_lines = [
            f"You are playing as {self.human_player.value}",
            f"Turn: {'AI' if self.game.is_current_player_ai() else 'You'}",
            f"Opponent: {self.opponent_id}",
        ]
        for idx, line in enumerate(status_lines):
            text = self.font_medium.render(line, True, TEXT_COLOR)
            self.screen.blit(text, (20, 40 + idx * 32))

        if self.message:
            msg = self.font_small.render(self.message, True, (94, 53, 177))
            self.screen.blit(msg, (20, 150))

        counts = self.font_small.render(
            f"Pieces - light: {self.game.remaining(Player.LIGHT)}  |  dark: {self.game.remaining(Player.DARK)}",
            True,
            TEXT_COLOR,
        )
        self.screen.blit(counts, (20, 185))
        self._draw_score_bar()

    def _draw_score_bar(self) -> None:
        breakdown = self.scorer.breakdown(self.game)
        total = breakdown.light + breakdown.dark
        share = breakdown.light / total if total else 0.5
        bar = pygame.Rect(20, 220, 250, 24)
        pygame.draw.rect(self.screen, BAR_DARK, bar)
        pygame.draw.rect(self.screen, BAR_LIGHT, pygame.Rect(bar.x, bar.y, int(bar.width * share), bar.height))
        pygame.draw.rect(self.screen, PIECE_OUTLINE, bar, width=2)

    # ------------------------------------------------------------------
    # Utility helpers
    # ------------------------------------------------------------------
    def _square_at(self, pos: Tuple[int, int]) -> Optional[Coord]:
        x0, y0 = BOARD_ORIGIN
        col = (pos[0] - x0) // self.cell
        row = (pos[1] - y0) // self.cell
        if pos[0] < x0 or pos[1] < y0 or not (0 <= row < self.game.size and 0 <= col < self.game.size):
            return None
        return Coord(row, col)

    @staticmethod
    def _format_move_message(actor: str, origin: Coord, target: Coord, captured: Tuple[Coord, ...]) -> str:
        if not captured:
            return f"{actor} moved {origin} -> {target}"
        return f"{actor} captured {', '.join(str(c) for c in captured)} ( {origin} -> {target} )"

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def run(self) -> None:
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.handle_click(event.pos)

            self.update_ai()
            self.draw()
            pygame.display.flip()
            self.clock.tick(FPS)

        pygame.quit()


def main(argv: Optional[List[str]] = None) -> int:
    config = DamaConfig.from_env()
    parser = argparse.ArgumentParser(description="Dama pygame client")
    parser.add_argument("--opponent", choices=tuple(OPPONENTS), default="minimax")
    parser.add_argument("--log-level", default=config.log_level)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    app = DamaPygameApp(config, opponent_id=args.opponent)
    app.run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution
    sys.exit(main())
