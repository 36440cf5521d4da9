"""Sound notifications for consumers of the game.

The rules engine never plays sounds itself. Front-ends call these hooks
around :meth:`dama.game.rules.Game.move_piece` depending on the outcome.
"""

from __future__ import annotations

import logging
import math
from array import array
from typing import Dict, Optional, Protocol


LOG = logging.getLogger("dama.audio")

SAMPLE_RATE = 22050

# (frequency Hz, duration s, volume)
TONES: Dict[str, tuple] = {
    "move": (220, 0.12, 0.12),
    "capture": (340, 0.14, 0.14),
    "illegal": (120, 0.08, 0.16),
    "promotion": (820, 0.16, 0.12),
}


class AudioService(Protocol):
    def toggle_mute(self) -> bool:
        ...

    def is_muted(self) -> bool:
        ...

    def set_muted(self, muted: bool) -> None:
        ...

    def play_move(self) -> None:
        ...

    def play_capture(self) -> None:
        ...

    def play_illegal(self) -> None:
        ...

    def play_promotion(self) -> None:
        ...


class SilentAudioService:
    def __init__(self, muted: bool = False) -> None:
        self._muted = muted
        self.played: list = []

    def toggle_mute(self) -> bool:
        self._muted = not self._muted
        return self._muted

    def is_muted(self) -> bool:
        return self._muted

    def set_muted(self, muted: bool) -> None:
        self._muted = muted

    def _play(self, name: str) -> None:
        if not self._muted:
            self.played.append(name)

    def play_move(self) -> None:
        self._play("move")

    def play_capture(self) -> None:
        self._play("capture")

    def play_illegal(self) -> None:
        self._play("illegal")

    def play_promotion(self) -> None:
        self._play("promotion")


def synthesize_tone(
    frequency: float,
    duration: float,
    volume: float,
    sample_rate: int = SAMPLE_RATE,
    channels: int = 1,
) -> bytes:
    """Render a 16-bit sine tone with a short linear fade-out.

    Samples are interleaved when ``channels`` is greater than one.
    """

    total = max(1, int(sample_rate * duration))
    fade_start = int(total * 0.6)
    samples = array("h")
    for index in range(total):
        envelope = 1.0
        if index >= fade_start:
            envelope = 1.0 - (index - fade_start) / max(1, total - fade_start)
        value = math.sin(2 * math.pi * frequency * index / sample_rate) * volume * envelope
        samples.extend([int(value * 32767)] * channels)
    return samples.tobytes()


class PygameAudioService(SilentAudioService):
    """Plays the notification tones through ``pygame.mixer``."""

    def __init__(self, muted: bool = False) -> None:
        super().__init__(muted=muted)
        self._sounds: Dict[str, object] = {}
        self._mixer: Optional[object] = None

        import pygame

        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
        except pygame.error as exc:
            LOG.warning("Audio disabled, mixer unavailable: %s", exc)
            return

        self._mixer = pygame.mixer
        sample_rate, _, channels = pygame.mixer.get_init()
        for name, (frequency, duration, volume) in TONES.items():
            buffer = synthesize_tone(frequency, duration, volume, sample_rate, channels)
            self._sounds[name] = pygame.mixer.Sound(buffer=buffer)

    @property
    def available(self) -> bool:
        return self._mixer is not None

    def _play(self, name: str) -> None:
        super()._play(name)
        if self._muted or not self.available:
            return
        self._sounds[name].play()
