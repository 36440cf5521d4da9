"""Runtime settings read from ``DAMA_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .game.pieces import Player


_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _int(env: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def _bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def _player(env: Mapping[str, str], name: str, default: Player) -> Player:
    raw = env.get(name, "").strip().lower()
    if not raw:
        return default
    try:
        return Player(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be 'light' or 'dark', got {raw!r}") from exc


@dataclass(frozen=True)
class DamaConfig:
    board_size: int = 8
    rows_per_side: int = 3
    starting_player: Player = Player.LIGHT
    require_capture: bool = False
    ai_depth: int = 5
    ai_delay_ms: int = 400
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.rows_per_side * 2 >= self.board_size:
            raise ValueError("rows_per_side must leave at least one empty row between the sides")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "DamaConfig":
        env = os.environ if env is None else env
        return cls(
            board_size=_int(env, "DAMA_BOARD_SIZE", cls.board_size, minimum=4),
            rows_per_side=_int(env, "DAMA_ROWS_PER_SIDE", cls.rows_per_side, minimum=1),
            starting_player=_player(env, "DAMA_STARTING_PLAYER", cls.starting_player),
            require_capture=_bool(env, "DAMA_REQUIRE_CAPTURE", cls.require_capture),
            ai_depth=_int(env, "DAMA_AI_DEPTH", cls.ai_depth, minimum=1),
            ai_delay_ms=_int(env, "DAMA_AI_DELAY_MS", cls.ai_delay_ms, minimum=0),
            log_level=(env.get("DAMA_LOG_LEVEL") or cls.log_level).strip().upper(),
        )
