# bitcanvas/config.py
from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .bit_canvas import DEFAULT_SIDE
from .paint_session import DrawMode, parse_draw_mode
from .validation import validate_side

logger = logging.getLogger(__name__)


_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class CanvasConfig:
    side: int = DEFAULT_SIDE

    def __post_init__(self) -> None:
        validate_side(self.side)


@dataclass(frozen=True)
class SessionConfig:
    default_mode: str = "mark"

    def __post_init__(self) -> None:
        parse_draw_mode(self.default_mode)

    @property
    def draw_mode(self) -> DrawMode:
        return parse_draw_mode(self.default_mode)


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"

    def __post_init__(self) -> None:
        if self.level.upper() not in _LOG_LEVELS:
            raise ValueError(
                f"Logging level must be one of {sorted(_LOG_LEVELS)}, got '{self.level}'"
            )


@dataclass(frozen=True)
class AppConfig:
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_from_toml(config_path: str | Path) -> AppConfig:
    """
    Load an AppConfig from a TOML file.

    Expected TOML structure (every table and key is optional):

    [canvas]
    side = 64

    [session]
    default_mode = "mark"   # mark|clear (draw|erase also accepted)

    [logging]
    level = "INFO"
    """
    p = Path(config_path)
    if not p.exists():
        raise FileNotFoundError(f"Configuration file not found: {p}")

    with p.open("rb") as f:
        data = tomllib.load(f)

    canvas = data.get("canvas") or {}
    session = data.get("session") or {}
    log = data.get("logging") or {}

    side = canvas.get("side", DEFAULT_SIDE)
    if isinstance(side, bool) or not isinstance(side, int):
        raise ValueError(f"[canvas] side must be an integer, got {side!r}")

    cfg = AppConfig(
        canvas=CanvasConfig(side=side),
        session=SessionConfig(default_mode=str(session.get("default_mode", "mark"))),
        logging=LoggingConfig(level=str(log.get("level", "INFO")).upper()),
    )

    logger.info(
        "Loaded AppConfig: canvas=%dx%d, default_mode=%s, log_level=%s",
        cfg.canvas.side,
        cfg.canvas.side,
        cfg.session.draw_mode,
        cfg.logging.level,
    )
    return cfg


def default_config() -> AppConfig:
    """The canonical setup: a 64x64 canvas starting in mark mode."""
    return AppConfig(
        canvas=CanvasConfig(side=DEFAULT_SIDE),
        session=SessionConfig(default_mode="mark"),
        logging=LoggingConfig(level="INFO"),
    )
