"""Gameplay tuning, the level table, and display configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence
import logging

from .enemy import EnemyType
from .formations import Formation
from .utils import FPS, SETTINGS_FILE, Color, hex_color, load_json

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True, slots=True)
class LevelSettings:
    """One row of the level table."""

    enemy_count: int
    formation: Formation
    enemy_type: EnemyType
    color: Color
    move_speed: float


LEVELS: tuple[LevelSettings, ...] = (
    LevelSettings(12, Formation.GRID, EnemyType.BASIC, hex_color("#39ff14"), 1.0),
    LevelSettings(18, Formation.V_SHAPE, EnemyType.FAST, hex_color("#ff00ff"), 1.5),
    LevelSettings(24, Formation.WAVE, EnemyType.SHOOTER, hex_color("#ff4500"), 2.0),
)


def validate_levels(levels: Sequence[LevelSettings]) -> None:
    """Reject a level table the simulation cannot play."""
    if not levels:
        raise ValueError("level table is empty")
    for number, level in enumerate(levels, start=1):
        if not isinstance(level, LevelSettings):
            raise ValueError(f"level {number}: expected LevelSettings, got {type(level).__name__}")
        if level.enemy_count <= 0:
            raise ValueError(f"level {number}: enemy_count must be positive, got {level.enemy_count}")
        if level.move_speed <= 0:
            raise ValueError(f"level {number}: move_speed must be positive, got {level.move_speed}")
        if not isinstance(level.formation, Formation):
            raise ValueError(f"level {number}: unknown formation {level.formation!r}")
        if not isinstance(level.enemy_type, EnemyType):
            raise ValueError(f"level {number}: unknown enemy type {level.enemy_type!r}")


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Simulation constants shared by every level."""

    player_speed: float = 6
    bullet_speed: float = 8
    enemy_shoot_chance: float = 0.001
    enemy_bullet_speed: float = 3
    max_enemy_bullets: int = 3
    starting_lives: int = 3
    invulnerability_frames: int = 120
    level_spawn_delay_ms: int = 1000
    bottom_margin: int = 50

    @property
    def spawn_delay_ticks(self) -> int:
        """Next-wave delay expressed in simulation ticks."""
        return max(1, round(self.level_spawn_delay_ms * FPS / 1000))


@dataclass(slots=True)
class DisplaySettings:
    """Display-related options."""

    fullscreen: bool = False
    show_starfield: bool = True
    log_level: str = "INFO"


class SettingsManager:
    """Load display settings from disk; nothing is ever written back."""

    def __init__(self, path: Path = SETTINGS_FILE) -> None:
        self.path = path
        self.display = self.load()

    def load(self) -> DisplaySettings:
        """Load display settings with safe defaults."""
        raw = load_json(self.path, {})
        display = DisplaySettings()
        if not isinstance(raw, dict):
            logger.warning("Ignoring malformed settings file %s", self.path)
            return display

        display.fullscreen = bool(raw.get("fullscreen", display.fullscreen))
        display.show_starfield = bool(raw.get("show_starfield", display.show_starfield))

        level = str(raw.get("log_level", display.log_level)).upper()
        if level in LOG_LEVELS:
            display.log_level = level
        else:
            logger.warning("Unknown log level %r in %s, using %s", level, self.path, display.log_level)
        return display
