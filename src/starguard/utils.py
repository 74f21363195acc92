"""Shared constants and utility helpers for Starguard."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any
import json

SCREEN_WIDTH = 800
SCREEN_HEIGHT = 600
FPS = 60

Color = tuple[int, int, int]
Point = tuple[float, float]

BG_TOP = (10, 10, 10)
BG_BOTTOM = (26, 10, 46)
TEXT_COLOR = (220, 238, 255)
SHADOW_COLOR = (15, 24, 45)
WHITE = (255, 255, 255)

CYAN = (0, 255, 255)
YELLOW = (255, 255, 0)
RED = (255, 0, 0)
ORANGE_RED = (255, 69, 0)

DATA_DIR = Path(".starguard")
SETTINGS_FILE = DATA_DIR / "settings.json"


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned rectangle in float screen coordinates."""

    x: float
    y: float
    width: float
    height: float


def check_collision(a: Bounds, b: Bounds) -> bool:
    """Return whether two rectangles overlap (touching edges do not count)."""
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp a value into a closed interval."""
    return max(minimum, min(maximum, value))


def hex_color(value: str) -> Color:
    """Convert a ``#rrggbb`` string into an RGB tuple."""
    value = value.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"expected #rrggbb colour, got {value!r}")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def load_json(path: Path, default: Any) -> Any:
    """Load JSON data, returning default when missing or malformed."""
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (json.JSONDecodeError, OSError):
        return default


def sprites_overlap(a: Any, b: Any) -> bool:
    """Float AABB test for ``spritecollide`` callbacks; Rects truncate positions."""
    return check_collision(a.bounds(), b.bounds())
