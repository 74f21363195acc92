"""Pytest configuration for headless pygame tests."""

from __future__ import annotations

import os
import random
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


class FixedRandom(random.Random):
    """Deterministic source whose ``random()`` always returns one value."""

    def __init__(self, value: float) -> None:
        super().__init__(1234)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def never_fire() -> FixedRandom:
    return FixedRandom(0.999)


@pytest.fixture
def always_fire() -> FixedRandom:
    return FixedRandom(0.0)
