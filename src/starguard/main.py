"""Executable entrypoint for Starguard."""

from __future__ import annotations

import logging

from .game import StarGame
from .settings import SettingsManager


def main() -> None:
    """Launch the game."""
    display = SettingsManager().display
    logging.basicConfig(
        level=getattr(logging, display.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    StarGame(display=display).run()


if __name__ == "__main__":
    main()
