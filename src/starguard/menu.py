"""Start and game-over screens with keyboard navigation."""

from __future__ import annotations

from dataclasses import dataclass, field
import pygame

from .utils import CYAN, ORANGE_RED, SHADOW_COLOR, TEXT_COLOR, YELLOW, Color


@dataclass(slots=True)
class MenuItem:
    """Single selectable menu row."""

    label: str
    action: str


@dataclass(slots=True)
class Menu:
    """Vertical keyboard-driven menu drawn over the playfield background."""

    title: str
    items: list[MenuItem]
    title_color: Color = YELLOW
    subtitle: list[str] = field(default_factory=list)
    selected_index: int = 0

    def move(self, delta: int) -> None:
        """Move menu selection by delta."""
        self.selected_index = (self.selected_index + delta) % len(self.items)

    def current_action(self) -> str:
        """Return selected action key."""
        return self.items[self.selected_index].action

    def render(self, surface: pygame.Surface, title_font: pygame.font.Font, body_font: pygame.font.Font) -> None:
        """Draw title, optional subtitle lines, and the item list."""
        center_x = surface.get_width() // 2
        title_shadow = title_font.render(self.title, True, SHADOW_COLOR)
        title = title_font.render(self.title, True, self.title_color)
        surface.blit(title_shadow, (center_x - title.get_width() // 2 + 3, 123))
        surface.blit(title, (center_x - title.get_width() // 2, 120))

        y = 200
        for line in self.subtitle:
            text = body_font.render(line, True, TEXT_COLOR)
            surface.blit(text, (center_x - text.get_width() // 2, y))
            y += 36

        start_y = max(y + 40, 320)
        for idx, item in enumerate(self.items):
            selected = idx == self.selected_index
            color = YELLOW if selected else TEXT_COLOR
            prefix = "> " if selected else "  "
            line = body_font.render(f"{prefix}{item.label}", True, color)
            surface.blit(line, (center_x - line.get_width() // 2, start_y + idx * 42))


def start_menu() -> Menu:
    return Menu(
        title="STARGUARD",
        items=[MenuItem("Start Mission", "start"), MenuItem("Quit", "exit")],
        title_color=CYAN,
        subtitle=["Arrows move | Space fires", "Clear three waves to save Earth"],
    )


def game_over_menu(victory: bool, score: int) -> Menu:
    """Build the end screen for a finished game."""
    if victory:
        title, color, message = "MISSION ACCOMPLISHED", CYAN, "Earth has been saved!"
    else:
        title, color, message = "MISSION FAILED", ORANGE_RED, "Earth has fallen to the invasion..."
    return Menu(
        title=title,
        items=[MenuItem("Restart", "restart"), MenuItem("Quit", "exit")],
        title_color=color,
        subtitle=[message, f"Final score: {score}"],
    )
