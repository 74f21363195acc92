"""Player craft and projectile entities."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Mapping
import pygame

from .utils import RED, YELLOW, Bounds, Color, Point, clamp

PLAYER_WIDTH = 30
PLAYER_HEIGHT = 40
BULLET_WIDTH = 4
BULLET_HEIGHT = 12
TRAIL_LENGTH = 5


class Bullet(pygame.sprite.Sprite):
    """Projectile travelling straight up (direction -1) or down (+1)."""

    def __init__(
        self,
        x: float,
        y: float,
        direction: int = -1,
        speed: float = 8,
        color: Color = YELLOW,
    ) -> None:
        super().__init__()
        self.x = x
        self.y = y
        self.direction = direction
        self.speed = speed
        self.color = color
        self.width = BULLET_WIDTH
        self.height = BULLET_HEIGHT
        self.trail: deque[Point] = deque(maxlen=TRAIL_LENGTH)
        self.rect = pygame.Rect(int(x), int(y), self.width, self.height)

    def update(self, field_height: float | None = None) -> None:
        """Advance one tick, record the trail, and leave every group once off screen."""
        self.y += self.speed * self.direction
        self.trail.append(self.center)
        self.rect.topleft = (int(self.x), int(self.y))
        if field_height is not None and self.is_off_screen(field_height):
            self.kill()

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def bounds(self) -> Bounds:
        return Bounds(self.x, self.y, self.width, self.height)

    def is_off_screen(self, field_height: float) -> bool:
        """Check whether the bullet has left the vertical playfield."""
        if self.direction < 0:
            return self.y < -self.height
        return self.y > field_height


def player_bullet(x: float, y: float, speed: float) -> Bullet:
    """Build an upward player shot."""
    return Bullet(x=x, y=y, direction=-1, speed=speed, color=YELLOW)


def enemy_bullet(x: float, y: float, speed: float) -> Bullet:
    """Build a slower downward enemy shot."""
    return Bullet(x=x, y=y, direction=1, speed=speed, color=RED)


@dataclass(slots=True, eq=False)
class Player(pygame.sprite.Sprite):
    """The player's rocket, steered left and right along the bottom edge."""

    x: float
    y: float
    speed: float = 6
    width: int = PLAYER_WIDTH
    height: int = PLAYER_HEIGHT
    invulnerable: int = 0
    thruster_phase: float = 0.0
    rect: pygame.Rect = field(init=False)

    def __post_init__(self) -> None:
        pygame.sprite.Sprite.__init__(self)
        self.rect = pygame.Rect(int(self.x), int(self.y), self.width, self.height)

    @classmethod
    def spawn(cls, field_width: float, field_height: float, speed: float) -> Player:
        """Create a player centred near the bottom of the playfield."""
        return cls(
            x=field_width / 2 - PLAYER_WIDTH / 2,
            y=field_height - PLAYER_HEIGHT - 20,
            speed=speed,
        )

    def update(self, keys: Mapping[int, bool], field_width: float) -> None:
        """Apply held movement keys and tick down invulnerability."""
        if keys.get(pygame.K_LEFT):
            self.x -= self.speed
        if keys.get(pygame.K_RIGHT):
            self.x += self.speed
        self.x = clamp(self.x, 0, field_width - self.width)
        self.rect.topleft = (int(self.x), int(self.y))

        self.thruster_phase += 0.3

        if self.invulnerable > 0:
            self.invulnerable -= 1

    def take_damage(self, invulnerability_frames: int) -> bool:
        """Start an invulnerability window; False if one is already running."""
        if self.invulnerable > 0:
            return False
        self.invulnerable = invulnerability_frames
        return True

    @property
    def is_flashing(self) -> bool:
        """Draw-time blink while invulnerable, toggling every 5 frames."""
        return self.invulnerable > 0 and (self.invulnerable // 5) % 2 == 1

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def muzzle(self) -> Point:
        return (self.x + self.width / 2 - BULLET_WIDTH / 2, self.y)

    def bounds(self) -> Bounds:
        return Bounds(self.x, self.y, self.width, self.height)

