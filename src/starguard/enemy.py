"""Invader entities and their per-type movement patterns."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Protocol
import math
import pygame

from .player import BULLET_WIDTH, Bullet, enemy_bullet
from .utils import Bounds, Color, Point, clamp

ENEMY_SIZE = 25
EDGE_DROP = 10
BASIC_DROP = 20
BASIC_DROP_INTERVAL = 60
SHOOTER_STEP = 20
SHOOTER_STEP_INTERVAL = 30
SHOOT_COOLDOWN = 60


class RandomSource(Protocol):
    def random(self) -> float: ...


FireCallback = Callable[["Enemy"], None]


class EnemyType(str, Enum):
    """Enemy variants; each one owns a movement pattern."""

    BASIC = "basic"
    FAST = "fast"
    SHOOTER = "shooter"

    def move(self, enemy: Enemy, rng: RandomSource, shoot_chance: float, fire: FireCallback) -> None:
        _MOVES[self](enemy, rng, shoot_chance, fire)


def _move_basic(enemy: Enemy, rng: RandomSource, shoot_chance: float, fire: FireCallback) -> None:
    # Creep sideways, dropping a row once a second.
    if enemy.move_counter % BASIC_DROP_INTERVAL == 0:
        enemy.y += BASIC_DROP
    enemy.x += enemy.direction * enemy.speed * 0.5


def _move_fast(enemy: Enemy, rng: RandomSource, shoot_chance: float, fire: FireCallback) -> None:
    enemy.x += enemy.direction * enemy.speed
    enemy.y += math.sin(enemy.animation_phase) * 0.5


def _move_shooter(enemy: Enemy, rng: RandomSource, shoot_chance: float, fire: FireCallback) -> None:
    if enemy.move_counter % SHOOTER_STEP_INTERVAL == 0:
        enemy.x += enemy.direction * SHOOTER_STEP
    # One Bernoulli trial per tick; the cooldown starts even if the shot is dropped.
    if enemy.shoot_cooldown <= 0 and rng.random() < shoot_chance * 2:
        fire(enemy)
        enemy.shoot_cooldown = SHOOT_COOLDOWN


_MOVES: dict[EnemyType, Callable[[Enemy, RandomSource, float, FireCallback], None]] = {
    EnemyType.BASIC: _move_basic,
    EnemyType.FAST: _move_fast,
    EnemyType.SHOOTER: _move_shooter,
}


class Enemy(pygame.sprite.Sprite):
    """A single invader; speed and colour are fixed when it spawns."""

    def __init__(self, x: float, y: float, kind: EnemyType, speed: float, color: Color) -> None:
        super().__init__()
        self.x = x
        self.y = y
        self.kind = kind
        self.speed = speed
        self.color = color
        self.width = ENEMY_SIZE
        self.height = ENEMY_SIZE
        self.direction = 1
        self.move_counter = 0
        self.shoot_cooldown = 0
        self.animation_phase = 0.0
        self.rect = pygame.Rect(int(x), int(y), self.width, self.height)

    def update(
        self,
        field_width: float,
        rng: RandomSource,
        shoot_chance: float = 0.0,
        fire: FireCallback | None = None,
    ) -> bool:
        """Advance one tick. Returns True if the enemy bounced off an edge."""
        self.animation_phase += 0.1
        self.move_counter += 1

        self.kind.move(self, rng, shoot_chance, fire or _hold_fire)

        bounced = False
        max_x = field_width - self.width
        if (self.x <= 0 and self.direction < 0) or (self.x >= max_x and self.direction > 0):
            self.direction *= -1
            self.y += EDGE_DROP
            bounced = True
        self.x = clamp(self.x, 0, max_x)
        self.rect.topleft = (int(self.x), int(self.y))

        if self.shoot_cooldown > 0:
            self.shoot_cooldown -= 1
        return bounced

    def shoot(self, enemy_bullets: pygame.sprite.Group, capacity: int, speed: float) -> Bullet | None:
        """Fire downward from the bottom centre unless the bullet cap is reached."""
        if len(enemy_bullets) >= capacity:
            return None
        bullet = enemy_bullet(self.x + self.width / 2 - BULLET_WIDTH / 2, self.y + self.height, speed)
        enemy_bullets.add(bullet)
        return bullet

    @property
    def is_charging(self) -> bool:
        return 0 < self.shoot_cooldown < 10

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def bounds(self) -> Bounds:
        return Bounds(self.x, self.y, self.width, self.height)


def _hold_fire(enemy: Enemy) -> None:
    return None
