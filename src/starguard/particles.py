"""Particle bursts for destroyed ships."""

from __future__ import annotations

from typing import Protocol
import pygame

from .utils import ORANGE_RED, Color

EXPLOSION_LIFETIME = 30
EXPLOSION_PARTICLES = 8
PARTICLE_SPREAD = 4.0
DAMPING = 0.98


class UniformSource(Protocol):
    def uniform(self, a: float, b: float) -> float: ...


class Particle(pygame.sprite.Sprite):
    """Lightweight particle with its own fade-out counter."""

    def __init__(
        self,
        position: tuple[float, float],
        velocity: tuple[float, float],
        color: Color,
        life: int = EXPLOSION_LIFETIME,
    ) -> None:
        super().__init__()
        self.position = [float(position[0]), float(position[1])]
        self.velocity = [velocity[0], velocity[1]]
        self.color = color
        self.life = life
        self.max_life = life
        self.rect = pygame.Rect(int(position[0]) - 2, int(position[1]) - 2, 4, 4)

    def update(self) -> None:
        """Advance particle simulation one frame."""
        self.position[0] += self.velocity[0]
        self.position[1] += self.velocity[1]
        self.velocity[0] *= DAMPING
        self.velocity[1] *= DAMPING
        self.life -= 1
        self.rect.center = (int(self.position[0]), int(self.position[1]))

    @property
    def alpha(self) -> float:
        return max(0.0, self.life / max(1, self.max_life))


class Explosion(pygame.sprite.Sprite):
    """Cosmetic burst; never takes part in collisions or scoring.

    The explosion's ``lifetime`` and each particle's ``life`` are separate
    counters. Only ``lifetime`` decides when the explosion is dead; a dead
    explosion removes itself from its groups.
    """

    def __init__(self, x: float, y: float, color: Color = ORANGE_RED, lifetime: int = EXPLOSION_LIFETIME) -> None:
        super().__init__()
        self.x = x
        self.y = y
        self.color = color
        self.lifetime = lifetime
        self.particles = pygame.sprite.Group()
        self.rect = pygame.Rect(int(x), int(y), 0, 0)

    @classmethod
    def burst(
        cls,
        x: float,
        y: float,
        rng: UniformSource,
        color: Color = ORANGE_RED,
        count: int = EXPLOSION_PARTICLES,
        lifetime: int = EXPLOSION_LIFETIME,
    ) -> Explosion:
        """Emit ``count`` particles from a point with random velocities."""
        explosion = cls(x, y, color, lifetime)
        for _ in range(count):
            velocity = (rng.uniform(-PARTICLE_SPREAD, PARTICLE_SPREAD), rng.uniform(-PARTICLE_SPREAD, PARTICLE_SPREAD))
            explosion.particles.add(Particle(position=(x, y), velocity=velocity, color=color, life=lifetime))
        return explosion

    def update(self) -> None:
        self.lifetime -= 1
        self.particles.update()
        if self.is_dead():
            self.kill()

    def is_dead(self) -> bool:
        return self.lifetime <= 0
