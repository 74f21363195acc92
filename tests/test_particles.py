from __future__ import annotations

import random

import pygame

from starguard.particles import EXPLOSION_PARTICLES, Explosion


def test_explosion_dies_after_exactly_thirty_updates() -> None:
    explosion = Explosion.burst(50, 50, random.Random(7))
    for _ in range(29):
        explosion.update()
        assert not explosion.is_dead()
    explosion.update()
    assert explosion.is_dead()


def test_burst_spawns_particles_within_spread() -> None:
    explosion = Explosion.burst(10, 20, random.Random(3), color=(1, 2, 3))
    assert len(explosion.particles) == EXPLOSION_PARTICLES
    for particle in explosion.particles:
        assert particle.position == [10, 20]
        assert -4 <= particle.velocity[0] <= 4
        assert -4 <= particle.velocity[1] <= 4
        assert particle.color == (1, 2, 3)
        assert particle.life == 30


def test_particle_velocity_damps() -> None:
    explosion = Explosion.burst(0, 0, random.Random(1))
    particle = explosion.particles.sprites()[0]
    vx, vy = particle.velocity
    explosion.update()
    assert particle.position == [vx, vy]
    assert particle.velocity[0] == vx * 0.98
    assert particle.velocity[1] == vy * 0.98
    assert particle.life == 29


def test_lifetime_decides_death_not_particle_life() -> None:
    explosion = Explosion.burst(0, 0, random.Random(1))
    for particle in explosion.particles:
        particle.life = 0
    assert not explosion.is_dead()


def test_dead_explosion_leaves_its_group() -> None:
    explosion = Explosion.burst(0, 0, random.Random(1))
    group = pygame.sprite.Group(explosion)
    for _ in range(29):
        group.update()
    assert explosion.alive()
    group.update()
    assert not explosion.alive()
    assert len(group) == 0
