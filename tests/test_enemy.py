from __future__ import annotations

import pygame

from starguard.enemy import Enemy, EnemyType

RED = (255, 0, 0)


def _enemy(kind: EnemyType, x: float = 100, y: float = 100, speed: float = 1.0) -> Enemy:
    return Enemy(x=x, y=y, kind=kind, speed=speed, color=RED)


def test_basic_drifts_at_half_speed_and_drops_every_sixty_ticks(never_fire) -> None:
    enemy = _enemy(EnemyType.BASIC)
    for _ in range(59):
        enemy.update(800, never_fire)
    assert enemy.y == 100
    assert enemy.x == 100 + 59 * 0.5
    enemy.update(800, never_fire)
    assert enemy.y == 120


def test_fast_moves_full_speed(never_fire) -> None:
    enemy = _enemy(EnemyType.FAST, speed=1.5)
    enemy.update(800, never_fire)
    assert enemy.x == 101.5
    assert enemy.y != 100


def test_shooter_steps_every_thirty_ticks(never_fire) -> None:
    enemy = _enemy(EnemyType.SHOOTER)
    for _ in range(29):
        enemy.update(800, never_fire, 0.001)
    assert enemy.x == 100
    enemy.update(800, never_fire, 0.001)
    assert enemy.x == 120


def test_shooter_fires_then_waits_for_cooldown(always_fire) -> None:
    enemy = _enemy(EnemyType.SHOOTER)
    shots: list[Enemy] = []
    enemy.update(800, always_fire, 0.001, shots.append)
    assert shots == [enemy]
    assert enemy.shoot_cooldown == 59
    for _ in range(58):
        enemy.update(800, always_fire, 0.001, shots.append)
    assert len(shots) == 1
    enemy.update(800, always_fire, 0.001, shots.append)
    enemy.update(800, always_fire, 0.001, shots.append)
    assert len(shots) == 2


def test_non_shooters_never_fire(always_fire) -> None:
    shots: list[Enemy] = []
    for kind in (EnemyType.BASIC, EnemyType.FAST):
        enemy = _enemy(kind)
        for _ in range(120):
            enemy.update(800, always_fire, 1.0, shots.append)
    assert shots == []


def test_right_edge_flips_once_and_drops(never_fire) -> None:
    enemy = _enemy(EnemyType.BASIC, x=775 - 0.25)
    assert enemy.update(800, never_fire)
    assert enemy.x == 775
    assert enemy.direction == -1
    assert enemy.y == 110
    assert not enemy.update(800, never_fire)
    assert enemy.direction == -1
    assert enemy.y == 110


def test_left_edge_flips(never_fire) -> None:
    enemy = _enemy(EnemyType.FAST, x=1, speed=2)
    enemy.direction = -1
    assert enemy.update(800, never_fire)
    assert enemy.x == 0
    assert enemy.direction == 1


def test_enemy_stays_inside_screen(never_fire) -> None:
    enemy = _enemy(EnemyType.FAST, speed=7)
    flips = 0
    for _ in range(500):
        flips += enemy.update(800, never_fire)
        assert 0 <= enemy.x <= 775
    assert flips > 0


def test_shooter_at_edge_does_not_flip_repeatedly(never_fire) -> None:
    enemy = _enemy(EnemyType.SHOOTER, x=768)
    enemy.move_counter = 29
    assert enemy.update(800, never_fire)
    y_after_flip = enemy.y
    for _ in range(20):
        assert not enemy.update(800, never_fire)
    assert enemy.y == y_after_flip


def test_shoot_respects_capacity() -> None:
    enemy = _enemy(EnemyType.SHOOTER)
    bullets = pygame.sprite.Group()
    fired = [enemy.shoot(bullets, capacity=3, speed=3) for _ in range(5)]
    assert len(bullets) == 3
    assert fired[3] is None and fired[4] is None
    first = bullets.sprites()[0]
    assert first.x == 100 + 12.5 - 2
    assert first.y == 125
    assert first.direction == 1
    assert fired[0] is first


def test_rect_follows_float_position(never_fire) -> None:
    enemy = _enemy(EnemyType.FAST, x=10.5, speed=1.5)
    enemy.update(800, never_fire)
    assert enemy.rect.topleft == (int(enemy.x), int(enemy.y))
    assert enemy.rect.size == (25, 25)
