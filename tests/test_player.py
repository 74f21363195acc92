from __future__ import annotations

import pygame

from starguard.player import TRAIL_LENGTH, Bullet, Player, enemy_bullet, player_bullet


def _player() -> Player:
    return Player.spawn(800, 600, speed=6)


def test_player_spawns_centered_above_bottom() -> None:
    player = _player()
    assert player.x == 385
    assert player.y == 540


def test_player_clamped_to_left_edge() -> None:
    player = _player()
    player.x = 2
    player.update({pygame.K_LEFT: True}, 800)
    assert player.x == 0


def test_player_clamped_to_right_edge() -> None:
    player = _player()
    player.x = 768
    player.update({pygame.K_RIGHT: True}, 800)
    assert player.x == 770


def test_released_keys_do_not_move() -> None:
    player = _player()
    start = player.x
    player.update({pygame.K_LEFT: False, pygame.K_RIGHT: False}, 800)
    assert player.x == start


def test_invulnerability_counts_down_to_zero() -> None:
    player = _player()
    player.invulnerable = 2
    player.update({}, 800)
    assert player.invulnerable == 1
    player.update({}, 800)
    player.update({}, 800)
    assert player.invulnerable == 0


def test_take_damage_blocked_while_invulnerable() -> None:
    player = _player()
    assert player.take_damage(120)
    assert player.invulnerable == 120
    assert not player.take_damage(120)
    assert player.invulnerable == 120


def test_flashing_toggles_every_five_frames() -> None:
    player = _player()
    player.invulnerable = 5
    assert player.is_flashing
    player.invulnerable = 4
    assert not player.is_flashing
    player.invulnerable = 0
    assert not player.is_flashing


def test_bullet_trail_keeps_latest_five_points() -> None:
    bullet = Bullet(x=100, y=300, direction=-1, speed=8)
    for _ in range(8):
        bullet.update()
    assert len(bullet.trail) == TRAIL_LENGTH
    assert bullet.trail[0] == (102, 300 - 4 * 8 + 6)
    assert bullet.trail[-1] == (102, 300 - 8 * 8 + 6)


def test_bullet_directions() -> None:
    up = player_bullet(10, 100, speed=8)
    down = enemy_bullet(10, 100, speed=3)
    up.update()
    down.update()
    assert up.y == 92
    assert down.y == 103
    assert down.color != up.color


def test_bullet_off_screen_checks_travel_direction() -> None:
    up = player_bullet(10, -13, speed=8)
    down = enemy_bullet(10, 601, speed=3)
    assert up.is_off_screen(600)
    assert down.is_off_screen(600)
    assert not player_bullet(10, -12, speed=8).is_off_screen(600)


def test_bullet_leaving_the_screen_leaves_its_group() -> None:
    shot = player_bullet(10, -4, speed=8)
    group = pygame.sprite.Group(shot)
    group.update(600)
    assert shot.alive()
    assert shot.rect.topleft == (10, -12)
    group.update(600)
    assert not shot.alive()
    assert len(group) == 0
