"""Simulation state, the per-frame update step, and the game-state machine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Sequence
import logging
import random

import pygame

from .enemy import Enemy
from .formations import formation_positions
from .particles import Explosion
from .player import Bullet, Player, player_bullet
from .settings import LEVELS, GameSettings, LevelSettings, validate_levels
from .utils import CYAN, ORANGE_RED, SCREEN_HEIGHT, SCREEN_WIDTH, Color, sprites_overlap

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Coarse states; only PLAYING runs the simulation step."""

    START = auto()
    PLAYING = auto()
    GAME_OVER = auto()


@dataclass(frozen=True, slots=True)
class HudSnapshot:
    """Values handed to the HUD once per simulated frame."""

    score: int
    level: int
    lives: int


@dataclass(slots=True)
class ScheduledTask:
    """One-shot callback due at a simulation tick."""

    due_tick: int
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass(slots=True)
class TickScheduler:
    """Runs deferred callbacks against the simulation clock, not wall time."""

    tasks: list[ScheduledTask] = field(default_factory=list)

    def schedule(self, now: int, delay_ticks: int, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(due_tick=now + delay_ticks, callback=callback)
        self.tasks.append(task)
        return task

    def run_due(self, now: int) -> int:
        """Fire every task due at or before ``now``; returns how many ran."""
        due = [task for task in self.tasks if task.due_tick <= now]
        self.tasks = [task for task in self.tasks if task.due_tick > now]
        ran = 0
        for task in due:
            if task.cancelled:
                continue
            task.callback()
            ran += 1
        return ran

    def cancel_all(self) -> None:
        for task in self.tasks:
            task.cancel()
        self.tasks.clear()

    @property
    def pending(self) -> int:
        return sum(1 for task in self.tasks if not task.cancelled)


class World:
    """Owns every entity collection plus score, lives and level."""

    def __init__(
        self,
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
        settings: GameSettings | None = None,
        levels: Sequence[LevelSettings] = LEVELS,
        rng: random.Random | None = None,
    ) -> None:
        validate_levels(levels)
        self.width = width
        self.height = height
        self.settings = settings or GameSettings()
        self.levels = tuple(levels)
        self.rng = rng or random.Random()

        self.state = GameState.START
        self.victory = False
        self.keys: dict[int, bool] = {}
        self.scheduler = TickScheduler()
        self.on_hud: Callable[[HudSnapshot], None] | None = None
        self.on_game_over: Callable[[bool], None] | None = None
        self.reset()

    def reset(self) -> None:
        """Fresh score, lives, level and entity collections."""
        self.scheduler.cancel_all()
        self.tick = 0
        self.score = 0
        self.level = 1
        self.lives = self.settings.starting_lives
        self.victory = False
        self.player = Player.spawn(self.width, self.height, self.settings.player_speed)
        self.bullets = pygame.sprite.Group()
        self.enemy_bullets = pygame.sprite.Group()
        self.enemies = pygame.sprite.Group()
        self.explosions = pygame.sprite.Group()
        self.hud = HudSnapshot(self.score, self.level, self.lives)

    # --- state machine ---------------------------------------------------

    def start(self) -> None:
        """START -> PLAYING with a fresh game and the first wave."""
        if self.state != GameState.START:
            return
        self.reset()
        self.state = GameState.PLAYING
        self.spawn_enemies()
        self.update_hud()
        logger.info("Game started")

    def restart(self) -> None:
        """GAME_OVER -> START."""
        if self.state != GameState.GAME_OVER:
            return
        self.state = GameState.START
        logger.info("Returned to start screen")

    def game_over(self, victory: bool, reason: str = "") -> None:
        """End the playing state; victory and loss are both normal outcomes."""
        if self.state != GameState.PLAYING:
            return
        self.state = GameState.GAME_OVER
        self.victory = victory
        self.scheduler.cancel_all()
        if victory:
            logger.info("Victory with score %d", self.score)
        else:
            logger.info("Game lost (%s) on level %d with score %d", reason or "unknown", self.level, self.score)
        if self.on_game_over:
            self.on_game_over(victory)

    @property
    def level_settings(self) -> LevelSettings:
        return self.levels[self.level - 1]

    # --- input -----------------------------------------------------------

    def key_down(self, key: int) -> None:
        """Record a pressed key; space fires once per physical press."""
        already_held = self.keys.get(key, False)
        self.keys[key] = True
        if key == pygame.K_SPACE and not already_held and self.state == GameState.PLAYING:
            self.fire_player_bullet()

    def key_up(self, key: int) -> None:
        self.keys[key] = False

    def fire_player_bullet(self) -> Bullet:
        x, y = self.player.muzzle
        bullet = player_bullet(x, y, self.settings.bullet_speed)
        self.bullets.add(bullet)
        return bullet

    # --- spawning and effects --------------------------------------------

    def spawn_enemies(self) -> None:
        """Replace the enemy collection with the current level's formation."""
        level = self.level_settings
        positions = formation_positions(level.formation, level.enemy_count, self.width)
        wave = [
            Enemy(x=x, y=y, kind=level.enemy_type, speed=level.move_speed, color=level.color)
            for x, y in positions
        ]
        self.enemies.empty()
        self.enemies.add(*wave)
        logger.info("Level %d: %d %s enemies in %s formation", self.level, len(self.enemies), level.enemy_type.value, level.formation.value)

    def create_explosion(self, x: float, y: float, color: Color = ORANGE_RED) -> Explosion:
        explosion = Explosion.burst(x, y, self.rng, color)
        self.explosions.add(explosion)
        return explosion

    def damage_player(self) -> bool:
        """Cost one life unless the player is invulnerable."""
        if not self.player.take_damage(self.settings.invulnerability_frames):
            return False
        self.lives = max(0, self.lives - 1)
        cx, cy = self.player.center
        self.create_explosion(cx, cy, CYAN)
        return True

    def _enemy_fire(self, enemy: Enemy) -> None:
        enemy.shoot(self.enemy_bullets, self.settings.max_enemy_bullets, self.settings.enemy_bullet_speed)

    # --- frame stepping --------------------------------------------------

    def frame(self) -> None:
        """One scheduler tick: simulate only while playing."""
        if self.state == GameState.PLAYING:
            self.update()

    def update(self) -> None:
        """Advance the simulation by one tick."""
        self.tick += 1
        self.scheduler.run_due(self.tick)

        self.player.update(self.keys, self.width)
        self._update_player_bullets()

        if self._update_enemy_bullets() or self._update_enemies() or self._resolve_bullet_hits():
            self.update_hud()
            return

        self.explosions.update()

        self.update_hud()

    def update_hud(self) -> None:
        self.hud = HudSnapshot(self.score, self.level, self.lives)
        if self.on_hud:
            self.on_hud(self.hud)

    def _update_player_bullets(self) -> None:
        self.bullets.update(self.height)

    def _update_enemy_bullets(self) -> bool:
        for bullet in self.enemy_bullets:
            bullet.update(self.height)
            if not bullet.alive():
                continue
            if sprites_overlap(bullet, self.player):
                bullet.kill()
                if self.damage_player() and self.lives <= 0:
                    self.game_over(False, "out of lives")
                    return True
        return False

    def _update_enemies(self) -> bool:
        threshold = self.height - self.settings.bottom_margin
        for enemy in self.enemies:
            enemy.update(self.width, self.rng, self.settings.enemy_shoot_chance, self._enemy_fire)

            if enemy.y + enemy.height > threshold:
                self.game_over(False, "invaders reached the surface")
                return True

            if sprites_overlap(enemy, self.player) and self.damage_player():
                enemy.kill()
                cx, cy = enemy.center
                self.create_explosion(cx, cy)
                if self.lives <= 0:
                    self.game_over(False, "out of lives")
                    return True
                if self._check_level_clear():
                    return True
        return False

    def _resolve_bullet_hits(self) -> bool:
        for bullet in self.bullets:
            # First overlapping enemy in spawn order takes the hit.
            enemy = pygame.sprite.spritecollideany(bullet, self.enemies, sprites_overlap)
            if enemy is None:
                continue
            bullet.kill()
            enemy.kill()
            self.score += 10 * self.level
            cx, cy = enemy.center
            self.create_explosion(cx, cy)
            if self._check_level_clear():
                return True
        return False

    def _check_level_clear(self) -> bool:
        """Advance the level once the wave is gone; True if that ended the game."""
        if self.enemies:
            return False
        self.level += 1
        if self.level > len(self.levels):
            self.game_over(True)
            return True
        logger.info("Wave cleared, level %d arrives in %d ticks", self.level, self.settings.spawn_delay_ticks)
        self.scheduler.schedule(self.tick, self.settings.spawn_delay_ticks, self.spawn_enemies)
        return False
