"""Pygame shell: window, frame loop, input routing, rendering, and HUD."""

from __future__ import annotations

import logging
import math
import pygame

from .enemy import Enemy, EnemyType
from .menu import Menu, game_over_menu, start_menu
from .particles import Explosion
from .player import Bullet, Player
from .settings import DisplaySettings, SettingsManager
from .utils import (
    BG_BOTTOM,
    BG_TOP,
    CYAN,
    FPS,
    RED,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TEXT_COLOR,
    WHITE,
    YELLOW,
    Color,
)
from .world import GameState, World

logger = logging.getLogger(__name__)

STAR_COUNT = 50


def build_background(size: tuple[int, int]) -> pygame.Surface:
    """Pre-render the vertical night-sky gradient."""
    width, height = size
    background = pygame.Surface((width, height))
    for y in range(height):
        t = y / max(1, height - 1)
        color = tuple(int(top + (bottom - top) * t) for top, bottom in zip(BG_TOP, BG_BOTTOM))
        pygame.draw.line(background, color, (0, y), (width, y))
    return background


def with_alpha(color: Color, alpha: float) -> tuple[int, int, int, int]:
    return (*color, max(0, min(255, int(255 * alpha))))


class StarGame:
    """Runs the world at a fixed cadence and paints it every frame."""

    def __init__(self, display: DisplaySettings | None = None, world: World | None = None) -> None:
        pygame.init()
        pygame.font.init()

        self.display = display or SettingsManager().display
        self.world = world or World(SCREEN_WIDTH, SCREEN_HEIGHT)
        self.world.on_game_over = self._show_game_over

        flags = pygame.FULLSCREEN if self.display.fullscreen else 0
        self.screen = pygame.display.set_mode((self.world.width, self.world.height), flags)
        pygame.display.set_caption("Starguard")
        self.clock = pygame.time.Clock()
        logger.debug("Display %dx%d fullscreen=%s", self.world.width, self.world.height, self.display.fullscreen)

        self.title_font = pygame.font.SysFont("consolas", 48, bold=True)
        self.body_font = pygame.font.SysFont("consolas", 26, bold=True)
        self.small_font = pygame.font.SysFont("consolas", 20)

        self.background = build_background((self.world.width, self.world.height))
        self.menu: Menu = start_menu()
        self.running = True

    @property
    def state(self) -> GameState:
        return self.world.state

    def run(self) -> None:
        """Main event/update/render loop."""
        while self.running:
            self.clock.tick(FPS)
            self._handle_events()
            if not self.running:
                break
            self.frame()
        logger.info("Shutting down")
        pygame.quit()

    def frame(self) -> None:
        """Maybe simulate, then always render."""
        self.world.frame()
        self._render()

    def _show_game_over(self, victory: bool) -> None:
        self.menu = game_over_menu(victory, self.world.score)

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                return
            if event.type == pygame.KEYUP:
                self.world.key_up(event.key)
                continue
            if event.type != pygame.KEYDOWN:
                continue

            self.world.key_down(event.key)
            if self.state == GameState.PLAYING:
                continue
            if event.key == pygame.K_ESCAPE and self.state == GameState.START:
                self.running = False
                return
            self._handle_menu_input(event.key)

    def _handle_menu_input(self, key: int) -> None:
        if key == pygame.K_UP:
            self.menu.move(-1)
            return
        if key == pygame.K_DOWN:
            self.menu.move(1)
            return
        if key not in (pygame.K_RETURN, pygame.K_SPACE):
            return

        action = self.menu.current_action()
        if action == "start":
            self.world.start()
        elif action == "restart":
            self.world.restart()
            self.menu = start_menu()
        elif action == "exit":
            self.running = False

    # --- rendering -------------------------------------------------------

    def _render(self) -> None:
        self.screen.blit(self.background, (0, 0))
        if self.display.show_starfield:
            self._draw_starfield(self.screen)

        if self.state == GameState.PLAYING:
            self._render_playfield(self.screen)
        else:
            self.menu.render(self.screen, self.title_font, self.body_font)
        pygame.display.flip()

    def _draw_starfield(self, surface: pygame.Surface) -> None:
        now = pygame.time.get_ticks()
        width, height = surface.get_size()
        for i in range(STAR_COUNT):
            x = (i * 137.5) % width
            y = (i * 234.7 + now * 0.01) % height
            size = (i % 3) + 1
            surface.fill(WHITE, (int(x), int(y), size, size))

    def _render_playfield(self, surface: pygame.Surface) -> None:
        world = self.world
        layer = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        self._draw_player(layer, world.player)
        for bullet in world.bullets:
            self._draw_bullet(layer, bullet)
        for bullet in world.enemy_bullets:
            self._draw_bullet(layer, bullet)
        for enemy in world.enemies:
            self._draw_enemy(layer, enemy)
        for explosion in world.explosions:
            self._draw_explosion(layer, explosion)
        surface.blit(layer, (0, 0))
        self._render_hud(surface)

    def _draw_player(self, surface: pygame.Surface, player: Player) -> None:
        alpha = 0.5 if player.is_flashing else 1.0
        x, y, w, h = player.x, player.y, player.width, player.height
        body = [
            (x + w / 2, y),
            (x + w * 0.8, y + h * 0.7),
            (x + w * 0.6, y + h * 0.7),
            (x + w * 0.6, y + h),
            (x + w * 0.4, y + h),
            (x + w * 0.4, y + h * 0.7),
            (x + w * 0.2, y + h * 0.7),
        ]
        pygame.draw.polygon(surface, with_alpha(CYAN, alpha), body)
        pygame.draw.rect(surface, with_alpha(WHITE, alpha), (int(x + w * 0.45), int(y + h * 0.2), int(w * 0.1), int(h * 0.3)))

        if self.world.keys.get(pygame.K_LEFT) or self.world.keys.get(pygame.K_RIGHT):
            phase = player.thruster_phase
            flame = pygame.Color(0, 0, 0)
            flame.hsla = ((20 + math.sin(phase) * 20) % 360, 100, 60, 100)
            points = [
                (x + w * 0.4, y + h),
                (x + w * 0.45, y + h + 10 + math.sin(phase) * 3),
                (x + w * 0.5, y + h + 5),
                (x + w * 0.55, y + h + 10 + math.sin(phase + 1) * 3),
                (x + w * 0.6, y + h),
            ]
            pygame.draw.polygon(surface, with_alpha((flame.r, flame.g, flame.b), alpha), points)

    def _draw_bullet(self, surface: pygame.Surface, bullet: Bullet) -> None:
        total = len(bullet.trail)
        for idx, (tx, ty) in enumerate(bullet.trail):
            fade = (idx + 1) / total * 0.5
            surface.fill(with_alpha(bullet.color, fade), (int(tx) - 1, int(ty) - 1, 2, 2))
        rect = bullet.rect
        pygame.draw.rect(surface, with_alpha(bullet.color, 0.5), rect.inflate(4, 4), border_radius=2)
        pygame.draw.rect(surface, with_alpha(bullet.color, 1.0), rect)

    def _draw_enemy(self, surface: pygame.Surface, enemy: Enemy) -> None:
        rect = enemy.rect
        if enemy.kind == EnemyType.BASIC:
            glow = 0.3 + math.sin(enemy.animation_phase * 2) * 0.2
            pygame.draw.rect(surface, with_alpha(enemy.color, glow), rect.inflate(8, 8), border_radius=4)
            pygame.draw.rect(surface, with_alpha(enemy.color, 1.0), rect)
        elif enemy.kind == EnemyType.FAST:
            points = [(rect.centerx, rect.top), (rect.right, rect.bottom), (rect.left, rect.bottom)]
            pygame.draw.polygon(surface, with_alpha(enemy.color, 1.0), points)
            pygame.draw.rect(surface, with_alpha(enemy.color, 0.5), (rect.left + 5, rect.bottom, rect.width - 10, 5))
        else:
            if enemy.is_charging:
                pygame.draw.rect(surface, with_alpha(RED, 0.8), rect.inflate(4, 4))
            pygame.draw.rect(surface, with_alpha(enemy.color, 1.0), rect)
            pygame.draw.rect(surface, with_alpha(WHITE, 1.0), (rect.centerx - 2, rect.bottom, 4, 8))

    def _draw_explosion(self, surface: pygame.Surface, explosion: Explosion) -> None:
        for particle in explosion.particles:
            if particle.life <= 0:
                continue
            surface.fill(with_alpha(particle.color, particle.alpha), particle.rect)

    def _render_hud(self, surface: pygame.Surface) -> None:
        hud = self.world.hud
        lines = [
            (f"Score: {hud.score}", YELLOW),
            (f"Level: {hud.level}", CYAN),
            (f"Lives: {'<3 ' * hud.lives}".rstrip(), RED),
        ]
        for idx, (line, color) in enumerate(lines):
            text = self.small_font.render(line, True, color)
            surface.blit(text, (16, 12 + idx * 24))

        helper = self.small_font.render("Arrows move | Space fires", True, TEXT_COLOR)
        surface.blit(helper, (surface.get_width() - helper.get_width() - 16, 12))
