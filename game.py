"""Pygame front end for Flappy Space Rocket."""

from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Tuple

import pygame

from engine import (
    BIRD_SIZE,
    BIRD_X,
    FIELD_HEIGHT,
    FIELD_WIDTH,
    OBSTACLE_WIDTH,
    Bird,
    GameState,
    Obstacle,
    Phase,
    is_new_high_score,
)
from session import GameSession
from starfield import Starfield

logger = logging.getLogger("rocket.game")

FPS = 60
CAPTION = "Flappy Space Rocket"

# Rocket tilt follows the vertical speed, capped when diving
TILT_PER_VELOCITY = 3.0
MAX_TILT = 30.0

BACKGROUND_TOP = (10, 0, 21)
BACKGROUND_BOTTOM = (26, 0, 51)
ROCKET_BODY = (255, 107, 157)
ROCKET_WINDOW = (140, 210, 240)
ROCKET_FLAME = (255, 190, 60)
OBSTACLE_COLOR = (139, 92, 246)
OBSTACLE_EDGE = (217, 70, 239)
ACCENT_COLOR = (255, 107, 157)
TEXT_COLOR = (240, 240, 240)
MUTED_TEXT = (190, 190, 210)
BUTTON_COLOR = (139, 92, 246)
BUTTON_ALT_COLOR = (60, 50, 90)
MENU_OVERLAY = (0, 0, 0, 128)
GAME_OVER_OVERLAY = (0, 0, 0, 178)

THRUST_KEYS = (pygame.K_SPACE,)
START_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)
MENU_KEYS = (pygame.K_m,)

Button = Tuple[str, pygame.Rect, Callable[[], None]]


def rocket_tilt(bird: Bird) -> float:
    """Clockwise tilt of the rocket sprite in degrees."""

    return min(bird.velocity * TILT_PER_VELOCITY, MAX_TILT)


def obstacle_rects(obstacle: Obstacle) -> Tuple[pygame.Rect, pygame.Rect]:
    x = int(obstacle.x)
    top = pygame.Rect(x, 0, OBSTACLE_WIDTH, int(obstacle.gap_top))
    gap_bottom = int(obstacle.gap_bottom)
    bottom = pygame.Rect(x, gap_bottom, OBSTACLE_WIDTH, FIELD_HEIGHT - gap_bottom)
    return top, bottom


def _make_rocket_sprite() -> pygame.Surface:
    sprite = pygame.Surface((BIRD_SIZE, BIRD_SIZE), pygame.SRCALPHA)
    mid = BIRD_SIZE // 2
    body = [(6, mid - 9), (34, mid - 9), (48, mid), (34, mid + 9), (6, mid + 9)]
    pygame.draw.polygon(sprite, ROCKET_FLAME, [(0, mid), (8, mid - 6), (8, mid + 6)])
    pygame.draw.polygon(sprite, ROCKET_BODY, body)
    pygame.draw.polygon(sprite, ROCKET_BODY, [(8, mid - 9), (16, mid - 9), (6, mid - 20)])
    pygame.draw.polygon(sprite, ROCKET_BODY, [(8, mid + 9), (16, mid + 9), (6, mid + 20)])
    pygame.draw.circle(sprite, ROCKET_WINDOW, (30, mid), 5)
    return sprite


class RocketGame:
    def __init__(
        self,
        *,
        enable_hand_control: bool = False,
        debug_hand: bool = False,
        seed: Optional[int] = None,
        fps: int = FPS,
    ) -> None:
        pygame.init()
        pygame.display.set_caption(CAPTION)
        self.screen = pygame.display.set_mode((FIELD_WIDTH, FIELD_HEIGHT))
        self.clock = pygame.time.Clock()
        self.fps = fps

        self.font_large = pygame.font.SysFont("arial", 48, bold=True)
        self.font_medium = pygame.font.SysFont("arial", 30, bold=True)
        self.font_small = pygame.font.SysFont("arial", 20)

        self.session = GameSession(rng=random.Random(seed))
        self.starfield = Starfield(FIELD_WIDTH, FIELD_HEIGHT, rng=random.Random(seed))
        self.background = self._make_background()
        self.rocket_sprite = _make_rocket_sprite()

        self.detector = None
        if enable_hand_control:
            try:
                from hand_control import HandThrustDetector

                self.detector = HandThrustDetector(debug=debug_hand)
            except (ImportError, RuntimeError) as exc:
                logger.warning("Hand control disabled: %s", exc)
                self.detector = None

    @property
    def state(self) -> GameState:
        return self.session.state

    def buttons(self) -> List[Button]:
        """Clickable buttons shown for the current phase."""

        center_x = FIELD_WIDTH // 2
        phase = self.state.phase
        if phase is Phase.IDLE:
            rect = pygame.Rect(0, 0, 240, 60)
            rect.center = (center_x, FIELD_HEIGHT // 2 + 70)
            return [("START GAME", rect, self.session.start)]
        if phase is Phase.GAME_OVER:
            again = pygame.Rect(0, 0, 200, 56)
            again.center = (center_x - 110, FIELD_HEIGHT // 2 + 110)
            menu = pygame.Rect(0, 0, 160, 56)
            menu.center = (center_x + 100, FIELD_HEIGHT // 2 + 110)
            return [
                ("PLAY AGAIN", again, self.session.restart),
                ("MENU", menu, self.session.reset),
            ]
        return []

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            raise SystemExit
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                raise SystemExit
            if event.key in THRUST_KEYS:
                self.session.activate()
            elif event.key in START_KEYS:
                if self.state.phase is Phase.GAME_OVER:
                    self.session.restart()
                else:
                    self.session.start()
            elif event.key in MENU_KEYS:
                self.session.reset()
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for _, rect, action in self.buttons():
                if rect.collidepoint(event.pos):
                    action()
                    return
            self.session.activate()

    def process_input(self) -> None:
        for event in pygame.event.get():
            self.handle_event(event)

        if self.detector is not None and self.detector.poll_thrust():
            self.session.activate()

    def _make_background(self) -> pygame.Surface:
        background = pygame.Surface((FIELD_WIDTH, FIELD_HEIGHT))
        for y in range(FIELD_HEIGHT):
            t = y / (FIELD_HEIGHT - 1)
            color = [
                int(top + (bottom - top) * t)
                for top, bottom in zip(BACKGROUND_TOP, BACKGROUND_BOTTOM)
            ]
            pygame.draw.line(background, color, (0, y), (FIELD_WIDTH, y))
        return background

    def _blit_centered(self, font: pygame.font.Font, text: str, color, center) -> None:
        surface = font.render(text, True, color)
        self.screen.blit(surface, surface.get_rect(center=center))

    def _draw_overlay(self, color) -> None:
        overlay = pygame.Surface((FIELD_WIDTH, FIELD_HEIGHT), pygame.SRCALPHA)
        overlay.fill(color)
        self.screen.blit(overlay, (0, 0))

    def _draw_buttons(self) -> None:
        for index, (label, rect, _) in enumerate(self.buttons()):
            color = BUTTON_COLOR if index == 0 else BUTTON_ALT_COLOR
            pygame.draw.rect(self.screen, color, rect, border_radius=rect.height // 2)
            pygame.draw.rect(self.screen, TEXT_COLOR, rect, width=2, border_radius=rect.height // 2)
            self._blit_centered(self.font_small, label, TEXT_COLOR, rect.center)

    def _draw_field(self) -> None:
        state = self.state
        for obstacle in state.obstacles:
            for rect in obstacle_rects(obstacle):
                if rect.height <= 0:
                    continue
                pygame.draw.rect(self.screen, OBSTACLE_COLOR, rect, border_radius=8)
                pygame.draw.rect(self.screen, OBSTACLE_EDGE, rect, width=2, border_radius=8)

        # pygame rotates counter-clockwise
        sprite = pygame.transform.rotate(self.rocket_sprite, -rocket_tilt(state.bird))
        center = (BIRD_X + BIRD_SIZE // 2, int(state.bird.y) + BIRD_SIZE // 2)
        self.screen.blit(sprite, sprite.get_rect(center=center))

    def _draw_hud(self) -> None:
        state = self.state
        score = self.font_small.render(f"Score: {state.score}", True, TEXT_COLOR)
        high = self.font_small.render(f"High: {state.high_score}", True, TEXT_COLOR)
        self.screen.blit(score, (16, 12))
        self.screen.blit(high, high.get_rect(topright=(FIELD_WIDTH - 16, 12)))

    def draw(self) -> None:
        self.screen.blit(self.background, (0, 0))
        self.starfield.draw(self.screen, pygame.time.get_ticks() / 1000.0)

        state = self.state
        center_x = FIELD_WIDTH // 2
        center_y = FIELD_HEIGHT // 2
        if state.phase is Phase.PLAYING:
            self._draw_field()
        elif state.phase is Phase.IDLE:
            self._draw_overlay(MENU_OVERLAY)
            self._blit_centered(self.font_large, "FLAPPY SPACE ROCKET", ACCENT_COLOR, (center_x, center_y - 80))
            self._blit_centered(self.font_small, "Click or press SPACE to fly", MUTED_TEXT, (center_x, center_y - 10))
        else:
            self._draw_overlay(GAME_OVER_OVERLAY)
            self._blit_centered(self.font_large, "GAME OVER", TEXT_COLOR, (center_x, center_y - 90))
            self._blit_centered(self.font_medium, f"Score: {state.score}", TEXT_COLOR, (center_x, center_y - 30))
            if is_new_high_score(state):
                self._blit_centered(self.font_medium, "NEW HIGH SCORE!", ACCENT_COLOR, (center_x, center_y + 20))
        self._draw_buttons()
        self._draw_hud()

        pygame.draw.line(self.screen, ACCENT_COLOR, (0, FIELD_HEIGHT - 2), (FIELD_WIDTH, FIELD_HEIGHT - 2), 4)
        pygame.display.flip()

    def run(self) -> None:
        try:
            while True:
                self.clock.tick(self.fps)
                self.process_input()
                self.session.scheduler.run_pending()
                self.draw()
        finally:
            self._shutdown()

    def _shutdown(self) -> None:
        if self.detector is not None:
            self.detector.stop()
            self.detector = None
        pygame.quit()


__all__ = ["RocketGame", "obstacle_rects", "rocket_tilt"]
