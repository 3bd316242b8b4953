"""Decorative twinkling starfield drawn behind the play field."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Optional

import pygame

STAR_COUNT = 100
TWINKLE_PERIOD = 2.0  # seconds
MIN_BRIGHTNESS = 0.3


@dataclass(frozen=True)
class Star:
    x: float
    y: float
    size: float
    delay: float

    def brightness(self, t: float) -> float:
        """Brightness in ``[MIN_BRIGHTNESS, 1]`` at time ``t`` (seconds)."""

        phase = (t + self.delay) / TWINKLE_PERIOD * 2 * math.pi
        wave = (math.sin(phase) + 1) / 2
        return MIN_BRIGHTNESS + (1 - MIN_BRIGHTNESS) * wave


class Starfield:
    def __init__(
        self,
        width: int,
        height: int,
        *,
        count: int = STAR_COUNT,
        rng: Optional[random.Random] = None,
    ) -> None:
        rng = rng if rng is not None else random.Random()
        self.width = width
        self.height = height
        self.stars: List[Star] = [
            Star(
                x=rng.random() * width,
                y=rng.random() * height,
                size=rng.random() * 3 + 1,
                delay=rng.random() * TWINKLE_PERIOD,
            )
            for _ in range(count)
        ]

    def draw(self, surface: pygame.Surface, t: float) -> None:
        for star in self.stars:
            level = int(255 * star.brightness(t))
            radius = max(1, int(star.size / 2))
            pygame.draw.circle(surface, (level, level, level), (int(star.x), int(star.y)), radius)


__all__ = ["Star", "Starfield"]
