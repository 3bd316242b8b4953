"""Core rules of Flappy Space Rocket: physics, obstacle stream, collisions.

Everything here is pure. Each operation takes a :class:`GameState` and returns
a new one, so the module can be driven by the pygame front end, by tests, or by
anything else that owns a clock.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Protocol, Tuple

# Play field
FIELD_WIDTH = 600
FIELD_HEIGHT = 600
BOUND_HEIGHT = 550

# Rocket
BIRD_X = 100
BIRD_SIZE = 50
BIRD_START_Y = 250.0

# Physics (per tick)
GRAVITY = 0.6
JUMP_FORCE = -10.0

# Obstacles
OBSTACLE_WIDTH = 80
GAP_SIZE = 200
GAME_SPEED = 3
SPAWN_X = 600.0
GAP_TOP_MIN = 100.0
GAP_TOP_MAX = 400.0
MIN_OBSTACLES = 2
SEED_OBSTACLES = ((600.0, 200.0), (900.0, 300.0))


class RandomSource(Protocol):
    def uniform(self, a: float, b: float) -> float: ...


class Phase(enum.Enum):
    IDLE = "idle"
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Bird:
    y: float = BIRD_START_Y
    velocity: float = 0.0

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + BIRD_SIZE


@dataclass(frozen=True)
class Obstacle:
    x: float
    gap_top: float
    passed: bool = False

    @property
    def right(self) -> float:
        return self.x + OBSTACLE_WIDTH

    @property
    def gap_bottom(self) -> float:
        return self.gap_top + GAP_SIZE

    def is_off_screen(self) -> bool:
        return self.x <= -OBSTACLE_WIDTH


@dataclass(frozen=True)
class GameState:
    phase: Phase = Phase.IDLE
    bird: Bird = Bird()
    obstacles: Tuple[Obstacle, ...] = ()
    score: int = 0
    high_score: int = 0

    @property
    def playing(self) -> bool:
        return self.phase is Phase.PLAYING


def seed_obstacles() -> Tuple[Obstacle, ...]:
    return tuple(Obstacle(x=x, gap_top=gap_top) for x, gap_top in SEED_OBSTACLES)


def spawn_obstacle(rng: RandomSource) -> Obstacle:
    """Create a fresh obstacle at the spawn column with a random gap."""

    return Obstacle(x=SPAWN_X, gap_top=rng.uniform(GAP_TOP_MIN, GAP_TOP_MAX))


def apply_physics(bird: Bird) -> Tuple[Bird, bool]:
    """Integrate one tick of gravity.

    Returns the new bird and whether it is still inside the vertical bounds.
    A bird that would leave the bounds keeps its previous position.
    """

    velocity = bird.velocity + GRAVITY
    y = bird.y + velocity
    if y <= 0 or y >= BOUND_HEIGHT:
        return bird, False
    return Bird(y=y, velocity=velocity), True


def advance_obstacles(
    obstacles: Tuple[Obstacle, ...], rng: RandomSource
) -> Tuple[Tuple[Obstacle, ...], int]:
    """Scroll, score, cull and replenish the obstacle stream.

    Returns the new stream and the number of points earned this tick.
    """

    advanced = []
    points = 0
    for obstacle in obstacles:
        x = obstacle.x - GAME_SPEED
        passed = obstacle.passed
        if not passed and x + OBSTACLE_WIDTH < BIRD_X:
            passed = True
            points += 1
        advanced.append(Obstacle(x=x, gap_top=obstacle.gap_top, passed=passed))

    remaining = [obstacle for obstacle in advanced if not obstacle.is_off_screen()]
    while len(remaining) < MIN_OBSTACLES:
        remaining.append(spawn_obstacle(rng))
    return tuple(remaining), points


def detect_collision(bird_y: float, obstacles: Tuple[Obstacle, ...]) -> bool:
    top = bird_y
    bottom = bird_y + BIRD_SIZE
    left = BIRD_X
    right = BIRD_X + BIRD_SIZE
    for obstacle in obstacles:
        if right > obstacle.x and left < obstacle.right:
            if top < obstacle.gap_top or bottom > obstacle.gap_bottom:
                return True
    return False


def _end_round(state: GameState) -> GameState:
    return replace(
        state,
        phase=Phase.GAME_OVER,
        high_score=max(state.high_score, state.score),
    )


def start(state: GameState) -> GameState:
    """Begin a round from the menu, or restart one after a game over."""

    if state.playing:
        return state
    return GameState(
        phase=Phase.PLAYING,
        bird=Bird(),
        obstacles=seed_obstacles(),
        score=0,
        high_score=state.high_score,
    )


def reset(state: GameState) -> GameState:
    """Leave the game over screen for the menu. Only the high score survives."""

    if state.phase is not Phase.GAME_OVER:
        return state
    return GameState(phase=Phase.IDLE, high_score=state.high_score)


def activate(state: GameState) -> GameState:
    if not state.playing:
        return state
    return replace(state, bird=replace(state.bird, velocity=JUMP_FORCE))


def tick(state: GameState, rng: RandomSource) -> GameState:
    """Run one frame of the game.

    Order is fixed: physics, then the obstacle stream, then the collision
    check against the rocket's updated position and the advanced obstacles.
    A boundary hit during physics ends the tick immediately.
    """

    if not state.playing:
        return state

    bird, in_bounds = apply_physics(state.bird)
    if not in_bounds:
        return _end_round(state)

    obstacles, points = advance_obstacles(state.obstacles, rng)
    state = replace(state, bird=bird, obstacles=obstacles, score=state.score + points)

    if detect_collision(bird.y, obstacles):
        return _end_round(state)
    return state


def is_new_high_score(state: GameState) -> bool:
    return (
        state.phase is Phase.GAME_OVER
        and state.score > 0
        and state.score == state.high_score
    )


__all__ = [
    "BIRD_SIZE",
    "BIRD_X",
    "BOUND_HEIGHT",
    "Bird",
    "FIELD_HEIGHT",
    "FIELD_WIDTH",
    "GAP_SIZE",
    "GameState",
    "OBSTACLE_WIDTH",
    "Obstacle",
    "Phase",
    "activate",
    "advance_obstacles",
    "apply_physics",
    "detect_collision",
    "is_new_high_score",
    "reset",
    "start",
    "tick",
]
