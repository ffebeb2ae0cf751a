"""Breakable asteroids and their fragment spawning."""
from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

from pygame.math import Vector2

from asteroids.math.vector import add, copy, from_angle, scale
from asteroids.world.entity import TAU, WORLD_SIZE, Entity, EntityKind

if TYPE_CHECKING:  # pragma: no cover - only used for typing
    from asteroids.world.session import GameSession

MIN_ROTATION = 0.0075
MAX_ROTATION = 0.0175
ROTATION_VARIANCE = MAX_ROTATION - MIN_ROTATION

MIN_VELOCITY = 0.75
MAX_VELOCITY = 1.65
VELOCITY_VARIANCE = MAX_VELOCITY - MIN_VELOCITY

MIN_DISTANCE = 200.0
MAX_DISTANCE = WORLD_SIZE / 2.0
DISTANCE_VARIANCE = MAX_DISTANCE - MIN_DISTANCE

SPAWN_UPDATES = 10
FRAGMENT_COUNT = 2
OUTLINE_POINTS = 5
COLLISION_MARGIN = 1.0


def _outline(radius: float) -> Tuple[Tuple[int, int], ...]:
    step = TAU / OUTLINE_POINTS
    return tuple(
        (int(radius * math.sin(i * step)), int(radius * math.cos(i * step)))
        for i in range(OUTLINE_POINTS)
    )


class AsteroidSize(Enum):
    SMALL = (15.0, 100)
    MEDIUM = (25.0, 50)
    LARGE = (40.0, 20)

    def __init__(self, radius: float, kill_value: int) -> None:
        self.base_radius = radius
        self.kill_value = kill_value
        self.outline = _outline(radius)

    @property
    def radius(self) -> float:
        """Collision radius, slightly larger than the drawn outline."""

        return self.base_radius + COLLISION_MARGIN

    def smaller(self) -> Optional["AsteroidSize"]:
        if self is AsteroidSize.LARGE:
            return AsteroidSize.MEDIUM
        if self is AsteroidSize.MEDIUM:
            return AsteroidSize.SMALL
        return None


@dataclass(eq=False)
class Asteroid(Entity):
    kind = EntityKind.ASTEROID

    size: AsteroidSize = AsteroidSize.LARGE
    rotation_speed: float = field(default=0.0)


def _spawn_position(rng: random.Random) -> Vector2:
    center = Vector2(WORLD_SIZE / 2.0, WORLD_SIZE / 2.0)
    offset = scale(from_angle(rng.random() * TAU), MIN_DISTANCE + rng.random() * DISTANCE_VARIANCE)
    return add(center, offset)


def _spawn_velocity(rng: random.Random) -> Vector2:
    return scale(from_angle(rng.random() * TAU), MIN_VELOCITY + rng.random() * VELOCITY_VARIANCE)


def _spin(rng: random.Random) -> float:
    return MIN_ROTATION + rng.random() * ROTATION_VARIANCE


def spawn_asteroid(rng: random.Random) -> Asteroid:
    """Create a large asteroid on a ring around the world centre.

    Root asteroids always spin counter-clockwise; fragments spin the other way.
    """

    size = AsteroidSize.LARGE
    return Asteroid(
        position=_spawn_position(rng),
        velocity=_spawn_velocity(rng),
        radius=size.radius,
        kill_score=size.kill_value,
        size=size,
        rotation_speed=-_spin(rng),
    )


def spawn_fragment(parent: Asteroid, size: AsteroidSize, rng: random.Random) -> Asteroid:
    """Create a fragment of ``parent`` and push it clear of its sibling."""

    fragment = Asteroid(
        position=copy(parent.position),
        velocity=_spawn_velocity(rng),
        radius=size.radius,
        kill_score=size.kill_value,
        size=size,
        rotation_speed=_spin(rng),
    )
    for _ in range(SPAWN_UPDATES):
        update_asteroid(fragment, None)
    return fragment


def update_asteroid(asteroid: Asteroid, session: Optional["GameSession"]) -> None:
    asteroid.move()
    asteroid.rotate(asteroid.rotation_speed)


def collide_asteroid(session: "GameSession", asteroid: Asteroid, other: Entity) -> None:
    if other.kind is EntityKind.ASTEROID:
        return
    fragment_size = asteroid.size.smaller()
    if fragment_size is not None:
        for _ in range(FRAGMENT_COUNT):
            session.register_entity(spawn_fragment(asteroid, fragment_size, session.rng))
    asteroid.flag_for_removal()
    session.add_score(asteroid.kill_score)


__all__ = [
    "Asteroid",
    "AsteroidSize",
    "FRAGMENT_COUNT",
    "SPAWN_UPDATES",
    "collide_asteroid",
    "spawn_asteroid",
    "spawn_fragment",
    "update_asteroid",
]
