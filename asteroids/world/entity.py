"""Shared entity state and toroidal motion."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from pygame.math import Vector2

from asteroids.math.vector import add, distance_squared, wrap_position

WORLD_SIZE = 550.0
TAU = math.pi * 2.0


class EntityKind(Enum):
    PLAYER = "player"
    BULLET = "bullet"
    ASTEROID = "asteroid"


@dataclass(eq=False)
class Entity:
    """Common state for every simulated body.

    The variant set is closed: each subclass pins ``kind`` and its behaviour
    is looked up in :mod:`asteroids.world.dispatch` by that tag.
    """

    kind: ClassVar[EntityKind]

    position: Vector2 = field(default_factory=Vector2)
    velocity: Vector2 = field(default_factory=Vector2)
    radius: float = 0.0
    kill_score: int = 0
    rotation: float = 0.0
    pending_removal: bool = field(default=False, init=False)

    def move(self) -> None:
        add(self.position, self.velocity)
        wrap_position(self.position, WORLD_SIZE)

    def check_collision(self, other: "Entity") -> bool:
        reach = self.radius + other.radius
        return distance_squared(self.position, other.position) < reach * reach

    def rotate(self, amount: float) -> None:
        self.rotation = (self.rotation + amount) % TAU

    def flag_for_removal(self) -> None:
        self.pending_removal = True

    def needs_removal(self) -> bool:
        return self.pending_removal


__all__ = ["Entity", "EntityKind", "TAU", "WORLD_SIZE"]
