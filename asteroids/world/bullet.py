"""Short-lived projectiles fired by the player."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from asteroids.math.vector import copy, from_angle, scale
from asteroids.world.entity import Entity, EntityKind

if TYPE_CHECKING:  # pragma: no cover - only used for typing
    from asteroids.world.session import GameSession

VELOCITY_MAGNITUDE = 6.75
MAX_LIFESPAN = 60
BULLET_RADIUS = 2.0


@dataclass(eq=False)
class Bullet(Entity):
    kind = EntityKind.BULLET

    lifespan: int = MAX_LIFESPAN


def fire_bullet(owner: Entity, angle: float) -> Bullet:
    """Spawn a bullet at ``owner`` travelling along ``angle``."""

    return Bullet(
        position=copy(owner.position),
        velocity=scale(from_angle(angle), VELOCITY_MAGNITUDE),
        radius=BULLET_RADIUS,
        kill_score=0,
    )


def update_bullet(bullet: Bullet, session: Optional["GameSession"]) -> None:
    bullet.move()
    bullet.lifespan -= 1
    if bullet.lifespan <= 0:
        bullet.flag_for_removal()


def collide_bullet(session: "GameSession", bullet: Bullet, other: Entity) -> None:
    # Passing through the ship that fired it is expected.
    if other.kind is not EntityKind.PLAYER:
        bullet.flag_for_removal()


__all__ = [
    "BULLET_RADIUS",
    "Bullet",
    "MAX_LIFESPAN",
    "VELOCITY_MAGNITUDE",
    "collide_bullet",
    "fire_bullet",
    "update_bullet",
]
