"""Per-kind behaviour tables for the closed entity variant set."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict

from asteroids.world.asteroid import collide_asteroid, update_asteroid
from asteroids.world.bullet import collide_bullet, update_bullet
from asteroids.world.entity import Entity, EntityKind
from asteroids.world.player import collide_player, update_player

if TYPE_CHECKING:  # pragma: no cover - only used for typing
    from asteroids.world.session import GameSession

UpdateHandler = Callable[[Entity, "GameSession"], None]
CollisionHandler = Callable[["GameSession", Entity, Entity], None]

UPDATE_HANDLERS: Dict[EntityKind, UpdateHandler] = {
    EntityKind.PLAYER: update_player,
    EntityKind.BULLET: update_bullet,
    EntityKind.ASTEROID: update_asteroid,
}

COLLISION_HANDLERS: Dict[EntityKind, CollisionHandler] = {
    EntityKind.PLAYER: collide_player,
    EntityKind.BULLET: collide_bullet,
    EntityKind.ASTEROID: collide_asteroid,
}


def update_entity(entity: Entity, session: "GameSession") -> None:
    UPDATE_HANDLERS[entity.kind](entity, session)


def handle_collision(session: "GameSession", entity: Entity, other: Entity) -> None:
    COLLISION_HANDLERS[entity.kind](session, entity, other)


__all__ = ["COLLISION_HANDLERS", "UPDATE_HANDLERS", "handle_collision", "update_entity"]
