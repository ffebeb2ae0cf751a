"""Read-only views handed to the presentation layer."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from asteroids.world.asteroid import Asteroid
from asteroids.world.entity import Entity, EntityKind

SHIP_SHAPE = "ship"
BULLET_SHAPE = "bullet"

Outline = Tuple[Tuple[int, int], ...]


@dataclass(frozen=True)
class EntityView:
    kind: EntityKind
    shape: str
    x: float
    y: float
    rotation: float
    radius: float
    outline: Outline = ()


@dataclass(frozen=True)
class RenderSnapshot:
    """Scalar overlay state plus one view per live entity."""

    entities: Tuple[EntityView, ...]
    score: int
    lives: int
    level: int
    is_game_over: bool
    is_paused: bool
    is_showing_level: bool
    can_draw_player: bool
    is_player_invulnerable: bool
    player_animation_frame: int
    player_thrusting: bool

    def views_of(self, kind: EntityKind) -> Tuple[EntityView, ...]:
        return tuple(view for view in self.entities if view.kind is kind)


def view_entity(entity: Entity) -> EntityView:
    if isinstance(entity, Asteroid):
        shape = f"asteroid_{entity.size.name.lower()}"
        outline = entity.size.outline
    elif entity.kind is EntityKind.PLAYER:
        shape = SHIP_SHAPE
        outline = ()
    else:
        shape = BULLET_SHAPE
        outline = ()
    return EntityView(
        kind=entity.kind,
        shape=shape,
        x=entity.position.x,
        y=entity.position.y,
        rotation=entity.rotation,
        radius=entity.radius,
        outline=outline,
    )


__all__ = ["BULLET_SHAPE", "EntityView", "RenderSnapshot", "SHIP_SHAPE", "view_entity"]
