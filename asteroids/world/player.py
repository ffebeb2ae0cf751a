"""Player ship flight model and weapon gating."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from asteroids.math.vector import add, from_angle, length_squared, normalize, scale, set_xy
from asteroids.world.bullet import Bullet, fire_bullet
from asteroids.world.entity import TAU, WORLD_SIZE, Entity, EntityKind

if TYPE_CHECKING:  # pragma: no cover - only used for typing
    from asteroids.world.session import GameSession

DEFAULT_ROTATION = -math.pi / 2.0
PLAYER_RADIUS = 10.0
THRUST_MAGNITUDE = 0.0385
MAX_VELOCITY_MAGNITUDE = 6.5
ROTATION_SPEED = 0.052
SLOW_RATE = 0.995
MAX_BULLETS = 4
FIRE_RATE = 4
MAX_CONSECUTIVE_SHOTS = 8
MAX_OVERHEAT = 30


@dataclass
class PlayerControlState:
    thrust: bool = False
    rotate_left: bool = False
    rotate_right: bool = False
    fire: bool = False


@dataclass(eq=False)
class Player(Entity):
    kind = EntityKind.PLAYER

    control: PlayerControlState = field(default_factory=PlayerControlState)
    firing_enabled: bool = True
    consecutive_shots: int = 0
    fire_cooldown: int = 0
    overheat_cooldown: int = 0
    animation_frame: int = 0
    bullets: List[Bullet] = field(default_factory=list)

    def __post_init__(self) -> None:
        set_xy(self.position, WORLD_SIZE / 2.0, WORLD_SIZE / 2.0)
        self.radius = PLAYER_RADIUS
        self.kill_score = 0
        self.rotation = DEFAULT_ROTATION % TAU

    @property
    def is_thrusting(self) -> bool:
        return self.control.thrust

    @property
    def is_overheated(self) -> bool:
        return self.overheat_cooldown > 0

    def reset(self) -> None:
        """Return to the spawn point; bullets already in flight keep going."""

        self.rotation = DEFAULT_ROTATION % TAU
        set_xy(self.position, WORLD_SIZE / 2.0, WORLD_SIZE / 2.0)
        set_xy(self.velocity, 0.0, 0.0)
        self.bullets.clear()


def _steer(player: Player) -> None:
    ctrl = player.control
    if ctrl.rotate_left != ctrl.rotate_right:
        player.rotate(-ROTATION_SPEED if ctrl.rotate_left else ROTATION_SPEED)

    if ctrl.thrust:
        add(player.velocity, scale(from_angle(player.rotation), THRUST_MAGNITUDE))
        # Speed cap is only checked while thrusting.
        if length_squared(player.velocity) >= MAX_VELOCITY_MAGNITUDE * MAX_VELOCITY_MAGNITUDE:
            scale(normalize(player.velocity), MAX_VELOCITY_MAGNITUDE)

    if length_squared(player.velocity) != 0.0:
        scale(player.velocity, SLOW_RATE)


def _update_weapons(player: Player, session: "GameSession") -> None:
    player.bullets = [bullet for bullet in player.bullets if not bullet.needs_removal()]

    player.fire_cooldown -= 1
    player.overheat_cooldown -= 1

    wants_fire = player.firing_enabled and player.control.fire
    if not wants_fire:
        if player.consecutive_shots > 0:
            player.consecutive_shots -= 1
        return
    if player.fire_cooldown > 0 or player.overheat_cooldown > 0:
        return

    if len(player.bullets) < MAX_BULLETS:
        player.fire_cooldown = FIRE_RATE
        bullet = fire_bullet(player, player.rotation)
        player.bullets.append(bullet)
        session.register_entity(bullet)

    # Shots blocked by the bullet cap still heat the gun.
    player.consecutive_shots += 1
    if player.consecutive_shots == MAX_CONSECUTIVE_SHOTS:
        player.consecutive_shots = 0
        player.overheat_cooldown = MAX_OVERHEAT
        weapons_log = session.logger.channel("weapons")
        if weapons_log.enabled:
            weapons_log.info("Weapon overheated at tick %d", session.tick_count)


def update_player(player: Player, session: "GameSession") -> None:
    player.move()
    player.animation_frame += 1
    _steer(player)
    _update_weapons(player, session)


def collide_player(session: "GameSession", player: Player, other: Entity) -> None:
    if other.kind is EntityKind.ASTEROID:
        session.kill_player()


__all__ = [
    "DEFAULT_ROTATION",
    "FIRE_RATE",
    "MAX_BULLETS",
    "MAX_CONSECUTIVE_SHOTS",
    "MAX_OVERHEAT",
    "MAX_VELOCITY_MAGNITUDE",
    "Player",
    "PlayerControlState",
    "collide_player",
    "update_player",
]
