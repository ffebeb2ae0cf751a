"""Game session: entity lifecycle, collisions and state transitions."""
from __future__ import annotations

import random
from typing import List, Optional

from asteroids.engine.input import InputIntents
from asteroids.engine.logger import GameLogger
from asteroids.engine.telemetry import CollisionTelemetry, CollisionTelemetrySnapshot
from asteroids.world.asteroid import spawn_asteroid
from asteroids.world.dispatch import handle_collision, update_entity
from asteroids.world.entity import Entity, EntityKind
from asteroids.world.player import Player
from asteroids.world.snapshot import RenderSnapshot, view_entity

DISPLAY_LEVEL_LIMIT = 60
DEATH_COOLDOWN_LIMIT = 200
RESPAWN_COOLDOWN_LIMIT = 100
INVULN_COOLDOWN_LIMIT = 0
RESET_COOLDOWN_LIMIT = 120
STARTING_LIVES = 3
# Keeps the player hidden and untouchable for the rest of a lost game.
GAME_OVER_DEATH_COOLDOWN = 2**31 - 1


class GameSession:
    """Owns every live entity and the scalar state of one game.

    New entities go through :meth:`register_entity` and only join the live
    list at the start of the next tick, so nothing is added while the list
    is being scanned. Removal is a latch on the entity that is honoured by a
    single sweep at the end of each tick.
    """

    def __init__(self, logger: GameLogger, rng: Optional[random.Random] = None) -> None:
        self.logger = logger
        self.rng = rng or random.Random()
        self.entities: List[Entity] = []
        self.pending: List[Entity] = []
        self.player = Player()
        self.score = 0
        self.lives = STARTING_LIVES
        self.level = 0
        self.death_cooldown = 0
        self.show_level_cooldown = 0
        self.restart_cooldown = 0
        self.is_game_over = False
        self.restart_requested = False
        self.paused = False
        self.tick_count = 0
        self._collision_telemetry = CollisionTelemetry()
        self.reset_game()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset_game(self) -> None:
        self.score = 0
        self.level = 0
        self.lives = STARTING_LIVES
        self.death_cooldown = 0
        self.show_level_cooldown = 0
        self.is_game_over = False
        self.restart_requested = False
        self.player.reset()
        self.player.firing_enabled = True
        self._reset_entity_lists()

    def _reset_entity_lists(self) -> None:
        self.pending.clear()
        self.entities.clear()
        self.entities.append(self.player)

    def register_entity(self, entity: Entity) -> None:
        self.pending.append(entity)

    def add_score(self, amount: int) -> None:
        self.score += amount

    def kill_player(self) -> None:
        session_log = self.logger.channel("session")
        self.lives -= 1
        if self.lives == 0:
            self.is_game_over = True
            self.restart_cooldown = RESET_COOLDOWN_LIMIT
            self.death_cooldown = GAME_OVER_DEATH_COOLDOWN
            session_log.info("Game over at level %d with score %d", self.level, self.score)
        else:
            self.death_cooldown = DEATH_COOLDOWN_LIMIT
            session_log.info("Player destroyed, %d lives left", self.lives)
        self.player.firing_enabled = False

    def check_for_restart(self) -> bool:
        restart = self.is_game_over and self.restart_cooldown <= 0
        if restart:
            self.restart_requested = True
        return restart

    def toggle_pause(self) -> None:
        self.paused = not self.paused
        self.logger.channel("session").info("Paused" if self.paused else "Resumed")

    def apply_intents(self, intents: InputIntents) -> None:
        """Copy sampled intents onto the player; later calls overwrite earlier ones."""

        ctrl = self.player.control
        ctrl.thrust = intents.thrust
        ctrl.rotate_left = intents.rotate_left
        ctrl.rotate_right = intents.rotate_right
        ctrl.fire = intents.fire
        restarting = intents.restart and self.check_for_restart()
        if intents.pause and not restarting:
            self.toggle_pause()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def are_enemies_dead(self) -> bool:
        return not any(entity.kind is EntityKind.ASTEROID for entity in self.entities)

    @property
    def is_player_invulnerable(self) -> bool:
        return self.death_cooldown > INVULN_COOLDOWN_LIMIT

    @property
    def can_draw_player(self) -> bool:
        return self.death_cooldown <= RESPAWN_COOLDOWN_LIMIT

    @property
    def is_showing_level(self) -> bool:
        return self.show_level_cooldown > 0

    def snapshot(self) -> RenderSnapshot:
        return RenderSnapshot(
            entities=tuple(view_entity(entity) for entity in self.entities),
            score=self.score,
            lives=self.lives,
            level=self.level,
            is_game_over=self.is_game_over,
            is_paused=self.paused,
            is_showing_level=self.is_showing_level,
            can_draw_player=self.can_draw_player,
            is_player_invulnerable=self.is_player_invulnerable,
            player_animation_frame=self.player.animation_frame,
            player_thrusting=self.player.is_thrusting,
        )

    def collision_stats(self) -> CollisionTelemetrySnapshot:
        return self._collision_telemetry.snapshot()

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------
    def tick(self) -> None:
        if self.paused:
            return
        self.tick_count += 1

        self.entities.extend(self.pending)
        self.pending.clear()

        if self.restart_cooldown > 0:
            self.restart_cooldown -= 1
        if self.show_level_cooldown > 0:
            self.show_level_cooldown -= 1

        if self.is_game_over and self.restart_requested:
            self.logger.channel("session").info("Restarting after game over")
            self.reset_game()

        if not self.is_game_over and self.are_enemies_dead():
            self._start_next_level()

        if self.death_cooldown > 0:
            self.death_cooldown -= 1
            if self.death_cooldown == RESPAWN_COOLDOWN_LIMIT:
                self.player.reset()
                self.player.firing_enabled = False
            elif self.death_cooldown == INVULN_COOLDOWN_LIMIT:
                self.player.firing_enabled = True

        if self.show_level_cooldown == 0:
            for entity in self.entities:
                update_entity(entity, self)
            self._resolve_collisions()
            self._sweep_removed()

    def _start_next_level(self) -> None:
        self.level += 1
        self.show_level_cooldown = DISPLAY_LEVEL_LIMIT
        self._reset_entity_lists()
        self.player.reset()
        self.player.firing_enabled = True
        count = self.level + 2
        for _ in range(count):
            self.register_entity(spawn_asteroid(self.rng))
        self.logger.channel("session").info("Level %d started with %d asteroids", self.level, count)

    def _resolve_collisions(self) -> None:
        telemetry = self._collision_telemetry
        telemetry.begin_tick(self.tick_count, len(self.entities))
        player = self.player
        entities = self.entities
        for i in range(len(entities)):
            a = entities[i]
            for j in range(i + 1, len(entities)):
                b = entities[j]
                telemetry.record_tested()
                if not a.check_collision(b):
                    continue
                # Checked per pair: a death earlier in this pass protects the player.
                if (a is player or b is player) and self.death_cooldown > INVULN_COOLDOWN_LIMIT:
                    continue
                handle_collision(self, a, b)
                handle_collision(self, b, a)
                telemetry.record_resolved()

    def _sweep_removed(self) -> None:
        before = len(self.entities)
        self.entities = [entity for entity in self.entities if not entity.needs_removal()]
        telemetry = self._collision_telemetry
        telemetry.record_removed(before - len(self.entities))
        telemetry.advance_ticks(1, self.logger.channel("collisions"))


__all__ = [
    "DEATH_COOLDOWN_LIMIT",
    "DISPLAY_LEVEL_LIMIT",
    "GAME_OVER_DEATH_COOLDOWN",
    "GameSession",
    "INVULN_COOLDOWN_LIMIT",
    "RESET_COOLDOWN_LIMIT",
    "RESPAWN_COOLDOWN_LIMIT",
    "STARTING_LIVES",
]
