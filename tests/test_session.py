import logging
import math
import random

import pytest
from pygame.math import Vector2

from asteroids.engine.input import InputIntents
from asteroids.engine.logger import DEFAULT_CHANNELS, GameLogger, LoggerConfig
from asteroids.math.vector import is_finite
from asteroids.world.asteroid import Asteroid, AsteroidSize, spawn_asteroid
from asteroids.world.bullet import Bullet, fire_bullet
from asteroids.world.entity import WORLD_SIZE, EntityKind
from asteroids.world.session import (
    DEATH_COOLDOWN_LIMIT,
    DISPLAY_LEVEL_LIMIT,
    RESET_COOLDOWN_LIMIT,
    RESPAWN_COOLDOWN_LIMIT,
    GameSession,
)


def _quiet_logger() -> GameLogger:
    channels = {name: False for name in DEFAULT_CHANNELS}
    return GameLogger(LoggerConfig(level=logging.CRITICAL, channels=channels))


def _session(seed: int = 4) -> GameSession:
    return GameSession(_quiet_logger(), rng=random.Random(seed))


def _asteroids(session: GameSession) -> list[Asteroid]:
    return [entity for entity in session.entities if entity.kind is EntityKind.ASTEROID]


def _playing_session(*entities) -> GameSession:
    """Session past its level banner with a hand-placed entity list."""

    session = _session()
    session.level = 1
    session.entities.extend(entities)
    return session


def test_new_session_defaults() -> None:
    session = _session()
    assert (session.lives, session.score, session.level) == (3, 0, 0)
    assert session.entities == [session.player]
    assert session.pending == []
    assert not session.is_game_over
    assert not session.is_player_invulnerable
    assert session.can_draw_player


def test_first_tick_starts_level_one() -> None:
    session = _session()
    session.tick()
    assert session.level == 1
    assert session.show_level_cooldown == DISPLAY_LEVEL_LIMIT
    assert session.is_showing_level
    assert len(session.pending) == 3
    assert all(isinstance(e, Asteroid) and e.size is AsteroidSize.LARGE for e in session.pending)
    assert _asteroids(session) == []

    session.tick()
    assert len(_asteroids(session)) == 3
    assert session.pending == []
    assert session.level == 1


def test_entities_hold_still_while_level_banner_shows() -> None:
    session = _session()
    session.tick()
    session.tick()
    positions = [Vector2(a.position) for a in _asteroids(session)]
    for _ in range(DISPLAY_LEVEL_LIMIT - 2):
        session.tick()
    assert session.show_level_cooldown == 1
    assert [a.position for a in _asteroids(session)] == positions
    session.tick()
    assert session.show_level_cooldown == 0
    assert [a.position for a in _asteroids(session)] != positions


def test_clearing_asteroids_advances_level_and_drops_bullets() -> None:
    session = _session()
    session.tick()
    session.tick()
    stray = fire_bullet(session.player, 0.0)
    session.entities = [session.player, stray]
    session.player.velocity = Vector2(3.0, 1.0)
    session.player.firing_enabled = False

    session.tick()

    assert session.level == 2
    assert session.entities == [session.player]
    assert len(session.pending) == 4
    assert session.player.velocity == Vector2(0.0, 0.0)
    assert session.player.firing_enabled


def test_bullet_hit_splits_asteroid_through_tick() -> None:
    asteroid = spawn_asteroid(random.Random(1))
    asteroid.position = Vector2(100.0, 100.0)
    session = _playing_session(asteroid)
    bullet = fire_bullet(asteroid, 0.0)
    session.entities.append(bullet)

    session.tick()

    assert asteroid not in session.entities
    assert bullet not in session.entities
    assert session.score == 20
    assert len(session.pending) == 2
    assert all(child.size is AsteroidSize.MEDIUM for child in session.pending)

    session.tick()
    assert len(_asteroids(session)) == 2
    assert session.level == 1


def test_pending_entities_join_on_next_tick() -> None:
    asteroid = spawn_asteroid(random.Random(2))
    session = _playing_session(asteroid)
    session.player.control.fire = True
    session.tick()
    bullets = [e for e in session.pending if isinstance(e, Bullet)]
    assert len(bullets) == 1
    assert bullets[0] not in session.entities
    session.tick()
    assert bullets[0] in session.entities


def _collide_player_with_asteroid(session: GameSession) -> Asteroid:
    asteroid = spawn_asteroid(session.rng)
    asteroid.position = Vector2(session.player.position)
    asteroid.velocity = Vector2(0.0, 0.0)
    session.entities.append(asteroid)
    session.tick()
    return asteroid


def test_death_respawn_sequence() -> None:
    session = _playing_session()
    _collide_player_with_asteroid(session)

    assert session.lives == 2
    assert session.death_cooldown == DEATH_COOLDOWN_LIMIT
    assert not session.player.firing_enabled
    assert session.is_player_invulnerable
    assert not session.can_draw_player

    session.player.velocity = Vector2(1.5, -0.5)
    ticks = 0
    while session.death_cooldown > RESPAWN_COOLDOWN_LIMIT:
        session.tick()
        ticks += 1
    assert ticks == DEATH_COOLDOWN_LIMIT - RESPAWN_COOLDOWN_LIMIT
    assert session.player.position == Vector2(WORLD_SIZE / 2.0, WORLD_SIZE / 2.0)
    assert session.player.velocity == Vector2(0.0, 0.0)
    assert not session.player.firing_enabled
    assert session.can_draw_player
    assert session.is_player_invulnerable

    while session.death_cooldown > 0:
        session.tick()
    assert session.player.firing_enabled
    assert not session.is_player_invulnerable
    assert session.lives == 2


def test_invulnerable_player_ignores_asteroids() -> None:
    session = _playing_session()
    session.death_cooldown = 50
    asteroid = spawn_asteroid(session.rng)
    asteroid.position = Vector2(session.player.position)
    asteroid.velocity = Vector2(0.0, 0.0)
    session.entities.append(asteroid)

    session.tick()

    assert session.lives == 3
    assert asteroid in session.entities
    assert session.score == 0


def test_simultaneous_hits_cost_one_life() -> None:
    session = _playing_session()
    for _ in range(2):
        asteroid = spawn_asteroid(session.rng)
        asteroid.position = Vector2(session.player.position)
        asteroid.velocity = Vector2(0.0, 0.0)
        session.entities.append(asteroid)
    session.tick()
    assert session.lives == 2


def test_game_over_and_restart() -> None:
    session = _playing_session()
    session.lives = 1
    _collide_player_with_asteroid(session)

    assert session.lives == 0
    assert session.is_game_over
    assert session.restart_cooldown == RESET_COOLDOWN_LIMIT
    assert not session.can_draw_player

    for _ in range(RESET_COOLDOWN_LIMIT - 1):
        session.apply_intents(InputIntents(restart=True))
        assert not session.restart_requested
        session.tick()
    assert session.restart_cooldown == 1
    session.tick()
    assert session.restart_cooldown == 0
    assert session.is_game_over

    session.apply_intents(InputIntents(restart=True))
    assert session.restart_requested
    session.tick()

    assert not session.is_game_over
    assert not session.restart_requested
    assert session.lives == 3
    assert session.score == 0
    assert session.death_cooldown == 0
    assert session.level == 1
    assert session.entities == [session.player]


def test_restart_ignored_while_playing() -> None:
    session = _playing_session()
    assert not session.check_for_restart()
    session.apply_intents(InputIntents(restart=True))
    assert not session.restart_requested


def test_pause_freezes_simulation() -> None:
    session = _session()
    session.tick()
    session.apply_intents(InputIntents(pause=True))
    assert session.paused
    tick_count = session.tick_count
    cooldown = session.show_level_cooldown
    for _ in range(10):
        session.tick()
    assert session.tick_count == tick_count
    assert session.show_level_cooldown == cooldown
    assert len(session.pending) == 3
    assert session.snapshot().is_paused

    session.apply_intents(InputIntents(pause=True))
    assert not session.paused
    session.tick()
    assert session.show_level_cooldown == cooldown - 1


def test_pause_is_ignored_when_restart_is_honoured() -> None:
    session = _session()
    session.is_game_over = True
    session.restart_cooldown = 0
    session.apply_intents(InputIntents(pause=True, restart=True))
    assert session.restart_requested
    assert not session.paused


def test_intents_drive_player_controls() -> None:
    session = _session()
    session.apply_intents(InputIntents(thrust=True, rotate_left=True, fire=True))
    ctrl = session.player.control
    assert (ctrl.thrust, ctrl.rotate_left, ctrl.rotate_right, ctrl.fire) == (True, True, False, True)
    session.apply_intents(InputIntents())
    assert (ctrl.thrust, ctrl.rotate_left, ctrl.rotate_right, ctrl.fire) == (False, False, False, False)


def test_snapshot_describes_entities_without_mutating() -> None:
    session = _session()
    session.tick()
    session.tick()
    tick_count = session.tick_count
    snapshot = session.snapshot()

    assert session.tick_count == tick_count
    assert (snapshot.score, snapshot.lives, snapshot.level) == (0, 3, 1)
    assert snapshot.is_showing_level
    assert snapshot.can_draw_player
    assert not snapshot.is_player_invulnerable
    ships = snapshot.views_of(EntityKind.PLAYER)
    assert len(ships) == 1 and ships[0].shape == "ship"
    rocks = snapshot.views_of(EntityKind.ASTEROID)
    assert len(rocks) == 3
    for view in rocks:
        assert view.shape == "asteroid_large"
        assert len(view.outline) == 5
        assert view.radius == AsteroidSize.LARGE.radius


def test_long_run_stays_finite_and_wrapped() -> None:
    session = _session(seed=17)
    session.apply_intents(InputIntents(thrust=True, rotate_right=True, fire=True))
    for _ in range(1500):
        session.tick()
        for entity in session.entities:
            assert is_finite(entity.position)
            assert is_finite(entity.velocity)
            assert 0.0 <= entity.position.x < WORLD_SIZE
            assert 0.0 <= entity.position.y < WORLD_SIZE
            assert math.isfinite(entity.rotation)
    assert session.score >= 0
    assert session.lives >= 0
    stats = session.collision_stats()
    assert stats.tested >= 0
