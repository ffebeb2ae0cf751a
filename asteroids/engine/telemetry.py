"""Lightweight per-tick collision statistics."""
from __future__ import annotations

from dataclasses import dataclass

from asteroids.engine.logger import ChannelLogger

LOG_INTERVAL_TICKS = 150


@dataclass
class CollisionTelemetrySnapshot:
    tick: int
    entities: int
    tested: int
    resolved: int
    removed: int


@dataclass
class CollisionTelemetry:
    """Aggregates pairwise collision statistics per tick."""

    tick: int = -1
    entities: int = 0
    tested: int = 0
    resolved: int = 0
    removed: int = 0
    _log_accumulator: int = 0

    def begin_tick(self, tick: int, entities: int) -> None:
        if tick != self.tick:
            self.tick = tick
            self.entities = entities
            self.tested = 0
            self.resolved = 0
            self.removed = 0

    def record_tested(self, count: int = 1) -> None:
        self.tested += count

    def record_resolved(self, count: int = 1) -> None:
        self.resolved += count

    def record_removed(self, count: int) -> None:
        self.removed += count

    def advance_ticks(self, ticks: int, logger: ChannelLogger | None = None) -> None:
        self._log_accumulator += ticks
        if self._log_accumulator >= LOG_INTERVAL_TICKS:
            self._log_accumulator = 0
            if logger and logger.enabled:
                logger.info(
                    "Collisions: tick=%d entities=%d tested=%d resolved=%d removed=%d",
                    self.tick,
                    self.entities,
                    self.tested,
                    self.resolved,
                    self.removed,
                )

    def snapshot(self) -> CollisionTelemetrySnapshot:
        return CollisionTelemetrySnapshot(
            tick=self.tick,
            entities=self.entities,
            tested=self.tested,
            resolved=self.resolved,
            removed=self.removed,
        )


__all__ = ["CollisionTelemetry", "CollisionTelemetrySnapshot", "LOG_INTERVAL_TICKS"]
