"""Fixed timestep game loop."""
from __future__ import annotations

import time
from typing import Callable, Optional

from asteroids.engine.logger import ChannelLogger


class FixedTimestepLoop:
    """Runs whole simulation ticks at a fixed rate with variable rendering.

    Elapsed wall time is accumulated every frame and spent in fixed ticks.
    At most ``max_updates_per_frame`` ticks run per frame; any whole-tick
    backlog beyond that is dropped so a slow frame cannot snowball.
    """

    def __init__(
        self,
        update: Callable[[], None],
        render: Callable[[float], None],
        process_events: Callable[[], None],
        fixed_hz: float = 60.0,
        max_updates_per_frame: int = 5,
        clock: Callable[[], float] = time.perf_counter,
        logger: Optional[ChannelLogger] = None,
    ) -> None:
        if fixed_hz <= 0.0:
            raise ValueError(f"fixed_hz must be positive, got {fixed_hz}")
        self.update = update
        self.render = render
        self.process_events = process_events
        self.fixed_dt = 1.0 / fixed_hz
        self.max_updates_per_frame = max(1, int(max_updates_per_frame))
        self.clock = clock
        self.logger = logger
        self.accumulator = 0.0
        self.dropped_ticks = 0
        self._running = False

    @property
    def interpolation_alpha(self) -> float:
        return self.accumulator / self.fixed_dt

    def stop(self) -> None:
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def advance(self, frame_time: float) -> int:
        """Spend ``frame_time`` seconds on ticks and return how many ran."""

        if frame_time > 0.0:
            self.accumulator += frame_time
        ticks = 0
        while self.accumulator >= self.fixed_dt and ticks < self.max_updates_per_frame:
            self.update()
            self.accumulator -= self.fixed_dt
            ticks += 1
        if self.accumulator >= self.fixed_dt:
            dropped = int(self.accumulator // self.fixed_dt)
            self.accumulator -= dropped * self.fixed_dt
            self.dropped_ticks += dropped
            if self.logger and self.logger.enabled:
                self.logger.debug("Dropped %d ticks of backlog", dropped)
        return ticks

    def run(self) -> None:
        self._running = True
        last_time = self.clock()
        while self._running:
            now = self.clock()
            frame_time = now - last_time
            last_time = now
            self.process_events()
            if not self._running:
                break
            self.advance(frame_time)
            self.render(self.interpolation_alpha)


__all__ = ["FixedTimestepLoop"]
