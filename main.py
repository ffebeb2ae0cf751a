"""Entry point for the Asteroids simulation."""
from __future__ import annotations

import random

import pygame

from asteroids.engine.input import InputBindings, InputMapper
from asteroids.engine.logger import init_logger
from asteroids.engine.loop import FixedTimestepLoop
from asteroids.engine.settings import SETTINGS_PATH, GameSettings
from asteroids.world.entity import WORLD_SIZE
from asteroids.world.session import GameSession
from asteroids.world.snapshot import RenderSnapshot


def caption_for(snapshot: RenderSnapshot) -> str:
    parts = [f"Asteroids  Score: {snapshot.score}", f"Lives: {snapshot.lives}", f"Level: {snapshot.level}"]
    if snapshot.is_game_over:
        parts.append("GAME OVER")
    elif snapshot.is_paused:
        parts.append("PAUSED")
    return "  ".join(parts)


def main() -> None:
    settings = GameSettings.load(SETTINGS_PATH)
    pygame.init()
    size = int(WORLD_SIZE) * settings.scale
    screen = pygame.display.set_mode((size, size))
    pygame.display.set_caption("Asteroids")

    logger = init_logger(SETTINGS_PATH)
    input_mapper = InputMapper(InputBindings.load(SETTINGS_PATH))
    rng = random.Random(settings.seed) if settings.seed is not None else None
    session = GameSession(logger, rng=rng)
    last_caption = ""

    def process_events() -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                loop.stop()
                return
            input_mapper.handle_event(event)
        session.apply_intents(input_mapper.intents())

    def render(alpha: float) -> None:
        nonlocal last_caption
        caption = caption_for(session.snapshot())
        if caption != last_caption:
            pygame.display.set_caption(caption)
            last_caption = caption
        screen.fill((0, 0, 0))
        pygame.display.flip()
        pygame.time.wait(1)

    loop = FixedTimestepLoop(
        session.tick,
        render,
        process_events,
        fixed_hz=settings.sim_hz,
        max_updates_per_frame=settings.max_updates_per_frame,
        logger=logger.channel("loop"),
    )

    try:
        loop.run()
    finally:
        pygame.quit()
        print("\nUsage: W/Up thrust, A/D or Left/Right rotate, Space fire, P pause, any key to restart after game over.")


if __name__ == "__main__":
    main()
