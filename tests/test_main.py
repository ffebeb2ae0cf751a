import logging
import random

from asteroids.engine.logger import GameLogger, LoggerConfig
from asteroids.world.session import GameSession
from main import caption_for


def _quiet_logger() -> GameLogger:
    return GameLogger(LoggerConfig(level=logging.CRITICAL, channels={}))


def test_caption_reflects_overlay_state() -> None:
    session = GameSession(_quiet_logger(), rng=random.Random(0))
    assert caption_for(session.snapshot()) == "Asteroids  Score: 0  Lives: 3  Level: 0"

    session.toggle_pause()
    assert caption_for(session.snapshot()).endswith("PAUSED")

    session.is_game_over = True
    assert caption_for(session.snapshot()).endswith("GAME OVER")
