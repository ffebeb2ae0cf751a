"""Runtime settings loaded from settings.json."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

SETTINGS_PATH = Path("settings.json")


@dataclass
class GameSettings:
    sim_hz: float = 60.0
    max_updates_per_frame: int = 5
    seed: Optional[int] = None
    scale: int = 1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameSettings":
        defaults = cls()
        seed = data.get("seed")
        return cls(
            sim_hz=float(data.get("simHz", defaults.sim_hz)),
            max_updates_per_frame=max(1, int(data.get("maxUpdatesPerFrame", defaults.max_updates_per_frame))),
            seed=int(seed) if seed is not None else None,
            scale=max(1, int(data.get("scale", defaults.scale))),
        )

    @classmethod
    def load(cls, path: Path = SETTINGS_PATH) -> "GameSettings":
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError:
            return cls()
        if not isinstance(data, dict):
            return cls()
        return cls.from_dict(data)


__all__ = ["GameSettings", "SETTINGS_PATH"]
