"""Keyboard bindings and intent sampling."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import pygame

DEFAULT_BINDINGS = {
    "thrust": ["K_w", "K_UP"],
    "rotate_left": ["K_a", "K_LEFT"],
    "rotate_right": ["K_d", "K_RIGHT"],
    "fire": ["K_SPACE"],
    "pause": ["K_p"],
}

HELD_ACTIONS = ("thrust", "rotate_left", "rotate_right", "fire")


@dataclass
class InputIntents:
    """Abstracted player intents sampled once per tick."""

    thrust: bool = False
    rotate_left: bool = False
    rotate_right: bool = False
    fire: bool = False
    pause: bool = False
    restart: bool = False


@dataclass
class InputBindings:
    """Runtime structure representing current bindings."""

    actions: Dict[str, list[str]] = field(default_factory=lambda: {k: list(v) for k, v in DEFAULT_BINDINGS.items()})

    @classmethod
    def load(cls, path: Path) -> "InputBindings":
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError:
            return cls()
        actions = {k: list(v) for k, v in DEFAULT_BINDINGS.items()}
        actions.update({k: list(v) for k, v in data.get("bindings", {}).items()})
        return cls(actions=actions)

    def save(self, path: Path) -> None:
        path.write_text(json.dumps({"bindings": self.actions}, indent=2))

    def actions_for_key(self, key: int) -> list[str]:
        matched = []
        for action, names in self.actions.items():
            for name in names:
                if getattr(pygame, name, None) == key:
                    matched.append(action)
                    break
        return matched


class InputMapper:
    """Turns key events into last-writer-wins intent flags."""

    def __init__(self, bindings: Optional[InputBindings] = None) -> None:
        self.bindings = bindings or InputBindings()
        self.action_state: Dict[str, bool] = {action: False for action in HELD_ACTIONS}
        self._pause_latched = False
        self._restart_latched = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
            return
        pressed = event.type == pygame.KEYDOWN
        if pressed:
            # Any key counts as a restart request once the game is over.
            self._restart_latched = True
        for action in self.bindings.actions_for_key(event.key):
            if action == "pause":
                if pressed:
                    self._pause_latched = True
            elif action in self.action_state:
                self.action_state[action] = pressed

    def action(self, name: str) -> bool:
        return self.action_state.get(name, False)

    def intents(self) -> InputIntents:
        intents = InputIntents(
            thrust=self.action("thrust"),
            rotate_left=self.action("rotate_left"),
            rotate_right=self.action("rotate_right"),
            fire=self.action("fire"),
            pause=self._pause_latched,
            restart=self._restart_latched,
        )
        self._pause_latched = False
        self._restart_latched = False
        return intents


__all__ = ["DEFAULT_BINDINGS", "InputBindings", "InputIntents", "InputMapper"]
