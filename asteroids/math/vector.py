"""2D vector helpers for toroidal motion."""
from __future__ import annotations

import math

from pygame.math import Vector2


def from_angle(angle: float) -> Vector2:
    """Return the unit vector pointing along ``angle`` (radians)."""

    return Vector2(math.cos(angle), math.sin(angle))


def copy(vec: Vector2) -> Vector2:
    return Vector2(vec.x, vec.y)


def set_xy(vec: Vector2, x: float, y: float) -> Vector2:
    vec.x = x
    vec.y = y
    return vec


def add(vec: Vector2, other: Vector2) -> Vector2:
    vec.x += other.x
    vec.y += other.y
    return vec


def scale(vec: Vector2, scalar: float) -> Vector2:
    vec.x *= scalar
    vec.y *= scalar
    return vec


def length_squared(vec: Vector2) -> float:
    return vec.x * vec.x + vec.y * vec.y


def distance_squared(a: Vector2, b: Vector2) -> float:
    dx = a.x - b.x
    dy = a.y - b.y
    return dx * dx + dy * dy


def normalize(vec: Vector2) -> Vector2:
    """Scale ``vec`` to unit length in place.

    Zero-length and already-unit vectors are left untouched, so this never
    raises the way ``Vector2.normalize_ip`` does for a zero vector.
    """

    length = length_squared(vec)
    if length != 0.0 and length != 1.0:
        length = math.sqrt(length)
        vec.x /= length
        vec.y /= length
    return vec


def _wrap_component(value: float, size: float) -> float:
    if value < 0.0:
        value += size
    value %= size
    # Float rounding can land a tiny negative back on ``size``.
    if value >= size:
        value = 0.0
    return value


def wrap_position(vec: Vector2, size: float) -> Vector2:
    """Fold both components into ``[0, size)``."""

    vec.x = _wrap_component(vec.x, size)
    vec.y = _wrap_component(vec.y, size)
    return vec


def is_finite(vec: Vector2) -> bool:
    return math.isfinite(vec.x) and math.isfinite(vec.y)


__all__ = [
    "Vector2",
    "add",
    "copy",
    "distance_squared",
    "from_angle",
    "is_finite",
    "length_squared",
    "normalize",
    "scale",
    "set_xy",
    "wrap_position",
]
