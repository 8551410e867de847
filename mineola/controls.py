"""Input handling helpers for arcball and first-person camera controllers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple

import numpy as np

MAX_DIST = 1e16


class ButtonAction(IntEnum):
    DOWN = 0
    UP = 1


class MouseButton(IntEnum):
    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


def arcball_direction(direction, radius: float) -> np.ndarray:
    """Unit vector on the arcball for a 2D offset from the screen centre."""
    d = np.asarray(direction, dtype=float).reshape(2)
    sqr_length = float(np.dot(d, d))
    sqr_radius = radius * radius
    if sqr_length >= sqr_radius:
        v = np.array([d[0], d[1], 0.0])
    else:
        v = np.array([d[0], d[1], np.sqrt(sqr_radius - sqr_length)])
    return v / np.linalg.norm(v)


def roll_correction(matrix, up_dir) -> np.ndarray:
    """Rebuild the x and y axes of a 4x4 frame so that x is level with ``up_dir``."""
    result = np.asarray(matrix, dtype=float).reshape(4, 4).copy()
    z = result[:3, 2]
    x = np.cross(np.asarray(up_dir, dtype=float).reshape(3), z)
    length = np.linalg.norm(x)
    if length < 0.001:
        return result
    x = x / length
    result[:3, 0] = x
    result[3, 0] = 0.0
    result[:3, 1] = np.cross(z, x)
    result[3, 1] = 0.0
    return result


def pinch_translation(target, position, scale: float, max_dist: float = MAX_DIST) -> np.ndarray:
    """World translation moving ``position`` towards ``target`` for a pinch ``scale``."""
    target = np.asarray(target, dtype=float).reshape(3)
    position = np.asarray(position, dtype=float).reshape(3)
    offset = target - position
    old_dist = float(np.linalg.norm(offset))
    new_dist = old_dist / scale if scale != 0 else max_dist
    new_dist = min(new_dist, max_dist)
    return offset / old_dist * (old_dist - new_dist)


class Displacement(NamedTuple):
    """Movement in the camera frame and along the world up direction."""

    local: np.ndarray
    world: np.ndarray


_KEY_AXES = {
    "W": ("forward", 1),
    "S": ("forward", -1),
    "A": ("left", 1),
    "D": ("left", -1),
    "E": ("up", 1),
    "Q": ("up", -1),
}


@dataclass
class MoveKeys:
    """Held movement keys of a first-person controller: each axis is -1, 0 or 1."""

    forward: int = 0
    left: int = 0
    up: int = 0

    def on_keyboard(self, key, action) -> None:
        """Update the axes for a key press or release; other keys are ignored."""
        name = chr(key) if isinstance(key, int) else str(key)
        binding = _KEY_AXES.get(name)
        if binding is None:
            return
        axis, value = binding
        if action == ButtonAction.DOWN:
            setattr(self, axis, value)
        elif getattr(self, axis) == value:
            setattr(self, axis, 0)

    def is_moving(self) -> bool:
        return bool(self.forward or self.left or self.up)

    def displacement(self, frame_time: float, move_speed: float, up_dir) -> Displacement:
        """Movement for a frame of ``frame_time`` milliseconds."""
        seconds = frame_time / 1000.0
        forward = seconds * self.forward * np.array([0.0, 0.0, -1.0]) * move_speed
        left = seconds * self.left * np.array([-1.0, 0.0, 0.0]) * move_speed
        up = seconds * self.up * np.asarray(up_dir, dtype=float).reshape(3) * move_speed
        return Displacement(forward + left, up)