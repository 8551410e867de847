"""Key-frame animation of scene node transforms."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Any

import numpy as np

_FLOAT_EPSILON = float(np.finfo(np.float32).eps)


class Interpolation(IntEnum):
    """How values between two key frames are obtained."""

    STEP = 0
    LINEAR = 1
    CUBIC_SPLINE = 2


class AnimTarget(IntFlag):
    """Which transform components a channel drives."""

    TRANSLATION = 1
    ROTATION = 2
    SCALE = 4


def _vec(values, length: int) -> np.ndarray:
    return np.asarray(values, dtype=float).reshape(length).copy()


def quat_slerp(q0, q1, t: float) -> np.ndarray:
    """Spherical interpolation of (w, x, y, z) quaternions along the shorter arc."""
    a = _vec(q0, 4)
    b = _vec(q1, 4)
    cos_theta = float(np.dot(a, b))
    if cos_theta < 0.0:
        b = -b
        cos_theta = -cos_theta
    if cos_theta > 1.0 - _FLOAT_EPSILON:
        return a + (b - a) * t
    angle = math.acos(cos_theta)
    return (math.sin((1.0 - t) * angle) * a + math.sin(t * angle) * b) / math.sin(angle)


def interpolate(v0, v1, t: float, method) -> np.ndarray:
    """Interpolate two vectors; STEP keeps ``v0``, the others blend linearly."""
    method = Interpolation(method)
    a = np.asarray(v0, dtype=float)
    if method is Interpolation.STEP:
        return a.copy()
    b = np.asarray(v1, dtype=float)
    return a + (b - a) * t


def _interpolate_rotation(q0, q1, t: float, method) -> np.ndarray:
    method = Interpolation(method)
    if method is Interpolation.STEP:
        return _vec(q0, 4)
    return quat_slerp(q0, q1, t)


@dataclass
class KeyFrame:
    """A transform sample: translation, (w, x, y, z) rotation and scale."""

    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.array([1.0, 0.0, 0.0, 0.0]))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __post_init__(self) -> None:
        self.translation = _vec(self.translation, 3)
        self.rotation = _vec(self.rotation, 4)
        self.scale = _vec(self.scale, 3)

    @staticmethod
    def lerp(f0: "KeyFrame", f1: "KeyFrame", t: float) -> "KeyFrame":
        """Linear blend of two frames, spherical for the rotation."""
        return KeyFrame(
            translation=interpolate(f0.translation, f1.translation, t, Interpolation.LINEAR),
            rotation=quat_slerp(f0.rotation, f1.rotation, t),
            scale=interpolate(f0.scale, f1.scale, t, Interpolation.LINEAR),
        )

    @staticmethod
    def cubic_spline(f0: "KeyFrame", t0_out: "KeyFrame", f1: "KeyFrame",
                     t1_in: "KeyFrame", tan_scale: float, t: float) -> "KeyFrame":
        """Cubic Hermite blend using out/in tangents scaled by ``tan_scale``."""
        t2 = t * t
        t3 = t2 * t
        c1 = 2.0 * t3 - 3.0 * t2 + 1.0
        c2 = t3 - 2.0 * t2 + t
        c3 = -2.0 * t3 + 3.0 * t2
        c4 = t3 - t2

        def blend(attr: str) -> np.ndarray:
            return (getattr(f0, attr) * c1
                    + getattr(t0_out, attr) * c2 * tan_scale
                    + getattr(f1, attr) * c3
                    + getattr(t1_in, attr) * c4 * tan_scale)

        rotation = blend("rotation")
        return KeyFrame(
            translation=blend("translation"),
            rotation=rotation / np.linalg.norm(rotation),
            scale=blend("scale"),
        )


@dataclass
class Channel:
    """Uniformly sampled key frames driving one node.

    The target is any object with ``position``, ``rotation`` and ``scale``
    attributes; a channel without a target does nothing.
    """

    key_frames: list = field(default_factory=list)
    fps: float = 25.0
    type: AnimTarget = AnimTarget.TRANSLATION | AnimTarget.ROTATION | AnimTarget.SCALE
    interp: Interpolation = Interpolation.LINEAR
    target: Any = None

    def length(self) -> float:
        """Duration in milliseconds."""
        return (len(self.key_frames) - 1) / self.fps * 1000.0

    def _set(self, translation, rotation, scale) -> None:
        node = self.target
        if self.type & AnimTarget.TRANSLATION:
            node.position = np.array(translation, dtype=float)
        if self.type & AnimTarget.ROTATION:
            node.rotation = np.array(rotation, dtype=float)
        if self.type & AnimTarget.SCALE:
            node.scale = np.array(scale, dtype=float)

    def apply(self, time: float) -> None:
        """Pose the target at ``time`` milliseconds; later times are ignored."""
        if time > self.length() or self.target is None:
            return
        frame = time * self.fps / 1000.0
        idx0 = math.floor(frame)
        t = frame - idx0
        if 0 <= idx0 < len(self.key_frames) - 1:
            k0 = self.key_frames[idx0]
            k1 = self.key_frames[idx0 + 1]
            self._set(
                interpolate(k0.translation, k1.translation, t, self.interp),
                _interpolate_rotation(k0.rotation, k1.rotation, t, self.interp),
                interpolate(k0.scale, k1.scale, t, self.interp),
            )
        else:
            current = self.key_frames[0] if idx0 < 0 else self.key_frames[-1]
            self._set(current.translation, current.rotation, current.scale)


class Animation:
    """A set of channels played together."""

    def __init__(self) -> None:
        self.channels: list[Channel] = []
        self._length = 0.0

    def add_channel(self, channel: Channel) -> None:
        """Add a channel, extending the animation's length if needed."""
        self._length = max(self._length, channel.length())
        self.channels.append(channel)

    def length(self) -> float:
        """Duration of the longest channel in milliseconds."""
        return self._length

    def apply(self, time: float) -> None:
        """Apply every channel at ``time`` milliseconds."""
        for channel in self.channels:
            channel.apply(time)