"""A water surface animated as a sum of Gerstner waves."""

from __future__ import annotations

import math
import random
import time as _time
from dataclasses import dataclass

import numpy as np

from .entity import Entity

_UP = np.array([0.0, 1.0, 0.0])


@dataclass
class WaveLevel:
    """One Gerstner wave: wave number, heading, amplitude and phase offset."""

    wave_number: float = 1.0
    theta: float = 0.0
    A: float = 0.1
    phase: float = 0.0


class WaterSurface(Entity):
    """A grid of vertices in the xz plane moved by random waves; times in ms."""

    def __init__(self, lattice_size: float = 0.02, num_segments=(400, 500),
                 seed: int | None = None) -> None:
        super().__init__()
        self.lattice_size = lattice_size
        self.num_segments = tuple(int(n) for n in num_segments)
        if self.num_segments[0] <= 0 or self.num_segments[1] <= 0:
            raise ValueError("a surface needs at least one segment along each axis")
        self._seed = seed
        self.positions = np.zeros((0, 3))
        self.original_positions = np.zeros((0, 3))
        self.normals = np.zeros((0, 3))
        self.triangles = np.zeros((0, 3), dtype=np.int64)
        self.levels: list[WaveLevel] = []
        self.init_cpu_data()

    def init_cpu_data(self) -> None:
        """Lay out a flat grid and draw a fresh set of waves."""
        seg_x, seg_z = self.num_segments
        verts_x = seg_x + 1
        size = np.array([self.lattice_size * seg_x, 0.0, self.lattice_size * seg_z])
        start = -size * 0.5
        zs, xs = np.meshgrid(np.arange(seg_z + 1), np.arange(verts_x), indexing="ij")
        xs = xs.reshape(-1).astype(float)
        zs = zs.reshape(-1).astype(float)
        offsets = np.stack([self.lattice_size * xs, np.zeros_like(xs),
                            self.lattice_size * zs], axis=-1)
        self.positions = start + offsets
        self.original_positions = self.positions.copy()
        self.normals = np.tile(_UP, (len(self.positions), 1))

        zi, xi = np.meshgrid(np.arange(seg_z), np.arange(seg_x), indexing="ij")
        v00 = (zi * verts_x + xi).reshape(-1)
        v10 = v00 + 1
        v01 = v00 + verts_x
        v11 = v01 + 1
        first = np.stack([v00, v10, v11], axis=-1)
        second = np.stack([v00, v11, v01], axis=-1)
        self.triangles = np.stack([first, second], axis=1).reshape(-1, 3).astype(np.int64)

        rng = random.Random(self._seed if self._seed is not None else _time.time())
        self.levels = []
        for k in range(1, 21, 2):
            theta = rng.random() * 2.0 * math.pi
            amplitude = 0.3 * math.exp(-k * 0.4)
            phase = rng.random() * math.pi
            self.levels.append(WaveLevel(float(k), theta, amplitude, phase))

    def update(self, cur_time: float) -> None:
        """Displace the grid for time ``cur_time`` and recompute vertex normals."""
        ori = self.original_positions
        positions = ori.copy()
        for level in self.levels:
            k = level.wave_number
            dir_n = np.array([math.cos(level.theta), 0.0, math.sin(level.theta)])
            dir_n /= np.linalg.norm(dir_n)
            direction = dir_n * k
            omega = math.sqrt(k)
            phase = (direction[0] * ori[:, 0] + direction[2] * ori[:, 2]
                     - omega * cur_time / 1000.0 + level.phase)
            positions -= np.outer(level.A * np.sin(phase), dir_n)
            positions += np.outer(level.A * np.cos(phase), _UP)
        self.positions = positions

        tri = self.triangles
        p0 = positions[tri[:, 0]]
        p1 = positions[tri[:, 1]]
        p2 = positions[tri[:, 2]]
        face = np.cross(p1 - p0, p2 - p1)
        face = -face / np.linalg.norm(face, axis=-1, keepdims=True)
        normals = np.zeros_like(positions)
        for corner in range(3):
            np.add.at(normals, tri[:, corner], face)
        self.normals = normals / np.linalg.norm(normals, axis=-1, keepdims=True)

    def frame_move(self, time: float, frame_time: float) -> None:
        self.update(time)