"""A mass-spring cloth simulated on a regular grid of particles."""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np

from .entity import Entity

GRAVITY = np.array([0.0, -9.8, 0.0])

_DIRECTIONS = ((1, 0), (0, 1), (-1, 0), (0, -1))


class ClothGrid(NamedTuple):
    """Initial particle positions, texture coordinates and triangle indices."""

    positions: np.ndarray
    uvs: np.ndarray
    triangles: np.ndarray


def _grid_triangles(segments_x: int, segments_y: int) -> np.ndarray:
    verts_x = segments_x + 1
    ys, xs = np.meshgrid(np.arange(segments_y), np.arange(segments_x), indexing="ij")
    v00 = (ys * verts_x + xs).reshape(-1)
    v10 = v00 + 1
    v01 = v00 + verts_x
    v11 = v01 + 1
    first = np.stack([v00, v10, v11], axis=-1)
    second = np.stack([v00, v11, v01], axis=-1)
    return np.stack([first, second], axis=1).reshape(-1, 3).astype(np.int64)


def cloth_grid(rest_len: float, num_segments) -> ClothGrid:
    """Build a sloped sheet whose neighbouring particles are ``rest_len`` apart."""
    segments_x, segments_y = (int(n) for n in num_segments)
    if segments_x <= 0 or segments_y <= 0:
        raise ValueError("a cloth needs at least one segment along each axis")
    half_sqrt2 = math.sqrt(2.0) * 0.5
    d_pos = np.array([rest_len, half_sqrt2 * rest_len, half_sqrt2 * rest_len])
    d_uv = np.array([1.0 / segments_x, 1.0 / segments_y])

    ys, xs = np.meshgrid(np.arange(segments_y + 1), np.arange(segments_x + 1), indexing="ij")
    xs = xs.reshape(-1).astype(float)
    ys = ys.reshape(-1).astype(float)
    positions = np.stack([d_pos[0] * xs, d_pos[1] * ys, d_pos[2] * ys], axis=-1)
    uvs = np.stack([d_uv[0] * xs, d_uv[1] * ys], axis=-1)
    return ClothGrid(positions, uvs, _grid_triangles(segments_x, segments_y))


def _shift(n: int, d: int) -> tuple[slice, slice]:
    if d > 0:
        return slice(0, n - d), slice(d, n)
    if d < 0:
        return slice(-d, n), slice(0, n + d)
    return slice(0, n), slice(0, n)


class Cloth(Entity):
    """Cloth hanging from its top row and every fourth column; times in ms."""

    def __init__(self, rest_len: float = 1.0, num_segments=(10, 10)) -> None:
        super().__init__()
        self.rest_len = rest_len
        self.num_segments = tuple(int(n) for n in num_segments)
        self.stiffness = 980.0 * 3.0
        self.damping = 0.5
        self.mass = 1.0
        self.time_step = 2e-3
        self.running = False
        grid = cloth_grid(rest_len, self.num_segments)
        self.uvs = grid.uvs
        self.triangles = grid.triangles
        self.positions = grid.positions
        self.velocities = np.zeros_like(self.positions)
        self.forces = np.zeros_like(self.positions)

    @property
    def _shape(self) -> tuple[int, int]:
        return self.num_segments[1] + 1, self.num_segments[0] + 1

    def _fixed_mask(self) -> np.ndarray:
        rows, cols = self._shape
        ys, xs = np.meshgrid(np.arange(rows), np.arange(cols), indexing="ij")
        return ((ys == rows - 1) | (xs % 4 == 0)).reshape(-1)

    def _compute_forces(self) -> None:
        rows, cols = self._shape
        grid = self.positions.reshape(rows, cols, 3)
        forces = np.zeros_like(grid)
        for dx, dy in _DIRECTIONS:
            ys0, ys1 = _shift(rows, dy)
            xs0, xs1 = _shift(cols, dx)
            delta = grid[ys1, xs1] - grid[ys0, xs0]
            dist = np.linalg.norm(delta, axis=-1, keepdims=True)
            forces[ys0, xs0] += self.stiffness * (dist - self.rest_len) * delta
            # Gravity is accumulated once per connected neighbour.
            forces[ys0, xs0] += GRAVITY * self.mass
        self.forces = forces.reshape(-1, 3)

    def step(self, d_time: float) -> None:
        """Advance the simulation by ``d_time`` seconds."""
        self._compute_forces()
        fixed = self._fixed_mask()
        free = ~fixed
        self.velocities[fixed] = 0.0
        v = self.velocities[free]
        v = v + (self.forces[free] - self.damping * v) / self.mass * d_time
        self.velocities[free] = v
        self.positions[free] += v * d_time

    def frame_move(self, time: float, frame_time: float) -> None:
        """Simulate ``frame_time`` milliseconds in fixed steps plus a remainder."""
        if not self.running:
            return
        total = frame_time / 1000.0
        steps = int(total / self.time_step)
        for _ in range(max(steps, 0)):
            self.step(self.time_step)
        remaining = total - self.time_step * steps
        if remaining > 0.0:
            self.step(remaining)

    def toggle(self) -> None:
        """Start or stop the simulation."""
        self.running = not self.running

    def reset(self) -> None:
        """Stop and return every particle to its initial place at rest."""
        self.running = False
        self.positions = cloth_grid(self.rest_len, self.num_segments).positions
        self.velocities = np.zeros_like(self.positions)
        self.forces = np.zeros_like(self.positions)