"""Axis-aligned bounding boxes."""

from __future__ import annotations

import numpy as np


class AABB:
    """An axis-aligned box given by its lower and upper corners."""

    def __init__(self, lb, ub) -> None:
        self.lb = np.asarray(lb, dtype=float).reshape(3).copy()
        self.ub = np.asarray(ub, dtype=float).reshape(3).copy()

    def __repr__(self) -> str:
        return f"AABB(lb={self.lb.tolist()}, ub={self.ub.tolist()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AABB):
            return NotImplemented
        return bool(np.array_equal(self.lb, other.lb) and np.array_equal(self.ub, other.ub))

    def center(self) -> np.ndarray:
        """Midpoint of the box."""
        return (self.lb + self.ub) * 0.5

    def extent(self) -> np.ndarray:
        """Size of the box along each axis."""
        return self.ub - self.lb

    def corners(self) -> list[np.ndarray]:
        """The eight corners; bit 0, 1, 2 of the index selects the upper x, y, z."""
        center = self.center()
        half = self.extent() * 0.5
        result = []
        for i in range(8):
            sign = np.array(
                [1.0 if i & bit else -1.0 for bit in (1, 2, 4)], dtype=float
            )
            result.append(center + half * sign)
        return result

    def combine(self, other: "AABB") -> "AABB":
        """Grow this box to enclose ``other``; returns self."""
        self.lb = np.minimum(self.lb, other.lb)
        self.ub = np.maximum(self.ub, other.ub)
        return self

    def transform(self, matrix) -> "AABB":
        """Replace the box with the bounds of its corners under a 4x4 matrix."""
        mat = np.asarray(matrix, dtype=float).reshape(4, 4)
        points = np.array([np.append(corner, 1.0) for corner in self.corners()])
        moved = (points @ mat.T)[:, :3]
        self.lb = moved.min(axis=0)
        self.ub = moved.max(axis=0)
        return self