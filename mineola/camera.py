"""Cameras and projection matrices."""

from __future__ import annotations

import math

import numpy as np


def perspective(fovy: float, aspect: float, near_plane: float, far_plane: float) -> np.ndarray:
    """Right-handed perspective projection mapping depth to [-1, 1]; fovy in radians."""
    if aspect == 0:
        raise ValueError("aspect ratio must be non-zero")
    f = 1.0 / math.tan(fovy / 2.0)
    depth = far_plane - near_plane
    mat = np.zeros((4, 4))
    mat[0, 0] = f / aspect
    mat[1, 1] = f
    mat[2, 2] = -(far_plane + near_plane) / depth
    mat[2, 3] = -(2.0 * far_plane * near_plane) / depth
    mat[3, 2] = -1.0
    return mat


def ortho(left: float, right: float, bottom: float, top: float,
          near_plane: float, far_plane: float) -> np.ndarray:
    """Right-handed orthographic projection mapping depth to [-1, 1]."""
    mat = np.identity(4)
    mat[0, 0] = 2.0 / (right - left)
    mat[1, 1] = 2.0 / (top - bottom)
    mat[2, 2] = -2.0 / (far_plane - near_plane)
    mat[0, 3] = -(right + left) / (right - left)
    mat[1, 3] = -(top + bottom) / (top - bottom)
    mat[2, 3] = -(far_plane + near_plane) / (far_plane - near_plane)
    return mat


class Camera:
    """A perspective or orthographic camera holding view and projection matrices."""

    def __init__(self, perspective: bool = True) -> None:
        self.perspective = perspective
        self._fovy = 60.0
        self._near = 0.001
        self._far = 100.0
        self.aspect_ratio = 1.0
        self.left = -1.0
        self.right = 1.0
        self.bottom = -1.0
        self.top = 1.0
        self.using_custom_proj_matrix = False
        self.view_matrix = np.identity(4)
        self._proj_matrix = np.identity(4)

    @property
    def proj_matrix(self) -> np.ndarray:
        return self._proj_matrix

    @property
    def fov(self) -> float:
        return self._fovy

    @fov.setter
    def fov(self, value: float) -> None:
        self.set_proj_params(value, self._near, self._far)

    @property
    def near_plane(self) -> float:
        return self._near

    @near_plane.setter
    def near_plane(self, value: float) -> None:
        self.set_proj_params(self._fovy, value, self._far)

    @property
    def far_plane(self) -> float:
        return self._far

    @far_plane.setter
    def far_plane(self, value: float) -> None:
        self.set_proj_params(self._fovy, self._near, value)

    def set_proj_params(self, fovy: float, near_plane: float, far_plane: float) -> None:
        """Set perspective parameters and rebuild the projection matrix."""
        self._fovy = fovy
        self._near = near_plane
        self._far = far_plane
        self._proj_matrix = perspective(fovy, self.aspect_ratio, near_plane, far_plane)

    def set_ortho_proj_params(self, left: float, right: float, bottom: float, top: float,
                              near_plane: float, far_plane: float) -> None:
        """Store orthographic bounds; the matrix is rebuilt on the next resize."""
        self.left = left
        self.right = right
        self.bottom = bottom
        self.top = top
        self._near = near_plane
        self._far = far_plane

    def set_proj_matrix(self, matrix) -> None:
        """Use a fixed projection matrix that resizing no longer overrides."""
        self._proj_matrix = np.asarray(matrix, dtype=float).reshape(4, 4).copy()
        self.using_custom_proj_matrix = True

    def on_size(self, width: int, height: int) -> None:
        """Adapt the projection to a viewport of the given size."""
        if height == 0 or self.using_custom_proj_matrix:
            return
        self.aspect_ratio = width / height
        if self.perspective:
            self._proj_matrix = perspective(
                self._fovy, self.aspect_ratio, self._near, self._far)
        else:
            center = (self.bottom + self.top) * 0.5
            diff = (self.top - center) / self.aspect_ratio
            self._proj_matrix = ortho(self.left, self.right, center - diff,
                                      center + diff, self._near, self._far)

    def uniforms(self) -> dict[str, np.ndarray]:
        """Matrices the camera uploads to the built-in uniform block."""
        return {
            "_view_mat": self.view_matrix,
            "_view_mat_inv": np.linalg.inv(self.view_matrix),
            "_proj_mat": self._proj_matrix,
            "_proj_mat_inv": np.linalg.inv(self._proj_matrix),
            "_proj_view_mat": self._proj_matrix @ self.view_matrix,
        }