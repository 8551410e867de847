import math

import numpy as np
import pytest

from mineola.camera import Camera, ortho, perspective


def _project(mat, point):
    clip = mat @ np.append(np.asarray(point, dtype=float), 1.0)
    return clip[:3] / clip[3]


def test_perspective_maps_near_and_far_planes():
    near, far = 0.5, 20.0
    mat = perspective(math.pi / 3, 1.5, near, far)
    assert _project(mat, [0, 0, -near])[2] == pytest.approx(-1.0)
    assert _project(mat, [0, 0, -far])[2] == pytest.approx(1.0)
    assert mat[3, 2] == -1.0


def test_perspective_aspect_ratio():
    mat = perspective(1.0, 2.5, 0.1, 10.0)
    assert mat[1, 1] / mat[0, 0] == pytest.approx(2.5)


def test_perspective_rejects_zero_aspect():
    with pytest.raises(ValueError):
        perspective(1.0, 0.0, 0.1, 10.0)


def test_ortho_maps_box_to_unit_cube():
    mat = ortho(-2, 4, -1, 3, 0.5, 10)
    np.testing.assert_allclose(_project(mat, [-2, -1, -0.5]), [-1, -1, -1])
    np.testing.assert_allclose(_project(mat, [4, 3, -10]), [1, 1, 1])


def test_camera_defaults():
    cam = Camera()
    assert cam.fov == 60.0
    assert cam.near_plane == pytest.approx(0.001)
    assert cam.far_plane == 100.0
    np.testing.assert_allclose(cam.proj_matrix, np.identity(4))


def test_set_proj_params_builds_perspective():
    cam = Camera()
    cam.set_proj_params(1.2, 0.1, 50.0)
    np.testing.assert_allclose(cam.proj_matrix, perspective(1.2, 1.0, 0.1, 50.0))


def test_property_setters_rebuild_matrix():
    cam = Camera()
    cam.set_proj_params(1.0, 0.1, 50.0)
    cam.far_plane = 200.0
    assert cam.far_plane == 200.0
    np.testing.assert_allclose(cam.proj_matrix, perspective(1.0, 1.0, 0.1, 200.0))
    cam.fov = 0.7
    np.testing.assert_allclose(cam.proj_matrix, perspective(0.7, 1.0, 0.1, 200.0))


def test_on_size_updates_aspect():
    cam = Camera()
    cam.set_proj_params(1.0, 0.1, 10.0)
    cam.on_size(800, 400)
    assert cam.aspect_ratio == pytest.approx(2.0)
    np.testing.assert_allclose(cam.proj_matrix, perspective(1.0, 2.0, 0.1, 10.0))


def test_on_size_zero_height_ignored():
    cam = Camera()
    cam.set_proj_params(1.0, 0.1, 10.0)
    before = cam.proj_matrix.copy()
    cam.on_size(800, 0)
    np.testing.assert_allclose(cam.proj_matrix, before)
    assert cam.aspect_ratio == 1.0


def test_custom_proj_matrix_survives_resize():
    cam = Camera()
    custom = np.arange(16, dtype=float).reshape(4, 4)
    cam.set_proj_matrix(custom)
    cam.on_size(640, 480)
    np.testing.assert_allclose(cam.proj_matrix, custom)
    assert cam.using_custom_proj_matrix


def test_orthographic_on_size_keeps_width():
    cam = Camera(perspective=False)
    cam.set_ortho_proj_params(-1, 1, -1, 1, 0.1, 10)
    cam.on_size(200, 100)
    np.testing.assert_allclose(cam.proj_matrix, ortho(-1, 1, -0.5, 0.5, 0.1, 10))


def test_uniforms_are_consistent():
    cam = Camera()
    cam.set_proj_params(1.0, 0.1, 10.0)
    view = np.identity(4)
    view[:3, 3] = [1, -2, 3]
    cam.view_matrix = view
    uniforms = cam.uniforms()
    np.testing.assert_allclose(uniforms["_proj_view_mat"], cam.proj_matrix @ view)
    np.testing.assert_allclose(uniforms["_view_mat_inv"] @ view, np.identity(4), atol=1e-12)
    np.testing.assert_allclose(
        uniforms["_proj_mat_inv"] @ uniforms["_proj_mat"], np.identity(4), atol=1e-9)