import numpy as np
import pytest

from mineola.controls import (
    ButtonAction,
    MoveKeys,
    arcball_direction,
    pinch_translation,
    roll_correction,
)


def test_arcball_inside_radius_points_out_of_screen():
    v = arcball_direction([3.0, 4.0], 10.0)
    assert np.linalg.norm(v) == pytest.approx(1.0)
    assert v[2] > 0


def test_arcball_outside_radius_lies_in_plane():
    v = arcball_direction([30.0, 40.0], 10.0)
    assert v[2] == 0.0
    assert np.allclose(v[:2], np.array([30.0, 40.0]) / np.linalg.norm([30.0, 40.0]))


def test_arcball_centre_is_straight_out():
    assert np.allclose(arcball_direction([0.0, 0.0], 5.0), [0.0, 0.0, 1.0])


def test_roll_correction_levels_x_axis():
    angle = 0.3
    mat = np.identity(4)
    mat[:3, 0] = [np.cos(angle), np.sin(angle), 0.0]
    mat[:3, 1] = [-np.sin(angle), np.cos(angle), 0.0]
    up = np.array([0.0, 1.0, 0.0])
    result = roll_correction(mat, up)
    assert np.dot(result[:3, 0], up) == pytest.approx(0.0)
    assert np.allclose(result[:, 2], mat[:, 2])
    assert np.allclose(result[:, 3], mat[:, 3])
    assert np.linalg.norm(result[:3, 0]) == pytest.approx(1.0)
    assert np.dot(result[:3, 0], result[:3, 1]) == pytest.approx(0.0)


def test_roll_correction_degenerate_returns_input():
    mat = np.identity(4)
    result = roll_correction(mat, [0.0, 0.0, 1.0])
    assert np.allclose(result, mat)


def test_pinch_unit_scale_does_not_move():
    assert np.allclose(pinch_translation([0, 0, 0], [0, 0, 5], 1.0), [0, 0, 0])


def test_pinch_zoom_in_divides_distance():
    target = np.array([1.0, 2.0, 3.0])
    position = np.array([1.0, 2.0, 9.0])
    moved = position + pinch_translation(target, position, 2.0)
    old = np.linalg.norm(target - position)
    assert np.linalg.norm(target - moved) == pytest.approx(old / 2.0)


def test_pinch_clamps_to_max_distance():
    target = np.zeros(3)
    position = np.array([0.0, 0.0, 1.0])
    max_dist = 3.0
    moved = position + pinch_translation(target, position, 0.01, max_dist)
    assert np.linalg.norm(moved - target) == pytest.approx(max_dist)


def test_move_keys_press_and_release():
    keys = MoveKeys()
    assert not keys.is_moving()
    keys.on_keyboard(ord("W"), ButtonAction.DOWN)
    assert keys.forward == 1
    assert keys.is_moving()
    keys.on_keyboard("S", ButtonAction.UP)
    assert keys.forward == 1
    keys.on_keyboard("W", ButtonAction.UP)
    assert keys.forward == 0
    assert not keys.is_moving()


def test_move_keys_opposite_key_overrides():
    keys = MoveKeys()
    keys.on_keyboard("A", ButtonAction.DOWN)
    keys.on_keyboard("D", ButtonAction.DOWN)
    assert keys.left == -1
    keys.on_keyboard("A", ButtonAction.UP)
    assert keys.left == -1


def test_move_keys_ignores_other_keys():
    keys = MoveKeys()
    keys.on_keyboard("X", ButtonAction.DOWN)
    assert keys == MoveKeys()


def test_displacement_directions():
    keys = MoveKeys(forward=1, left=0, up=-1)
    up_dir = np.array([0.0, 1.0, 0.0])
    move = keys.displacement(1000.0, 2.0, up_dir)
    assert np.allclose(move.local, [0.0, 0.0, -2.0])
    assert np.allclose(move.world, -2.0 * up_dir)


def test_displacement_zero_when_idle():
    move = MoveKeys().displacement(16.0, 5.0, [0.0, 1.0, 0.0])
    assert np.allclose(move.local, 0.0)
    assert np.allclose(move.world, 0.0)