import numpy as np
import pytest

from mineola.cloth import Cloth, cloth_grid


def test_grid_sizes():
    grid = cloth_grid(1.0, (3, 2))
    assert grid.positions.shape == (12, 3)
    assert grid.uvs.shape == (12, 2)
    assert grid.triangles.shape == (12, 3)


def test_grid_first_triangles_follow_winding():
    grid = cloth_grid(1.0, (3, 2))
    # columns: 4 vertices per row
    assert grid.triangles[0].tolist() == [0, 1, 5]
    assert grid.triangles[1].tolist() == [0, 5, 4]


def test_grid_neighbour_distances_equal_rest_length():
    grid = cloth_grid(0.5, (4, 4))
    pos = grid.positions.reshape(5, 5, 3)
    horizontal = np.linalg.norm(pos[:, 1:] - pos[:, :-1], axis=-1)
    vertical = np.linalg.norm(pos[1:] - pos[:-1], axis=-1)
    assert np.allclose(horizontal, 0.5)
    assert np.allclose(vertical, 0.5)


def test_grid_uv_corners():
    grid = cloth_grid(1.0, (10, 10))
    assert np.allclose(grid.uvs[0], [0.0, 0.0])
    assert np.allclose(grid.uvs[-1], [1.0, 1.0])
    assert np.allclose(grid.positions[0], [0.0, 0.0, 0.0])


def test_grid_rejects_empty():
    with pytest.raises(ValueError):
        cloth_grid(1.0, (0, 5))


def test_step_keeps_fixed_particles():
    cloth = Cloth(1.0, (8, 4))
    start = cloth.positions.copy()
    cloth.step(0.002)
    pos = cloth.positions.reshape(5, 9, 3)
    start_grid = start.reshape(5, 9, 3)
    assert np.array_equal(pos[-1], start_grid[-1])
    assert np.array_equal(pos[:, ::4], start_grid[:, ::4])


def test_step_pulls_free_particles_down():
    cloth = Cloth(1.0, (8, 4))
    cloth.step(0.002)
    vel = cloth.velocities.reshape(5, 9, 3)
    assert vel[0, 1, 1] < 0.0
    assert np.all(vel[-1] == 0.0)


def test_frame_move_idle_when_stopped():
    cloth = Cloth(1.0, (4, 4))
    start = cloth.positions.copy()
    cloth.frame_move(0.0, 16.0)
    assert np.array_equal(cloth.positions, start)


def test_frame_move_matches_fixed_steps():
    a = Cloth(1.0, (4, 4))
    b = Cloth(1.0, (4, 4))
    a.toggle()
    a.frame_move(0.0, 5.0)
    b.step(0.002)
    b.step(0.002)
    b.step(0.005 - 0.004)
    assert np.allclose(a.positions, b.positions)


def test_toggle_and_reset():
    cloth = Cloth(1.0, (4, 4))
    start = cloth.positions.copy()
    cloth.toggle()
    assert cloth.running is True
    cloth.frame_move(0.0, 20.0)
    assert not np.allclose(cloth.positions, start)
    cloth.reset()
    assert cloth.running is False
    assert np.allclose(cloth.positions, start)
    assert np.all(cloth.velocities == 0.0)