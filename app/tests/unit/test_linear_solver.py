"""Tests for simulation/linear_solver.py: Gaussian elimination with partial pivoting."""

import numpy as np
import pytest
from simulation.linear_solver import solve_linear_system


class TestRegularSystems:
    def test_two_by_two(self):
        x, singular = solve_linear_system([[2.0, 1.0], [1.0, 3.0]], [3.0, 5.0])
        assert x == pytest.approx([0.8, 1.4])
        assert singular == []

    def test_needs_row_swap(self):
        x, singular = solve_linear_system([[0.0, 1.0], [1.0, 0.0]], [2.0, 3.0])
        assert x == pytest.approx([3.0, 2.0])
        assert singular == []

    def test_matches_numpy(self):
        rng = np.random.default_rng(7)
        a = rng.normal(size=(6, 6)) + 6 * np.eye(6)
        b = rng.normal(size=6)
        x, _ = solve_linear_system(a, b)
        assert x == pytest.approx(np.linalg.solve(a, b))

    def test_inputs_not_modified(self):
        a = np.array([[4.0, 1.0], [2.0, 3.0]])
        b = np.array([1.0, 2.0])
        solve_linear_system(a, b)
        assert a.tolist() == [[4.0, 1.0], [2.0, 3.0]]
        assert b.tolist() == [1.0, 2.0]

    def test_wide_conductance_range(self):
        # Nano-siemens entries beside a unit conductance, as leakage next to a load
        a = [[1e-9 + 1e-9, -1e-9], [-1e-9, 1e-9 + 1.0]]
        x, singular = solve_linear_system(a, [1e-9, 0.0])
        assert singular == []
        assert np.allclose(np.array(a) @ x, [1e-9, 0.0], atol=1e-15)


class TestDegenerateSystems:
    def test_empty(self):
        x, singular = solve_linear_system(np.zeros((0, 0)), np.zeros(0))
        assert x.shape == (0,)
        assert singular == []

    def test_zero_column_left_at_zero(self):
        x, singular = solve_linear_system([[1.0, 0.0], [0.0, 0.0]], [2.0, 5.0])
        assert singular == [1]
        assert x.tolist() == [2.0, 0.0]

    def test_all_zero(self):
        x, singular = solve_linear_system(np.zeros((3, 3)), np.ones(3))
        assert singular == [0, 1, 2]
        assert x.tolist() == [0.0, 0.0, 0.0]

    def test_tolerance_is_configurable(self):
        _, singular = solve_linear_system([[1e-12]], [1.0])
        assert singular == [0]
        x, singular = solve_linear_system([[1e-12]], [1.0], pivot_tolerance=1e-15)
        assert singular == []
        assert x[0] == pytest.approx(1e12)

    def test_shape_mismatch_raises(self):
        with pytest.raises(ValueError):
            solve_linear_system(np.eye(2), np.ones(3))
