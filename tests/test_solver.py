# tests/test_solver.py
import numpy as np
import pytest
import scipy.linalg

from acsim_core import SingularSystemError
from acsim_core.simulation import solve_linear_system


class TestGaussJordanElimination:

    def test_matches_scipy_on_random_systems(self):
        rng = np.random.default_rng(1234)
        for n in (1, 2, 5, 12, 40):
            A = rng.normal(size=(n, n)) + 1j * rng.normal(size=(n, n)) + n * np.eye(n)
            b = rng.normal(size=n) + 1j * rng.normal(size=n)
            x = solve_linear_system(A, b)
            np.testing.assert_allclose(x, scipy.linalg.solve(A, b), rtol=1e-9, atol=1e-12)

    def test_requires_pivoting(self):
        A = np.array([[0, 1], [1, 0]], dtype=complex)
        b = np.array([2, 3], dtype=complex)
        np.testing.assert_allclose(solve_linear_system(A, b), [3, 2])

    def test_mna_shaped_system_with_zero_diagonal(self):
        # Voltage-source rows have a zero on the diagonal.
        A = np.array([[0.1, -0.1, 1.0], [-0.1, 0.2, 0.0], [1.0, 0.0, 0.0]], dtype=complex)
        b = np.array([0, 0, 12.0], dtype=complex)
        x = solve_linear_system(A, b)
        np.testing.assert_allclose(x, [12.0, 6.0, -0.6], atol=1e-12)
        np.testing.assert_allclose(x, scipy.linalg.solve(A, b), atol=1e-12)

    def test_inputs_are_not_modified(self):
        A = np.array([[2, 1], [1, 3]], dtype=complex)
        b = np.array([1, 2], dtype=complex)
        A_copy, b_copy = A.copy(), b.copy()
        solve_linear_system(A, b)
        np.testing.assert_array_equal(A, A_copy)
        np.testing.assert_array_equal(b, b_copy)

    def test_small_but_valid_pivot(self):
        # A lone 10 Mohm voltmeter conductance is still a usable pivot.
        x = solve_linear_system(np.array([[1e-7]], dtype=complex), np.array([1e-7], dtype=complex))
        np.testing.assert_allclose(x, [1.0])

    def test_singular_matrix_raises(self):
        A = np.array([[1, 2], [2, 4]], dtype=complex)
        with pytest.raises(SingularSystemError) as excinfo:
            solve_linear_system(A, np.array([1, 1], dtype=complex), frequency=50.0)
        assert excinfo.value.step == 1
        assert excinfo.value.frequency == 50.0
        assert "Singular System" in excinfo.value.get_diagnostic_report()

    def test_zero_matrix_raises_at_first_step(self):
        with pytest.raises(SingularSystemError) as excinfo:
            solve_linear_system(np.zeros((3, 3), dtype=complex), np.ones(3, dtype=complex))
        assert excinfo.value.step == 0

    def test_pivot_below_threshold_raises(self):
        with pytest.raises(SingularSystemError):
            solve_linear_system(np.array([[1e-13]], dtype=complex), np.array([1.0], dtype=complex))

    def test_empty_system(self):
        x = solve_linear_system(np.zeros((0, 0), dtype=complex), np.zeros(0, dtype=complex))
        assert x.shape == (0,)

    def test_shape_errors(self):
        with pytest.raises(ValueError):
            solve_linear_system(np.zeros((2, 3)), np.zeros(2))
        with pytest.raises(ValueError):
            solve_linear_system(np.eye(2), np.zeros(3))
