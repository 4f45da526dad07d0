"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pymatrix.dense import Matrix
from pymatrix.dense.backends import CPULapackBackend


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def system_matrix():
    """3x3 invertible coefficient matrix (det = 2)."""
    return Matrix.from_rows([
        [1, 1, 1],
        [1, -1, -1],
        [4, -1, -2],
    ])


@pytest.fixture
def system_rhs():
    """Right-hand side whose solution against system_matrix is (2, -1, 2)."""
    return Matrix.from_rows([[3], [1], [5]])


@pytest.fixture
def multi_rhs():
    """Three right-hand sides stacked as columns."""
    return Matrix.from_rows([
        [3, 1, 1],
        [1, 2, 2],
        [5, 2, 3],
    ])


@pytest.fixture
def singular_matrix():
    """Exactly singular 2x2; LU finds U(2, 2) == 0."""
    return Matrix.from_rows([[1, 1], [1, 1]])


@pytest.fixture
def random_invertible(rng):
    """Well-conditioned random 5x5 (diagonally dominant)."""
    A = rng.standard_normal((5, 5)) + 5.0 * np.eye(5)
    return Matrix.from_array(A)


class RecordingBackend:
    """
    LinearAlgebraBackend test double.

    Delegates to the CPU backend and records every call. Status codes can be
    forced per operation; direct_solve_statuses is consumed one per call.
    """

    def __init__(
        self,
        factor_status: int = 0,
        invert_status: int = 0,
        direct_solve_statuses: list[int] | None = None,
    ):
        self._inner = CPULapackBackend()
        self.factor_status = factor_status
        self.invert_status = invert_status
        self.direct_solve_statuses = list(direct_solve_statuses or [])
        self.calls: list[str] = []
        self.coefficients_seen: list[np.ndarray] = []

    @property
    def name(self) -> str:
        return 'recording'

    def lu_factorize(self, buffer, n):
        self.calls.append('lu_factorize')
        pivots, status = self._inner.lu_factorize(buffer, n)
        return pivots, self.factor_status or status

    def lu_invert(self, buffer, n, pivots):
        self.calls.append('lu_invert')
        status = self._inner.lu_invert(buffer, n, pivots)
        return self.invert_status or status

    def direct_solve(self, coefficients, n, rhs):
        self.calls.append('direct_solve')
        self.coefficients_seen.append(coefficients.copy())
        x, pivots, status = self._inner.direct_solve(coefficients, n, rhs)
        if self.direct_solve_statuses:
            forced = self.direct_solve_statuses.pop(0)
            status = forced or status
        return x, pivots, status

    def general_multiply(self, x, y, x_rows, x_cols, y_cols):
        self.calls.append('general_multiply')
        return self._inner.general_multiply(x, y, x_rows, x_cols, y_cols)

    def axpy(self, alpha, x, y):
        self.calls.append('axpy')
        return self._inner.axpy(alpha, x, y)

    def scale(self, alpha, x):
        self.calls.append('scale')
        return self._inner.scale(alpha, x)

    def transpose_buffer(self, x, rows, cols):
        self.calls.append('transpose_buffer')
        return self._inner.transpose_buffer(x, rows, cols)


@pytest.fixture
def recording_backend():
    """Backend double that records calls and otherwise behaves like the CPU backend."""
    return RecordingBackend()


@pytest.fixture
def make_recording_backend():
    """Factory for backend doubles with forced status codes."""
    return RecordingBackend
