"""
Tests for invert(), solve() and solve_system().

Covers known solutions, round trips against NumPy, the concatenated
pivot layout, failure semantics for singular and malformed systems, and
the diagnostics attached by solve_system().
"""

import warnings

import numpy as np
import pytest

from pymatrix.core.exceptions import (
    DimensionError,
    EquationUnsolvedError,
    IllegalArgumentError,
    LinearAlgebraError,
    NotInvertibleError,
    ValidationError,
)
from pymatrix.dense import (
    LinearSystemSolution,
    Matrix,
    allclose,
    invert,
    multiply,
    solve,
    solve_system,
)


# ═══════════════════════════════════════════════════════════════════════
# invert
# ═══════════════════════════════════════════════════════════════════════


class TestInvert:

    def test_known_inverse(self):
        x = Matrix.from_rows([[4, 7], [2, 6]])
        expected = Matrix.from_rows([[0.6, -0.7], [-0.2, 0.4]])
        assert allclose(invert(x), expected)

    def test_round_trip_fp64(self, random_invertible):
        inv = invert(random_invertible)
        assert allclose(multiply(random_invertible, inv), Matrix.identity(5))
        assert allclose(multiply(inv, random_invertible), Matrix.identity(5))

    def test_matches_numpy(self, system_matrix):
        expected = np.linalg.inv(system_matrix.to_array())
        np.testing.assert_allclose(invert(system_matrix).to_array(), expected, atol=1e-12)

    def test_round_trip_fp32(self, rng):
        A = (rng.standard_normal((4, 4)) + 4.0 * np.eye(4)).astype(np.float32)
        x = Matrix.from_array(A)
        inv = invert(x)
        assert inv.dtype == np.float32
        assert allclose(multiply(x, inv), Matrix.identity(4, dtype=np.float32))

    def test_input_untouched(self, system_matrix):
        before = system_matrix.copy()
        invert(system_matrix)
        assert system_matrix == before

    def test_one_by_one(self):
        assert invert(Matrix(1, 1, 4.0)).tolist() == [[0.25]]

    def test_singular(self, singular_matrix):
        with pytest.raises(NotInvertibleError) as exc_info:
            invert(singular_matrix)
        err = exc_info.value
        assert err.pivot == 2
        assert err.status == 2
        assert err.operation == 'invert'
        assert "not invertible" in str(err)

    def test_singular_is_linear_algebra_error(self, singular_matrix):
        with pytest.raises(LinearAlgebraError):
            invert(singular_matrix)

    def test_singular_input_untouched(self, singular_matrix):
        before = singular_matrix.copy()
        with pytest.raises(NotInvertibleError):
            invert(singular_matrix)
        assert singular_matrix == before

    def test_zero_matrix(self):
        with pytest.raises(NotInvertibleError) as exc_info:
            invert(Matrix(3, 3))
        assert exc_info.value.pivot == 1

    def test_non_square(self):
        with pytest.raises(DimensionError, match="invert: matrix must be square, got 2x3"):
            invert(Matrix(2, 3))


# ═══════════════════════════════════════════════════════════════════════
# solve
# ═══════════════════════════════════════════════════════════════════════


class TestSolve:

    def test_known_solution(self, system_matrix, system_rhs):
        pivots = solve(system_matrix, system_rhs)
        np.testing.assert_allclose(system_rhs.to_array(), [[2.0], [-1.0], [2.0]], atol=1e-12)
        assert len(pivots) == 3
        assert all(0 <= p < 3 for p in pivots)
        assert pivots[0] == 2

    def test_coefficients_untouched(self, system_matrix, system_rhs):
        before = system_matrix.copy()
        solve(system_matrix, system_rhs)
        assert system_matrix == before

    def test_multiple_columns(self, system_matrix, multi_rhs):
        B = multi_rhs.to_array()
        pivots = solve(system_matrix, multi_rhs)
        expected = np.linalg.solve(system_matrix.to_array(), B)
        np.testing.assert_allclose(multi_rhs.to_array(), expected, atol=1e-12)
        assert len(pivots) == 9
        np.testing.assert_allclose(multi_rhs.column(1), [1.5, -5.0, 4.5], atol=1e-12)

    def test_pivots_repeat_per_column(self, system_matrix, multi_rhs):
        pivots = solve(system_matrix, multi_rhs)
        assert pivots[0:3] == pivots[3:6] == pivots[6:9]

    def test_columns_match_single_solves(self, system_matrix, multi_rhs):
        B = multi_rhs.to_array()
        all_pivots = solve(system_matrix, multi_rhs)
        for c in range(3):
            single = Matrix.from_array(B[:, [c]])
            pivots = solve(system_matrix, single)
            np.testing.assert_allclose(single.column(0), multi_rhs.column(c), atol=1e-14)
            assert pivots == all_pivots[3 * c:3 * c + 3]

    def test_matches_inverse_product(self, system_matrix, multi_rhs):
        expected = multiply(invert(system_matrix), multi_rhs)
        solve(system_matrix, multi_rhs)
        assert allclose(multi_rhs, expected)

    def test_residual(self, random_invertible, rng):
        B = rng.standard_normal((5, 2))
        X = Matrix.from_array(B)
        solve(random_invertible, X)
        np.testing.assert_allclose(random_invertible.to_array() @ X.to_array(), B, atol=1e-10)

    def test_float32(self, system_matrix):
        a = Matrix.from_array(system_matrix.to_array(), dtype=np.float32)
        b = Matrix.from_rows([[3], [1], [5]], dtype=np.float32)
        solve(a, b)
        assert b.dtype == np.float32
        np.testing.assert_allclose(b.column(0), [2.0, -1.0, 2.0], atol=1e-5)

    def test_ndarray_rhs(self, system_matrix):
        b = np.array([[3.0], [1.0], [5.0]])
        pivots = solve(system_matrix, b)
        np.testing.assert_allclose(b[:, 0], [2.0, -1.0, 2.0], atol=1e-12)
        assert len(pivots) == 3

    def test_zero_columns(self, system_matrix):
        b = np.zeros((3, 0))
        with pytest.raises(IllegalArgumentError) as exc_info:
            solve(system_matrix, b)
        assert exc_info.value.argument_index == 1
        assert exc_info.value.status == -1

    def test_zero_columns_checked_before_shape(self):
        with pytest.raises(IllegalArgumentError):
            solve(Matrix(2, 3), np.zeros((5, 0)))

    def test_singular(self, singular_matrix):
        b = Matrix.from_rows([[1], [2]])
        with pytest.raises(EquationUnsolvedError) as exc_info:
            solve(singular_matrix, b)
        err = exc_info.value
        assert err.equation == 2
        assert err.status == 2
        assert err.column == 0

    def test_singular_leaves_rhs(self, singular_matrix):
        b = Matrix.from_rows([[1, 4], [2, 5]])
        before = b.copy()
        with pytest.raises(EquationUnsolvedError):
            solve(singular_matrix, b)
        assert b == before

    def test_non_square(self):
        with pytest.raises(DimensionError, match="square"):
            solve(Matrix(2, 3), Matrix(2, 1))

    def test_row_mismatch(self, system_matrix):
        with pytest.raises(DimensionError, match="rows"):
            solve(system_matrix, Matrix(2, 1))

    def test_dtype_mismatch(self, system_matrix):
        with pytest.raises(DimensionError, match="element types differ"):
            solve(system_matrix, Matrix(3, 1, dtype=np.float32))

    def test_ndarray_dtype_mismatch(self, system_matrix):
        b = np.array([[3.0], [1.0], [5.0]], dtype=np.float32)
        with pytest.raises(DimensionError, match="element types differ"):
            solve(system_matrix, b)
        np.testing.assert_array_equal(b, [[3.0], [1.0], [5.0]])

    def test_ndarray_float32_system(self, system_matrix):
        a = Matrix.from_array(system_matrix.to_array(), dtype=np.float32)
        b = np.array([[3.0], [1.0], [5.0]], dtype=np.float32)
        solve(a, b)
        assert b.dtype == np.float32
        np.testing.assert_allclose(b[:, 0], [2.0, -1.0, 2.0], atol=1e-5)

    def test_rhs_type(self, system_matrix):
        with pytest.raises(ValidationError):
            solve(system_matrix, [[3.0], [1.0], [5.0]])

    def test_rhs_integer_array(self, system_matrix):
        with pytest.raises(ValidationError, match="floating"):
            solve(system_matrix, np.array([[3], [1], [5]]))

    def test_rhs_1d_array(self, system_matrix):
        with pytest.raises(DimensionError):
            solve(system_matrix, np.array([3.0, 1.0, 5.0]))


# ═══════════════════════════════════════════════════════════════════════
# solve_system
# ═══════════════════════════════════════════════════════════════════════


class TestSolveSystem:

    def test_solution(self, system_matrix, system_rhs):
        result = solve_system(system_matrix, system_rhs)
        assert isinstance(result, LinearSystemSolution)
        np.testing.assert_allclose(result.solution.column(0), [2.0, -1.0, 2.0], atol=1e-12)

    def test_rhs_untouched(self, system_matrix, system_rhs):
        before = system_rhs.copy()
        solve_system(system_matrix, system_rhs)
        assert system_rhs == before

    def test_agrees_with_solve(self, system_matrix, multi_rhs):
        result = solve_system(system_matrix, multi_rhs)
        pivots = solve(system_matrix, multi_rhs)
        assert result.solution == multi_rhs
        assert result.pivots == pivots

    def test_metadata(self, system_matrix, multi_rhs):
        result = solve_system(system_matrix, multi_rhs)
        assert result.n == 3
        assert result.nrhs == 3
        assert result.info['method'] == 'lu'
        assert result.backend_name == 'cpu_lapack'
        assert result.warnings == ()

    def test_timing_sections(self, system_matrix, system_rhs):
        result = solve_system(system_matrix, system_rhs)
        assert set(result.timing) == {
            'total_seconds', 'transpose', 'direct_solve', 'diagnostics',
        }
        assert all(v >= 0.0 for v in result.timing.values())

    def test_diagnostics(self, system_matrix, system_rhs):
        result = solve_system(system_matrix, system_rhs)
        expected = np.linalg.cond(system_matrix.to_array())
        assert result.condition_number == pytest.approx(expected)
        assert result.residual_norm < 1e-12

    def test_solution_is_copy(self, system_matrix, system_rhs):
        result = solve_system(system_matrix, system_rhs)
        x = result.solution
        x[0, 0] = 100.0
        assert result.solution[0, 0] == pytest.approx(2.0)

    def test_ndarray_rhs_untouched(self, system_matrix):
        b = np.array([[3.0], [1.0], [5.0]])
        solve_system(system_matrix, b)
        np.testing.assert_array_equal(b, [[3.0], [1.0], [5.0]])

    def test_ill_conditioned_warns(self):
        a = Matrix.from_rows([[1, 1], [1, 1 + 1e-10]])
        b = Matrix.from_rows([[2], [2]])
        with pytest.warns(RuntimeWarning, match="ill-conditioned"):
            result = solve_system(a, b)
        assert result.condition_number > 1e8
        assert len(result.warnings) == 1

    def test_well_conditioned_is_quiet(self, random_invertible):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            solve_system(random_invertible, Matrix(5, 1, 1.0))

    def test_non_finite_coefficients_warn(self):
        a = Matrix.from_rows([[1, np.nan], [0, 1]])
        b = Matrix.from_rows([[1], [1]])
        solve(a, b.copy())
        with pytest.warns(RuntimeWarning, match="NaN or inf"):
            result = solve_system(a, b)
        assert result.condition_number == np.inf
        assert len(result.warnings) == 1
        assert "ill-conditioned" not in result.warnings[0]

    def test_singular(self, singular_matrix):
        with pytest.raises(EquationUnsolvedError):
            solve_system(singular_matrix, Matrix(2, 1, 1.0))

    def test_summary(self, system_matrix, system_rhs):
        text = solve_system(system_matrix, system_rhs).summary()
        assert "Linear System Solution" in text
        assert "Equations: 3" in text
        assert "Backend: cpu_lapack" in text

    def test_repr(self, system_matrix, system_rhs):
        assert repr(solve_system(system_matrix, system_rhs)).startswith(
            "LinearSystemSolution(n=3, nrhs=1"
        )
