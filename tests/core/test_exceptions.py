"""
Tests for pymatrix exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyMatrixError)
    - Precondition violations and backend failures are disjoint families
    - Diagnostic attributes on the LinearAlgebraError subclasses
    - Default attribute values
"""

import pytest

from pymatrix.core.exceptions import (
    DimensionError,
    EquationUnsolvedError,
    IllegalArgumentError,
    LinearAlgebraError,
    MatrixIndexError,
    NotInvertibleError,
    NumericalError,
    PyMatrixError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyMatrixError."""

    def test_validation_error_is_pymatrix_error(self):
        with pytest.raises(PyMatrixError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_index_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise MatrixIndexError("row 3 out of range")

    def test_index_error_is_builtin_index_error(self):
        with pytest.raises(IndexError):
            raise MatrixIndexError("row 3 out of range")

    @pytest.mark.parametrize("exc", [
        NotInvertibleError("singular"),
        IllegalArgumentError("bad arg", argument_index=1),
        EquationUnsolvedError("singular", equation=2),
    ])
    def test_backend_failures_are_linear_algebra_errors(self, exc):
        assert isinstance(exc, LinearAlgebraError)
        assert isinstance(exc, NumericalError)
        assert isinstance(exc, PyMatrixError)

    @pytest.mark.parametrize("exc", [
        NotInvertibleError("singular"),
        IllegalArgumentError("bad arg", argument_index=1),
        EquationUnsolvedError("singular", equation=2),
    ])
    def test_backend_failures_are_not_validation_errors(self, exc):
        assert not isinstance(exc, ValidationError)

    def test_dimension_error_is_not_numerical_error(self):
        assert not isinstance(DimensionError("x"), NumericalError)


# ═══════════════════════════════════════════════════════════════════════
# NotInvertibleError
# ═══════════════════════════════════════════════════════════════════════


class TestNotInvertibleError:
    """NotInvertibleError carries the zero pivot when there is one."""

    def test_all_attributes(self):
        err = NotInvertibleError(
            "invert: matrix is not invertible",
            operation='divide',
            status=2,
            pivot=2,
        )
        assert str(err) == "invert: matrix is not invertible"
        assert err.operation == 'divide'
        assert err.status == 2
        assert err.pivot == 2

    def test_defaults(self):
        err = NotInvertibleError("singular")
        assert err.operation == 'invert'
        assert err.status == 0
        assert err.pivot is None


# ═══════════════════════════════════════════════════════════════════════
# IllegalArgumentError
# ═══════════════════════════════════════════════════════════════════════


class TestIllegalArgumentError:
    """IllegalArgumentError keeps the 1-based argument index."""

    def test_status_is_negated_index(self):
        err = IllegalArgumentError("bad", argument_index=4)
        assert err.argument_index == 4
        assert err.status == -4

    def test_defaults(self):
        err = IllegalArgumentError("bad", argument_index=1)
        assert err.operation == 'solve'
        assert err.column is None

    def test_catchable_with_attributes(self):
        with pytest.raises(LinearAlgebraError) as exc_info:
            raise IllegalArgumentError("bad", argument_index=3, column=1)
        assert exc_info.value.argument_index == 3
        assert exc_info.value.column == 1


# ═══════════════════════════════════════════════════════════════════════
# EquationUnsolvedError
# ═══════════════════════════════════════════════════════════════════════


class TestEquationUnsolvedError:
    """EquationUnsolvedError keeps the pivot position."""

    def test_status_is_equation(self):
        err = EquationUnsolvedError("singular", equation=3, column=0)
        assert err.equation == 3
        assert err.status == 3
        assert err.column == 0
        assert err.operation == 'solve'

    def test_message_preserved(self):
        err = EquationUnsolvedError("U(2,2) is exactly zero", equation=2)
        assert "U(2,2)" in str(err)
