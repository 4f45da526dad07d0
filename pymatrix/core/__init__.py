"""
Core infrastructure for pymatrix.

Shared abstractions used by the dense matrix package and its backends.

Key components:
    protocols: LinearAlgebraBackend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Precondition validators
    compute: Device detection, timing, precision, LAPACK kernels
"""

from pymatrix.core.protocols import LinearAlgebraBackend
from pymatrix.core.result import Result
from pymatrix.core.exceptions import (
    PyMatrixError,
    ValidationError,
    DimensionError,
    MatrixIndexError,
    NumericalError,
    LinearAlgebraError,
    NotInvertibleError,
    IllegalArgumentError,
    EquationUnsolvedError,
)

__all__ = [
    # Protocols
    "LinearAlgebraBackend",
    # Result
    "Result",
    # Exceptions
    "PyMatrixError",
    "ValidationError",
    "DimensionError",
    "MatrixIndexError",
    "NumericalError",
    "LinearAlgebraError",
    "NotInvertibleError",
    "IllegalArgumentError",
    "EquationUnsolvedError",
]
