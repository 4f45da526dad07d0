"""
pymatrix: dense matrices with LU-based inversion and solving.

A row-major single/double precision Matrix type, elementwise and BLAS-backed
algebra, and LAPACK-backed invert()/solve() with a precise error taxonomy
for singular and malformed systems. The numeric backend is pluggable
(SciPy LAPACK on CPU by default, PyTorch on CUDA/MPS optionally).

Submodules:
    core: Exceptions, backend protocol, validation, compute kernels
    dense: Matrix, algebra and solvers
"""

__version__ = "0.1.0"

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
from pymatrix.dense import (
    Axis,
    Matrix,
    add,
    allclose,
    divide,
    elementwise_multiply,
    exp,
    invert,
    multiply,
    power,
    scale,
    solve,
    solve_system,
    sum,
    transpose,
)

__all__ = [
    "__version__",
    # Container
    "Matrix",
    "Axis",
    # Algebra
    "add",
    "scale",
    "elementwise_multiply",
    "multiply",
    "transpose",
    "power",
    "exp",
    "sum",
    "divide",
    "allclose",
    # Solvers
    "invert",
    "solve",
    "solve_system",
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
