"""
Dense matrices and LU-based linear algebra.

Public API:
    Matrix, Axis
    add, scale, elementwise_multiply, multiply, transpose,
    power, exp, sum, divide, allclose
    invert, solve, solve_system

Example:
    >>> from pymatrix.dense import Matrix, solve
    >>> A = Matrix.from_rows([[1, 1, 1], [1, -1, -1], [4, -1, -2]])
    >>> B = Matrix.from_rows([[3], [1], [5]])
    >>> pivots = solve(A, B)
    >>> print(B)
"""

from pymatrix.dense.matrix import Axis, Matrix
from pymatrix.dense.algebra import (
    add,
    allclose,
    divide,
    elementwise_multiply,
    exp,
    multiply,
    power,
    scale,
    sum,
    transpose,
)
from pymatrix.dense.solution import LinearSystemSolution, SolveParams
from pymatrix.dense.solvers import invert, solve, solve_system

__all__ = [
    "Matrix",
    "Axis",
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
    "invert",
    "solve",
    "solve_system",
    "LinearSystemSolution",
    "SolveParams",
]
