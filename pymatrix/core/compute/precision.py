"""
Numerical precision constants and utilities.

Matrices are generic over a closed set of element widths: single and
double precision. Everything that needs to know about the width (buffer
allocation, backend routine selection, tolerances) goes through here.
"""

import numpy as np
from numpy.typing import DTypeLike, NDArray
from typing import Any


# The only element types a Matrix may hold
SUPPORTED_DTYPES: tuple[np.dtype, ...] = (
    np.dtype(np.float32),
    np.dtype(np.float64),
)

DEFAULT_DTYPE: np.dtype = np.dtype(np.float64)

# Machine epsilon for float64
EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16

# Machine epsilon for float32
EPSILON_32: float = float(np.finfo(np.float32).eps)  # ~1.19e-7


def is_supported_dtype(dtype: DTypeLike) -> bool:
    """True if dtype is one of the supported element widths."""
    try:
        return np.dtype(dtype) in SUPPORTED_DTYPES
    except TypeError:
        return False


def is_single_precision(dtype: DTypeLike) -> bool:
    """True for float32."""
    return np.dtype(dtype) == np.dtype(np.float32)


def machine_epsilon(dtype: DTypeLike = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    Args:
        dtype: NumPy dtype or type

    Returns:
        Machine epsilon for the dtype
    """
    return float(np.finfo(dtype).eps)


def condition_number(A: NDArray[np.floating[Any]]) -> float:
    """
    Compute the 2-norm condition number of a square matrix.

    Computed in double precision regardless of the input width so that
    single-precision systems are judged against an accurate estimate.

    Args:
        A: Input matrix (n x n)

    Returns:
        Condition number (ratio of largest to smallest singular value).
        Returns inf if matrix is singular or has NaN or inf entries.
    """
    if not np.isfinite(A).all():
        return np.inf
    s = np.linalg.svd(np.asarray(A, dtype=np.float64), compute_uv=False)
    if s[-1] == 0:
        return np.inf
    return float(s[0] / s[-1])
