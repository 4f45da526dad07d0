"""
CPU reference backend.

Implements LinearAlgebraBackend on top of LAPACK and BLAS through
scipy.linalg.lapack / scipy.linalg.blas. The s* or d* routine family is
picked from the buffer's dtype, so float32 matrices are factorized in
single precision and float64 matrices in double precision.

Buffers are handed to LAPACK without reordering: LAPACK reads them
column-major. For lu_factorize/lu_invert that means the transpose is
factorized and inverted, and since inv(A^T)^T == inv(A) the row-major
result is the inverse of the row-major input. direct_solve expects its
coefficient buffer to be column-major already.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pymatrix.core.compute.linalg.lu import (
    lu_factor_cpu,
    lu_inverse_cpu,
    lu_solve_direct_cpu,
    gemm_cpu,
    axpy_cpu,
    scal_cpu,
)


class CPULapackBackend:
    """
    CPU backend using LAPACK ?getrf / ?getri / ?gesv and BLAS.

    Implements the LinearAlgebraBackend protocol. Stateless: an instance
    may be shared freely.
    """

    @property
    def name(self) -> str:
        return 'cpu_lapack'

    def lu_factorize(
        self, buffer: NDArray[np.floating[Any]], n: int
    ) -> tuple[list[int], int]:
        a = buffer.reshape((n, n), order='F')
        result = lu_factor_cpu(a, overwrite=True)
        buffer[:] = result.lu.ravel(order='F')
        return result.pivots.tolist(), result.info

    def lu_invert(
        self, buffer: NDArray[np.floating[Any]], n: int, pivots: list[int]
    ) -> int:
        lu = buffer.reshape((n, n), order='F')
        inv_a, info = lu_inverse_cpu(lu, np.asarray(pivots, dtype=np.int32), overwrite=True)
        if info == 0:
            buffer[:] = inv_a.ravel(order='F')
        return info

    def direct_solve(
        self,
        coefficients: NDArray[np.floating[Any]],
        n: int,
        rhs: NDArray[np.floating[Any]],
    ) -> tuple[NDArray[np.floating[Any]], list[int], int]:
        a = coefficients.reshape((n, n), order='F')
        b = np.asarray(rhs, dtype=coefficients.dtype)
        x, factorization = lu_solve_direct_cpu(a, b)
        coefficients[:] = factorization.lu.ravel(order='F')
        return x, factorization.pivots.tolist(), factorization.info

    def general_multiply(
        self,
        x: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
        x_rows: int,
        x_cols: int,
        y_cols: int,
    ) -> NDArray[np.floating[Any]]:
        c = gemm_cpu(x.reshape(x_rows, x_cols), y.reshape(x_cols, y_cols))
        return np.ascontiguousarray(c, dtype=x.dtype).ravel()

    def axpy(
        self,
        alpha: float,
        x: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        return axpy_cpu(alpha, x, y)

    def scale(
        self, alpha: float, x: NDArray[np.floating[Any]]
    ) -> NDArray[np.floating[Any]]:
        return scal_cpu(alpha, x)

    def transpose_buffer(
        self, x: NDArray[np.floating[Any]], rows: int, cols: int
    ) -> NDArray[np.floating[Any]]:
        return np.ascontiguousarray(x.reshape(rows, cols).T).ravel()
