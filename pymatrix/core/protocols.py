"""
Core protocols for pymatrix.

These define structural interfaces that backend implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so that
test doubles and third-party factorization libraries can be plugged in
without inheriting from anything.

Buffer conventions:
    - Buffers are 1-D contiguous NumPy arrays of float32 or float64
    - The element width of the inputs selects the routine family
      (single or double precision); results keep that width
    - Status codes follow LAPACK's info convention:
        0   success
        -i  the i-th argument had an illegal value
        +i  U(i, i) is exactly zero (1-based)
    - Pivot indices are 0-based row interchanges
"""

from typing import Protocol, Any, runtime_checkable
import numpy as np
from numpy.typing import NDArray


@runtime_checkable
class LinearAlgebraBackend(Protocol):
    """
    Protocol for the numeric backend behind Matrix algebra and solvers.

    Backends are stateless: every call receives its own buffers and no
    scratch space is shared between calls, so one backend instance may
    serve independent matrices concurrently.
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{library}'
        Examples: 'cpu_lapack', 'gpu_torch_fp32'
        """
        ...

    def lu_factorize(
        self, buffer: NDArray[np.floating[Any]], n: int
    ) -> tuple[list[int], int]:
        """
        LU factorization with partial pivoting, in place.

        Args:
            buffer: n*n matrix buffer, overwritten with the L and U factors
            n: Order of the matrix

        Returns:
            (pivots, status)
        """
        ...

    def lu_invert(
        self, buffer: NDArray[np.floating[Any]], n: int, pivots: list[int]
    ) -> int:
        """
        Build the inverse from a prior factorization, in place.

        Args:
            buffer: Factorized buffer from lu_factorize(), overwritten
                    with the inverse
            n: Order of the matrix
            pivots: Pivots returned by lu_factorize()

        Returns:
            status
        """
        ...

    def direct_solve(
        self,
        coefficients: NDArray[np.floating[Any]],
        n: int,
        rhs: NDArray[np.floating[Any]],
    ) -> tuple[NDArray[np.floating[Any]], list[int], int]:
        """
        Solve A x = b for a single right-hand side.

        Args:
            coefficients: n*n buffer of A in column-major order; may be
                          overwritten with factorization side effects
            n: Number of equations
            rhs: Right-hand side vector (n,)

        Returns:
            (solution, pivots, status)
        """
        ...

    def general_multiply(
        self,
        x: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
        x_rows: int,
        x_cols: int,
        y_cols: int,
    ) -> NDArray[np.floating[Any]]:
        """Row-major x @ y, no transposes. Returns a new x_rows*y_cols buffer."""
        ...

    def axpy(
        self,
        alpha: float,
        x: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        """Return alpha*x + y as a new buffer."""
        ...

    def scale(
        self, alpha: float, x: NDArray[np.floating[Any]]
    ) -> NDArray[np.floating[Any]]:
        """Return alpha*x as a new buffer."""
        ...

    def transpose_buffer(
        self, x: NDArray[np.floating[Any]], rows: int, cols: int
    ) -> NDArray[np.floating[Any]]:
        """Return the row-major cols*rows transpose of a rows*cols buffer."""
        ...
