"""
LU factorization kernels.

Thin, status-preserving wrappers over LAPACK (via scipy.linalg.lapack) and
PyTorch. Unlike scipy.linalg.lu_factor / numpy.linalg.inv these never raise
on singular input: they hand back LAPACK's info code so callers can map it
onto their own error taxonomy.

All functions operate on 2-D arrays in the array's own logical orientation;
memory layout is the caller's concern. Routine width (s*/d*) follows the
input dtype.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray
from scipy.linalg.lapack import get_lapack_funcs
from scipy.linalg.blas import get_blas_funcs

if TYPE_CHECKING:
    import torch


@dataclass(frozen=True)
class LUResult:
    """
    Result of an LU factorization P A = L U.

    Attributes:
        lu: Packed factors; strict lower triangle is L (unit diagonal), the
            upper triangle is U
        pivots: 0-based row interchanges, row i swapped with pivots[i]
        info: LAPACK status (0 ok, <0 illegal argument, >0 zero pivot U(i,i))
    """
    lu: NDArray[np.floating[Any]]
    pivots: NDArray[np.int32]
    info: int


def lu_factor_cpu(A: NDArray[np.floating[Any]], overwrite: bool = False) -> LUResult:
    """
    LU factorization using LAPACK ?getrf.

    Args:
        A: Square matrix (n x n)
        overwrite: Allow LAPACK to reuse A's memory (only effective for
                   Fortran-contiguous input of the routine's dtype)

    Returns:
        LUResult with packed factors, pivots and info
    """
    getrf, = get_lapack_funcs(('getrf',), (A,))
    lu, piv, info = getrf(A, overwrite_a=overwrite)
    return LUResult(lu=lu, pivots=piv, info=int(info))


def lu_inverse_cpu(
    lu: NDArray[np.floating[Any]],
    pivots: NDArray[np.int32],
    overwrite: bool = False,
) -> tuple[NDArray[np.floating[Any]], int]:
    """
    Inverse from an LU factorization using LAPACK ?getri.

    Args:
        lu: Packed factors from lu_factor_cpu()
        pivots: Pivots from lu_factor_cpu()
        overwrite: Allow LAPACK to reuse lu's memory

    Returns:
        (inverse, info)
    """
    getri, = get_lapack_funcs(('getri',), (lu,))
    inv_a, info = getri(lu, np.asarray(pivots, dtype=np.int32), overwrite_lu=overwrite)
    return inv_a, int(info)


def lu_solve_direct_cpu(
    A: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], LUResult]:
    """
    Solve A x = b with LAPACK ?gesv (factor and solve in one call).

    Args:
        A: Square matrix (n x n)
        b: Right-hand side (n,) or (n, k)

    Returns:
        (x, factorization) where x has b's shape
    """
    gesv, = get_lapack_funcs(('gesv',), (A, b))
    b2 = b.reshape(-1, 1) if b.ndim == 1 else b
    lu, piv, x, info = gesv(A, b2)
    return x.reshape(b.shape), LUResult(lu=lu, pivots=piv, info=int(info))


def gemm_cpu(
    X: NDArray[np.floating[Any]],
    Y: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """General matrix multiply X @ Y via BLAS ?gemm."""
    gemm, = get_blas_funcs(('gemm',), (X, Y))
    return gemm(1.0, X, Y)


def axpy_cpu(
    alpha: float,
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """alpha*x + y via BLAS ?axpy. y is copied, never overwritten."""
    axpy, = get_blas_funcs(('axpy',), (x, y))
    return axpy(x, y.copy(), a=alpha)


def scal_cpu(alpha: float, x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """alpha*x via BLAS ?scal. x is copied, never overwritten."""
    scal, = get_blas_funcs(('scal',), (x,))
    return scal(alpha, x.copy())


def _first_zero_pivot(U_diag: NDArray[np.floating[Any]]) -> int:
    """LAPACK-style info for a factor diagonal: 1-based first zero, else 0."""
    zeros = np.flatnonzero(U_diag == 0)
    return int(zeros[0]) + 1 if zeros.size else 0


def lu_factor_gpu(A: 'torch.Tensor') -> LUResult:
    """
    LU factorization using PyTorch (GPU-accelerated).

    Args:
        A: Square tensor (n x n), already on the desired device

    Returns:
        LUResult with factors as a NumPy array (moved to CPU) and
        0-based pivots
    """
    import torch

    LU, pivots, info = torch.linalg.lu_factor_ex(A)
    return LUResult(
        lu=LU.cpu().numpy(),
        pivots=(pivots.cpu().numpy() - 1).astype(np.int32),
        info=int(info.item()),
    )


def lu_inverse_gpu(
    LU: 'torch.Tensor',
    pivots: NDArray[np.int32],
) -> tuple[NDArray[np.floating[Any]], int]:
    """
    Inverse from a packed LU factorization using PyTorch.

    PyTorch has no getri; the inverse is obtained by solving against the
    identity. A zero on U's diagonal is reported the way getri does.
    """
    import torch

    info = _first_zero_pivot(torch.diagonal(LU).cpu().numpy())
    if info != 0:
        return LU.cpu().numpy(), info

    piv = torch.as_tensor(np.asarray(pivots) + 1, dtype=torch.int32, device=LU.device)
    eye = torch.eye(LU.shape[0], dtype=LU.dtype, device=LU.device)
    inv_a = torch.linalg.lu_solve(LU, piv, eye)
    return inv_a.cpu().numpy(), 0


def lu_solve_direct_gpu(
    A: 'torch.Tensor',
    b: 'torch.Tensor',
) -> tuple[NDArray[np.floating[Any]], LUResult]:
    """
    Solve A x = b using PyTorch, mirroring ?gesv's outputs.

    Returns:
        (x as NumPy array, factorization); x is meaningless when info != 0
    """
    import torch

    LU, pivots, info = torch.linalg.lu_factor_ex(A)
    status = int(info.item())
    factorization = LUResult(
        lu=LU.cpu().numpy(),
        pivots=(pivots.cpu().numpy() - 1).astype(np.int32),
        info=status,
    )
    if status != 0:
        return b.cpu().numpy(), factorization

    x = torch.linalg.lu_solve(LU, pivots, b.reshape(-1, 1))
    return x.reshape(b.shape).cpu().numpy(), factorization
