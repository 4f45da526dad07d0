"""
Linear algebra kernels for pymatrix.

This module provides CPU and GPU implementations of the factorization and
BLAS primitives that the dense backends are built from.

All functions follow these conventions:
    - CPU functions use SciPy's LAPACK/BLAS wrappers, s* or d* by dtype
    - GPU functions use PyTorch and return NumPy arrays (data moved to CPU)
    - Factorizations report LAPACK info codes instead of raising

Submodules:
    lu: LU factorization, LU inverse, direct solve, gemm/axpy/scal
"""

from pymatrix.core.compute.linalg.lu import (
    LUResult,
    lu_factor_cpu,
    lu_inverse_cpu,
    lu_solve_direct_cpu,
    gemm_cpu,
    axpy_cpu,
    scal_cpu,
    lu_factor_gpu,
    lu_inverse_gpu,
    lu_solve_direct_gpu,
)

__all__ = [
    # LU decomposition
    "LUResult",
    "lu_factor_cpu",
    "lu_inverse_cpu",
    "lu_solve_direct_cpu",
    "lu_factor_gpu",
    "lu_inverse_gpu",
    "lu_solve_direct_gpu",
    # BLAS
    "gemm_cpu",
    "axpy_cpu",
    "scal_cpu",
]
