"""
Tolerance tiers for numerical validation.

Defines precision expectations for different compute paths:
- CPU FP64 (reference): close to machine precision
- GPU FP64: same as CPU
- CPU/GPU FP32: relaxed for single-precision arithmetic

Used by allclose(), the test suite, and the solver's conditioning check.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import DTypeLike

from pymatrix.core.compute.precision import is_single_precision


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# CPU reference in double precision
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision, LAPACK reference',
)

# Single precision on CPU
CPU_FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='cpu_fp32',
    description='CPU single precision',
)

# GPU with FP64 (compute GPUs or explicit request)
GPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='gpu_fp64',
    description='GPU double precision, matches CPU reference',
)

# GPU with FP32 (consumer GPUs, default)
GPU_FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='gpu_fp32',
    description='GPU single precision',
)

# Condition numbers above these lose most significant digits of the
# solution: roughly 1/sqrt(eps) for each width.
ILL_CONDITIONED_FP64 = 1e8
ILL_CONDITIONED_FP32 = 1e4


def select_tolerance(backend_name: str, dtype: DTypeLike = np.float64) -> ToleranceTier:
    """Select appropriate tolerance tier for a backend and element width."""
    single = is_single_precision(dtype)
    if 'gpu' in backend_name:
        return GPU_FP32 if single or 'fp32' in backend_name else GPU_FP64
    return CPU_FP32 if single else CPU_FP64


def ill_conditioning_threshold(dtype: DTypeLike) -> float:
    """Condition number above which a system is reported as ill-conditioned."""
    return ILL_CONDITIONED_FP32 if is_single_precision(dtype) else ILL_CONDITIONED_FP64
