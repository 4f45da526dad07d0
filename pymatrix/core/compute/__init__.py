"""
Shared compute infrastructure for pymatrix.

IMPORTANT: This is NOT where backends live. Those go in dense/backends/.
This module contains shared NUMERIC infrastructure.

Submodules:
    device: Hardware detection and device selection
    timing: Execution timing utilities
    precision: Supported element widths and precision utilities
    tolerances: Tolerance tiers per backend and width
    linalg: LAPACK/BLAS and PyTorch kernels
"""

from pymatrix.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from pymatrix.core.compute.timing import Timer

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Timing
    "Timer",
]
