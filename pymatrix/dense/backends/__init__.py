"""
Numeric backends for dense matrices.

Available backends:
    CPULapackBackend: CPU reference implementation (SciPy LAPACK/BLAS)
    GPUTorchBackend: GPU implementation using PyTorch (CUDA/MPS)

get_backend() turns a backend choice into an instance. The GPU backend is
imported lazily so that PyTorch stays optional.
"""

from typing import Literal, Union

from pymatrix.core.protocols import LinearAlgebraBackend
from pymatrix.core.compute.device import select_device
from pymatrix.dense.backends.cpu import CPULapackBackend


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'gpu', 'cpu_lapack', 'gpu_torch']
BackendSpec = Union[BackendChoice, LinearAlgebraBackend, None]

_CPU_BACKEND = CPULapackBackend()


def get_backend(choice: BackendSpec = None) -> LinearAlgebraBackend:
    """
    Select and instantiate the appropriate backend.

    Args:
        choice: Backend preference
            - None / 'cpu' / 'cpu_lapack': CPU LAPACK backend (shared instance)
            - 'gpu' / 'gpu_torch': PyTorch backend on the detected GPU
            - 'auto': CUDA GPU if available, else CPU
            - any object satisfying LinearAlgebraBackend: used as-is

    Returns:
        Backend instance

    Raises:
        ValueError: If unknown backend specified
        RuntimeError: If GPU requested but unavailable
    """
    if choice is None or choice in ('cpu', 'cpu_lapack'):
        return _CPU_BACKEND

    if isinstance(choice, str):
        if choice == 'auto':
            # Only a GPU that keeps float64 matrices in float64 is picked
            # implicitly; MPS has to be requested with 'gpu'.
            device = select_device('auto')
            if not (device.is_gpu and device.supports_fp64):
                return _CPU_BACKEND
            from pymatrix.dense.backends.gpu import GPUTorchBackend
            return GPUTorchBackend(device=device.torch_device)

        if choice in ('gpu', 'gpu_torch'):
            device = select_device('gpu')
            from pymatrix.dense.backends.gpu import GPUTorchBackend
            return GPUTorchBackend(device=device.torch_device)

        raise ValueError(f"Unknown backend: {choice!r}")

    if isinstance(choice, LinearAlgebraBackend):
        return choice

    raise ValueError(
        f"Unknown backend: {choice!r} does not implement LinearAlgebraBackend"
    )


__all__ = [
    "CPULapackBackend",
    "BackendChoice",
    "BackendSpec",
    "get_backend",
]
