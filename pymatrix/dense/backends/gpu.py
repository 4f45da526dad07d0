"""
GPU backend using PyTorch.

Performance path for large systems - validated against the CPU LAPACK
reference. Supports CUDA (Linux/Windows) and MPS (macOS Apple Silicon).

Buffers stay NumPy arrays at the interface; they are moved to the device
for each call in their own element width, so float32 matrices are computed
in single precision and float64 matrices in double precision, exactly as
on the CPU. MPS has no float64 and refuses double precision buffers.
Layout conventions match CPULapackBackend (LAPACK-style column-major
reading of factorization buffers, 0-based pivots, LAPACK info codes).
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pymatrix.core.compute.linalg.lu import (
    lu_factor_gpu,
    lu_inverse_gpu,
    lu_solve_direct_gpu,
)


class GPUTorchBackend:
    """
    GPU backend using torch.linalg.

    The computation width follows each buffer's dtype. On CUDA both widths
    are available; on MPS only float32 is, and float64 buffers raise
    RuntimeError instead of being silently narrowed.
    """

    def __init__(self, device: str = 'cuda'):
        """
        Initialize GPU backend.

        Args:
            device: GPU device ('cuda', 'cuda:1', 'mps')

        Raises:
            RuntimeError: If the device is unavailable
            ValueError: If the device string is not a GPU device
        """
        import torch

        self._torch = torch

        if device.startswith('cuda'):
            if not torch.cuda.is_available():
                raise RuntimeError(
                    "CUDA not available. Install PyTorch with CUDA support, "
                    "or use backend='cpu'."
                )
            self.device = torch.device(device)
            self.device_name = torch.cuda.get_device_properties(self.device).name
            self.supports_fp64 = True

        elif device == 'mps':
            if not (hasattr(torch.backends, 'mps') and torch.backends.mps.is_available()):
                raise RuntimeError(
                    "MPS not available. Requires macOS with Apple Silicon "
                    "and PyTorch with MPS support."
                )
            self.device = torch.device('mps')
            self.device_name = 'Apple Silicon GPU (MPS)'
            self.supports_fp64 = False

        else:
            raise ValueError(
                f"Unknown GPU device: {device!r}. Use 'cuda' or 'mps'."
            )

    @property
    def name(self) -> str:
        # Widest precision the device computes in
        precision = "fp64" if self.supports_fp64 else "fp32"
        return f'gpu_torch_{precision}'

    def _tensor(self, array: NDArray[np.floating[Any]]) -> Any:
        if array.dtype == np.float64 and not self.supports_fp64:
            raise RuntimeError(
                f"{self.device_name} does not support float64. Use "
                f"dtype=np.float32 matrices or backend='cpu' for double precision."
            )
        host = np.ascontiguousarray(array)
        return self._torch.from_numpy(host).to(self.device)

    def lu_factorize(
        self, buffer: NDArray[np.floating[Any]], n: int
    ) -> tuple[list[int], int]:
        result = lu_factor_gpu(self._tensor(buffer.reshape((n, n), order='F')))
        buffer[:] = result.lu.ravel(order='F')
        return result.pivots.tolist(), result.info

    def lu_invert(
        self, buffer: NDArray[np.floating[Any]], n: int, pivots: list[int]
    ) -> int:
        LU = self._tensor(buffer.reshape((n, n), order='F'))
        inv_a, info = lu_inverse_gpu(LU, np.asarray(pivots, dtype=np.int32))
        if info == 0:
            buffer[:] = inv_a.ravel(order='F')
        return info

    def direct_solve(
        self,
        coefficients: NDArray[np.floating[Any]],
        n: int,
        rhs: NDArray[np.floating[Any]],
    ) -> tuple[NDArray[np.floating[Any]], list[int], int]:
        A = self._tensor(coefficients.reshape((n, n), order='F'))
        x, factorization = lu_solve_direct_gpu(A, self._tensor(rhs))
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
        X = self._tensor(x.reshape(x_rows, x_cols))
        Y = self._tensor(y.reshape(x_cols, y_cols))
        return (X @ Y).cpu().numpy().ravel()

    def axpy(
        self,
        alpha: float,
        x: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        z = self._torch.add(self._tensor(y), self._tensor(x), alpha=alpha)
        return z.cpu().numpy()

    def scale(
        self, alpha: float, x: NDArray[np.floating[Any]]
    ) -> NDArray[np.floating[Any]]:
        return (self._tensor(x) * alpha).cpu().numpy()

    def transpose_buffer(
        self, x: NDArray[np.floating[Any]], rows: int, cols: int
    ) -> NDArray[np.floating[Any]]:
        t = self._tensor(x.reshape(rows, cols)).T.contiguous()
        return t.cpu().numpy().ravel()
