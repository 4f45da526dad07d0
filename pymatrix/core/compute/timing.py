"""
Phase timing for solver calls.

solve_system() reports how long each phase took (transposing the
coefficients, the per-column direct solves, the diagnostics). GPU kernels
run asynchronously, so a timer bound to a GPU backend waits for the device
before reading the clock.
"""

import time
from contextlib import contextmanager
from typing import Iterator


def _cuda_synchronize() -> None:
    import torch
    if torch.cuda.is_available():
        torch.cuda.synchronize()


class Timer:
    """
    Wall-clock timer for one solver call, with named phases.

    The timer is itself a context manager covering the whole call; phases
    are timed inside it with section(). A phase entered more than once
    (one direct solve per right-hand-side column) is reported as the sum
    of its runs.

    Usage:
        with Timer() as timer:
            with timer.section('transpose'):
                coefficients = backend.transpose_buffer(a.buffer, n, n)
            for column in columns:
                with timer.section('direct_solve'):
                    ...
        timer.result()
        # {'total_seconds': 0.002, 'transpose': 0.0001, 'direct_solve': 0.0015}
    """

    def __init__(self, sync_cuda: bool = False):
        """
        Args:
            sync_cuda: Wait for queued CUDA work before every clock read
        """
        self._sync_cuda = sync_cuda
        self._phases: dict[str, float] = {}
        self._started: float | None = None
        self._elapsed: float | None = None

    def _now(self) -> float:
        if self._sync_cuda:
            _cuda_synchronize()
        return time.perf_counter()

    def __enter__(self) -> 'Timer':
        self._started = self._now()
        self._elapsed = None
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._elapsed = self._now() - self._started

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time one run of the phase `name`."""
        began = self._now()
        try:
            yield
        finally:
            self._phases[name] = self._phases.get(name, 0.0) + (self._now() - began)

    @property
    def running(self) -> bool:
        return self._started is not None and self._elapsed is None

    def result(self) -> dict[str, float]:
        """
        Phase totals plus 'total_seconds' for the whole call.

        Raises:
            RuntimeError: If the timer has not been entered and exited
        """
        if self._elapsed is None:
            raise RuntimeError("Timer.result() needs a completed `with Timer()` block")
        return {'total_seconds': self._elapsed, **self._phases}
