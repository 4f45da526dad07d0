"""
Generic result container for pymatrix computations.

The Result class is the envelope that solver outputs are wrapped in. It
carries the computed payload together with the backend that produced it,
phase timings and any non-fatal diagnostics.

Design decisions:
    - Generic over payload P for type safety
    - info dict for flexible metadata (method, sizes, diagnostics)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) so results can be shared safely
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for linear algebra computations.

    Type Parameters:
        P: The payload type

    Attributes:
        params: Computed payload (solution matrix, pivots, ...)
        info: Structured metadata (method, n, nrhs, ...)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=SolveParams(solution=x, pivots=[0, 2, 2], ...),
        ...     info={'method': 'lu', 'n': 3, 'nrhs': 1},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_lapack'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
