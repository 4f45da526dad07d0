"""
Linear system solution types.

Contains the parameter payload and user-facing solution wrapper returned
by solve_system().
"""

from dataclasses import dataclass
from typing import Any

from pymatrix.core.result import Result
from pymatrix.dense.matrix import Matrix


@dataclass(frozen=True)
class SolveParams:
    """
    Parameter payload for a solved linear system A X = B.

    This is the immutable data computed by solve_system().
    """
    solution: Matrix
    pivots: tuple[int, ...]
    condition_number: float
    residual_norm: float


@dataclass
class LinearSystemSolution:
    """
    User-facing linear system results.

    Wraps the Result envelope and provides convenient accessors for the
    solution matrix and its diagnostics.
    """
    _result: Result[SolveParams]

    @property
    def solution(self) -> Matrix:
        """X, shaped like B. Returned as a copy."""
        return self._result.params.solution.copy()

    @property
    def pivots(self) -> list[int]:
        """Concatenated pivots, one full set of n per right-hand-side column."""
        return list(self._result.params.pivots)

    @property
    def condition_number(self) -> float:
        """2-norm condition number of A."""
        return self._result.params.condition_number

    @property
    def residual_norm(self) -> float:
        """max |A X - B| over all elements."""
        return self._result.params.residual_norm

    @property
    def n(self) -> int:
        return self._result.info['n']

    @property
    def nrhs(self) -> int:
        return self._result.info['nrhs']

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Human-readable summary of the solve."""
        lines = [
            "Linear System Solution",
            "=" * 60,
            f"Equations: {self.n}",
            f"Right-hand sides: {self.nrhs}",
            f"Condition number: {self.condition_number:.6g}",
            f"Max residual: {self.residual_norm:.6g}",
            "",
            "Solution:",
            str(self._result.params.solution).rstrip("\n"),
            "-" * 60,
            f"Backend: {self.backend_name}",
        ]
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for w in self.warnings:
            lines.append(f"Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSystemSolution(n={self.n}, nrhs={self.nrhs}, "
            f"condition_number={self.condition_number:.4g})"
        )
