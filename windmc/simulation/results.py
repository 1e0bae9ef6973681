"""Read-only summaries produced by the simulation.

These are the only objects handed to plotting and reporting consumers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


def _readonly(values: list[float] | list[int], dtype: type) -> NDArray:
    arr = np.array(values, dtype=dtype)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True)
class ConvergencePoint:
    """Monte Carlo estimate at one checkpoint.

    Attributes:
        sample_size: Number of scenarios S in the checkpoint.
        mean: Sample mean of total portfolio power (kW).
        empirical_se: Sample standard deviation of the batch over sqrt(S).
        theoretical_se: sqrt(population_variance / S).
    """

    sample_size: int
    mean: float
    empirical_se: float
    theoretical_se: float

    def confidence_interval(self, z: float = 1.96) -> tuple[float, float]:
        """``mean -/+ z * theoretical_se`` (95 % band by default)."""
        half = z * self.theoretical_se
        return self.mean - half, self.mean + half


@dataclass(frozen=True)
class ReferenceValue:
    """Reference ("true") expectation of total portfolio power.

    With ``method == "monte_carlo"`` this is itself a large-sample estimate
    and carries a sampling error of :attr:`standard_error`; with
    ``method == "quadrature"`` it is obtained by numerical integration and
    ``sample_size`` is 0.

    Attributes:
        mean: Expected total power (kW).
        variance: Variance of total power (kW^2), the population variance
            used for theoretical standard errors.
        sample_size: Scenarios behind the estimate (0 for quadrature).
        method: ``"monte_carlo"`` or ``"quadrature"``.
    """

    mean: float
    variance: float
    sample_size: int
    method: str = "monte_carlo"

    @property
    def standard_error(self) -> float:
        if self.sample_size <= 0:
            return 0.0
        return math.sqrt(self.variance / self.sample_size)


@dataclass(frozen=True)
class ConvergenceResult:
    """Ordered checkpoint estimates plus the reference they converge to."""

    points: tuple[ConvergencePoint, ...]
    reference: ReferenceValue

    @property
    def sample_sizes(self) -> NDArray[np.int64]:
        return _readonly([p.sample_size for p in self.points], np.int64)

    @property
    def means(self) -> NDArray[np.float64]:
        return _readonly([p.mean for p in self.points], np.float64)

    @property
    def empirical_se(self) -> NDArray[np.float64]:
        return _readonly([p.empirical_se for p in self.points], np.float64)

    @property
    def theoretical_se(self) -> NDArray[np.float64]:
        return _readonly([p.theoretical_se for p in self.points], np.float64)

    @property
    def absolute_errors(self) -> NDArray[np.float64]:
        return _readonly([abs(p.mean - self.reference.mean) for p in self.points], np.float64)

    @property
    def final(self) -> ConvergencePoint:
        return self.points[-1]

    def decay_slope(self, kind: str = "empirical") -> float:
        """Least-squares slope of ``log(SE)`` against ``log(S)``.

        Plain Monte Carlo converges as ``O(1/sqrt(S))``, so the slope should
        be close to -0.5.

        Parameters
        ----------
        kind : {"empirical", "theoretical"}
            Which standard error series to regress.

        Raises
        ------
        ValueError
            If *kind* is unknown, fewer than two checkpoints exist, or a
            standard error is not strictly positive.
        """
        if kind == "empirical":
            se = self.empirical_se
        elif kind == "theoretical":
            se = self.theoretical_se
        else:
            raise ValueError(f"Unsupported kind '{kind}'. Use 'empirical' or 'theoretical'.")

        if len(se) < 2:
            raise ValueError("At least two checkpoints are required to fit a decay slope.")
        if np.any(se <= 0):
            raise ValueError("Standard errors must be > 0 to fit a log-log slope.")

        slope, _ = np.polyfit(np.log(self.sample_sizes), np.log(se), 1)
        return float(slope)

    def summary(self) -> dict[str, Any]:
        """Headline figures for reporting (final checkpoint vs. reference)."""
        final = self.final
        abs_err = abs(final.mean - self.reference.mean)
        rel_err = 100.0 * abs_err / self.reference.mean if self.reference.mean else None

        try:
            slope: float | None = self.decay_slope("empirical")
        except ValueError:
            slope = None

        return {
            "final_sample_size": final.sample_size,
            "final_estimate": final.mean,
            "reference_value": self.reference.mean,
            "reference_method": self.reference.method,
            "absolute_error": abs_err,
            "relative_error_pct": rel_err,
            "theoretical_se": final.theoretical_se,
            "empirical_se": final.empirical_se,
            "decay_slope": slope,
        }
