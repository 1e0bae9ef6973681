"""Checkpoint sweep of the Monte Carlo estimator.

At each checkpoint size S a brand-new batch of S scenarios is simulated,
reduced to its mean and standard errors, and discarded before the next
checkpoint starts.  Batches at different checkpoints share no draws, which
is why the sequence of means wanders within a band that narrows like
``1/sqrt(S)`` instead of converging monotonically.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from windmc.errors import ConfigurationError
from windmc.portfolio.aggregator import Portfolio
from windmc.simulation.results import ConvergencePoint
from windmc.simulation.streams import SeedLike, as_seed_sequence, child_sequences, farm_generators

logger = logging.getLogger(__name__)

# Progress is reported every this many checkpoints.
PROGRESS_EVERY: int = 20


# ======================================================================
# Checkpoint schedules
# ======================================================================

def checkpoint_sizes(step: int, maximum: int) -> tuple[int, ...]:
    """Evenly spaced checkpoint sizes ``step, 2*step, ...`` up to *maximum*.

    Raises
    ------
    ConfigurationError
        If *step* is not a positive integer or *maximum* < *step*.
    """
    for name, value in (("checkpoint step", step), ("maximum checkpoint", maximum)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if step <= 0:
        raise ConfigurationError(f"checkpoint step must be > 0, got {step}")
    if maximum < step:
        raise ConfigurationError(
            f"maximum checkpoint must be >= step, got maximum={maximum}, step={step}"
        )
    return tuple(range(int(step), int(maximum) + 1, int(step)))


def validate_checkpoints(sizes: Iterable[int]) -> tuple[int, ...]:
    """Check that checkpoint sizes are non-empty, positive and strictly ascending."""
    sizes = tuple(sizes)
    if not sizes:
        raise ConfigurationError("checkpoint sequence must not be empty")
    for s in sizes:
        if isinstance(s, bool) or not isinstance(s, (int, np.integer)):
            raise ConfigurationError(f"checkpoint sizes must be integers, got {s!r}")
        if s <= 0:
            raise ConfigurationError(f"checkpoint sizes must be > 0, got {s}")
    if any(b <= a for a, b in zip(sizes, sizes[1:])):
        raise ConfigurationError(f"checkpoint sizes must be strictly ascending, got {sizes}")
    return tuple(int(s) for s in sizes)


# ======================================================================
# Batch reduction
# ======================================================================

def sample_std(values: NDArray[np.floating]) -> float:
    """Unbiased sample standard deviation; 0.0 for a single value."""
    if values.size < 2:
        return 0.0
    return float(np.std(values, ddof=1))


def summarize_batch(total_power: NDArray[np.floating], population_variance: float) -> ConvergencePoint:
    """Reduce one scenario batch of total power to a :class:`ConvergencePoint`."""
    s = int(total_power.size)
    if s == 0:
        raise ConfigurationError("cannot summarize an empty scenario batch")
    return ConvergencePoint(
        sample_size=s,
        mean=float(np.mean(total_power)),
        empirical_se=sample_std(total_power) / math.sqrt(s),
        theoretical_se=math.sqrt(population_variance / s),
    )


# ======================================================================
# Estimator
# ======================================================================

class ConvergenceEstimator:
    """Recompute the Monte Carlo estimator at ascending checkpoint sizes.

    Parameters
    ----------
    portfolio : Portfolio
        Farms whose total output is estimated.
    checkpoints : sequence of int
        Strictly ascending scenario counts.
    """

    def __init__(self, portfolio: Portfolio, checkpoints: Sequence[int]) -> None:
        self.portfolio = portfolio
        self.checkpoints = validate_checkpoints(checkpoints)

    def run(self, population_variance: float, seed: SeedLike = None) -> tuple[ConvergencePoint, ...]:
        """Run the sweep.

        Parameters
        ----------
        population_variance : float
            Variance of total power from the reference run, the numerator of
            every theoretical standard error.
        seed : int, SeedSequence or None
            Root of the sweep's random streams.  Checkpoint ``i`` draws farm
            ``j`` from child ``(i, j)``, so identical seeds reproduce the
            sweep bit for bit.

        Returns
        -------
        tuple of ConvergencePoint
            One point per checkpoint, in checkpoint order.
        """
        if not (math.isfinite(population_variance) and population_variance >= 0):
            raise ConfigurationError(
                f"population variance must be finite and >= 0, got {population_variance}"
            )

        root = as_seed_sequence(seed)
        streams = child_sequences(root, len(self.checkpoints))
        n_farms = len(self.portfolio.farms)
        s_max = self.checkpoints[-1]

        points: list[ConvergencePoint] = []
        for i, (size, stream) in enumerate(zip(self.checkpoints, streams), start=1):
            total = self.portfolio.simulate(size, farm_generators(stream, n_farms))
            points.append(summarize_batch(total, population_variance))
            del total

            if i % PROGRESS_EVERY == 0:
                logger.debug("Completed %d/%d scenarios", size, s_max)

        return tuple(points)
