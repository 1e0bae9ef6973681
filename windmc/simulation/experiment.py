"""End-to-end convergence experiment.

:func:`run_experiment` validates the whole configuration, computes the
reference expectation (whose variance drives the theoretical standard
errors) and then sweeps the checkpoints.  Reference and sweep draw from
separate children of one root seed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from windmc.errors import ConfigurationError
from windmc.portfolio.aggregator import Portfolio
from windmc.simulation.convergence import ConvergenceEstimator, validate_checkpoints
from windmc.simulation.reference import ReferenceEstimator, quadrature_reference
from windmc.simulation.results import ConvergenceResult
from windmc.simulation.streams import as_seed_sequence, child_sequences

logger = logging.getLogger(__name__)

REFERENCE_METHODS = ("monte_carlo", "quadrature")

# Recommended ratio between the reference and the largest checkpoint.
MIN_REFERENCE_RATIO: int = 10


def _is_int(value: object) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


@dataclass(frozen=True)
class ExperimentConfig:
    """Everything needed to reproduce one convergence study.

    Attributes:
        portfolio: Farms to simulate.
        checkpoints: Strictly ascending checkpoint sizes.
        reference_sample_size: Scenarios in the Monte Carlo reference run.
        seed: Root seed; ``None`` draws fresh OS entropy.
        reference_method: ``"monte_carlo"`` (default) or ``"quadrature"``.
    """

    portfolio: Portfolio
    checkpoints: tuple[int, ...]
    reference_sample_size: int
    seed: int | None = None
    reference_method: str = "monte_carlo"

    def __post_init__(self) -> None:
        object.__setattr__(self, "checkpoints", tuple(self.checkpoints))

    def validate(self) -> None:
        """Raise :class:`ConfigurationError` on the first violated constraint."""
        checkpoints = validate_checkpoints(self.checkpoints)

        if self.reference_method not in REFERENCE_METHODS:
            raise ConfigurationError(
                f"reference_method must be one of {REFERENCE_METHODS}, "
                f"got '{self.reference_method}'"
            )
        if self.seed is not None and not (_is_int(self.seed) and self.seed >= 0):
            raise ConfigurationError(
                f"seed must be a non-negative integer or None, got {self.seed!r}"
            )

        s_max = checkpoints[-1]
        ref = self.reference_sample_size
        if not _is_int(ref):
            raise ConfigurationError(f"reference sample size must be an integer, got {ref!r}")
        if ref <= s_max:
            raise ConfigurationError(
                "reference sample size must be larger than the maximum checkpoint, "
                f"got reference={ref}, maximum checkpoint={s_max}"
            )
        if ref < MIN_REFERENCE_RATIO * s_max:
            logger.warning(
                "Reference sample (%d) is less than %dx the largest checkpoint (%d); "
                "its own sampling error may be comparable to the estimates.",
                ref,
                MIN_REFERENCE_RATIO,
                s_max,
            )


def run_experiment(config: ExperimentConfig) -> ConvergenceResult:
    """Run the reference estimate and the checkpoint sweep.

    Parameters
    ----------
    config : ExperimentConfig
        Validated before any sampling.

    Returns
    -------
    ConvergenceResult
        Bit-identical for identical configurations with an explicit seed.
    """
    config.validate()

    root = as_seed_sequence(config.seed)
    reference_seq, sweep_seq = child_sequences(root, 2)

    if config.reference_method == "quadrature":
        reference = quadrature_reference(config.portfolio)
    else:
        estimator = ReferenceEstimator(config.portfolio, config.reference_sample_size)
        reference = estimator.run(reference_seq)

    logger.info(
        "Running Monte Carlo sweep over %d checkpoints (max %d scenarios)",
        len(config.checkpoints),
        config.checkpoints[-1],
    )
    sweep = ConvergenceEstimator(config.portfolio, config.checkpoints)
    points = sweep.run(reference.variance, sweep_seq)

    result = ConvergenceResult(points=points, reference=reference)
    summary = result.summary()
    logger.info(
        "Final estimate (%d scenarios): %.2f kW, reference %.2f kW, absolute error %.4f kW",
        summary["final_sample_size"],
        summary["final_estimate"],
        summary["reference_value"],
        summary["absolute_error"],
        extra={
            "seed": config.seed,
            "reference_method": config.reference_method,
            "sample_size": summary["final_sample_size"],
            "absolute_error": summary["absolute_error"],
        },
    )
    return result
