"""Monte Carlo simulation engine.

Submodules
----------
streams
    Seeded, position-addressed random streams.
convergence
    Checkpoint schedules and the :class:`ConvergenceEstimator` sweep.
reference
    Large-sample and quadrature reference expectations.
results
    Read-only result value objects.
experiment
    :class:`ExperimentConfig` and :func:`run_experiment`.
"""

from windmc.simulation.convergence import (
    ConvergenceEstimator,
    checkpoint_sizes,
    validate_checkpoints,
)
from windmc.simulation.experiment import ExperimentConfig, run_experiment
from windmc.simulation.reference import ReferenceEstimator, quadrature_reference
from windmc.simulation.results import ConvergencePoint, ConvergenceResult, ReferenceValue

__all__ = [
    "checkpoint_sizes",
    "ConvergenceEstimator",
    "ConvergencePoint",
    "ConvergenceResult",
    "ExperimentConfig",
    "quadrature_reference",
    "ReferenceEstimator",
    "ReferenceValue",
    "run_experiment",
    "validate_checkpoints",
]
