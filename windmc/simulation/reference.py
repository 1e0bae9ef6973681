"""Reference ("true") expectation of total portfolio power.

The default reference is a single Monte Carlo run far larger than any
checkpoint.  It is an approximation with its own, small, sampling error.
:func:`quadrature_reference` gives the exact expectation and variance by
numerical integration of each power curve against its Weibull density.
"""

from __future__ import annotations

import logging

import numpy as np

from windmc.errors import ConfigurationError
from windmc.portfolio.aggregator import Portfolio
from windmc.simulation.results import ReferenceValue
from windmc.simulation.streams import SeedLike, as_seed_sequence, farm_generators

logger = logging.getLogger(__name__)


class ReferenceEstimator:
    """Large-sample Monte Carlo estimate of the expected total power.

    Parameters
    ----------
    portfolio : Portfolio
        Farms whose total output is estimated.
    sample_size : int
        Number of scenarios; should exceed the largest checkpoint by at
        least an order of magnitude.
    """

    def __init__(self, portfolio: Portfolio, sample_size: int) -> None:
        if isinstance(sample_size, bool) or not isinstance(sample_size, (int, np.integer)):
            raise ConfigurationError(f"reference sample size must be an integer, got {sample_size!r}")
        if sample_size < 2:
            raise ConfigurationError(f"reference sample size must be >= 2, got {sample_size}")
        self.portfolio = portfolio
        self.sample_size = int(sample_size)

    def run(self, seed: SeedLike = None) -> ReferenceValue:
        """Simulate once and return the mean and sample variance of total power."""
        generators = farm_generators(as_seed_sequence(seed), len(self.portfolio.farms))
        total = self.portfolio.simulate(self.sample_size, generators)

        reference = ReferenceValue(
            mean=float(np.mean(total)),
            variance=float(np.var(total, ddof=1)),
            sample_size=self.sample_size,
            method="monte_carlo",
        )
        logger.info(
            'Reference "true" expected value (from %d samples): %.2f kW',
            self.sample_size,
            reference.mean,
        )
        return reference


def quadrature_reference(portfolio: Portfolio) -> ReferenceValue:
    """Exact expectation and variance of total power by numerical integration.

    Farms are independent, so the variance of the sum is the sum of the
    per-farm variances.
    """
    mean = 0.0
    variance = 0.0
    for farm in portfolio.farms:
        mean += farm.curve.expected_power(farm.wind)
        variance += farm.curve.power_variance(farm.wind)

    logger.info("Reference expected value (quadrature): %.2f kW", mean)
    return ReferenceValue(mean=mean, variance=variance, sample_size=0, method="quadrature")
