"""Monte Carlo convergence engine for a wind farm portfolio.

Submodules
----------
wind
    Weibull wind-speed sampling and the cubic turbine power curve.
portfolio
    Farm / portfolio value objects and per-scenario power aggregation.
simulation
    Seeded random streams, the checkpoint sweep, the reference expectation
    and the experiment driver.
"""

from windmc.errors import ConfigurationError, DimensionMismatchError

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "DimensionMismatchError",
]
