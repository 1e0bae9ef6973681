"""Portfolio composition and aggregation."""

from windmc.portfolio.aggregator import Farm, Portfolio, aggregate_power

__all__ = [
    "aggregate_power",
    "Farm",
    "Portfolio",
]
