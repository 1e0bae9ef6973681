"""Farm and portfolio value objects, and per-scenario power aggregation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from windmc.errors import ConfigurationError, DimensionMismatchError
from windmc.wind.power_curve import CubicPowerCurve
from windmc.wind.weibull import WeibullParams, sample_wind_speeds


# ======================================================================
# Aggregation
# ======================================================================

def aggregate_power(*farm_powers: ArrayLike) -> NDArray[np.floating]:
    """Sum per-farm power vectors scenario by scenario.

    Parameters
    ----------
    *farm_powers : array-like
        One 1-D power vector (kW) per farm, all indexed by scenario.

    Returns
    -------
    ndarray
        Total portfolio power for each scenario.

    Raises
    ------
    DimensionMismatchError
        If the vectors differ in length or are not 1-D.  Shapes are never
        broadcast.
    ValueError
        If no vectors are given.
    """
    if not farm_powers:
        raise ValueError("At least one farm power vector is required.")

    arrays = [np.asarray(p, dtype=np.float64) for p in farm_powers]
    shapes = [a.shape for a in arrays]
    if any(len(s) != 1 for s in shapes):
        raise DimensionMismatchError(f"Farm power vectors must be 1-D, got shapes {shapes}")
    if len(set(shapes)) != 1:
        raise DimensionMismatchError(
            f"Farm power vectors must have equal length, got {[s[0] for s in shapes]}"
        )

    total = arrays[0].copy()
    for arr in arrays[1:]:
        total += arr
    return total


# ======================================================================
# Farm / Portfolio
# ======================================================================

@dataclass(frozen=True)
class Farm:
    """A wind farm: its wind regime and its turbine model."""

    name: str
    wind: WeibullParams
    curve: CubicPowerCurve

    def simulate(self, n: int, rng: np.random.Generator) -> NDArray[np.floating]:
        """Sample *n* wind speeds and convert them to power (kW)."""
        return self.curve.power(sample_wind_speeds(n, self.wind, rng))


@dataclass(frozen=True)
class Portfolio:
    """An ordered, immutable collection of farms whose output is summed.

    Parameters
    ----------
    farms : sequence of Farm
        At least one farm.  Stored as a tuple.
    """

    farms: tuple[Farm, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "farms", tuple(self.farms))
        if not self.farms:
            raise ConfigurationError("A portfolio needs at least one farm.")
        names = [f.name for f in self.farms]
        if len(set(names)) != len(names):
            raise ConfigurationError(f"Farm names must be unique, got {names}")

    @property
    def rated_power(self) -> float:
        """Combined nameplate power (kW), the upper bound of total output."""
        return float(sum(f.curve.rated_power for f in self.farms))

    def simulate(
        self,
        n: int,
        generators: Sequence[np.random.Generator],
    ) -> NDArray[np.floating]:
        """Run one scenario batch of size *n* through the full pipeline.

        Parameters
        ----------
        n : int
            Number of scenarios.
        generators : sequence of numpy.random.Generator
            One independent generator per farm, in farm order.

        Returns
        -------
        ndarray, shape (n,)
            Total portfolio power for each scenario.
        """
        if len(generators) != len(self.farms):
            raise DimensionMismatchError(
                f"Expected {len(self.farms)} random generators, got {len(generators)}"
            )
        return aggregate_power(
            *(farm.simulate(n, rng) for farm, rng in zip(self.farms, generators))
        )
