"""Weibull wind-speed distribution: parameters, density and sampling.

Wind speeds are drawn by inverse-transform sampling, which keeps every draw
an explicit function of a uniform variate from a caller-supplied
:class:`numpy.random.Generator`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.special import gamma as gamma_fn

from windmc.errors import ConfigurationError


# ======================================================================
# Distribution parameters
# ======================================================================

@dataclass(frozen=True)
class WeibullParams:
    """Two-parameter Weibull distribution of wind speed at one farm.

    .. math::

        F(v) = 1 - \\exp\\!\\left[-\\left(\\frac{v}{\\lambda}\\right)^k\\right]

    Parameters
    ----------
    scale : float
        Scale parameter lambda (m/s).  Must be > 0.
    shape : float
        Shape parameter k (dimensionless).  Must be > 0.

    Raises
    ------
    ConfigurationError
        If either parameter is non-positive or not finite.
    """

    scale: float
    shape: float

    def __post_init__(self) -> None:
        for name in ("scale", "shape"):
            value = getattr(self, name)
            if not (isinstance(value, Real) and math.isfinite(value)):
                raise ConfigurationError(f"{name} must be a finite number, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"{name} must be > 0, got {value}")

    def mean(self) -> float:
        """Expected wind speed, ``scale * Gamma(1 + 1/shape)``."""
        return float(self.scale * gamma_fn(1.0 + 1.0 / self.shape))


# ======================================================================
# Closed-form CDF / PDF
# ======================================================================

def weibull_cdf(wind_speeds: ArrayLike, params: WeibullParams) -> NDArray[np.floating]:
    """Cumulative probability of each wind speed (zero for negative speeds)."""
    v = np.asarray(wind_speeds, dtype=np.float64)
    z = np.clip(v, 0.0, None) / params.scale
    return -np.expm1(-(z ** params.shape))


def weibull_pdf(wind_speeds: ArrayLike, params: WeibullParams) -> NDArray[np.floating]:
    """Probability density of each wind speed.

    .. math::

        f(v) = \\frac{k}{\\lambda}\\left(\\frac{v}{\\lambda}\\right)^{k-1}
               \\exp\\!\\left[-\\left(\\frac{v}{\\lambda}\\right)^k\\right]
    """
    v = np.asarray(wind_speeds, dtype=np.float64)
    k, lam = params.shape, params.scale
    z = np.clip(v, 0.0, None) / lam

    with np.errstate(divide="ignore", invalid="ignore"):
        pdf = (k / lam) * z ** (k - 1) * np.exp(-(z ** k))
    # k < 1 diverges at v == 0; the density is only ever integrated.
    pdf = np.nan_to_num(pdf, nan=0.0, posinf=0.0, neginf=0.0)

    return np.where(v < 0, 0.0, pdf)


def weibull_survival(wind_speed: float, params: WeibullParams) -> float:
    """``P(V >= wind_speed)`` for a scalar speed."""
    if wind_speed <= 0:
        return 1.0
    return math.exp(-((wind_speed / params.scale) ** params.shape))


# ======================================================================
# Inverse-transform sampling
# ======================================================================

def sample_wind_speeds(
    n: int,
    params: WeibullParams,
    rng: np.random.Generator,
) -> NDArray[np.floating]:
    """Draw *n* i.i.d. Weibull wind speeds by inverse-CDF sampling.

    Each sample is ``scale * (-ln(1 - U)) ** (1 / shape)`` with ``U``
    uniform on [0, 1).

    Parameters
    ----------
    n : int
        Number of samples.  Zero yields an empty array.
    params : WeibullParams
        Distribution of the farm being sampled.
    rng : numpy.random.Generator
        Random source owned by this farm for this batch.  Farms must never
        share a generator, otherwise their speeds become correlated.

    Returns
    -------
    ndarray, shape (n,)
        Non-negative wind speeds (m/s).

    Raises
    ------
    ConfigurationError
        If *n* is negative or not an integer.
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise ConfigurationError(f"sample count must be an integer, got {n!r}")
    if n < 0:
        raise ConfigurationError(f"sample count must be >= 0, got {n}")

    u = rng.random(int(n))
    # log1p(-u) is exact near u == 0 and finite for u in [0, 1).
    return params.scale * (-np.log1p(-u)) ** (1.0 / params.shape)
