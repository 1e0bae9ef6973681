"""Cubic wind turbine power curve.

Provides :class:`CubicPowerCurve`, the piecewise mapping from wind speed to
electrical output used for every farm in the portfolio, together with its
first two moments under a Weibull wind regime.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Real

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import integrate

from windmc.errors import ConfigurationError
from windmc.wind.weibull import WeibullParams, weibull_pdf, weibull_survival


# ---------------------------------------------------------------------------
# CubicPowerCurve class
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CubicPowerCurve:
    """Piecewise turbine power curve with a cubic ramp.

    .. math::

        P(v) = \\begin{cases}
            0 & v < v_{\\text{ci}} \\\\
            a v^3 + b & v_{\\text{ci}} \\le v < v_{\\text{r}} \\\\
            P_{\\text{r}} & v_{\\text{r}} \\le v < v_{\\text{co}} \\\\
            0 & v \\ge v_{\\text{co}}
        \\end{cases}

    with :math:`a = P_r / (v_r^3 - v_{ci}^3)` and :math:`b = -a v_{ci}^3`, so
    the ramp is zero at cut-in and reaches rated power at rated speed.  The
    drop to zero at cut-out is the storm shutdown, not an artefact.

    Parameters
    ----------
    cut_in : float
        Cut-in wind speed (m/s).
    rated_speed : float
        Wind speed at which rated power is reached (m/s).
    cut_out : float
        Shutdown wind speed (m/s).
    rated_power : float
        Nameplate power (kW).

    Raises
    ------
    ConfigurationError
        Unless ``0 < cut_in < rated_speed < cut_out`` and
        ``rated_power > 0``.
    """

    cut_in: float
    rated_speed: float
    cut_out: float
    rated_power: float

    # Derived cubic coefficients (set in __post_init__).
    a: float = field(init=False, repr=False)
    b: float = field(init=False, repr=False)

    def __post_init__(self) -> None:
        for name in ("cut_in", "rated_speed", "cut_out", "rated_power"):
            value = getattr(self, name)
            if not (isinstance(value, Real) and math.isfinite(value)):
                raise ConfigurationError(f"{name} must be a finite number, got {value!r}")
        if not (0 < self.cut_in < self.rated_speed < self.cut_out):
            raise ConfigurationError(
                "Speeds must satisfy 0 < cut_in < rated_speed < cut_out, "
                f"got cut_in={self.cut_in}, rated_speed={self.rated_speed}, "
                f"cut_out={self.cut_out}"
            )
        if self.rated_power <= 0:
            raise ConfigurationError(f"rated_power must be > 0, got {self.rated_power}")

        a = self.rated_power / (self.rated_speed ** 3 - self.cut_in ** 3)
        object.__setattr__(self, "a", a)
        object.__setattr__(self, "b", -a * self.cut_in ** 3)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def power(self, wind_speeds: ArrayLike) -> NDArray[np.floating]:
        """Evaluate power output for an array of wind speeds.

        Parameters
        ----------
        wind_speeds : array-like
            Wind speeds (m/s), arbitrary shape.

        Returns
        -------
        ndarray
            Power output (kW), same shape as *wind_speeds*.
        """
        v = np.asarray(wind_speeds, dtype=np.float64)

        # Regions are closed below and open above; conditions are checked
        # in order so each speed lands in exactly one of them.
        conditions = [
            v < self.cut_in,
            v < self.rated_speed,
            v < self.cut_out,
        ]
        choices = [
            np.zeros_like(v),
            self.a * v ** 3 + self.b,
            np.full_like(v, self.rated_power),
        ]
        return np.select(conditions, choices, default=0.0)

    # ------------------------------------------------------------------
    # Moments under a Weibull wind regime
    # ------------------------------------------------------------------

    def _ramp_moment(self, params: WeibullParams, order: int) -> float:
        def integrand(v: float) -> float:
            return float((self.a * v ** 3 + self.b) ** order * weibull_pdf(v, params))

        value, _ = integrate.quad(
            integrand, self.cut_in, self.rated_speed, epsabs=1e-10, epsrel=1e-10, limit=200
        )
        return float(value)

    def _flat_probability(self, params: WeibullParams) -> float:
        return weibull_survival(self.rated_speed, params) - weibull_survival(self.cut_out, params)

    def expected_power(self, params: WeibullParams) -> float:
        """Exact ``E[P(V)]`` for ``V ~ Weibull(params)``.

        The ramp is integrated with :func:`scipy.integrate.quad`; the flat
        region contributes ``rated_power * P(v_r <= V < v_co)`` in closed form.
        """
        return self._ramp_moment(params, 1) + self.rated_power * self._flat_probability(params)

    def expected_power_squared(self, params: WeibullParams) -> float:
        """Exact ``E[P(V)^2]`` for ``V ~ Weibull(params)``."""
        return (
            self._ramp_moment(params, 2)
            + self.rated_power ** 2 * self._flat_probability(params)
        )

    def power_variance(self, params: WeibullParams) -> float:
        """Exact ``Var[P(V)]`` for ``V ~ Weibull(params)``."""
        mean = self.expected_power(params)
        return max(self.expected_power_squared(params) - mean ** 2, 0.0)
