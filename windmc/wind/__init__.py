"""Wind resource and turbine models.

Submodules
----------
weibull
    Weibull distribution parameters, closed-form CDF/PDF and inverse-CDF
    wind-speed sampling.
power_curve
    Piecewise cubic power curve and its moments under a Weibull regime.
"""

from windmc.wind.power_curve import CubicPowerCurve
from windmc.wind.weibull import (
    WeibullParams,
    sample_wind_speeds,
    weibull_cdf,
    weibull_pdf,
    weibull_survival,
)

__all__ = [
    "CubicPowerCurve",
    "sample_wind_speeds",
    "weibull_cdf",
    "weibull_pdf",
    "weibull_survival",
    "WeibullParams",
]
