"""Exceptions raised by the Monte Carlo engine."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """A parameter violates its domain constraint.

    Raised before any sampling begins, so a run never partially executes
    with invalid inputs.
    """


class DimensionMismatchError(ValueError):
    """Per-farm power vectors of different lengths were combined.

    Both farms are always sampled at the same checkpoint size, so this
    signals a wiring defect rather than a recoverable condition.
    """
