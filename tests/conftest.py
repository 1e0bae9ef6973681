"""Shared fixtures for windmc engine and API tests."""

from __future__ import annotations

import pytest

from windmc.portfolio import Farm, Portfolio
from windmc.simulation import ExperimentConfig, checkpoint_sizes
from windmc.wind import CubicPowerCurve, WeibullParams


# ======================================================================
# Turbine / wind fixtures
# ======================================================================

@pytest.fixture
def power_curve() -> CubicPowerCurve:
    """2 MW turbine: cut-in 3 m/s, rated 12 m/s, cut-out 25 m/s."""
    return CubicPowerCurve(cut_in=3.0, rated_speed=12.0, cut_out=25.0, rated_power=2000.0)


@pytest.fixture
def farm1_wind() -> WeibullParams:
    return WeibullParams(scale=10.0, shape=2.0)


@pytest.fixture
def farm2_wind() -> WeibullParams:
    return WeibullParams(scale=12.0, shape=2.2)


@pytest.fixture
def portfolio(power_curve, farm1_wind, farm2_wind) -> Portfolio:
    """The two-farm portfolio of the reference study."""
    return Portfolio(
        farms=(
            Farm("farm1", farm1_wind, power_curve),
            Farm("farm2", farm2_wind, power_curve),
        )
    )


# ======================================================================
# Experiment fixtures
# ======================================================================

@pytest.fixture
def small_config(portfolio) -> ExperimentConfig:
    """Quick study: checkpoints 50..1000, 20k-scenario reference."""
    return ExperimentConfig(
        portfolio=portfolio,
        checkpoints=checkpoint_sizes(50, 1000),
        reference_sample_size=20_000,
        seed=123,
    )


@pytest.fixture
def study_config(portfolio) -> ExperimentConfig:
    """Full study: checkpoints 100..10000 step 100, 100k reference, seed 42."""
    return ExperimentConfig(
        portfolio=portfolio,
        checkpoints=checkpoint_sizes(100, 10_000),
        reference_sample_size=100_000,
        seed=42,
    )
