"""Tests for windmc.portfolio and windmc.simulation.streams."""

from __future__ import annotations

import numpy as np
import pytest

from windmc.errors import ConfigurationError, DimensionMismatchError
from windmc.portfolio import Farm, Portfolio, aggregate_power
from windmc.simulation.streams import as_seed_sequence, child_sequences, farm_generators


class TestAggregatePower:
    def test_literal_case(self):
        total = aggregate_power([0.0, 500.0, 2000.0], [100.0, 0.0, 0.0])
        np.testing.assert_array_equal(total, [100.0, 500.0, 2000.0])

    def test_three_farms(self):
        total = aggregate_power([1.0, 2.0], [3.0, 4.0], [5.0, 6.0])
        np.testing.assert_array_equal(total, [9.0, 12.0])

    def test_single_farm_is_copied(self):
        p = np.array([1.0, 2.0])
        total = aggregate_power(p)
        total[0] = 99.0
        assert p[0] == 1.0

    def test_inputs_not_mutated(self):
        p1 = np.array([1.0, 2.0, 3.0])
        p2 = np.array([4.0, 5.0, 6.0])
        aggregate_power(p1, p2)
        np.testing.assert_array_equal(p1, [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(p2, [4.0, 5.0, 6.0])

    def test_empty_vectors(self):
        assert aggregate_power([], []).shape == (0,)

    def test_length_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="equal length"):
            aggregate_power([1.0, 2.0, 3.0], [1.0, 2.0])

    def test_no_broadcasting(self):
        with pytest.raises(DimensionMismatchError):
            aggregate_power([1.0, 2.0, 3.0], [1.0])

    def test_not_1d(self):
        with pytest.raises(DimensionMismatchError, match="1-D"):
            aggregate_power(np.ones((2, 2)), np.ones((2, 2)))

    def test_no_vectors(self):
        with pytest.raises(ValueError, match="At least one"):
            aggregate_power()

    def test_deterministic(self):
        a = aggregate_power([1.5, 2.5], [0.25, 0.75])
        b = aggregate_power([1.5, 2.5], [0.25, 0.75])
        np.testing.assert_array_equal(a, b)


class TestPortfolio:
    def test_empty_portfolio(self):
        with pytest.raises(ConfigurationError, match="at least one farm"):
            Portfolio(farms=())

    def test_duplicate_names(self, power_curve, farm1_wind):
        farm = Farm("farm1", farm1_wind, power_curve)
        with pytest.raises(ConfigurationError, match="unique"):
            Portfolio(farms=(farm, farm))

    def test_farms_stored_as_tuple(self, power_curve, farm1_wind, farm2_wind):
        p = Portfolio(farms=[Farm("a", farm1_wind, power_curve), Farm("b", farm2_wind, power_curve)])
        assert isinstance(p.farms, tuple)

    def test_rated_power(self, portfolio):
        assert portfolio.rated_power == 4000.0

    def test_simulate_bounds(self, portfolio):
        total = portfolio.simulate(20_000, farm_generators(as_seed_sequence(5), 2))
        assert total.shape == (20_000,)
        assert np.all(total >= 0.0)
        assert np.all(total <= portfolio.rated_power)

    def test_simulate_is_sum_of_farms(self, portfolio):
        seq = as_seed_sequence(9)
        total = portfolio.simulate(500, farm_generators(seq, 2))
        g1, g2 = farm_generators(seq, 2)
        f1, f2 = portfolio.farms
        np.testing.assert_array_equal(total, f1.simulate(500, g1) + f2.simulate(500, g2))

    def test_generator_count_mismatch(self, portfolio):
        with pytest.raises(DimensionMismatchError, match="random generators"):
            portfolio.simulate(10, [np.random.default_rng(0)])

    def test_zero_scenarios(self, portfolio):
        total = portfolio.simulate(0, farm_generators(as_seed_sequence(1), 2))
        assert total.shape == (0,)


class TestStreams:
    def test_as_seed_sequence_passthrough(self):
        seq = np.random.SeedSequence(3)
        assert as_seed_sequence(seq) is seq

    def test_children_are_stateless(self):
        parent = np.random.SeedSequence(42)
        first = [c.generate_state(4) for c in child_sequences(parent, 3)]
        second = [c.generate_state(4) for c in child_sequences(parent, 3)]
        for a, b in zip(first, second):
            np.testing.assert_array_equal(a, b)

    def test_children_match_spawn(self):
        spawned = np.random.SeedSequence(42).spawn(2)
        derived = child_sequences(np.random.SeedSequence(42), 2)
        for a, b in zip(spawned, derived):
            np.testing.assert_array_equal(a.generate_state(4), b.generate_state(4))

    def test_children_differ(self):
        a, b = child_sequences(np.random.SeedSequence(42), 2)
        assert not np.array_equal(a.generate_state(4), b.generate_state(4))

    def test_farm_speeds_uncorrelated(self, portfolio):
        """Farms sampled from sibling streams are statistically independent."""
        g1, g2 = farm_generators(as_seed_sequence(77), 2)
        v1 = g1.random(100_000)
        v2 = g2.random(100_000)
        assert abs(np.corrcoef(v1, v2)[0, 1]) < 0.02
