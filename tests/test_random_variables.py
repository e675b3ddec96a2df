"""Tests for seeded rate generators."""

import math
import statistics

import pytest

from housing_sim_uk.random_variables import (
    LOG_NORMAL,
    NORMAL,
    RandomVariableDistribution,
    make_generator,
    make_root_generator,
)


class TestReproducibility:
    def test_same_seed_same_draws(self):
        dist = RandomVariableDistribution(5.0, 10.0)
        g1 = make_generator(make_root_generator(0.25), dist)
        g2 = make_generator(make_root_generator(0.25), dist)
        assert [g1() for _ in range(50)] == [g2() for _ in range(50)]

    def test_different_seed_different_draws(self):
        dist = RandomVariableDistribution(5.0, 10.0)
        g1 = make_generator(make_root_generator(0.25), dist)
        g2 = make_generator(make_root_generator(0.75), dist)
        assert [g1() for _ in range(10)] != [g2() for _ in range(10)]

    def test_generators_share_root_stream(self):
        """Two generators on one root interleave the root's draws in call order."""
        dist = RandomVariableDistribution(0.0, 1.0)
        root_a = make_root_generator(0.5)
        a1 = make_generator(root_a, dist, NORMAL)
        a2 = make_generator(root_a, dist, NORMAL)
        interleaved = [a1(), a2(), a1(), a2()]

        single = make_generator(make_root_generator(0.5), dist, NORMAL)
        assert interleaved == [single() for _ in range(4)]


class TestNormal:
    def test_zero_std_dev_is_mean(self):
        g = make_generator(make_root_generator(0), RandomVariableDistribution(2.7, 0.0), NORMAL)
        assert all(g() == 2.7 for _ in range(10))

    def test_mean_near_target(self):
        g = make_generator(make_root_generator(42), RandomVariableDistribution(4.0, 3.0), NORMAL)
        draws = [g() for _ in range(10000)]
        assert abs(statistics.mean(draws) - 4.0) < 0.15
        assert abs(statistics.stdev(draws) - 3.0) < 0.15


class TestLogNormal:
    def test_default_kind(self):
        g = make_generator(make_root_generator(0), RandomVariableDistribution(3.0, 0.0))
        assert g() == pytest.approx(math.exp(0.03))

    def test_always_positive(self):
        g = make_generator(make_root_generator(42), RandomVariableDistribution(5.1, 60.0), LOG_NORMAL)
        assert all(g() > 0 for _ in range(10000))

    def test_mean_near_target(self):
        """E[exp(N(0.05, 0.1))] = exp(0.05 + 0.005)"""
        g = make_generator(make_root_generator(42), RandomVariableDistribution(5.0, 10.0), LOG_NORMAL)
        draws = [g() for _ in range(10000)]
        assert abs(statistics.mean(draws) - math.exp(0.055)) < 0.01


class TestInvalidDistribution:
    def test_missing(self):
        with pytest.raises(ValueError, match="required"):
            make_generator(make_root_generator(0), None)

    def test_negative_std_dev(self):
        with pytest.raises(ValueError, match="non-negative"):
            make_generator(make_root_generator(0), RandomVariableDistribution(1.0, -1.0))

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="unknown distribution kind"):
            make_generator(make_root_generator(0), RandomVariableDistribution(1.0, 1.0), "uniform")
