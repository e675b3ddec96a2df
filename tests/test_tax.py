"""Tests for stamp duty and capital gains tax."""

import pytest
from housing_sim_uk.tax import (
    calc_stamp_duty,
    calc_capital_gains_tax,
    CAPITAL_GAINS_ALLOWANCE,
)


class TestStampDutyFirstTimeBuyer:
    def test_below_threshold(self):
        """200k < 425k relief threshold → 0"""
        assert calc_stamp_duty(200_000, True) == 0

    def test_second_band(self):
        """(500k - 425k) × 5% = 3,750"""
        assert calc_stamp_duty(500_000, True) == pytest.approx(3_750)

    def test_third_band(self):
        """(925k - 425k) × 5% + (1m - 925k) × 10% = 25,000 + 7,500"""
        assert calc_stamp_duty(1_000_000, True) == pytest.approx(32_500)

    def test_at_threshold(self):
        assert calc_stamp_duty(425_000, True) == 0


class TestStampDutyStandard:
    def test_second_band(self):
        """(500k - 250k) × 5% = 12,500"""
        assert calc_stamp_duty(500_000, False) == pytest.approx(12_500)

    def test_third_band(self):
        """33,750 + 75k × 10%"""
        assert calc_stamp_duty(1_000_000, False) == pytest.approx(41_250)

    def test_top_band(self):
        """33,750 + 575k × 10% + 500k × 12%"""
        assert calc_stamp_duty(2_000_000, False) == pytest.approx(151_250)


class TestStampDutyEdges:
    def test_zero_price(self):
        assert calc_stamp_duty(0, True) == 0
        assert calc_stamp_duty(0, False) == 0

    def test_negative_price(self):
        assert calc_stamp_duty(-10_000, False) == 0

    @pytest.mark.parametrize("first_time_buyer", [True, False])
    def test_non_decreasing(self, first_time_buyer):
        prices = range(0, 2_000_001, 5_000)
        duties = [calc_stamp_duty(p, first_time_buyer) for p in prices]
        assert all(b >= a for a, b in zip(duties, duties[1:]))

    @pytest.mark.parametrize("edge", [250_000, 425_000, 925_000, 1_500_000])
    def test_continuous_at_band_edges(self, edge):
        """Crossing a band edge by £1 costs at most the top marginal rate on £1."""
        for first_time_buyer in (True, False):
            below = calc_stamp_duty(edge, first_time_buyer)
            above = calc_stamp_duty(edge + 1, first_time_buyer)
            assert 0 <= above - below <= 0.12 + 1e-9


class TestCapitalGainsTax:
    def test_within_allowance(self):
        assert calc_capital_gains_tax(2_000) == 0

    def test_above_allowance(self):
        """(13,000 - 3,000) × 20% = 2,000"""
        assert calc_capital_gains_tax(13_000) == pytest.approx(2_000)

    def test_loss(self):
        assert calc_capital_gains_tax(-5_000) == 0

    def test_at_allowance(self):
        assert calc_capital_gains_tax(CAPITAL_GAINS_ALLOWANCE) == 0

    def test_custom_rate(self):
        assert calc_capital_gains_tax(10_000, allowance=0, rate=10) == pytest.approx(1_000)
