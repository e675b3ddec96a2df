"""Tests for metric extractors."""

import pytest
from housing_sim_uk import FinancialSituation
from housing_sim_uk.metrics import (
    METRICS,
    capital_gains_tax_due,
    post_tax_stocks_value,
    post_tax_wealth,
    rent,
    salary,
)


@pytest.fixture
def fs():
    """Unrealised non-ISA gain of 10k → (10k - 3k) × 20% = 1,400 tax."""
    return FinancialSituation(
        house_value=300_000,
        cash_value=1_000,
        salary=4_000,
        rent=1_500,
        stock_isa_value=20_000,
        stock_non_isa_value=50_000,
        stock_non_isa_value_paid=40_000,
        mortgage_balance=200_000,
        cumulative_inflation=2.0,
    )


class TestCapitalGains:
    def test_due(self, fs):
        assert capital_gains_tax_due(fs) == pytest.approx(1_400)

    def test_loss_owes_nothing(self):
        fs = FinancialSituation(stock_non_isa_value=10_000, stock_non_isa_value_paid=15_000)
        assert capital_gains_tax_due(fs) == 0


class TestPostTax:
    def test_wealth(self, fs):
        assert post_tax_wealth(fs) == pytest.approx(169_600)

    def test_wealth_deflated(self, fs):
        assert post_tax_wealth(fs, correct_inflation=True) == pytest.approx(84_800)

    def test_stocks(self, fs):
        assert post_tax_stocks_value(fs) == pytest.approx(68_600)

    def test_bankrupt_is_zero(self):
        assert post_tax_wealth(FinancialSituation(bankrupt=True)) == 0


class TestDeflation:
    def test_flows(self, fs):
        assert salary(fs) == 4_000
        assert salary(fs, True) == pytest.approx(2_000)
        assert rent(fs, True) == pytest.approx(750)

    @pytest.mark.parametrize("name", sorted(METRICS))
    def test_every_metric_halves(self, fs, name):
        extractor = METRICS[name]
        assert extractor(fs, True) == pytest.approx(extractor(fs) / 2)
