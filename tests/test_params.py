"""Tests for Inputs, mortgage stages and input validation."""

import pytest
from housing_sim_uk import Inputs, MortgageTerms, RandomVariableDistribution, validate_inputs
from housing_sim_uk.params import DEFAULT_HOUSE_PRICE, DEFAULT_RENTAL_YIELD


class TestDefaults:
    def test_rent_from_yield(self):
        assert Inputs().rent == pytest.approx(DEFAULT_HOUSE_PRICE * DEFAULT_RENTAL_YIELD / 12)
        assert Inputs().rent == pytest.approx(1_875)

    def test_defaults_valid(self):
        assert validate_inputs(Inputs()) == []

    def test_distributions_not_shared(self):
        a, b = Inputs(), Inputs()
        assert a.inflation == b.inflation
        a.inflation = RandomVariableDistribution(1.0, 1.0)
        assert b.inflation == RandomVariableDistribution(2.7, 3.7)


class TestMortgageStages:
    def test_stage1_inclusive(self):
        inputs = Inputs(mortgage_stage1_length=2)
        assert inputs.get_mortgage_terms(1) == MortgageTerms(5.09, 2_170)
        assert inputs.get_mortgage_terms(2) == MortgageTerms(5.09, 2_170)

    def test_stage2_after(self):
        inputs = Inputs(mortgage_stage1_length=2)
        assert inputs.get_mortgage_terms(3) == MortgageTerms(7.99, 2_890)
        assert inputs.get_mortgage_terms(30) == MortgageTerms(7.99, 2_890)

    def test_no_stage1(self):
        inputs = Inputs(mortgage_stage1_length=0)
        assert inputs.get_mortgage_terms(1) == MortgageTerms(7.99, 2_890)


class TestPolicyForYear:
    def test_carries_terms_and_flags(self):
        inputs = Inputs(
            is_buying=False, mortgage_overpay=True, service_charge_is_rate=False,
            model_capital_gains_tax=False, distribution_kind="normal",
        )
        policy = inputs.policy_for_year(3)
        assert policy.is_buying is False
        assert policy.mortgage_interest_rate == 7.99
        assert policy.mortgage_monthly_payment == 2_890
        assert policy.mortgage_overpay is True
        assert policy.service_charge_is_rate is False
        assert policy.model_capital_gains_tax is False
        assert policy.distribution_kind == "normal"

    def test_running_costs(self):
        policy = Inputs().policy_for_year(1)
        assert policy.ground_rent == 500
        assert policy.service_charge == 0.6
        assert policy.maintenance_rate == 1.0
        assert policy.home_insurance == 0


class TestValidateInputs:
    def test_no_samples(self):
        errors = validate_inputs(Inputs(num_samples=0))
        assert any("num_samples" in e for e in errors)

    def test_negative_years(self):
        errors = validate_inputs(Inputs(years_to_forecast=-1))
        assert any("years_to_forecast" in e for e in errors)

    def test_zero_years_ok(self):
        assert validate_inputs(Inputs(years_to_forecast=0)) == []

    def test_unknown_kind(self):
        errors = validate_inputs(Inputs(distribution_kind="uniform"))
        assert any("distribution_kind" in e for e in errors)

    def test_missing_distribution(self):
        errors = validate_inputs(Inputs(rent_growth=None))
        assert errors == ["rent_growth: distribution is missing"]

    def test_negative_std_dev(self):
        errors = validate_inputs(Inputs(inflation=RandomVariableDistribution(2.0, -1.0)))
        assert any(e.startswith("inflation:") for e in errors)

    def test_mortgage_above_price(self):
        errors = validate_inputs(Inputs(house_price=300_000, mortgage=400_000))
        assert any("exceeds house price" in e for e in errors)

    def test_mortgage_above_price_ok_when_renting(self):
        assert validate_inputs(Inputs(is_buying=False, house_price=300_000, mortgage=400_000)) == []

    def test_collects_all(self):
        errors = validate_inputs(Inputs(num_samples=0, years_to_forecast=-1))
        assert len(errors) == 2
