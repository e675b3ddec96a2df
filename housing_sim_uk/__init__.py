"""Buy vs Rent Net Worth Monte Carlo Simulation Package."""

from housing_sim_uk.params import Inputs, MortgageTerms, PolicyParams, validate_inputs
from housing_sim_uk.random_variables import (
    RandomVariableDistribution,
    make_root_generator,
    make_generator,
    NORMAL,
    LOG_NORMAL,
)
from housing_sim_uk.simulation import (
    FinancialSituation,
    RateDraws,
    GrowthFactors,
    growth_factors,
    initial_financial_situation,
    next_financial_situation,
    go_bankrupt,
    BANKRUPTCY_TOLERANCE,
)
from housing_sim_uk.monte_carlo import (
    MonteCarloResult,
    PercentileBands,
    RateGenerators,
    make_rate_generators,
    simulate_trajectory,
    run_samples,
    aggregate_samples,
    final_summary,
    run_monte_carlo,
)
from housing_sim_uk.scenarios import SCENARIOS, run_scenarios
from housing_sim_uk.tax import (
    calc_stamp_duty,
    calc_capital_gains_tax,
    ISA_MAX_CONTRIBUTION,
    CAPITAL_GAINS_ALLOWANCE,
    CAPITAL_GAINS_RATE,
)
from housing_sim_uk import metrics

__all__ = [
    "Inputs",
    "MortgageTerms",
    "PolicyParams",
    "validate_inputs",
    "RandomVariableDistribution",
    "make_root_generator",
    "make_generator",
    "NORMAL",
    "LOG_NORMAL",
    "FinancialSituation",
    "RateDraws",
    "GrowthFactors",
    "growth_factors",
    "initial_financial_situation",
    "next_financial_situation",
    "go_bankrupt",
    "BANKRUPTCY_TOLERANCE",
    "MonteCarloResult",
    "PercentileBands",
    "RateGenerators",
    "make_rate_generators",
    "simulate_trajectory",
    "run_samples",
    "aggregate_samples",
    "final_summary",
    "run_monte_carlo",
    "SCENARIOS",
    "run_scenarios",
    "calc_stamp_duty",
    "calc_capital_gains_tax",
    "ISA_MAX_CONTRIBUTION",
    "CAPITAL_GAINS_ALLOWANCE",
    "CAPITAL_GAINS_RATE",
    "metrics",
]
