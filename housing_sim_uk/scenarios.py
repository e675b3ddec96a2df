"""Scenario definitions and multi-scenario execution."""

import dataclasses

from housing_sim_uk.monte_carlo import MonteCarloResult, run_monte_carlo
from housing_sim_uk.params import Inputs

# Both scenarios share the same base inputs and seed; only the housing path differs.
SCENARIOS: dict[str, dict] = {
    "Buy": {"is_buying": True},
    "Rent": {"is_buying": False},
}


def scenario_inputs(base_inputs: Inputs, overrides: dict) -> Inputs:
    return dataclasses.replace(base_inputs, **overrides)


def run_scenarios(
    base_inputs: Inputs | None = None,
    scenarios: dict[str, dict] | None = None,
    quiet: bool = True,
) -> dict[str, MonteCarloResult]:
    """Run every scenario. scenarios maps name → Inputs field overrides (default: buy and rent)."""
    if base_inputs is None:
        base_inputs = Inputs()
    if scenarios is None:
        scenarios = SCENARIOS

    results = {}
    for name, overrides in scenarios.items():
        inputs = scenario_inputs(base_inputs, overrides)
        results[name] = run_monte_carlo(inputs, scenario_name=name, quiet=quiet)
    return results
