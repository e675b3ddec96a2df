"""Monte Carlo simulation engine."""

import sys
from dataclasses import dataclass, field
from random import Random

from housing_sim_uk.metrics import METRICS, Extractor
from housing_sim_uk.params import Inputs, validate_inputs
from housing_sim_uk.random_variables import RandomGenerator, make_generator, make_root_generator
from housing_sim_uk.simulation import (
    FinancialSituation,
    RateDraws,
    initial_financial_situation,
    next_financial_situation,
)

DEFAULT_PERCENTILES = (10, 90)

# Metrics reported in the final-year summary
SUMMARY_METRICS = (
    "house_value",
    "salary",
    "post_tax_wealth",
    "rent",
    "stock_isa_value",
    "stock_non_isa_value",
)

Trajectory = list[FinancialSituation]


@dataclass(frozen=True)
class RateGenerators:
    """The five per-quantity generators of one sample."""

    inflation: RandomGenerator
    salary_growth: RandomGenerator
    stock_appreciation: RandomGenerator
    house_appreciation: RandomGenerator
    rent_growth: RandomGenerator

    def draw(self) -> RateDraws:
        """Draw one year of rates. The call order here is part of the seed contract."""
        inflation = self.inflation()
        salary_growth = self.salary_growth()
        stock_appreciation = self.stock_appreciation()
        house_appreciation = self.house_appreciation()
        rent_growth = self.rent_growth()
        return RateDraws(
            inflation=inflation,
            salary_growth=salary_growth,
            stock_appreciation=stock_appreciation,
            house_appreciation=house_appreciation,
            rent_growth=rent_growth,
        )


@dataclass(frozen=True)
class PercentileBands:
    """Per-year median and a low/high percentile pair across samples."""

    low_percentile: int
    high_percentile: int
    median: list[float] = field(default_factory=list)
    low: list[float] = field(default_factory=list)
    high: list[float] = field(default_factory=list)


@dataclass
class MonteCarloResult:
    """Sample set and headline statistics for one scenario."""

    scenario_name: str
    n_samples: int
    samples: list[Trajectory] = field(default_factory=list)
    bankrupt_count: int = 0
    bankruptcy_probability: float = 0.0
    # metric name → median of the final-year value
    final_medians: dict[str, float] = field(default_factory=dict)
    # whether final_medians are in year-0 money; also the default for bands()
    correct_inflation: bool = False

    def bands(
        self,
        extractor: Extractor,
        correct_inflation: bool | None = None,
        percentiles: tuple[int, int] = DEFAULT_PERCENTILES,
    ) -> PercentileBands:
        if correct_inflation is None:
            correct_inflation = self.correct_inflation
        return aggregate_samples(self.samples, extractor, correct_inflation, percentiles)


def make_rate_generators(root: Random, inputs: Inputs) -> RateGenerators:
    kind = inputs.distribution_kind
    inflation = make_generator(root, inputs.inflation, kind)
    stock_appreciation = make_generator(root, inputs.stock_appreciation_rate, kind)
    salary_growth = make_generator(root, inputs.salary_growth, kind)
    rent_growth = make_generator(root, inputs.rent_growth, kind)
    house_appreciation = make_generator(root, inputs.house_appreciation_rate, kind)
    return RateGenerators(
        inflation=inflation,
        salary_growth=salary_growth,
        stock_appreciation=stock_appreciation,
        house_appreciation=house_appreciation,
        rent_growth=rent_growth,
    )


def initial_situation_for(inputs: Inputs) -> FinancialSituation:
    return initial_financial_situation(
        is_buying=inputs.is_buying,
        house_price=inputs.house_price,
        cash=inputs.cash,
        salary=inputs.salary,
        rent=inputs.rent,
        mortgage=inputs.mortgage,
        buying_costs=inputs.buying_costs,
        first_time_buyer=inputs.first_time_buyer,
    )


def simulate_trajectory(
    fs0: FinancialSituation, inputs: Inputs, generators: RateGenerators,
) -> Trajectory:
    """Run one sample for inputs.years_to_forecast years. Returns years + 1 snapshots."""
    policies = {}
    history = [fs0]
    fs = fs0
    for year in range(1, inputs.years_to_forecast + 1):
        stage = 1 if year <= inputs.mortgage_stage1_length else 2
        if stage not in policies:
            policies[stage] = inputs.policy_for_year(year)
        fs = next_financial_situation(fs, generators.draw(), policies[stage])
        history.append(fs)
    return history


def run_samples(inputs: Inputs, quiet: bool = True) -> list[Trajectory]:
    """Run inputs.num_samples independent trajectories from one seeded root.

    Same inputs (seed included) give identical trajectories.
    """
    errors = validate_inputs(inputs)
    if errors:
        raise ValueError("invalid inputs: " + "; ".join(errors))

    fs0 = initial_situation_for(inputs)
    root = make_root_generator(inputs.seed)
    samples: list[Trajectory] = []
    for i in range(inputs.num_samples):
        generators = make_rate_generators(root, inputs)
        samples.append(simulate_trajectory(fs0, inputs, generators))
        if not quiet and (i + 1) % 100 == 0:
            print(f"\r  samples: {i + 1}/{inputs.num_samples}", end="", file=sys.stderr)

    if not quiet and inputs.num_samples >= 100:
        print(file=sys.stderr)
    return samples


def _percentile_from_sorted(sorted_vals: list[float], p: float) -> float:
    """Linearly interpolated percentile from a pre-sorted list.

    P50 is the usual median: the mean of the two middle values when the
    count is even.
    """
    pos = p / 100 * (len(sorted_vals) - 1)
    lower = int(pos)
    upper = min(lower + 1, len(sorted_vals) - 1)
    frac = pos - lower
    if frac == 0:
        return sorted_vals[lower]
    return sorted_vals[lower] * (1 - frac) + sorted_vals[upper] * frac


def aggregate_samples(
    samples: list[Trajectory],
    extractor: Extractor,
    correct_inflation: bool = False,
    percentiles: tuple[int, int] = DEFAULT_PERCENTILES,
) -> PercentileBands:
    """Reduce a sample set to per-year median and low/high percentile series."""
    low_p, high_p = percentiles
    if not 0 <= low_p <= 50 <= high_p <= 100:
        raise ValueError(f"percentiles must satisfy 0 <= low <= 50 <= high <= 100, got {percentiles}")
    if not samples:
        raise ValueError("cannot aggregate an empty sample set")

    median, low, high = [], [], []
    for year_snapshots in zip(*samples):
        values = sorted(extractor(fs, correct_inflation) for fs in year_snapshots)
        median.append(_percentile_from_sorted(values, 50))
        low.append(_percentile_from_sorted(values, low_p))
        high.append(_percentile_from_sorted(values, high_p))
    return PercentileBands(
        low_percentile=low_p,
        high_percentile=high_p,
        median=median,
        low=low,
        high=high,
    )


def final_summary(samples: list[Trajectory], correct_inflation: bool = False) -> dict[str, float]:
    """Median across samples of each summary metric in the last year."""
    last = [history[-1] for history in samples]
    summary = {}
    for name in SUMMARY_METRICS:
        values = sorted(METRICS[name](fs, correct_inflation) for fs in last)
        summary[name] = _percentile_from_sorted(values, 50)
    return summary


def run_monte_carlo(inputs: Inputs, scenario_name: str = "", quiet: bool = True) -> MonteCarloResult:
    """Run the sample set for inputs and collect headline statistics."""
    if not quiet:
        print(f"  {scenario_name or 'scenario'}: {inputs.num_samples} samples", file=sys.stderr)
    samples = run_samples(inputs, quiet=quiet)
    bankrupt_count = sum(1 for history in samples if history[-1].bankrupt)
    return MonteCarloResult(
        scenario_name=scenario_name,
        n_samples=inputs.num_samples,
        samples=samples,
        bankrupt_count=bankrupt_count,
        bankruptcy_probability=bankrupt_count / inputs.num_samples,
        final_medians=final_summary(samples, inputs.correct_inflation),
        correct_inflation=inputs.correct_inflation,
    )
