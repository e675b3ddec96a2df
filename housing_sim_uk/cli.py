"""CLI entry point for the buy vs rent Monte Carlo comparison."""

import argparse

from housing_sim_uk.config import parse_args
from housing_sim_uk.metrics import METRICS
from housing_sim_uk.monte_carlo import DEFAULT_PERCENTILES, SUMMARY_METRICS, MonteCarloResult
from housing_sim_uk.params import Inputs
from housing_sim_uk.scenarios import run_scenarios
from housing_sim_uk.tax import calc_stamp_duty

SUMMARY_LABELS = {
    "house_value": "House value",
    "salary": "Salary (monthly)",
    "post_tax_wealth": "Post-tax wealth",
    "rent": "Rent (monthly)",
    "stock_isa_value": "ISA stocks",
    "stock_non_isa_value": "Non-ISA stocks",
}


def _percentile_pair(s: str) -> tuple[int, int]:
    try:
        low, high = (int(x) for x in s.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected LOW,HIGH percentiles, got {s!r}") from None
    if not 0 <= low <= 50 <= high <= 100:
        raise argparse.ArgumentTypeError(f"need 0 <= LOW <= 50 <= HIGH <= 100, got {s!r}")
    return low, high


def _add_report_args(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--metric", choices=sorted(METRICS), default="post_tax_wealth",
        help="metric for the yearly band table (default: post_tax_wealth)",
    )
    low, high = DEFAULT_PERCENTILES
    parser.add_argument(
        "--percentiles", type=_percentile_pair, default=DEFAULT_PERCENTILES,
        help=f"low,high percentile pair for the bands (default: {low},{high})",
    )
    parser.add_argument(
        "--step", type=int, default=5,
        help="print every N years in the band table (default: 5)",
    )
    parser.add_argument(
        "--quiet", action="store_true",
        help="suppress progress output on stderr",
    )


def _fmt_money(v: float) -> str:
    if v < 0:
        return f"-£{abs(v):,.0f}"
    return f"£{v:,.0f}"


def _print_header(inputs: Inputs, scenario_names: list[str]):
    money = "year-0 money" if inputs.correct_inflation else "nominal"
    print("=" * 80)
    print(f"Buy vs rent projection: {inputs.years_to_forecast} years, "
          f"{inputs.num_samples:,} samples, seed={inputs.seed} ({money})")
    stamp_duty = calc_stamp_duty(inputs.house_price, inputs.first_time_buyer)
    print(f"  House: {_fmt_money(inputs.house_price)} / mortgage {_fmt_money(inputs.mortgage)}"
          f" / stamp duty {_fmt_money(stamp_duty)} / buying costs {_fmt_money(inputs.buying_costs)}")
    print(f"  Cash: {_fmt_money(inputs.cash)} / salary {_fmt_money(inputs.salary)}/month"
          f" / rent {_fmt_money(inputs.rent)}/month")
    print(f"  Mortgage: {inputs.mortgage_interest_rate_stage1:.2f}% at {_fmt_money(inputs.mortgage_monthly_payment_stage1)}/month"
          f" for {inputs.mortgage_stage1_length} years, then {inputs.mortgage_interest_rate_stage2:.2f}%"
          f" at {_fmt_money(inputs.mortgage_monthly_payment_stage2)}/month"
          f"{' (overpaying)' if inputs.mortgage_overpay else ''}")
    print(f"  Scenarios: {', '.join(scenario_names)}")
    print("=" * 80)


def _print_bands(result: MonteCarloResult, metric: str, percentiles: tuple[int, int], step: int):
    bands = result.bands(METRICS[metric], percentiles=percentiles)
    low_label = f"P{bands.low_percentile}"
    high_label = f"P{bands.high_percentile}"
    print(f"\n[{result.scenario_name}] {metric}")
    print("-" * 60)
    print(f"{'Year':<6}{low_label:>18}{'Median':>18}{high_label:>18}")
    print("-" * 60)
    last = len(bands.median) - 1
    for year in range(len(bands.median)):
        if year % step == 0 or year == last:
            print(
                f"{year:<6}"
                f"{_fmt_money(bands.low[year]):>18}"
                f"{_fmt_money(bands.median[year]):>18}"
                f"{_fmt_money(bands.high[year]):>18}"
            )
    print("-" * 60)


def _print_summary(results: dict[str, MonteCarloResult], years: int):
    names = list(results)
    print(f"\n[Final year {years}: medians across samples]")
    print("-" * 80)
    print(f"{'':<20}" + "".join(f"{name:>18}" for name in names))
    print("-" * 80)
    for key in SUMMARY_METRICS:
        row = "".join(f"{_fmt_money(results[name].final_medians[key]):>18}" for name in names)
        print(f"{SUMMARY_LABELS[key]:<20}{row}")
    row = "".join(f"{results[name].bankruptcy_probability:>18.1%}" for name in names)
    print(f"{'Bankrupt':<20}{row}")
    print("-" * 80)


def main():
    inputs, scenarios, args = parse_args(
        "Monte Carlo projection of net worth: buying a home vs renting and investing",
        _add_report_args,
    )
    step = max(1, args.step)

    _print_header(inputs, list(scenarios))
    try:
        results = run_scenarios(inputs, scenarios, quiet=args.quiet)
    except ValueError as e:
        raise SystemExit(f"error: {e}")

    for result in results.values():
        _print_bands(result, args.metric, args.percentiles, step)
    _print_summary(results, inputs.years_to_forecast)


if __name__ == "__main__":
    main()
