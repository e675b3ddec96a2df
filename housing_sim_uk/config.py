"""TOML config loader with CLI > config > default resolution."""

import argparse
import dataclasses
import sys
import tomllib
from pathlib import Path

from housing_sim_uk.params import Inputs
from housing_sim_uk.random_variables import DISTRIBUTION_KINDS, RandomVariableDistribution
from housing_sim_uk.scenarios import SCENARIOS

DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULTS = {f.name: getattr(Inputs(), f.name) for f in dataclasses.fields(Inputs)}

DISTRIBUTION_KEYS = (
    "inflation",
    "house_appreciation_rate",
    "stock_appreciation_rate",
    "salary_growth",
    "rent_growth",
)


def parse_distribution(value) -> RandomVariableDistribution:
    """Parse a distribution from {mean, std_dev}, [mean, std_dev] or "mean,std_dev"."""
    if isinstance(value, RandomVariableDistribution):
        return value
    if isinstance(value, dict):
        try:
            return RandomVariableDistribution(float(value["mean"]), float(value["std_dev"]))
        except KeyError as e:
            raise ValueError(f"distribution table is missing {e.args[0]!r}") from None
    if isinstance(value, str):
        value = value.split(",")
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return RandomVariableDistribution(float(value[0]), float(value[1]))
    raise ValueError(f"cannot read distribution from {value!r} (expected mean,std_dev)")


def _normalize(raw: dict, where: str) -> dict:
    """Check keys against Inputs fields and convert distribution values."""
    unknown = sorted(set(raw) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"{where}: unknown keys {', '.join(unknown)}")
    normalized = dict(raw)
    for key in DISTRIBUTION_KEYS:
        if key in normalized:
            normalized[key] = parse_distribution(normalized[key])
    return normalized


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist.

    Top-level keys are Inputs fields. [scenarios.<name>] tables hold per-scenario
    overrides and are returned under the "scenarios" key.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        scenarios = raw.pop("scenarios", {})
        config = _normalize(raw, str(path))
        if scenarios:
            config["scenarios"] = {
                name: _normalize(table, f"{path} [scenarios.{name}]")
                for name, table in scenarios.items()
            }
    except (tomllib.TOMLDecodeError, ValueError, TypeError) as e:
        print(f"Failed to read config file {path}: {e}", file=sys.stderr)
        raise SystemExit(1)
    return config


def _distribution_arg(s: str) -> RandomVariableDistribution:
    try:
        return parse_distribution(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with shared simulation flags."""
    d = DEFAULTS
    bool_flag = argparse.BooleanOptionalAction
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="config file path (default: config.toml)")
    parser.add_argument("--house-price", type=float, default=None, help=f"house price (default: {d['house_price']:,.0f})")
    parser.add_argument("--cash", type=float, default=None, help=f"starting cash (default: {d['cash']:,.0f})")
    parser.add_argument("--mortgage", type=float, default=None, help=f"mortgage principal (default: {d['mortgage']:,.0f})")
    parser.add_argument("--salary", type=float, default=None, help=f"monthly take-home salary (default: {d['salary']:,.0f})")
    parser.add_argument("--rent", type=float, default=None, help=f"monthly rent (default: {d['rent']:,.0f})")
    parser.add_argument("--buying-costs", type=float, default=None, help=f"one-off buying costs (default: {d['buying_costs']:,.0f})")
    parser.add_argument("--first-time-buyer", action=bool_flag, default=None, help="first-time buyer stamp duty relief (default: on)")
    parser.add_argument("--stage1-years", dest="mortgage_stage1_length", type=int, default=None, help=f"length of the initial mortgage deal in years (default: {d['mortgage_stage1_length']})")
    parser.add_argument("--stage1-rate", dest="mortgage_interest_rate_stage1", type=float, default=None, help=f"initial deal interest rate %% (default: {d['mortgage_interest_rate_stage1']})")
    parser.add_argument("--stage1-payment", dest="mortgage_monthly_payment_stage1", type=float, default=None, help=f"initial deal monthly payment (default: {d['mortgage_monthly_payment_stage1']:,.0f})")
    parser.add_argument("--stage2-rate", dest="mortgage_interest_rate_stage2", type=float, default=None, help=f"follow-on interest rate %% (default: {d['mortgage_interest_rate_stage2']})")
    parser.add_argument("--stage2-payment", dest="mortgage_monthly_payment_stage2", type=float, default=None, help=f"follow-on monthly payment (default: {d['mortgage_monthly_payment_stage2']:,.0f})")
    parser.add_argument("--overpay", dest="mortgage_overpay", action=bool_flag, default=None, help="put surplus cash into the mortgage before investing (default: off)")
    parser.add_argument("--ground-rent", type=float, default=None, help=f"annual ground rent (default: {d['ground_rent']:,.0f})")
    parser.add_argument("--service-charge", type=float, default=None, help=f"service charge, %% of house value or flat (default: {d['service_charge']})")
    parser.add_argument("--service-charge-is-rate", action=bool_flag, default=None, help="treat service charge as a percentage of house value (default: on)")
    parser.add_argument("--maintenance-rate", type=float, default=None, help=f"annual maintenance %% of house value (default: {d['maintenance_rate']})")
    parser.add_argument("--home-insurance", type=float, default=None, help=f"annual home insurance (default: {d['home_insurance']:,.0f})")
    for key in DISTRIBUTION_KEYS:
        dist = d[key]
        parser.add_argument(
            "--" + key.replace("_", "-"), type=_distribution_arg, default=None,
            help=f"mean,std_dev in %% (default: {dist.mean},{dist.std_dev})",
        )
    parser.add_argument("--years", dest="years_to_forecast", type=int, default=None, help=f"years to forecast (default: {d['years_to_forecast']})")
    parser.add_argument("--samples", dest="num_samples", type=int, default=None, help=f"Monte Carlo samples (default: {d['num_samples']})")
    parser.add_argument("--seed", type=float, default=None, help=f"random seed (default: {d['seed']})")
    parser.add_argument("--correct-inflation", action=bool_flag, default=None, help="report in year-0 money (default: on)")
    parser.add_argument("--distribution-kind", choices=DISTRIBUTION_KINDS, default=None, help=f"rate draw distribution (default: {d['distribution_kind']})")
    parser.add_argument("--model-inflation", action=bool_flag, default=None, help="compound growth rates with inflation (default: on)")
    parser.add_argument("--rent-tracks-house-price", action=bool_flag, default=None, help="rent grows relative to house prices (default: on)")
    parser.add_argument("--model-capital-gains-tax", action=bool_flag, default=None, help="tax gains realised when selling stock (default: on)")
    return parser


def resolve(args: argparse.Namespace, config: dict) -> dict:
    """Resolve values with priority: CLI flag > config.toml > hardcoded default."""
    resolved = {}
    for key, default in DEFAULTS.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    return resolved


def build_inputs(r: dict) -> Inputs:
    """Build Inputs from resolved config dict."""
    return Inputs(**r)


def build_scenarios(config: dict) -> dict[str, dict]:
    """Default buy/rent scenarios, extended or overridden by [scenarios.<name>] tables."""
    scenarios = {name: dict(overrides) for name, overrides in SCENARIOS.items()}
    for name, overrides in config.get("scenarios", {}).items():
        scenarios.setdefault(name, {}).update(overrides)
    return scenarios


def parse_args(
    description: str,
    add_args_fn=None,
) -> tuple[Inputs, dict[str, dict], argparse.Namespace]:
    """Parse CLI args, load config, resolve values.

    Returns (base_inputs, scenarios, namespace).
    """
    parser = create_parser(description)
    if add_args_fn:
        add_args_fn(parser)
    args = parser.parse_args()
    config = load_config(args.config)
    r = resolve(args, config)
    return build_inputs(r), build_scenarios(config), args
