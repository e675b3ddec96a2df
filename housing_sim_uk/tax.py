"""Stamp duty and capital gains tax calculations."""

# Stamp Duty Land Tax bands (England & NI): (lower threshold, marginal rate)
# The second threshold depends on first-time-buyer relief.
_STAMP_DUTY_FIRST_THRESHOLD = 250_000
_STAMP_DUTY_FIRST_THRESHOLD_FTB = 425_000
_STAMP_DUTY_UPPER_THRESHOLDS: tuple[float, ...] = (925_000, 1_500_000, float("inf"))
_STAMP_DUTY_RATES: tuple[float, ...] = (0.0, 0.05, 0.10, 0.12)

ISA_MAX_CONTRIBUTION = 20_000  # annual ISA subscription limit
CAPITAL_GAINS_ALLOWANCE = 3_000
# Only holds for higher-rate income tax payers.
CAPITAL_GAINS_RATE = 20  # percent


def _stamp_duty_thresholds(first_time_buyer: bool) -> tuple[float, ...]:
    first = _STAMP_DUTY_FIRST_THRESHOLD_FTB if first_time_buyer else _STAMP_DUTY_FIRST_THRESHOLD
    return (0, first) + _STAMP_DUTY_UPPER_THRESHOLDS


def calc_stamp_duty(house_price: float, first_time_buyer: bool) -> float:
    """Return stamp duty payable on a purchase at house_price.

    Each band charges its marginal rate on the part of the price that falls
    inside it. A price of 0 (or below) pays nothing.
    """
    thresholds = _stamp_duty_thresholds(first_time_buyer)
    stamp_duty = 0.0
    for i, rate in enumerate(_STAMP_DUTY_RATES):
        lower, upper = thresholds[i], thresholds[i + 1]
        if house_price <= lower:
            break
        stamp_duty += (min(house_price, upper) - lower) * rate
    return stamp_duty


def calc_capital_gains_tax(
    gain: float,
    allowance: float = CAPITAL_GAINS_ALLOWANCE,
    rate: float = CAPITAL_GAINS_RATE,
) -> float:
    """Tax on a capital gain: max(gain - allowance, 0) × rate/100."""
    return max(gain - allowance, 0) * rate / 100
