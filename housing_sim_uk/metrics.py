"""Scalar metrics read off a FinancialSituation.

Every extractor takes (snapshot, correct_inflation=False). With
correct_inflation the nominal value is divided by the snapshot's cumulative
inflation index, giving year-0 money.
"""

from typing import Callable

from housing_sim_uk.simulation import FinancialSituation
from housing_sim_uk.tax import calc_capital_gains_tax

Extractor = Callable[[FinancialSituation, bool], float]


def _deflate(value: float, fs: FinancialSituation, correct_inflation: bool) -> float:
    if correct_inflation:
        return value / fs.cumulative_inflation
    return value


def capital_gains_tax_due(fs: FinancialSituation) -> float:
    """Tax owed if all non-ISA holdings were sold now."""
    return calc_capital_gains_tax(fs.stock_non_isa_value - fs.stock_non_isa_value_paid)


def house_value(fs: FinancialSituation, correct_inflation: bool = False) -> float:
    return _deflate(fs.house_value, fs, correct_inflation)


def cash_value(fs: FinancialSituation, correct_inflation: bool = False) -> float:
    return _deflate(fs.cash_value, fs, correct_inflation)


def stock_isa_value(fs: FinancialSituation, correct_inflation: bool = False) -> float:
    return _deflate(fs.stock_isa_value, fs, correct_inflation)


def stock_non_isa_value(fs: FinancialSituation, correct_inflation: bool = False) -> float:
    return _deflate(fs.stock_non_isa_value, fs, correct_inflation)


def post_tax_stocks_value(fs: FinancialSituation, correct_inflation: bool = False) -> float:
    value = fs.stock_isa_value + fs.stock_non_isa_value - capital_gains_tax_due(fs)
    return _deflate(value, fs, correct_inflation)


def post_tax_wealth(fs: FinancialSituation, correct_inflation: bool = False) -> float:
    """House + cash + stocks - mortgage - capital gains tax on unrealised gains."""
    value = (
        fs.house_value
        + fs.cash_value
        + fs.stock_isa_value
        + fs.stock_non_isa_value
        - fs.mortgage_balance
        - capital_gains_tax_due(fs)
    )
    return _deflate(value, fs, correct_inflation)


def mortgage_balance(fs: FinancialSituation, correct_inflation: bool = False) -> float:
    return _deflate(fs.mortgage_balance, fs, correct_inflation)


def salary(fs: FinancialSituation, correct_inflation: bool = False) -> float:
    return _deflate(fs.salary, fs, correct_inflation)


def rent(fs: FinancialSituation, correct_inflation: bool = False) -> float:
    return _deflate(fs.rent, fs, correct_inflation)


def money_spent(fs: FinancialSituation, correct_inflation: bool = False) -> float:
    return _deflate(fs.money_spent, fs, correct_inflation)


METRICS: dict[str, Extractor] = {
    "post_tax_wealth": post_tax_wealth,
    "house_value": house_value,
    "cash_value": cash_value,
    "stock_isa_value": stock_isa_value,
    "stock_non_isa_value": stock_non_isa_value,
    "post_tax_stocks_value": post_tax_stocks_value,
    "mortgage_balance": mortgage_balance,
    "salary": salary,
    "rent": rent,
    "money_spent": money_spent,
}
