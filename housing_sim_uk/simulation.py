"""Core simulation engine: one household's finances advanced one year at a time."""

import dataclasses
from dataclasses import dataclass

from housing_sim_uk.params import PolicyParams
from housing_sim_uk.random_variables import LOG_NORMAL
from housing_sim_uk.tax import ISA_MAX_CONTRIBUTION, calc_capital_gains_tax, calc_stamp_duty

# Cash may end a year this far below zero before the household is bankrupt
# (absorbs rounding and the liquidation tax shortfall).
BANKRUPTCY_TOLERANCE = 1.0


@dataclass(frozen=True)
class FinancialSituation:
    """Snapshot of a household's finances at the end of a year.

    Never mutated: every step of the yearly update returns a new snapshot.
    """

    house_value: float = 0.0
    cash_value: float = 0.0
    salary: float = 0.0  # monthly
    rent: float = 0.0  # monthly
    stock_isa_value: float = 0.0
    stock_non_isa_value: float = 0.0
    stock_non_isa_value_paid: float = 0.0  # cost basis of non-ISA holdings
    mortgage_balance: float = 0.0
    money_spent: float = 0.0  # interest, rent, fees, taxes, running costs to date
    cumulative_inflation: float = 1.0
    year_number: int = 0
    bankrupt: bool = False


@dataclass(frozen=True)
class RateDraws:
    """One year's raw draws, as produced by the rate generators."""

    inflation: float
    salary_growth: float
    stock_appreciation: float
    house_appreciation: float
    rent_growth: float


@dataclass(frozen=True)
class GrowthFactors:
    """Nominal multiplicative factors applied to one year."""

    inflation: float
    salary: float
    stock: float
    house: float
    rent: float


def _to_factor(draw: float, kind: str) -> float:
    if kind == LOG_NORMAL:
        return draw
    return 1 + draw / 100


def growth_factors(draws: RateDraws, policy: PolicyParams) -> GrowthFactors:
    """Turn raw draws into nominal growth factors.

    With model_inflation, salary/stock/house draws are real growth and are
    compounded with the inflation factor. With rent_tracks_house_price, the
    rent draw is growth over the house factor rather than over inflation.
    """
    kind = policy.distribution_kind
    inflation = _to_factor(draws.inflation, kind) if policy.model_inflation else 1.0
    house = inflation * _to_factor(draws.house_appreciation, kind)
    rent_base = house if policy.rent_tracks_house_price else inflation
    return GrowthFactors(
        inflation=inflation,
        salary=inflation * _to_factor(draws.salary_growth, kind),
        stock=inflation * _to_factor(draws.stock_appreciation, kind),
        house=house,
        rent=rent_base * _to_factor(draws.rent_growth, kind),
    )


def _receive_salary(fs: FinancialSituation) -> FinancialSituation:
    return dataclasses.replace(fs, cash_value=fs.cash_value + fs.salary * 12)


def _pay_mortgage(
    fs: FinancialSituation, interest_rate: float, monthly_payment: float,
) -> FinancialSituation:
    """Pay one year of mortgage. Interest is always paid in full.

    Principal reduction is clamped to [0, balance]: the final payment is cut
    to what is owed, and a payment below the interest never grows the balance.
    """
    interest = fs.mortgage_balance * interest_rate / 100
    principal_reduction = min(max(monthly_payment * 12 - interest, 0.0), fs.mortgage_balance)
    annual_payment = principal_reduction + interest
    return dataclasses.replace(
        fs,
        mortgage_balance=fs.mortgage_balance - principal_reduction,
        cash_value=fs.cash_value - annual_payment,
        money_spent=fs.money_spent + interest,
    )


def _pay_running_house_costs(fs: FinancialSituation, policy: PolicyParams) -> FinancialSituation:
    """Charge a year of maintenance, ground rent, service charge and insurance.

    Only owners pay. This departs from the original model, which also charged
    ground rent and insurance to renters.
    """
    if fs.house_value <= 0:
        return fs
    maintenance = fs.house_value * policy.maintenance_rate / 100
    if policy.service_charge_is_rate:
        service_charge = fs.house_value * policy.service_charge / 100
    else:
        service_charge = policy.service_charge
    total = maintenance + policy.ground_rent + service_charge + policy.home_insurance
    return dataclasses.replace(
        fs,
        cash_value=fs.cash_value - total,
        money_spent=fs.money_spent + total,
    )


def _pay_rent(fs: FinancialSituation) -> FinancialSituation:
    annual_rent = fs.rent * 12
    return dataclasses.replace(
        fs,
        cash_value=fs.cash_value - annual_rent,
        money_spent=fs.money_spent + annual_rent,
    )


def _appreciate(fs: FinancialSituation, factors: GrowthFactors) -> FinancialSituation:
    return dataclasses.replace(
        fs,
        house_value=fs.house_value * factors.house,
        stock_isa_value=fs.stock_isa_value * factors.stock,
        stock_non_isa_value=fs.stock_non_isa_value * factors.stock,
    )


def _grow_salary_and_rent(fs: FinancialSituation, factors: GrowthFactors) -> FinancialSituation:
    return dataclasses.replace(
        fs,
        salary=fs.salary * factors.salary,
        rent=fs.rent * factors.rent,
    )


def _overpay_mortgage(fs: FinancialSituation) -> FinancialSituation:
    if fs.cash_value < 0:
        return fs
    overpayment = min(fs.cash_value, fs.mortgage_balance)
    return dataclasses.replace(
        fs,
        cash_value=fs.cash_value - overpayment,
        mortgage_balance=fs.mortgage_balance - overpayment,
    )


def _invest_surplus_cash(fs: FinancialSituation) -> FinancialSituation:
    """Move all non-negative cash into stocks, ISA first up to the annual cap."""
    if fs.cash_value < 0:
        return fs
    isa_investment = min(fs.cash_value, ISA_MAX_CONTRIBUTION)
    non_isa_investment = fs.cash_value - isa_investment
    return dataclasses.replace(
        fs,
        cash_value=0.0,
        stock_isa_value=fs.stock_isa_value + isa_investment,
        stock_non_isa_value=fs.stock_non_isa_value + non_isa_investment,
        stock_non_isa_value_paid=fs.stock_non_isa_value_paid + non_isa_investment,
    )


def _liquidate_stocks(fs: FinancialSituation, tax_gains: bool) -> FinancialSituation:
    """Sell holdings to cover negative cash: non-ISA first, then ISA.

    The non-ISA sale is sized to the shortfall before capital gains tax, so
    the tax itself is only covered if ISA holdings remain. Cash can end
    slightly negative; BANKRUPTCY_TOLERANCE absorbs small residues.
    """
    non_isa_to_sell = min(fs.stock_non_isa_value, -fs.cash_value)
    if fs.stock_non_isa_value > 0:
        fraction_sold = non_isa_to_sell / fs.stock_non_isa_value
    else:
        fraction_sold = 0.0
    basis_sold = fs.stock_non_isa_value_paid * fraction_sold
    gain = non_isa_to_sell - basis_sold
    tax = calc_capital_gains_tax(gain) if tax_gains else 0.0
    cash_value = fs.cash_value + non_isa_to_sell - tax

    isa_to_sell = min(fs.stock_isa_value, -cash_value)
    return dataclasses.replace(
        fs,
        cash_value=cash_value + isa_to_sell,
        stock_non_isa_value=fs.stock_non_isa_value - non_isa_to_sell,
        stock_non_isa_value_paid=fs.stock_non_isa_value_paid - basis_sold,
        stock_isa_value=fs.stock_isa_value - isa_to_sell,
        money_spent=fs.money_spent + tax,
    )


def go_bankrupt(fs: FinancialSituation) -> FinancialSituation:
    """Zero every monetary field at once; only the clock and inflation index survive."""
    return FinancialSituation(
        cumulative_inflation=fs.cumulative_inflation,
        year_number=fs.year_number,
        bankrupt=True,
    )


def _check_solvency(fs: FinancialSituation) -> FinancialSituation:
    if fs.cash_value < -BANKRUPTCY_TOLERANCE:
        return go_bankrupt(fs)
    return fs


def _buy_house(
    fs: FinancialSituation,
    house_price: float,
    mortgage: float,
    buying_costs: float,
    first_time_buyer: bool,
) -> FinancialSituation:
    stamp_duty = calc_stamp_duty(house_price, first_time_buyer)
    cash_needed = stamp_duty + buying_costs + (house_price - mortgage)
    if cash_needed > fs.cash_value:
        return go_bankrupt(fs)
    return dataclasses.replace(
        fs,
        cash_value=fs.cash_value - cash_needed,
        mortgage_balance=fs.mortgage_balance + mortgage,
        money_spent=fs.money_spent + stamp_duty + buying_costs,
        house_value=fs.house_value + house_price,
        rent=0.0,
    )


def initial_financial_situation(
    is_buying: bool,
    house_price: float,
    cash: float,
    salary: float,
    rent: float,
    mortgage: float,
    buying_costs: float,
    first_time_buyer: bool,
) -> FinancialSituation:
    """Year-0 snapshot: buy the house if buying, then invest what cash is left."""
    fs = FinancialSituation(cash_value=cash, salary=salary, rent=rent)
    if is_buying:
        fs = _buy_house(fs, house_price, mortgage, buying_costs, first_time_buyer)
    fs = _invest_surplus_cash(fs)
    return _check_solvency(fs)


def next_financial_situation(
    fs: FinancialSituation, draws: RateDraws, policy: PolicyParams,
) -> FinancialSituation:
    """Advance a snapshot by one year.

    Order matters (it decides who gets paid first): income, mortgage, running
    costs, rent, appreciation, salary/rent growth, overpayment, investment,
    liquidation, solvency check. Costs are assessed on pre-appreciation values.
    A bankrupt snapshot stays all-zero.
    """
    factors = growth_factors(draws, policy)

    nxt = _receive_salary(fs)
    nxt = _pay_mortgage(nxt, policy.mortgage_interest_rate, policy.mortgage_monthly_payment)
    nxt = _pay_running_house_costs(nxt, policy)
    if not policy.is_buying:
        nxt = _pay_rent(nxt)

    nxt = _appreciate(nxt, factors)
    nxt = _grow_salary_and_rent(nxt, factors)

    if policy.mortgage_overpay:
        nxt = _overpay_mortgage(nxt)
    nxt = _invest_surplus_cash(nxt)
    if nxt.cash_value < 0:
        nxt = _liquidate_stocks(nxt, policy.model_capital_gains_tax)
    nxt = _check_solvency(nxt)

    return dataclasses.replace(
        nxt,
        cumulative_inflation=nxt.cumulative_inflation * factors.inflation,
        year_number=nxt.year_number + 1,
    )
