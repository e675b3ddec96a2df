"""Simulation inputs and per-year policy parameters."""

from dataclasses import dataclass, field

from housing_sim_uk.random_variables import DISTRIBUTION_KINDS, LOG_NORMAL, RandomVariableDistribution

DEFAULT_HOUSE_PRICE = 500_000
# London average gross rental yield ≈ 4.5% (annual rent / house price)
DEFAULT_RENTAL_YIELD = 0.045


@dataclass(frozen=True)
class MortgageTerms:
    interest_rate: float  # percent per year
    monthly_payment: float


@dataclass(frozen=True)
class PolicyParams:
    """Everything next_financial_situation needs besides the prior state and the draws."""

    is_buying: bool
    mortgage_interest_rate: float = 0.0
    mortgage_monthly_payment: float = 0.0
    mortgage_overpay: bool = False
    ground_rent: float = 0.0
    service_charge: float = 0.0
    service_charge_is_rate: bool = True
    home_insurance: float = 0.0
    maintenance_rate: float = 0.0
    distribution_kind: str = LOG_NORMAL
    model_inflation: bool = True
    rent_tracks_house_price: bool = True
    model_capital_gains_tax: bool = True


@dataclass
class Inputs:
    """All user-facing inputs of a buy or rent projection. Money is in pounds."""

    is_buying: bool = True
    first_time_buyer: bool = True

    # Starting position
    house_price: float = DEFAULT_HOUSE_PRICE
    cash: float = 110_000
    mortgage: float = 400_000
    salary: float = 5_400  # monthly take-home available for housing/investing
    rent: float = DEFAULT_HOUSE_PRICE * DEFAULT_RENTAL_YIELD / 12
    buying_costs: float = 5_000

    # Two-stage mortgage (Nationwide quote for 500k house, 2024-06)
    mortgage_stage1_length: int = 2
    mortgage_interest_rate_stage1: float = 5.09
    mortgage_monthly_payment_stage1: float = 2_170
    mortgage_interest_rate_stage2: float = 7.99
    mortgage_monthly_payment_stage2: float = 2_890
    mortgage_overpay: bool = False

    # Running costs of an owned house
    ground_rent: float = 500
    service_charge: float = 0.6  # percent of house value, or flat if service_charge_is_rate is False
    service_charge_is_rate: bool = True
    maintenance_rate: float = 1.0
    home_insurance: float = 0.0

    # Annual rate distributions (percent). Growth rates are over inflation
    # when model_inflation is set; rent growth is over house price growth
    # when rent_tracks_house_price is set.
    # UK CPI 1989-2023
    inflation: RandomVariableDistribution = field(
        default_factory=lambda: RandomVariableDistribution(2.7, 3.7)
    )
    # London average house price over inflation 1989-2023
    house_appreciation_rate: RandomVariableDistribution = field(
        default_factory=lambda: RandomVariableDistribution(4.2, 4.1)
    )
    # S&P 500 over inflation 1989-2023
    stock_appreciation_rate: RandomVariableDistribution = field(
        default_factory=lambda: RandomVariableDistribution(5.1, 16.9)
    )
    salary_growth: RandomVariableDistribution = field(
        default_factory=lambda: RandomVariableDistribution(2.0, 3.0)
    )
    rent_growth: RandomVariableDistribution = field(
        default_factory=lambda: RandomVariableDistribution(0.0, 3.0)
    )

    # Monte Carlo
    years_to_forecast: int = 30
    num_samples: int = 100
    seed: float = 0.0
    correct_inflation: bool = True

    # Modelling switches
    distribution_kind: str = LOG_NORMAL
    model_inflation: bool = True
    rent_tracks_house_price: bool = True
    model_capital_gains_tax: bool = True

    def get_mortgage_terms(self, year: int) -> MortgageTerms:
        """Mortgage terms for the year being simulated (1-based)."""
        if year <= self.mortgage_stage1_length:
            return MortgageTerms(self.mortgage_interest_rate_stage1, self.mortgage_monthly_payment_stage1)
        return MortgageTerms(self.mortgage_interest_rate_stage2, self.mortgage_monthly_payment_stage2)

    def policy_for_year(self, year: int) -> PolicyParams:
        terms = self.get_mortgage_terms(year)
        return PolicyParams(
            is_buying=self.is_buying,
            mortgage_interest_rate=terms.interest_rate,
            mortgage_monthly_payment=terms.monthly_payment,
            mortgage_overpay=self.mortgage_overpay,
            ground_rent=self.ground_rent,
            service_charge=self.service_charge,
            service_charge_is_rate=self.service_charge_is_rate,
            home_insurance=self.home_insurance,
            maintenance_rate=self.maintenance_rate,
            distribution_kind=self.distribution_kind,
            model_inflation=self.model_inflation,
            rent_tracks_house_price=self.rent_tracks_house_price,
            model_capital_gains_tax=self.model_capital_gains_tax,
        )

    def distributions(self) -> dict[str, RandomVariableDistribution]:
        return {
            "inflation": self.inflation,
            "house_appreciation_rate": self.house_appreciation_rate,
            "stock_appreciation_rate": self.stock_appreciation_rate,
            "salary_growth": self.salary_growth,
            "rent_growth": self.rent_growth,
        }


def validate_inputs(inputs: Inputs) -> list[str]:
    """Check caller-supplied inputs. Returns list of error messages."""
    errors = []
    if inputs.num_samples < 1:
        errors.append(f"num_samples must be at least 1, got {inputs.num_samples}")
    if inputs.years_to_forecast < 0:
        errors.append(f"years_to_forecast must be non-negative, got {inputs.years_to_forecast}")
    if inputs.distribution_kind not in DISTRIBUTION_KINDS:
        errors.append(
            f"distribution_kind {inputs.distribution_kind!r} is not one of {DISTRIBUTION_KINDS}"
        )
    for name, dist in inputs.distributions().items():
        if dist is None:
            errors.append(f"{name}: distribution is missing")
        elif dist.std_dev < 0:
            errors.append(f"{name}: std_dev must be non-negative, got {dist.std_dev}")
    if inputs.is_buying and inputs.mortgage > inputs.house_price:
        errors.append(
            f"mortgage {inputs.mortgage:,.0f} exceeds house price {inputs.house_price:,.0f}"
        )
    return errors
