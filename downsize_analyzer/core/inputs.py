from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Final

from .returns import net_return_pct


MONTHS_IN_YEAR: Final[int] = 12


class InputValidationError(ValueError):
    """Raised when a ParameterSet cannot be projected."""


def pct(value: float) -> float:
    return value / 100.0


@dataclass(frozen=True)
class ParameterSet:
    """Assumptions for one projection run.

    Rates are percentage points (6.0 means 6 %), amounts are currency units.
    """

    # Current home (sale assumptions for A/B/C, kept in D)
    current_home_value: float = 1_300_000.0
    current_mortgage_balance: float = 0.0
    selling_costs_pct: float = 6.0
    cap_gains_tax_pct: float = 0.0
    current_home_appreciation_pct: float = 3.0

    # Smaller home (B)
    smaller_home_price: float = 700_000.0
    smaller_home_closing_pct: float = 2.5
    down_payment_from_proceeds_pct: float = 50.0
    mortgage_rate_pct: float = 6.5
    mortgage_years: int = 30
    property_tax_pct: float = 2.1
    insurance_annual: float = 2_500.0
    hoa_monthly: float = 250.0
    maintenance_pct: float = 1.0
    home_appreciation_pct: float = 3.0

    # Rent (A/C) and storage
    monthly_rent: float = 4_500.0
    rent_inflation_pct: float = 3.0
    include_storage: bool = True
    storage_monthly: float = 350.0
    storage_inflation_pct: float = 3.0

    # Investment return
    use_index_return: bool = True
    index_return_pct: float = 8.0
    manual_return_pct: float = 6.5
    return_adjust_pct: float = 0.0
    tax_drag_pct: float = 0.5

    # Share of proceeds invested per scenario
    invest_share_a_pct: float = 100.0
    invest_share_b_pct: float = 50.0  # of proceeds left after the down payment
    invest_share_c_pct: float = 50.0

    # Keep current home (D)
    keep_property_tax_annual: float = 13_500.0
    keep_insurance_annual: float = 7_000.0
    keep_hoa_monthly: float = 180.0
    keep_extra_maintenance_annual: float = 2_500.0

    # Horizon & discounting
    years: int = 15
    discount_rate_pct: float = 5.5

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool):
                continue
            if not isinstance(value, (int, float)):
                raise InputValidationError(f"{f.name} must be numeric, got {value!r}")
            try:
                finite = math.isfinite(value)
            except OverflowError:
                finite = False
            if not finite:
                raise InputValidationError(f"{f.name} must be finite, got {value!r}")

        for name in ("years", "mortgage_years"):
            value = getattr(self, name)
            if isinstance(value, bool) or int(value) != value or value < 1:
                raise InputValidationError(f"{name} must be a positive whole number of years")

        for name in (
            "current_home_value",
            "current_mortgage_balance",
            "smaller_home_price",
            "insurance_annual",
            "hoa_monthly",
            "monthly_rent",
            "storage_monthly",
            "keep_property_tax_annual",
            "keep_insurance_annual",
            "keep_hoa_monthly",
            "keep_extra_maintenance_annual",
        ):
            if getattr(self, name) < 0:
                raise InputValidationError(f"{name} cannot be negative")

        for name in (
            "down_payment_from_proceeds_pct",
            "invest_share_a_pct",
            "invest_share_b_pct",
            "invest_share_c_pct",
        ):
            if not 0 <= getattr(self, name) <= 100:
                raise InputValidationError(f"{name} must be between 0 and 100")

        if self.discount_rate_pct <= -100:
            raise InputValidationError("discount_rate_pct must be greater than -100")

        if self.mortgage_rate_pct < 0:
            raise InputValidationError("mortgage_rate_pct cannot be negative")


@dataclass(frozen=True)
class Assumptions:
    """ParameterSet with every rate expressed as a fraction."""

    current_home_value: float
    current_mortgage_balance: float
    selling_cost_rate: float
    cap_gains_rate: float
    current_home_appreciation: float

    smaller_home_price: float
    closing_cost_rate: float
    down_payment_share: float
    mortgage_rate: float
    mortgage_years: int
    property_tax_rate: float
    insurance_annual: float
    hoa_annual: float
    maintenance_rate: float
    home_appreciation: float

    monthly_rent: float
    rent_inflation: float
    include_storage: bool
    storage_monthly: float
    storage_inflation: float

    net_return: float

    share_a: float
    share_b: float
    share_c: float

    keep_costs_annual: float

    years: int
    discount_rate: float

    @classmethod
    def from_parameters(cls, params: ParameterSet) -> "Assumptions":
        return cls(
            current_home_value=float(params.current_home_value),
            current_mortgage_balance=float(params.current_mortgage_balance),
            selling_cost_rate=pct(params.selling_costs_pct),
            cap_gains_rate=pct(params.cap_gains_tax_pct),
            current_home_appreciation=pct(params.current_home_appreciation_pct),
            smaller_home_price=float(params.smaller_home_price),
            closing_cost_rate=pct(params.smaller_home_closing_pct),
            down_payment_share=pct(params.down_payment_from_proceeds_pct),
            mortgage_rate=pct(params.mortgage_rate_pct),
            mortgage_years=int(params.mortgage_years),
            property_tax_rate=pct(params.property_tax_pct),
            insurance_annual=float(params.insurance_annual),
            hoa_annual=params.hoa_monthly * MONTHS_IN_YEAR,
            maintenance_rate=pct(params.maintenance_pct),
            home_appreciation=pct(params.home_appreciation_pct),
            monthly_rent=float(params.monthly_rent),
            rent_inflation=pct(params.rent_inflation_pct),
            include_storage=bool(params.include_storage),
            storage_monthly=float(params.storage_monthly),
            storage_inflation=pct(params.storage_inflation_pct),
            net_return=pct(net_return_pct(params)),
            share_a=pct(params.invest_share_a_pct),
            share_b=pct(params.invest_share_b_pct),
            share_c=pct(params.invest_share_c_pct),
            keep_costs_annual=(
                params.keep_property_tax_annual
                + params.keep_insurance_annual
                + params.keep_hoa_monthly * MONTHS_IN_YEAR
                + params.keep_extra_maintenance_annual
            ),
            years=int(params.years),
            discount_rate=pct(params.discount_rate_pct),
        )
