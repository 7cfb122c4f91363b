from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import List, Tuple

import pandas as pd

from .amortization import (
    advance_year,
    aggregate_yearly,
    amort_schedule,
    fixed_monthly_payment,
)
from .inputs import MONTHS_IN_YEAR, Assumptions, ParameterSet
from .returns import net_return_pct
from .scenarios import (
    SCENARIO_ORDER,
    Scenario,
    ScenarioPosition,
    ScenarioResult,
    YearlySnapshot,
    best_scenario,
    evaluate,
)
from .taxes import SaleBreakdown, sale_proceeds
from .utils import ensure_finite, grow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectionResult:
    sale: SaleBreakdown
    net_return_pct: float
    monthly_payment: float
    snapshots: Tuple[YearlySnapshot, ...]
    results: Tuple[ScenarioResult, ...]

    @property
    def net_proceeds(self) -> float:
        return self.sale.net_proceeds

    @property
    def best(self) -> ScenarioResult:
        return best_scenario(self.results)

    def result(self, scenario: Scenario) -> ScenarioResult:
        return self.results[SCENARIO_ORDER.index(scenario)]

    def yearly_frame(self) -> pd.DataFrame:
        """One row per year; columns are `<field>_<scenario>`, e.g. net_worth_a."""
        rows = []
        for snap in self.snapshots:
            row = {"year": snap.year}
            for scenario in SCENARIO_ORDER:
                for key, value in asdict(snap.position(scenario)).items():
                    row[f"{key}_{scenario.field}"] = value
            rows.append(row)
        return pd.DataFrame(rows)

    def results_frame(self) -> pd.DataFrame:
        best = self.best.scenario
        return pd.DataFrame(
            [
                {
                    "scenario": r.scenario.value,
                    "label": r.label,
                    "npv": r.npv,
                    "terminal_value": r.terminal_value,
                    "best": r.scenario is best,
                }
                for r in self.results
            ]
        )


class DownsizingModel:
    def __init__(self, params: ParameterSet):
        self.params = params
        self.assumptions = Assumptions.from_parameters(params)
        a = self.assumptions

        self.sale = sale_proceeds(
            a.current_home_value,
            a.current_mortgage_balance,
            a.selling_cost_rate,
            a.cap_gains_rate,
        )
        proceeds = self.sale.net_proceeds

        # Scenario B financing
        self.down_payment = proceeds * a.down_payment_share
        self.closing_costs = a.smaller_home_price * a.closing_cost_rate
        self.loan_principal = max(0.0, a.smaller_home_price - self.down_payment)
        self.monthly_payment = fixed_monthly_payment(
            self.loan_principal, a.mortgage_rate, a.mortgage_years
        )

        self.years = list(range(1, a.years + 1))

    # ------------------------- Labels ------------------------- #
    def label(self, scenario: Scenario) -> str:
        p = self.params
        if scenario is Scenario.RENT:
            return f"A: Rent (invest {p.invest_share_a_pct:g}%)"
        if scenario is Scenario.BUY_SMALLER:
            return f"B: Buy Smaller (invest {p.invest_share_b_pct:g}%)"
        if scenario is Scenario.RENT_STORAGE:
            return f"C: Rent+Storage (invest {p.invest_share_c_pct:g}%)"
        return "D: Keep Current Home"

    def upfront(self, scenario: Scenario) -> float:
        if scenario is Scenario.BUY_SMALLER:
            return -(self.closing_costs + self.down_payment)
        return 0.0

    # ------------------------- Projection ------------------------- #
    def project(self) -> List[YearlySnapshot]:
        """Advance all four scenarios in lockstep over the horizon."""
        a = self.assumptions
        proceeds = self.sale.net_proceeds
        monthly_rate = a.mortgage_rate / MONTHS_IN_YEAR

        rent = a.monthly_rent
        storage = a.storage_monthly
        home_value_b = a.smaller_home_price
        keep_home_value = a.current_home_value
        remaining = self.loan_principal

        invest_a = proceeds * a.share_a
        cash_a = proceeds - invest_a
        invest_b = (proceeds - self.down_payment) * a.share_b
        invest_c = proceeds * a.share_c
        cash_c = proceeds - invest_c

        logger.debug(
            "Projecting %d years: net proceeds %.2f, net return %.4f, loan %.2f @ %.2f/month",
            a.years,
            proceeds,
            a.net_return,
            self.loan_principal,
            self.monthly_payment,
        )

        snapshots: List[YearlySnapshot] = []
        for y in self.years:
            invest_a = grow(invest_a, a.net_return)
            invest_b = grow(invest_b, a.net_return)
            invest_c = grow(invest_c, a.net_return)

            # This year's rent/storage; inflation applies from next year on
            rent_annual = rent * MONTHS_IN_YEAR
            storage_annual = storage * MONTHS_IN_YEAR if a.include_storage else 0.0
            rent = grow(rent, a.rent_inflation)
            storage = grow(storage, a.storage_inflation)
            out_rent = rent_annual + storage_annual

            # B: mortgage year, costs on start-of-year home value
            loan_year = advance_year(remaining, self.monthly_payment, monthly_rate)
            remaining = loan_year.end_balance
            if loan_year.paid_off_this_year:
                logger.debug("Scenario B mortgage paid off in year %d", y)
            ownership_b = (
                home_value_b * a.property_tax_rate
                + home_value_b * a.maintenance_rate
                + a.insurance_annual
                + a.hoa_annual
            )
            out_b = loan_year.interest + ownership_b
            home_value_b = grow(home_value_b, a.home_appreciation)

            out_d = a.keep_costs_annual
            keep_home_value = grow(keep_home_value, a.current_home_appreciation)

            snap = YearlySnapshot(
                year=y,
                a=ScenarioPosition(
                    invested=invest_a,
                    held_cash=cash_a,
                    outflow=out_rent,
                    carrying_cost=storage_annual,
                    net_worth=invest_a + cash_a - out_rent,
                ),
                b=ScenarioPosition(
                    invested=invest_b,
                    outflow=out_b,
                    carrying_cost=ownership_b,
                    interest_paid=loan_year.interest,
                    remaining_principal=remaining,
                    asset_value=home_value_b,
                    net_worth=invest_b + home_value_b - remaining - out_b,
                ),
                c=ScenarioPosition(
                    invested=invest_c,
                    held_cash=cash_c,
                    outflow=out_rent,
                    carrying_cost=storage_annual,
                    net_worth=invest_c + cash_c - out_rent,
                ),
                d=ScenarioPosition(
                    outflow=out_d,
                    carrying_cost=out_d,
                    asset_value=keep_home_value,
                    net_worth=keep_home_value - out_d,
                ),
            )
            for scenario in SCENARIO_ORDER:
                ensure_finite(
                    f"year {y} scenario {scenario.value}",
                    *asdict(snap.position(scenario)).values(),
                )
            snapshots.append(snap)

        return snapshots

    def evaluate(self, snapshots: List[YearlySnapshot]) -> List[ScenarioResult]:
        return [
            evaluate(
                scenario,
                self.label(scenario),
                self.upfront(scenario),
                snapshots,
                self.assumptions.discount_rate,
            )
            for scenario in SCENARIO_ORDER
        ]

    def run(self) -> ProjectionResult:
        snapshots = self.project()
        results = self.evaluate(snapshots)
        result = ProjectionResult(
            sale=self.sale,
            net_return_pct=net_return_pct(self.params),
            monthly_payment=self.monthly_payment,
            snapshots=tuple(snapshots),
            results=tuple(results),
        )
        logger.debug("Best scenario: %s (NPV %.2f)", result.best.label, result.best.npv)
        return result

    # Convenience
    def loan_schedule(self, yearly: bool = True) -> pd.DataFrame:
        """Scenario B mortgage schedule over its full term."""
        a = self.assumptions
        schedule = amort_schedule(self.loan_principal, a.mortgage_rate, a.mortgage_years)
        return aggregate_yearly(schedule) if yearly else schedule


def run(params: ParameterSet) -> ProjectionResult:
    return DownsizingModel(params).run()
