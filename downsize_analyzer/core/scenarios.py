from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

from .utils import ensure_finite, npv as npv_fn


class Scenario(str, Enum):
    RENT = "A"
    BUY_SMALLER = "B"
    RENT_STORAGE = "C"
    KEEP_HOME = "D"

    @property
    def field(self) -> str:
        return self.value.lower()


SCENARIO_ORDER: Tuple[Scenario, ...] = (
    Scenario.RENT,
    Scenario.BUY_SMALLER,
    Scenario.RENT_STORAGE,
    Scenario.KEEP_HOME,
)


@dataclass(frozen=True)
class ScenarioPosition:
    """End-of-year state of one scenario."""

    invested: float = 0.0
    held_cash: float = 0.0
    outflow: float = 0.0
    carrying_cost: float = 0.0
    interest_paid: float = 0.0
    remaining_principal: float = 0.0
    asset_value: float = 0.0
    net_worth: float = 0.0


@dataclass(frozen=True)
class YearlySnapshot:
    year: int
    a: ScenarioPosition
    b: ScenarioPosition
    c: ScenarioPosition
    d: ScenarioPosition

    def position(self, scenario: Scenario) -> ScenarioPosition:
        return getattr(self, scenario.field)


@dataclass(frozen=True)
class ScenarioResult:
    scenario: Scenario
    label: str
    npv: float
    terminal_value: float
    cashflows: Tuple[float, ...]


def terminal_value(scenario: Scenario, last: ScenarioPosition) -> float:
    """Liquidatable assets at the end of the horizon.

    A and C both count their uninvested share as held cash alongside the
    invested balance, so matching shares give matching results.
    """
    if scenario is Scenario.BUY_SMALLER:
        return last.asset_value + last.invested - last.remaining_principal
    if scenario is Scenario.KEEP_HOME:
        return last.asset_value
    return last.invested + last.held_cash


def build_cashflows(
    upfront: float,
    snapshots: Sequence[YearlySnapshot],
    scenario: Scenario,
    terminal: float,
) -> List[float]:
    """CF_0 = upfront, CF_1..CF_N = -outflow, CF_N+1 = terminal value."""
    cashflows = [upfront]
    cashflows.extend(-snap.position(scenario).outflow for snap in snapshots)
    cashflows.append(terminal)
    return cashflows


def evaluate(
    scenario: Scenario,
    label: str,
    upfront: float,
    snapshots: Sequence[YearlySnapshot],
    discount_rate: float,
) -> ScenarioResult:
    if not snapshots:
        raise ValueError("cannot value a scenario without yearly snapshots")
    terminal = terminal_value(scenario, snapshots[-1].position(scenario))
    cashflows = build_cashflows(upfront, snapshots, scenario, terminal)
    value = npv_fn(discount_rate, cashflows)
    ensure_finite(f"NPV of scenario {scenario.value}", value, terminal)
    return ScenarioResult(
        scenario=scenario,
        label=label,
        npv=value,
        terminal_value=terminal,
        cashflows=tuple(cashflows),
    )


def rank(results: Iterable[ScenarioResult]) -> List[ScenarioResult]:
    """Highest NPV first; sorted() is stable so ties keep A, B, C, D order."""
    return sorted(results, key=lambda r: r.npv, reverse=True)


def best_scenario(results: Iterable[ScenarioResult]) -> ScenarioResult:
    ranked = rank(results)
    if not ranked:
        raise ValueError("no scenario results to rank")
    return ranked[0]
