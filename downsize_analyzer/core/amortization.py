from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

import pandas as pd

from .inputs import MONTHS_IN_YEAR


PAYOFF_EPSILON: Final[float] = 1e-6


class LoanState(str, Enum):
    ACCRUING = "accruing"
    PAID_OFF = "paid_off"


def fixed_monthly_payment(principal: float, annual_rate: float, years: int) -> float:
    """Compute the fixed monthly payment for a fully amortizing loan.

    Parameters
    ----------
    principal : float
        Initial loan amount.
    annual_rate : float
        Nominal annual interest rate as a decimal (e.g., 0.065 for 6.5%).
    years : int
        Loan term in years.

    Returns
    -------
    float
        The constant monthly payment. Straight-line when the rate is zero.
    """
    n_months = years * MONTHS_IN_YEAR
    if principal <= 0 or n_months <= 0:
        return 0.0
    monthly_rate = annual_rate / MONTHS_IN_YEAR
    if monthly_rate == 0:
        return principal / n_months
    return principal * monthly_rate / (1 - (1 + monthly_rate) ** (-n_months))


def state_of(balance: float) -> LoanState:
    return LoanState.PAID_OFF if balance <= PAYOFF_EPSILON else LoanState.ACCRUING


@dataclass(frozen=True)
class MonthStep:
    interest: float
    principal: float
    balance: float
    state: LoanState


def advance_month(balance: float, payment: float, monthly_rate: float) -> MonthStep:
    """Apply one monthly payment to an accruing balance."""
    interest = balance * monthly_rate
    # Capped at the balance so the loan never goes negative; floored at zero
    # so the balance never grows when the payment cannot cover interest.
    principal = max(0.0, min(payment - interest, balance))
    new_balance = balance - principal
    return MonthStep(
        interest=interest,
        principal=principal,
        balance=new_balance,
        state=state_of(new_balance),
    )


@dataclass(frozen=True)
class LoanYear:
    start_balance: float
    end_balance: float
    interest: float
    principal: float
    months_paid: int
    state: LoanState

    @property
    def paid_off_this_year(self) -> bool:
        return self.state is LoanState.PAID_OFF and self.months_paid > 0


def advance_year(balance: float, payment: float, monthly_rate: float) -> LoanYear:
    """Advance a loan balance through one year of monthly payments.

    Once the balance reaches PAYOFF_EPSILON the loan is PAID_OFF: the
    remaining months of the year, and every later year, accrue nothing.
    """
    state = state_of(balance)
    current = balance
    interest_paid = 0.0
    principal_paid = 0.0
    months = 0
    while state is LoanState.ACCRUING and months < MONTHS_IN_YEAR:
        step = advance_month(current, payment, monthly_rate)
        interest_paid += step.interest
        principal_paid += step.principal
        current = step.balance
        state = step.state
        months += 1
    return LoanYear(
        start_balance=balance,
        end_balance=max(current, 0.0),
        interest=interest_paid,
        principal=principal_paid,
        months_paid=months,
        state=state,
    )


def amort_schedule(principal: float, annual_rate: float, years: int) -> pd.DataFrame:
    """Generate a monthly amortization schedule.

    Columns: month (1..N), payment, interest, principal, balance

    Rows stop at the month the loan is paid off.
    """
    columns = ["month", "payment", "interest", "principal", "balance"]
    n_months = years * MONTHS_IN_YEAR
    if n_months <= 0 or principal <= 0:
        return pd.DataFrame(columns=columns, data=[])

    payment = fixed_monthly_payment(principal, annual_rate, years)
    monthly_rate = annual_rate / MONTHS_IN_YEAR

    rows = []
    balance = float(principal)
    for m in range(1, n_months + 1):
        step = advance_month(balance, payment, monthly_rate)
        rows.append(
            {
                "month": m,
                "payment": float(step.interest + step.principal),
                "interest": float(step.interest),
                "principal": float(step.principal),
                "balance": float(max(step.balance, 0.0)),
            }
        )
        balance = step.balance
        if step.state is LoanState.PAID_OFF:
            break

    return pd.DataFrame(rows, columns=columns)


def aggregate_yearly(schedule: pd.DataFrame) -> pd.DataFrame:
    """Aggregate a monthly amortization schedule by year.

    Returns a DataFrame with columns: year, payment, interest, principal, end_balance
    """
    if schedule.empty:
        return pd.DataFrame(
            columns=["year", "payment", "interest", "principal", "end_balance"],
            data=[],
        )

    schedule = schedule.copy()
    schedule["year"] = (schedule["month"] - 1) // MONTHS_IN_YEAR + 1
    agg = (
        schedule.groupby("year", as_index=False)[["payment", "interest", "principal"]]
        .sum()
        .sort_values("year")
    )
    end_balances = (
        schedule.groupby("year", as_index=False)["balance"].last().rename(columns={"balance": "end_balance"})
    )
    return agg.merge(end_balances, on="year", how="left")
