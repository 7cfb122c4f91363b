from __future__ import annotations

from dataclasses import dataclass


def capital_gains_tax(gain: float, eff_rate: float) -> float:
    """Compute effective capital gains tax.

    Negative gains are not taxed.
    """
    if eff_rate <= 0 or gain <= 0:
        return 0.0
    return gain * eff_rate


@dataclass(frozen=True)
class SaleBreakdown:
    sale_price: float
    selling_costs: float
    equity_before_tax: float
    capital_gains_tax: float
    net_proceeds: float


def sale_proceeds(
    price: float,
    mortgage_balance: float,
    selling_cost_rate: float,
    cap_gains_rate: float,
) -> SaleBreakdown:
    """Cash left after selling the current home.

    The tax base is the equity after selling costs, so an underwater sale
    pays no tax and may leave negative proceeds.
    """
    selling_costs = price * selling_cost_rate
    equity_before_tax = price - mortgage_balance - selling_costs
    tax = capital_gains_tax(equity_before_tax, cap_gains_rate)
    return SaleBreakdown(
        sale_price=float(price),
        selling_costs=selling_costs,
        equity_before_tax=equity_before_tax,
        capital_gains_tax=tax,
        net_proceeds=equity_before_tax - tax,
    )
