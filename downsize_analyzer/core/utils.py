from __future__ import annotations

import math
from typing import Iterable


class ComputationError(ArithmeticError):
    """A projection produced a non-finite value."""


def grow(value: float, annual_rate: float, years: int = 1) -> float:
    if years <= 0:
        return value
    try:
        return value * (1 + annual_rate) ** years
    except OverflowError as exc:
        raise ComputationError(f"growth overflowed: {exc}") from exc


def npv(rate: float, cashflows: Iterable[float]) -> float:
    """Net present value for a series of cashflows CF_t at t=0..N.

    NPV = sum(CF_t / (1 + rate)^t)
    """
    total = 0.0
    try:
        for t, cf in enumerate(cashflows):
            total += cf / ((1 + rate) ** t)
    except OverflowError as exc:
        raise ComputationError(f"NPV overflowed at rate {rate!r}: {exc}") from exc
    return total


def ensure_finite(name: str, *values: float) -> None:
    for value in values:
        if not math.isfinite(value):
            raise ComputationError(f"{name} is not finite ({value!r})")
