from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .inputs import ParameterSet


def net_return_pct(params: "ParameterSet") -> float:
    """Annual investment return after adjustment and tax drag, in percent.

    The baseline is either the index-tracking CAGR assumption or the manual
    rate, never both.
    """
    baseline = params.index_return_pct if params.use_index_return else params.manual_return_pct
    return baseline + params.return_adjust_pct - params.tax_drag_pct
