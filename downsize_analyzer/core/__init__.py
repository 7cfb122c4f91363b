from .amortization import (
    LoanState,
    advance_year,
    aggregate_yearly,
    amort_schedule,
    fixed_monthly_payment,
)
from .inputs import Assumptions, InputValidationError, ParameterSet
from .model import DownsizingModel, ProjectionResult, run
from .returns import net_return_pct
from .scenarios import (
    Scenario,
    ScenarioPosition,
    ScenarioResult,
    YearlySnapshot,
    best_scenario,
    rank,
)
from .taxes import SaleBreakdown, capital_gains_tax, sale_proceeds
from .utils import ComputationError, grow, npv

__all__ = [
	"LoanState",
	"advance_year",
	"aggregate_yearly",
	"amort_schedule",
	"fixed_monthly_payment",
	"Assumptions",
	"InputValidationError",
	"ParameterSet",
	"DownsizingModel",
	"ProjectionResult",
	"run",
	"net_return_pct",
	"Scenario",
	"ScenarioPosition",
	"ScenarioResult",
	"YearlySnapshot",
	"best_scenario",
	"rank",
	"SaleBreakdown",
	"capital_gains_tax",
	"sale_proceeds",
	"ComputationError",
	"grow",
	"npv",
]
