"""
Downsizing analyzer.

Projects four housing strategies (sell and rent, sell and buy smaller, sell
and rent with storage, keep the current home) over a fixed horizon and ranks
them by the net present value of their cash flows plus terminal assets.
"""

from .core import (
    ComputationError,
    DownsizingModel,
    InputValidationError,
    ParameterSet,
    ProjectionResult,
    Scenario,
    ScenarioResult,
    YearlySnapshot,
    run,
)

__all__ = [
    "ComputationError",
    "DownsizingModel",
    "InputValidationError",
    "ParameterSet",
    "ProjectionResult",
    "Scenario",
    "ScenarioResult",
    "YearlySnapshot",
    "run",
]
