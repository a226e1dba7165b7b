"""
Shared schema for the pension model.

Enumerations for the categorical fields that flow between the reference
data, the projection engine, the scenario generator and the advisor, plus
the column names used when results are exported as DataFrames.

Example Usage:
    >>> from pension_model.schema import Sex, Quarter
    >>> Quarter.from_label("iv").ordinal
    3
"""

from .enums import EffortTier, Quarter, Sex, StrategyTag
from .limits import DEFAULT_LIMITS, ValidationLimits
from .career import CareerRecord
from .columns import IndexationColumns, ScenarioColumns, SuggestionColumns

__all__ = [
    # Enumerations
    "Sex",
    "Quarter",
    "EffortTier",
    "StrategyTag",
    # Engine input
    "CareerRecord",
    "ValidationLimits",
    "DEFAULT_LIMITS",
    # Column definitions
    "IndexationColumns",
    "ScenarioColumns",
    "SuggestionColumns",
]
