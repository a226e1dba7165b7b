"""
Column definitions for the DataFrames exported by the reference layer and
the reporting helpers.
"""

from enum import Enum
from typing import List


class IndexationColumns(str, Enum):
    """Columns of ``IndexationSeries.to_frame()``."""

    YEAR = "year"
    QUARTER = "quarter"
    PRIMARY_FACTOR = "primary_factor"
    SUB_FACTOR = "sub_factor"

    @classmethod
    def ordered(cls) -> List[str]:
        return [c.value for c in cls]


class ScenarioColumns(str, Enum):
    """Columns of ``scenarios_to_frame()``."""

    STRATEGY = "strategy"
    WORK_LONGER_YEARS = "work_longer_years"
    EXTRA_MONTHLY_INCOME = "extra_monthly_income"
    DURATION_YEARS = "duration_years"
    ANNUAL_RAISE_RATE = "annual_raise_rate"
    PENSION = "pension"
    INCREASE = "increase"
    PERCENTAGE_INCREASE = "percentage_increase"
    MEETS_GOAL = "meets_goal"
    EFFORT = "effort"
    FINAL_SALARY = "final_salary"

    @classmethod
    def ordered(cls) -> List[str]:
        return [c.value for c in cls]


class SuggestionColumns(str, Enum):
    """Columns of ``suggestions_to_frame()``."""

    ID = "id"
    STRATEGY = "strategy"
    TITLE = "title"
    DESCRIPTION = "description"
    EFFORT = "effort"
    TIMEFRAME_YEARS = "timeframe_years"

    @classmethod
    def ordered(cls) -> List[str]:
        return [c.value for c in cls]


__all__ = ["IndexationColumns", "ScenarioColumns", "SuggestionColumns"]
