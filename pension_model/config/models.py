# pension_model/config/models.py
"""
Pydantic models for the engine configuration: economic constants, scenario
grids, advisor thresholds, benchmark groups and upstream input limits.

Every model carries working defaults, so ``EngineConfig()`` is a complete
configuration. YAML overlays (see ``loaders.py``) only need to name the
values they change.
"""

import logging
from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pension_model.schema import Sex, ValidationLimits

logger = logging.getLogger(__name__)

# --- Low-level Reusable Models ---


class SexSpecific(BaseModel):
    """A value that differs between the two statutory sexes."""

    model_config = ConfigDict(frozen=True)

    male: float = Field(..., ge=0.0)
    female: float = Field(..., ge=0.0)

    def for_sex(self, sex: Sex) -> float:
        return self.male if Sex(sex) is Sex.MALE else self.female


class BenchmarkGroup(BaseModel):
    """A national benefit band used to place a projected pension in context."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    amount: float = Field(..., ge=0.0)
    description: str = ""


def _default_benchmark_groups() -> List[BenchmarkGroup]:
    return [
        BenchmarkGroup(
            id="below-minimum",
            name="Below minimum",
            amount=1800,
            description="Contribution record shorter than the qualifying period for the minimum benefit.",
        ),
        BenchmarkGroup(
            id="minimum",
            name="Minimum benefit",
            amount=2000,
            description="Guaranteed minimum for a full qualifying contribution record.",
        ),
        BenchmarkGroup(
            id="average",
            name="Average benefit",
            amount=3500,
            description="Typical career length and earnings.",
        ),
        BenchmarkGroup(
            id="above-average",
            name="Above average",
            amount=5000,
            description="Longer careers, higher earnings and a regular contribution history.",
        ),
        BenchmarkGroup(
            id="high",
            name="High benefit",
            amount=8000,
            description="Long careers with high earnings and a complete contribution history.",
        ),
    ]


# --- Economic Constants ---


class EconomicConstants(BaseModel):
    """Fixed economic parameters consulted by every projection formula."""

    model_config = ConfigDict(frozen=True)

    contribution_rate: float = Field(
        0.1976, gt=0.0, le=1.0, description="Share of gross salary paid into the primary account"
    )
    wage_growth_rate: float = Field(
        0.04, ge=0.0, description="Default annual nominal wage growth"
    )
    inflation_rate: float = Field(
        0.02, ge=0.0, description="Default annual inflation used to discount to today's money"
    )
    national_average_benefit: float = Field(
        3500.0, ge=0.0, description="Average monthly benefit paid nationally (reference only)"
    )
    retirement_age: SexSpecific = Field(
        default_factory=lambda: SexSpecific(male=65, female=60),
        description="Statutory retirement age in years",
    )
    sick_days_per_year: SexSpecific = Field(
        default_factory=lambda: SexSpecific(male=12, female=16),
        description="Average sick-leave days per working year",
    )
    payout_years: SexSpecific = Field(
        default_factory=lambda: SexSpecific(male=18, female=24),
        description="Assumed years of benefit payout used to amortise the nominal benefit",
    )
    standard_payout_years: float = Field(
        18.0, gt=0.0, description="Payout horizon used by bonus, scenario and advisor formulas"
    )
    sick_leave_contribution_factor: float = Field(
        0.8, ge=0.0, le=1.0, description="Share of normal contributions accrued while on sick leave"
    )
    working_days_per_month: float = Field(21.67, gt=0.0)
    working_hours_per_month: float = Field(168.0, gt=0.0)
    weeks_per_month: float = Field(4.33, gt=0.0)

    @property
    def standard_payout_months(self) -> float:
        return self.standard_payout_years * 12

    def payout_months(self, sex: Sex) -> float:
        return self.payout_years.for_sex(sex) * 12

    def statutory_retirement_age(self, sex: Sex) -> int:
        return int(self.retirement_age.for_sex(sex))


# --- Scenario Grids ---


class ScenarioGrids(BaseModel):
    """Parameter grids enumerated by the scenario generator."""

    model_config = ConfigDict(frozen=True)

    work_longer_years: List[int] = Field(default_factory=lambda: list(range(1, 11)))
    extra_incomes: List[float] = Field(default_factory=lambda: [300, 500, 800, 1000, 1500, 2000])
    extra_income_durations: List[int] = Field(default_factory=lambda: [1, 2, 3, 5, 7, 10])
    raise_rates: List[float] = Field(default_factory=lambda: [0.03, 0.05, 0.07, 0.10])
    overtime_hours_per_week: List[int] = Field(default_factory=lambda: [1, 2, 3, 4])
    later_retirement_years: List[int] = Field(default_factory=lambda: [1, 2, 5])
    high_effort_income: float = Field(1500.0, gt=0.0)
    medium_effort_income: float = Field(800.0, gt=0.0)

    @model_validator(mode="after")
    def check_grids(self) -> "ScenarioGrids":
        """Validate that every grid is non-empty and strictly positive."""
        for name in (
            "work_longer_years",
            "extra_incomes",
            "extra_income_durations",
            "raise_rates",
            "overtime_hours_per_week",
            "later_retirement_years",
        ):
            values = getattr(self, name)
            if not values:
                raise ValueError(f"Scenario grid '{name}' must not be empty")
            if any(v <= 0 for v in values):
                raise ValueError(f"Scenario grid '{name}' must contain positive values, got {values}")
        if self.medium_effort_income > self.high_effort_income:
            raise ValueError("medium_effort_income cannot exceed high_effort_income")
        return self


# --- Advisor Thresholds ---


class AdvisorThresholds(BaseModel):
    """Policy table for the goal advisor: windows, ceilings and effort tiers."""

    model_config = ConfigDict(frozen=True)

    max_suggestions: int = Field(4, ge=1)
    # Fastest path
    fast_window_short_years: int = Field(3, gt=0)
    fast_window_long_years: int = Field(5, gt=0)
    fast_window_gap_threshold: float = Field(1500.0, ge=0.0)
    income_ceiling: float = Field(3000.0, gt=0.0, description="Largest extra monthly income we will suggest")
    fast_high_effort_income: float = Field(2000.0, gt=0.0)
    fast_medium_effort_income: float = Field(1000.0, gt=0.0)
    # Balanced path
    balanced_work_longer_share: float = Field(0.2, gt=0.0, description="Extra working time as a share of the remaining horizon")
    balanced_short_years: int = Field(5, gt=0)
    balanced_long_years: int = Field(10, gt=0)
    balanced_gap_threshold: float = Field(1000.0, ge=0.0)
    # Effortless path
    max_work_longer_years: int = Field(10, gt=0)
    # Investment path
    investment_annual_return: float = Field(0.05, gt=0.0)
    investment_ceiling: float = Field(1500.0, gt=0.0)
    # Realistic fallback
    fallback_min_suggestions: int = Field(2, ge=0)
    fallback_gap_threshold: float = Field(1500.0, ge=0.0)
    fallback_target_uplift: float = Field(0.3, gt=0.0)
    fallback_duration_years: int = Field(7, gt=0)
    fallback_income_ceiling: float = Field(2000.0, gt=0.0)
    # Rounding of suggested monthly amounts
    amount_step: float = Field(50.0, gt=0.0)

    @model_validator(mode="after")
    def check_ordering(self) -> "AdvisorThresholds":
        """Ensure windows and tiers are ordered the way the search expects."""
        if self.fast_window_short_years > self.fast_window_long_years:
            raise ValueError("fast_window_short_years cannot exceed fast_window_long_years")
        if self.balanced_short_years > self.balanced_long_years:
            raise ValueError("balanced_short_years cannot exceed balanced_long_years")
        if self.fast_medium_effort_income > self.fast_high_effort_income:
            raise ValueError("fast_medium_effort_income cannot exceed fast_high_effort_income")
        if self.investment_ceiling > self.income_ceiling:
            logger.warning(
                f"investment_ceiling ({self.investment_ceiling}) is above income_ceiling ({self.income_ceiling})"
            )
        return self


# --- Root Model ---


class EngineConfig(BaseModel):
    """Root configuration handed to the projection engine, scenarios and advisor."""

    model_config = ConfigDict(frozen=True)

    economics: EconomicConstants = Field(default_factory=EconomicConstants)
    scenarios: ScenarioGrids = Field(default_factory=ScenarioGrids)
    advisor: AdvisorThresholds = Field(default_factory=AdvisorThresholds)
    limits: ValidationLimits = Field(default_factory=ValidationLimits)
    benchmark_groups: List[BenchmarkGroup] = Field(default_factory=_default_benchmark_groups)
    currency: str = "PLN"

    @model_validator(mode="after")
    def check_benchmarks(self) -> "EngineConfig":
        """Benchmark groups must be listed in ascending amount order with unique ids."""
        amounts = [g.amount for g in self.benchmark_groups]
        if amounts != sorted(amounts):
            raise ValueError("benchmark_groups must be ordered by ascending amount")
        ids = [g.id for g in self.benchmark_groups]
        if len(ids) != len(set(ids)):
            raise ValueError("benchmark_groups ids must be unique")
        return self


DEFAULT_CONFIG = EngineConfig()

__all__ = [
    "SexSpecific",
    "BenchmarkGroup",
    "EconomicConstants",
    "ScenarioGrids",
    "AdvisorThresholds",
    "ValidationLimits",
    "EngineConfig",
    "DEFAULT_CONFIG",
]
