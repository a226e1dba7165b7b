# pension_model/engines/scenarios.py
"""
Scenario generator: enumerates what-if variants and scores each one.

Variants are small frozen dataclasses (``WorkLonger``, ``ExtraIncome``,
``Raise``, ``Combined``). ``evaluate_variant`` scores any single variant;
the ``generate_*`` functions walk the configured grids. Nothing here has
side effects.
"""

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Union

import numpy as np

from pension_model.config.models import DEFAULT_CONFIG, EconomicConstants, EngineConfig, ScenarioGrids
from pension_model.schema import EffortTier, ScenarioColumns, StrategyTag
from pension_model.utils.money import round_ratio, to_money

from .contributions import annual_contribution, project_final_salary
from .projection import later_retirement_bonus

logger = logging.getLogger(__name__)


# --- Variants ---


@dataclass(frozen=True)
class WorkLonger:
    years: int
    tag: ClassVar[StrategyTag] = StrategyTag.WORK_LONGER


@dataclass(frozen=True)
class ExtraIncome:
    monthly_amount: float
    duration_years: int
    tag: ClassVar[StrategyTag] = StrategyTag.EXTRA_INCOME


@dataclass(frozen=True)
class Raise:
    annual_rate: float
    tag: ClassVar[StrategyTag] = StrategyTag.RAISE


@dataclass(frozen=True)
class Combined:
    """Work longer and earn extra income at the same time."""

    work_longer_years: int
    monthly_amount: float
    duration_years: int
    tag: ClassVar[StrategyTag] = StrategyTag.COMBINED


ScenarioVariant = Union[WorkLonger, ExtraIncome, Raise, Combined]


@dataclass(frozen=True)
class ScenarioResult:
    """Score of one variant against a base pension."""

    variant: ScenarioVariant
    pension: float
    increase: float
    percentage_increase: float
    meets_goal: bool
    effort: Optional[EffortTier] = None
    final_salary: Optional[float] = None

    @property
    def strategy(self) -> StrategyTag:
        return self.variant.tag

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into one record keyed by ``ScenarioColumns``."""
        v = self.variant
        return {
            ScenarioColumns.STRATEGY.value: self.strategy.value,
            ScenarioColumns.WORK_LONGER_YEARS.value: getattr(v, "years", getattr(v, "work_longer_years", None)),
            ScenarioColumns.EXTRA_MONTHLY_INCOME.value: getattr(v, "monthly_amount", None),
            ScenarioColumns.DURATION_YEARS.value: getattr(v, "duration_years", None),
            ScenarioColumns.ANNUAL_RAISE_RATE.value: getattr(v, "annual_rate", None),
            ScenarioColumns.PENSION.value: self.pension,
            ScenarioColumns.INCREASE.value: self.increase,
            ScenarioColumns.PERCENTAGE_INCREASE.value: self.percentage_increase,
            ScenarioColumns.MEETS_GOAL.value: self.meets_goal,
            ScenarioColumns.EFFORT.value: self.effort.value if self.effort is not None else None,
            ScenarioColumns.FINAL_SALARY.value: self.final_salary,
        }


# --- Helpers ---


def percentage_increase(increase: float, base_pension: float) -> float:
    """Increase as a percentage of the base, two decimals; 0 for a zero base."""
    if base_pension == 0:
        return 0.0
    return round_ratio(increase / base_pension * 100, 2)


def income_effort(monthly_amount: float, grids: ScenarioGrids = DEFAULT_CONFIG.scenarios) -> EffortTier:
    if monthly_amount >= grids.high_effort_income:
        return EffortTier.HIGH
    if monthly_amount >= grids.medium_effort_income:
        return EffortTier.MEDIUM
    return EffortTier.LOW


def extra_income_uplift(
    monthly_amount: float, duration_years: float, constants: EconomicConstants = DEFAULT_CONFIG.economics
) -> float:
    """Monthly benefit gained from extra income paid in for ``duration_years``."""
    contributions = annual_contribution(monthly_amount, constants.contribution_rate) * duration_years
    return contributions / constants.standard_payout_months


def _result(
    variant: ScenarioVariant,
    base_pension: float,
    new_pension: float,
    target: Optional[float],
    effort: Optional[EffortTier] = None,
    final_salary: Optional[float] = None,
) -> ScenarioResult:
    increase = new_pension - base_pension
    return ScenarioResult(
        variant=variant,
        pension=to_money(new_pension),
        increase=to_money(increase),
        percentage_increase=percentage_increase(increase, base_pension),
        meets_goal=target is not None and new_pension >= target,
        effort=effort,
        final_salary=final_salary,
    )


# --- Evaluation ---


def evaluate_variant(
    variant: ScenarioVariant,
    base_pension: float,
    salary: float,
    years_until_retirement: int = 0,
    target: Optional[float] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> ScenarioResult:
    """
    Score a single variant against ``base_pension``.

    Args:
        variant: The what-if to evaluate.
        base_pension: Current projected monthly benefit.
        salary: Current gross monthly salary.
        years_until_retirement: Remaining working horizon; grows the salary
            used by work-longer variants and bounds raise trajectories.
        target: Optional desired benefit, sets ``meets_goal``.
        config: Engine configuration.

    Returns:
        A ``ScenarioResult``.
    """
    economics = config.economics

    if isinstance(variant, WorkLonger):
        final_salary = project_final_salary(salary, years_until_retirement, 0, economics.wage_growth_rate)
        new_pension = later_retirement_bonus(base_pension, variant.years, final_salary, economics)
        return _result(variant, base_pension, new_pension, target)

    if isinstance(variant, ExtraIncome):
        uplift = extra_income_uplift(variant.monthly_amount, variant.duration_years, economics)
        effort = income_effort(variant.monthly_amount, config.scenarios)
        return _result(variant, base_pension, base_pension + uplift, target, effort=effort)

    if isinstance(variant, Raise):
        years = max(0, years_until_retirement)
        # Salary rises before each year's contribution is paid.
        salaries = salary * np.power(1.0 + variant.annual_rate, np.arange(1, years + 1, dtype=float))
        contributions = float(np.sum(salaries)) * 12 * economics.contribution_rate
        final_salary = float(salaries[-1]) if years else salary
        new_pension = contributions / economics.standard_payout_months
        return _result(variant, base_pension, new_pension, target, final_salary=round(final_salary))

    if isinstance(variant, Combined):
        final_salary = project_final_salary(salary, years_until_retirement, 0, economics.wage_growth_rate)
        after_work = later_retirement_bonus(base_pension, variant.work_longer_years, final_salary, economics)
        uplift = extra_income_uplift(variant.monthly_amount, variant.duration_years, economics)
        effort = income_effort(variant.monthly_amount, config.scenarios)
        return _result(variant, base_pension, after_work + uplift, target, effort=effort)

    raise TypeError(f"Unsupported scenario variant: {variant!r}")


# --- Generators ---


def generate_work_longer_scenarios(
    pension: float,
    salary: float,
    target: Optional[float] = None,
    years_until_retirement: int = 0,
    config: EngineConfig = DEFAULT_CONFIG,
) -> List[ScenarioResult]:
    """One result per extra working year in the grid (1-10 by default), in grid order."""
    return [
        evaluate_variant(WorkLonger(years), pension, salary, years_until_retirement, target, config)
        for years in config.scenarios.work_longer_years
    ]


def generate_extra_income_scenarios(
    pension: float,
    salary: float,
    target: Optional[float] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> List[ScenarioResult]:
    """
    Cross product of the income and duration grids, best percentage gain first.

    ``salary`` is accepted for interface symmetry; the uplift depends only on
    the extra income itself.
    """
    grids = config.scenarios
    results = [
        evaluate_variant(ExtraIncome(income, duration), pension, salary, 0, target, config)
        for income in grids.extra_incomes
        for duration in grids.extra_income_durations
    ]
    results.sort(key=lambda r: r.percentage_increase, reverse=True)
    logger.debug(f"Generated {len(results)} extra-income scenarios")
    return results


def generate_raise_scenarios(
    pension: float,
    salary: float,
    years_until_retirement: int,
    target: Optional[float] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> List[ScenarioResult]:
    """
    Pension from contributions alone under each annual raise rate.

    The resulting pension is built from the remaining horizon's
    contributions only, so ``increase`` can be negative for short horizons.
    """
    return [
        evaluate_variant(Raise(rate), pension, salary, years_until_retirement, target, config)
        for rate in config.scenarios.raise_rates
    ]


def overtime_monthly_income(salary: float, hours_per_week: float, constants: EconomicConstants) -> float:
    """Extra monthly pay for ``hours_per_week`` paid at the salary's hourly rate."""
    hourly = salary / constants.working_hours_per_month
    return hourly * hours_per_week * constants.weeks_per_month


def generate_overtime_scenarios(
    pension: float,
    salary: float,
    years_until_retirement: int,
    target: Optional[float] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> List[ScenarioResult]:
    """Extra weekly hours kept up until retirement, scored as extra income."""
    if years_until_retirement <= 0:
        return []
    return [
        evaluate_variant(
            ExtraIncome(
                round(overtime_monthly_income(salary, hours, config.economics), 2),
                years_until_retirement,
            ),
            pension,
            salary,
            years_until_retirement,
            target,
            config,
        )
        for hours in config.scenarios.overtime_hours_per_week
    ]


__all__ = [
    "WorkLonger",
    "ExtraIncome",
    "Raise",
    "Combined",
    "ScenarioVariant",
    "ScenarioResult",
    "percentage_increase",
    "income_effort",
    "extra_income_uplift",
    "evaluate_variant",
    "generate_work_longer_scenarios",
    "generate_extra_income_scenarios",
    "generate_raise_scenarios",
    "overtime_monthly_income",
    "generate_overtime_scenarios",
]
