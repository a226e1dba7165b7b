# pension_model/engines/advisor.py
"""
Goal advisor: measures the gap to a desired benefit and proposes up to four
feasible ways to close it.

Strategies are tried in a fixed priority order (fastest, balanced,
effortless, investment) and each is dropped silently when its monthly cost
exceeds the affordability ceiling in ``AdvisorThresholds``. When fewer than
the configured minimum survive and the gap is large, a realistic fallback
with a reduced target is offered.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pension_model.config.models import DEFAULT_CONFIG, EconomicConstants, EngineConfig
from pension_model.schema import EffortTier, Sex, StrategyTag
from pension_model.utils.money import round_ratio, round_up_to_step, to_money

from .projection import later_retirement_bonus, years_needed_for_goal

logger = logging.getLogger(__name__)

GOAL_MET_MESSAGE = "Congratulations! Your projected benefit already meets your goal."

# Fixed pros and cons shown with each suggestion
_PROS: Dict[str, Tuple[str, ...]] = {
    "fastest": ("Fastest result", "Short period of effort", "Concrete plan"),
    "balanced": ("Moderate effort", "Realistic", "Flexible"),
    "effortless": ("No additional effort", "Predictable", "Simple"),
    "investment": ("Tax relief", "Long-term", "Passive"),
    "realistic": ("Achievable", "Flexible", "Still a significant improvement"),
}
_CONS: Dict[str, Tuple[str, ...]] = {
    "balanced": ("Takes longer", "Requires discipline"),
    "effortless": ("Late retirement", "Long wait"),
    "investment": ("Requires discipline", "Market risk"),
    "realistic": ("Requires lowering expectations", "Medium effort"),
}


@dataclass(frozen=True)
class GapAnalysis:
    gap: float
    gap_percentage: float
    has_gap: bool
    meets_goal: bool


@dataclass(frozen=True)
class SuggestedPath:
    """One recommended strategy. Built and owned by the advisor; never mutated."""

    id: str
    strategy: StrategyTag
    title: str
    description: str
    effort: EffortTier
    timeframe_years: int
    details: Mapping[str, Any] = field(default_factory=dict)
    pros: Tuple[str, ...] = ()
    cons: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "strategy": self.strategy.value,
            "title": self.title,
            "description": self.description,
            "effort": self.effort.value,
            "timeframe_years": self.timeframe_years,
            "details": dict(self.details),
            "pros": list(self.pros),
            "cons": list(self.cons),
        }


@dataclass(frozen=True)
class AdvisorResult:
    needs_suggestions: bool
    suggestions: Tuple[SuggestedPath, ...] = ()
    gap: Optional[float] = None
    gap_percentage: Optional[float] = None
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "needs_suggestions": self.needs_suggestions,
            "gap": self.gap,
            "gap_percentage": self.gap_percentage,
            "message": self.message,
            "suggestions": [s.to_dict() for s in self.suggestions],
        }


def compute_gap(current: float, target: float) -> GapAnalysis:
    """Gap between the target and the current benefit, in money and as a share of the target."""
    gap = target - current
    gap_percentage = round_ratio(gap / target * 100, 2) if target != 0 else 0.0
    return GapAnalysis(
        gap=to_money(gap),
        gap_percentage=gap_percentage,
        has_gap=gap > 0,
        meets_goal=gap <= 0,
    )


# --- Sizing helpers ---


def extra_income_for_goal(
    gap: float, duration_years: int, constants: EconomicConstants, step: float = 50.0
) -> float:
    """Extra monthly income that closes ``gap`` when paid in for ``duration_years``."""
    funds_needed = gap * constants.standard_payout_months
    monthly = funds_needed / (duration_years * 12 * constants.contribution_rate)
    return round_up_to_step(monthly, step)


def monthly_investment_for_goal(
    goal: float, years: int, annual_return: float, step: float = 50.0
) -> Optional[float]:
    """
    Monthly saving whose annuity future value reaches ``goal`` after ``years``.

    ``None`` when there is no saving horizon.
    """
    months = years * 12
    if months <= 0:
        return None
    rate = annual_return / 12
    annuity_factor = ((1 + rate) ** months - 1) / rate
    return round_up_to_step(goal / annuity_factor, step)


def _fmt(amount: float) -> str:
    return f"{amount:,.0f}"


# --- Strategies ---


def _fastest(gap: float, currency: str, config: EngineConfig) -> Optional[SuggestedPath]:
    policy = config.advisor
    if gap > policy.fast_window_gap_threshold:
        duration = policy.fast_window_long_years
    else:
        duration = policy.fast_window_short_years
    extra = extra_income_for_goal(gap, duration, config.economics, policy.amount_step)
    if extra > policy.income_ceiling:
        logger.debug(f"Fastest path dropped: {extra} {currency}/month exceeds ceiling {policy.income_ceiling}")
        return None

    if extra >= policy.fast_high_effort_income:
        effort = EffortTier.HIGH
    elif extra >= policy.fast_medium_effort_income:
        effort = EffortTier.MEDIUM
    else:
        effort = EffortTier.LOW
    return SuggestedPath(
        id="fastest",
        strategy=StrategyTag.EXTRA_INCOME,
        title=f"Fastest ({duration} years)",
        description=f"Extra income of +{_fmt(extra)} {currency}/month for {duration} years",
        effort=effort,
        timeframe_years=duration,
        details={
            "extra_monthly_income": extra,
            "duration_years": duration,
            "total_earned": extra * 12 * duration,
        },
        pros=_PROS["fastest"],
        cons=(
            "Requires additional work",
            "High pace" if effort is EffortTier.HIGH else "Requires discipline",
        ),
    )


def _balanced(
    current: float, target: float, salary: float, years_until_retirement: int, currency: str, config: EngineConfig
) -> Optional[SuggestedPath]:
    policy = config.advisor
    work_longer = int(math.ceil(years_until_retirement * policy.balanced_work_longer_share))
    after_work = later_retirement_bonus(current, work_longer, salary, config.economics)
    residual = target - after_work
    if residual <= 0:
        logger.debug(f"Balanced path skipped: working {work_longer} years longer already meets the goal")
        return None

    if residual > policy.balanced_gap_threshold:
        duration = policy.balanced_long_years
    else:
        duration = policy.balanced_short_years
    extra = extra_income_for_goal(residual, duration, config.economics, policy.amount_step)
    if extra > policy.income_ceiling:
        logger.debug(f"Balanced path dropped: {extra} {currency}/month exceeds ceiling {policy.income_ceiling}")
        return None

    return SuggestedPath(
        id="balanced",
        strategy=StrategyTag.COMBINED,
        title=f"Balanced ({duration + work_longer} years)",
        description=(
            f"+{_fmt(extra)} {currency}/month for {duration} years and work {work_longer} years longer"
        ),
        effort=EffortTier.MEDIUM,
        timeframe_years=duration + work_longer,
        details={
            "extra_monthly_income": extra,
            "duration_years": duration,
            "work_longer_years": work_longer,
            "total_earned": extra * 12 * duration,
        },
        pros=_PROS["balanced"],
        cons=_CONS["balanced"],
    )


def _effortless(
    current: float, target: float, salary: float, retirement_age: int, config: EngineConfig
) -> Optional[SuggestedPath]:
    try:
        years = years_needed_for_goal(current, target, salary, config.economics)
    except ValueError as e:
        logger.debug(f"Effortless path skipped: {e}")
        return None
    if years > config.advisor.max_work_longer_years:
        logger.debug(f"Effortless path dropped: {years} extra years exceeds {config.advisor.max_work_longer_years}")
        return None

    return SuggestedPath(
        id="effortless",
        strategy=StrategyTag.WORK_LONGER,
        title="Effortless",
        description=f"Simply work {years} years longer",
        effort=EffortTier.LOW,
        timeframe_years=years,
        details={"work_longer_years": years, "retirement_age": retirement_age + years},
        pros=_PROS["effortless"],
        cons=_CONS["effortless"],
    )


def _investment(gap: float, years_until_retirement: int, currency: str, config: EngineConfig) -> Optional[SuggestedPath]:
    policy = config.advisor
    monthly = monthly_investment_for_goal(
        gap, years_until_retirement, policy.investment_annual_return, policy.amount_step
    )
    if monthly is None:
        logger.debug("Investment path skipped: no saving horizon before retirement")
        return None
    if monthly > policy.investment_ceiling:
        logger.debug(f"Investment path dropped: {monthly} {currency}/month exceeds {policy.investment_ceiling}")
        return None

    return SuggestedPath(
        id="investment",
        strategy=StrategyTag.INVESTMENT,
        title="Long-term investing",
        description=f"Save {_fmt(monthly)} {currency}/month in a tax-advantaged retirement account",
        effort=EffortTier.LOW,
        timeframe_years=years_until_retirement,
        details={
            "monthly_investment": monthly,
            "total_invested": monthly * 12 * years_until_retirement,
            "expected_return": gap,
        },
        pros=_PROS["investment"],
        cons=_CONS["investment"],
    )


def _realistic(current: float, target: float, currency: str, config: EngineConfig) -> Optional[SuggestedPath]:
    policy = config.advisor
    reduced_target = current * (1 + policy.fallback_target_uplift)
    duration = policy.fallback_duration_years
    extra = extra_income_for_goal(reduced_target - current, duration, config.economics, policy.amount_step)
    if extra > policy.fallback_income_ceiling:
        logger.debug(f"Realistic fallback dropped: {extra} {currency}/month exceeds {policy.fallback_income_ceiling}")
        return None

    adjusted = round(reduced_target)
    return SuggestedPath(
        id="realistic",
        strategy=StrategyTag.COMBINED,
        title="Realistic adjustment",
        description=(
            f"Consider a goal of {_fmt(adjusted)} {currency} (instead of {_fmt(target)}) "
            f"plus extra income of {_fmt(extra)} {currency}/month for {duration} years"
        ),
        effort=EffortTier.MEDIUM,
        timeframe_years=duration,
        details={
            "extra_monthly_income": extra,
            "duration_years": duration,
            "adjusted_target": adjusted,
            "original_target": target,
            "total_earned": extra * 12 * duration,
        },
        pros=_PROS["realistic"],
        cons=_CONS["realistic"],
    )


def suggest_paths(
    current: float,
    target: float,
    salary: float,
    years_until_retirement: int,
    config: EngineConfig = DEFAULT_CONFIG,
    retirement_age: Optional[int] = None,
) -> AdvisorResult:
    """
    Propose feasible strategies for closing the gap between ``current`` and ``target``.

    Args:
        current: Current projected monthly benefit.
        target: Desired monthly benefit.
        salary: Current gross monthly salary.
        years_until_retirement: Remaining working horizon.
        config: Engine configuration; ``config.advisor`` holds every threshold.
        retirement_age: Planned retirement age used to describe the
            work-longer path. Defaults to the male statutory age.

    Returns:
        An ``AdvisorResult`` with at most ``max_suggestions`` suggestions in
        priority order, or ``needs_suggestions=False`` when the goal is met.
    """
    if current >= target:
        logger.info(f"Goal of {target:.2f} already met by projected {current:.2f}")
        return AdvisorResult(needs_suggestions=False, message=GOAL_MET_MESSAGE)

    policy = config.advisor
    currency = config.currency
    if retirement_age is None:
        retirement_age = config.economics.statutory_retirement_age(Sex.MALE)
    analysis = compute_gap(current, target)
    gap = target - current

    suggestions: List[SuggestedPath] = []
    for candidate in (
        _fastest(gap, currency, config),
        _balanced(current, target, salary, years_until_retirement, currency, config),
        _effortless(current, target, salary, retirement_age, config),
        _investment(gap, years_until_retirement, currency, config),
    ):
        if candidate is not None:
            suggestions.append(candidate)

    if len(suggestions) < policy.fallback_min_suggestions and gap > policy.fallback_gap_threshold:
        fallback = _realistic(current, target, currency, config)
        if fallback is not None:
            suggestions.append(fallback)

    accepted = tuple(suggestions[: policy.max_suggestions])
    logger.info(
        f"Gap {analysis.gap:.2f} ({analysis.gap_percentage:.2f}%): "
        f"{len(accepted)} suggestion(s) {[s.id for s in accepted]}"
    )
    return AdvisorResult(
        needs_suggestions=True,
        suggestions=accepted,
        gap=analysis.gap,
        gap_percentage=analysis.gap_percentage,
    )


__all__ = [
    "GOAL_MET_MESSAGE",
    "GapAnalysis",
    "SuggestedPath",
    "AdvisorResult",
    "compute_gap",
    "extra_income_for_goal",
    "monthly_investment_for_goal",
    "suggest_paths",
]
