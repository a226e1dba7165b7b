# pension_model/engines/projection.py
"""
Projection engine: turns a career record into a benefit report.

QuickStart:
    >>> from pension_model.schema import CareerRecord
    >>> from pension_model.engines.projection import project
    >>> career = CareerRecord(age=30, sex="male", gross_salary=8000,
    ...                       work_start_year=2015, work_end_year=2055)
    >>> report = project(career, as_of_year=2026)
    >>> report.retirement_year
    2061

Every function takes "now" as an explicit ``as_of_year`` so a projection is
reproducible for any reference date. Reference tables are passed in; the
engine never loads files.
"""

import logging
import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from pension_model.config.models import DEFAULT_CONFIG, EconomicConstants, EngineConfig
from pension_model.reference.tables import ReferenceData
from pension_model.schema import CareerRecord, Sex
from pension_model.utils.money import round_ratio, to_money

from .contributions import (
    annual_contribution,
    estimate_historical_capital,
    project_final_salary,
    project_forward_contributions,
)
from .valorization import ProjectionError, project_capital_based_pension

logger = logging.getLogger(__name__)

_DEFAULT_ECONOMICS = DEFAULT_CONFIG.economics


@dataclass(frozen=True)
class SickLeaveImpact:
    """
    Benefit reduction attributable to average sick leave.

    The older "with / without sick leave" pair carried the reduction in one
    field and zero in the other; ``difference`` keeps that reading available.
    """

    benefit_reduction: float

    @property
    def difference(self) -> float:
        return self.benefit_reduction


@dataclass(frozen=True)
class BenefitReport:
    """Result of one full projection. A plain value; nothing here is persisted."""

    as_of_year: int
    nominal_monthly_pension: float
    real_monthly_pension: float
    replacement_rate: float
    national_average_benefit: float
    retirement_year: int
    projected_final_salary: float
    sick_leave_impact: Optional[SickLeaveImpact] = None
    later_retirement_scenarios: Dict[int, float] = field(default_factory=dict)
    desired_monthly_pension: Optional[float] = None
    years_needed_for_goal: Optional[int] = None
    capital_based_pension: Optional[float] = None

    @property
    def years_until_retirement(self) -> int:
        return max(0, self.retirement_year - self.as_of_year)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["years_until_retirement"] = self.years_until_retirement
        if self.sick_leave_impact is not None:
            data["sick_leave_impact"]["difference"] = self.sick_leave_impact.difference
        data["later_retirement_scenarios"] = {
            str(years): pension for years, pension in self.later_retirement_scenarios.items()
        }
        return data


# --- Single formulas ---


def retirement_year(career: CareerRecord, as_of_year: int, constants: EconomicConstants = _DEFAULT_ECONOMICS) -> int:
    """Birth year plus the statutory retirement age for the person's sex."""
    return career.birth_year(as_of_year) + constants.statutory_retirement_age(career.sex)


def project_nominal_pension(
    career: CareerRecord,
    as_of_year: int,
    constants: EconomicConstants = _DEFAULT_ECONOMICS,
) -> float:
    """
    Project the flat monthly benefit in future money.

    Args:
        career: The person's career facts.
        as_of_year: Reference year ("now").
        constants: Economic constants (contribution rate, wage growth, payout horizons).

    Returns:
        Total accumulated capital divided by the sex-dependent payout months,
        rounded to two places.
    """
    if career.primary_account is not None:
        primary = career.primary_account
    else:
        primary = estimate_historical_capital(
            career.gross_salary, career.work_start_year, career.work_end_year, as_of_year, constants
        )

    forward = 0.0
    if career.work_end_year > as_of_year:
        forward = project_forward_contributions(
            career.gross_salary, career.work_end_year, as_of_year, constants
        )

    total = primary + forward + (career.sub_account or 0.0)
    months = constants.payout_months(career.sex)
    logger.debug(
        f"Nominal capital {total:.2f} (primary {primary:.2f}, forward {forward:.2f}) over {months:.0f} months"
    )
    return to_money(total / months)


def project_real_pension(
    nominal: float,
    retirement_year: int,
    as_of_year: int,
    inflation_rate: float = _DEFAULT_ECONOMICS.inflation_rate,
) -> float:
    """Discount the nominal benefit to today's money; unchanged once retirement is not in the future."""
    if retirement_year <= as_of_year:
        return nominal
    years = retirement_year - as_of_year
    return to_money(nominal / (1.0 + inflation_rate) ** years)


def replacement_rate(pension: float, final_salary: float) -> float:
    """Pension as a share of the final salary, three decimals; 0 for a zero salary."""
    if final_salary == 0:
        return 0.0
    return round_ratio(pension / final_salary, 3)


def sick_leave_impact(
    years_worked: int,
    sex: Sex,
    gross_salary: float,
    constants: EconomicConstants = _DEFAULT_ECONOMICS,
) -> SickLeaveImpact:
    """
    Benefit lost to average sick leave over the whole working period.

    Sick days accrue contributions at a reduced factor. The lost share of
    those days is priced at the daily salary, annualised, converted to
    contributions and amortised over the sex-dependent payout horizon.
    """
    if years_worked <= 0:
        return SickLeaveImpact(benefit_reduction=0.0)

    total_sick_days = years_worked * constants.sick_days_per_year.for_sex(sex)
    effective_days_lost = total_sick_days * (1.0 - constants.sick_leave_contribution_factor)
    daily_salary = gross_salary / constants.working_days_per_month
    annual_loss = (effective_days_lost / years_worked) * daily_salary * 12
    loss = annual_loss * constants.contribution_rate * years_worked / constants.payout_months(sex)
    return SickLeaveImpact(benefit_reduction=to_money(loss))


def later_retirement_bonus(
    base_pension: float,
    extra_years: float,
    final_salary: float,
    constants: EconomicConstants = _DEFAULT_ECONOMICS,
) -> float:
    """
    Benefit after working ``extra_years`` beyond the planned end.

    Two additive parts: the contributions of the extra years amortised over
    the standard horizon, and the uplift from a shorter payout period.
    """
    months = constants.standard_payout_months
    from_contributions = annual_contribution(final_salary, constants.contribution_rate) * extra_years / months
    shorter_payout = base_pension * (extra_years / months) * 12
    return to_money(base_pension + from_contributions + shorter_payout)


def years_needed_for_goal(
    current: float,
    target: float,
    final_salary: float,
    constants: EconomicConstants = _DEFAULT_ECONOMICS,
) -> int:
    """
    Whole years of extra contributions needed to lift ``current`` to ``target``.

    Raises:
        ValueError: If the goal is not met and a year's contribution at
            ``final_salary`` is not positive.
    """
    if current >= target:
        return 0
    yearly = annual_contribution(final_salary, constants.contribution_rate)
    if yearly <= 0:
        raise ValueError(f"Cannot reach a goal with a non-positive yearly contribution ({yearly})")
    deficit = (target - current) * constants.standard_payout_months
    # Round away float noise before ceil so exact multiples stay whole.
    return int(math.ceil(round(deficit / yearly, 9)))


# --- Full simulation ---


def project(
    career: CareerRecord,
    as_of_year: int,
    reference_data: Optional[ReferenceData] = None,
    config: EngineConfig = DEFAULT_CONFIG,
    as_of_month: int = 0,
) -> BenefitReport:
    """
    Run the full projection for one career record.

    Args:
        career: Validated career facts.
        as_of_year: Reference year ("now").
        reference_data: Optional reference tables. When supplied, the
            capital-based benefit is reported alongside the nominal one.
        config: Engine configuration.
        as_of_month: Zero-based reference month, used only by the
            capital-based benefit.

    Returns:
        A ``BenefitReport``.
    """
    economics = config.economics
    ret_year = retirement_year(career, as_of_year, economics)
    logger.info(
        f"Projecting benefit for age {career.age} ({career.sex.value}) as of {as_of_year}; retirement year {ret_year}"
    )

    nominal = project_nominal_pension(career, as_of_year, economics)
    real = project_real_pension(nominal, ret_year, as_of_year, economics.inflation_rate)
    final_salary = project_final_salary(career.gross_salary, ret_year, as_of_year, economics.wage_growth_rate)
    rate = replacement_rate(nominal, final_salary)

    sick = None
    if career.include_sick_leave:
        sick = sick_leave_impact(career.years_worked, career.sex, career.gross_salary, economics)

    later = {
        years: later_retirement_bonus(nominal, years, final_salary, economics)
        for years in config.scenarios.later_retirement_years
    }

    years_needed = None
    if career.desired_monthly_pension is not None:
        try:
            years_needed = years_needed_for_goal(nominal, career.desired_monthly_pension, final_salary, economics)
        except ValueError as e:
            logger.warning(f"Years needed for goal not computed: {e}")

    capital_based = None
    if reference_data is not None:
        try:
            capital_based = project_capital_based_pension(
                career, reference_data, as_of_year, as_of_month, economics
            )
        except ProjectionError as e:
            logger.warning(f"Capital-based benefit not computed: {e}")

    report = BenefitReport(
        as_of_year=as_of_year,
        nominal_monthly_pension=nominal,
        real_monthly_pension=real,
        replacement_rate=rate,
        national_average_benefit=economics.national_average_benefit,
        retirement_year=ret_year,
        projected_final_salary=to_money(final_salary),
        sick_leave_impact=sick,
        later_retirement_scenarios=later,
        desired_monthly_pension=career.desired_monthly_pension,
        years_needed_for_goal=years_needed,
        capital_based_pension=capital_based,
    )
    logger.info(f"Projected nominal {nominal:.2f}, real {real:.2f}, replacement rate {rate:.3f}")
    return report


__all__ = [
    "SickLeaveImpact",
    "BenefitReport",
    "retirement_year",
    "project_nominal_pension",
    "project_real_pension",
    "replacement_rate",
    "sick_leave_impact",
    "later_retirement_bonus",
    "years_needed_for_goal",
    "project",
]
