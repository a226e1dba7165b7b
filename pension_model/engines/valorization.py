# pension_model/engines/valorization.py
"""
Capital valorisation against the quarterly indexation series, and the
table-driven (capital / remaining life) benefit built on top of it.
"""

import logging
from typing import Optional

from pension_model.config.models import EconomicConstants
from pension_model.reference.tables import IndexationSeries, ReferenceData, map_quarter
from pension_model.schema import CareerRecord, Quarter
from pension_model.utils.money import to_money

from .contributions import estimate_historical_capital, project_forward_contributions

logger = logging.getLogger(__name__)

PRIMARY_ACCOUNT = "primary"
SUB_ACCOUNT = "sub"
_ACCOUNTS = (PRIMARY_ACCOUNT, SUB_ACCOUNT)


class ProjectionError(Exception):
    """Raised when a benefit cannot be computed from the supplied reference data."""

    pass


def quarter_of_month(month: int) -> Quarter:
    """Quarter containing the zero-based month index (clamped to 0-11)."""
    month = max(0, min(11, int(month)))
    return Quarter.from_ordinal(month // 3)


def valorize_capital(
    amount: float,
    series: IndexationSeries,
    year: int,
    quarter,
    account: str = PRIMARY_ACCOUNT,
) -> float:
    """
    Apply the indexation factor for a benefit determined in (year, quarter).

    The factor is taken from the quarter chosen by ``map_quarter``. When that
    quarter was never published the capital is returned unchanged and a
    warning is logged; an unchanged result therefore means missing data, not
    zero growth.

    Args:
        amount: Capital to valorise.
        series: Quarterly indexation factors.
        year: Year of benefit determination.
        quarter: Quarter of benefit determination (``Quarter`` or roman label).
        account: ``"primary"`` or ``"sub"``; selects which factor applies.

    Returns:
        The valorised capital.
    """
    if account not in _ACCOUNTS:
        raise ValueError(f"Unknown account '{account}', expected one of {_ACCOUNTS}")
    if amount == 0:
        return 0.0

    index_year, index_quarter = map_quarter(year, quarter)
    record = series.indexation_for(index_year, index_quarter)
    if record is None:
        logger.warning(
            f"No indexation published for {index_year} {index_quarter.value}; "
            f"{account} capital of {amount:.2f} left unchanged"
        )
        return amount

    factor = record.primary_factor if account == PRIMARY_ACCOUNT else record.sub_factor
    return amount * factor


def actual_retirement_age(age: int, work_end_year: int, as_of_year: int) -> int:
    """Age at the end of work; never below the current age."""
    return max(age, age + (work_end_year - as_of_year))


def project_capital_based_pension(
    career: CareerRecord,
    reference_data: ReferenceData,
    as_of_year: int,
    as_of_month: int = 0,
    constants: Optional[EconomicConstants] = None,
) -> float:
    """
    Monthly benefit as valorised capital divided by remaining life expectancy.

    Primary capital (supplied balance or historical estimate) and prior-system
    capital take the primary factor; the sub-account and external-fund
    balances take the sub-account factor. Forward contributions are added
    without valorisation.

    Raises:
        ProjectionError: If the lifespan table gives no remaining months for
            the retirement age.
    """
    constants = constants or EconomicConstants()
    quarter = quarter_of_month(as_of_month)

    if career.primary_account is not None:
        primary = career.primary_account
    else:
        primary = estimate_historical_capital(
            career.gross_salary, career.work_start_year, career.work_end_year, as_of_year, constants
        )
    primary += career.prior_system_capital or 0.0
    sub = (career.sub_account or 0.0) + (career.external_fund_account or 0.0)

    capital = (
        valorize_capital(primary, reference_data.indexation, as_of_year, quarter, PRIMARY_ACCOUNT)
        + valorize_capital(sub, reference_data.indexation, as_of_year, quarter, SUB_ACCOUNT)
        + project_forward_contributions(career.gross_salary, career.work_end_year, as_of_year, constants)
    )

    retirement_age = actual_retirement_age(career.age, career.work_end_year, as_of_year)
    months = reference_data.remaining_life_months(retirement_age, as_of_month)
    if months <= 0:
        raise ProjectionError(
            f"No life-expectancy data for retirement age {retirement_age}; cannot amortise capital"
        )

    logger.debug(
        f"Capital-based benefit: capital {capital:.2f} over {months:.1f} months at age {retirement_age}"
    )
    return to_money(capital / months)


__all__ = [
    "PRIMARY_ACCOUNT",
    "SUB_ACCOUNT",
    "ProjectionError",
    "quarter_of_month",
    "valorize_capital",
    "actual_retirement_age",
    "project_capital_based_pension",
]
