# pension_model/engines/contributions.py
"""
Salary trajectories and the contributions they generate.

Past salaries are reconstructed by discounting the current salary at the
wage-growth rate; future salaries compound forward from it. Each year pays
``12 * monthly salary * contribution rate`` into the primary account.
"""

import logging

import numpy as np

from pension_model.config.models import EconomicConstants

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def annual_contribution(monthly_salary: float, contribution_rate: float) -> float:
    """One year's contribution at a flat monthly salary."""
    return monthly_salary * MONTHS_PER_YEAR * contribution_rate


def elapsed_working_years(work_start_year: int, work_end_year: int, as_of_year: int) -> int:
    """Working years already behind the person at ``as_of_year``."""
    return max(0, min(work_end_year - work_start_year, as_of_year - work_start_year))


def remaining_working_years(work_end_year: int, as_of_year: int) -> int:
    return max(0, work_end_year - as_of_year)


def historical_salaries(current_salary: float, years: int, wage_growth_rate: float) -> np.ndarray:
    """
    Reconstruct monthly salaries for ``years`` elapsed years, oldest first.

    The most recent year earns the current salary; each earlier year is
    discounted by one more step of wage growth.
    """
    exponents = np.arange(years - 1, -1, -1, dtype=float)
    return current_salary / np.power(1.0 + wage_growth_rate, exponents)


def future_salaries(current_salary: float, years: int, growth_rate: float) -> np.ndarray:
    """Monthly salaries for ``years`` future years, starting at the current salary."""
    return current_salary * np.power(1.0 + growth_rate, np.arange(years, dtype=float))


def estimate_historical_capital(
    current_salary: float,
    work_start_year: int,
    work_end_year: int,
    as_of_year: int,
    constants: EconomicConstants,
) -> float:
    """Estimate primary-account capital accumulated before ``as_of_year``."""
    years = elapsed_working_years(work_start_year, work_end_year, as_of_year)
    if years == 0:
        return 0.0
    salaries = historical_salaries(current_salary, years, constants.wage_growth_rate)
    total = float(np.sum(salaries) * MONTHS_PER_YEAR * constants.contribution_rate)
    logger.debug(f"Historical capital over {years} years: {total:.2f}")
    return total


def project_forward_contributions(
    current_salary: float,
    work_end_year: int,
    as_of_year: int,
    constants: EconomicConstants,
) -> float:
    """Contributions still to be paid from ``as_of_year`` up to the end of work."""
    years = remaining_working_years(work_end_year, as_of_year)
    if years == 0:
        return 0.0
    salaries = future_salaries(current_salary, years, constants.wage_growth_rate)
    total = float(np.sum(salaries) * MONTHS_PER_YEAR * constants.contribution_rate)
    logger.debug(f"Forward contributions over {years} years: {total:.2f}")
    return total


def project_final_salary(
    current_salary: float, retirement_year: int, as_of_year: int, wage_growth_rate: float
) -> float:
    """Salary grown at ``wage_growth_rate`` to the retirement year (never shrunk)."""
    return current_salary * (1.0 + wage_growth_rate) ** max(0, retirement_year - as_of_year)


__all__ = [
    "annual_contribution",
    "elapsed_working_years",
    "remaining_working_years",
    "historical_salaries",
    "future_salaries",
    "estimate_historical_capital",
    "project_forward_contributions",
    "project_final_salary",
]
