import json

import pytest

from pension_model.config import EngineConfig
from pension_model.config.models import EconomicConstants
from pension_model.engines.projection import (
    BenefitReport,
    later_retirement_bonus,
    project,
    project_nominal_pension,
    project_real_pension,
    replacement_rate,
    retirement_year,
    sick_leave_impact,
    years_needed_for_goal,
)
from pension_model.schema import CareerRecord, Sex


def make_career(**overrides):
    fields = dict(
        age=40,
        sex="male",
        gross_salary=5000,
        work_start_year=2000,
        work_end_year=2020,
    )
    fields.update(overrides)
    return CareerRecord(**fields)


# --- Nominal pension ---


def test_nominal_uses_supplied_balances_and_male_horizon():
    career = make_career(primary_account=216000, sub_account=21600)
    # work ended before 2026, so no forward contributions
    assert project_nominal_pension(career, 2026) == 1100.0


def test_nominal_female_horizon_is_longer():
    career = make_career(sex="female", primary_account=216000, sub_account=21600)
    assert project_nominal_pension(career, 2026) == 825.0


def test_nominal_estimates_history_and_projects_forward():
    career = make_career(work_start_year=2025, work_end_year=2030)
    # one elapsed year at 5000, then four future years growing 4% a year
    historical = 5000 * 12 * 0.1976
    forward = 5000 * (1 + 1.04 + 1.04**2 + 1.04**3) * 12 * 0.1976
    expected = (historical + forward) / 216
    assert project_nominal_pension(career, 2026) == pytest.approx(expected, abs=0.005)


def test_nominal_history_discounts_earlier_years():
    career = make_career(work_start_year=2024, work_end_year=2026)
    expected = (5000 / 1.04 + 5000) * 12 * 0.1976 / 216
    assert project_nominal_pension(career, 2026) == pytest.approx(expected, abs=0.005)


def test_nominal_supplied_primary_replaces_estimate():
    estimated = project_nominal_pension(make_career(), 2026)
    supplied = project_nominal_pension(make_career(primary_account=0), 2026)
    assert estimated > 0
    assert supplied == 0.0


def test_nominal_zero_salary_and_no_balances_is_zero():
    assert project_nominal_pension(make_career(gross_salary=0), 2026) == 0.0


# --- Real pension ---


def test_real_pension_discounts_future_retirement():
    assert project_real_pension(1000, 2036, 2026, 0.02) == 820.35


@pytest.mark.parametrize("ret_year", [2020, 2026])
def test_real_pension_unchanged_when_not_in_future(ret_year):
    assert project_real_pension(1234.56, ret_year, 2026, 0.02) == 1234.56


@pytest.mark.parametrize("nominal", [500.0, 3210.99, 8000.0])
@pytest.mark.parametrize("years", [1, 5, 30])
def test_real_never_exceeds_nominal(nominal, years):
    assert project_real_pension(nominal, 2026 + years, 2026, 0.02) <= nominal


# --- Replacement rate ---


@pytest.mark.parametrize(
    "pension, salary, expected",
    [(3000, 10000, 0.3), (1000, 3000, 0.333), (2000, 3000, 0.667), (1000, 0, 0.0)],
)
def test_replacement_rate(pension, salary, expected):
    assert replacement_rate(pension, salary) == expected


# --- Sick leave ---


def test_sick_leave_male():
    impact = sick_leave_impact(10, Sex.MALE, 5000)
    annual_loss = (10 * 12 * 0.2 / 10) * (5000 / 21.67) * 12
    expected = annual_loss * 0.1976 * 10 / 216
    assert impact.benefit_reduction == pytest.approx(expected, abs=0.005)
    assert impact.difference == impact.benefit_reduction


def test_sick_leave_female_uses_more_days_and_longer_horizon():
    male = sick_leave_impact(10, Sex.MALE, 5000).benefit_reduction
    female = sick_leave_impact(10, Sex.FEMALE, 5000).benefit_reduction
    # 16/12 more days, amortised over 288 instead of 216 months
    assert female == pytest.approx(male * (16 / 12) * (216 / 288), abs=0.01)


@pytest.mark.parametrize("years", [0, -3])
def test_sick_leave_without_working_years_is_zero(years):
    assert sick_leave_impact(years, Sex.MALE, 5000).benefit_reduction == 0.0


def test_sick_leave_honours_configured_factor():
    constants = EconomicConstants(sick_leave_contribution_factor=1.0)
    assert sick_leave_impact(10, Sex.MALE, 5000, constants).benefit_reduction == 0.0


# --- Later retirement ---


def test_later_retirement_bonus_value():
    # 23712 / 216 from contributions plus 2000 * 12 / 216 from the shorter payout
    assert later_retirement_bonus(2000, 1, 10000) == 2220.89


def test_later_retirement_bonus_zero_years_is_base():
    assert later_retirement_bonus(2000, 0, 10000) == 2000.0


def test_later_retirement_bonus_strictly_increasing():
    values = [later_retirement_bonus(2500, years, 7000) for years in range(0, 11)]
    assert all(b > a for a, b in zip(values, values[1:]))


# --- Years needed ---


def test_years_needed_rounds_up():
    # 1000 * 216 / 23712 = 9.1 years
    assert years_needed_for_goal(1000, 2000, 10000) == 10


def test_years_needed_exact_multiple_stays_whole():
    yearly = 10000 * 12 * 0.1976
    target = 1000 + 3 * yearly / 216
    assert years_needed_for_goal(1000, target, 10000) == 3


@pytest.mark.parametrize("value", [0.0, 1.0, 2500.0, 99999.0])
def test_years_needed_at_goal_is_zero(value):
    assert years_needed_for_goal(value, value, 5000) == 0


def test_years_needed_above_goal_is_zero():
    assert years_needed_for_goal(3000, 2000, 5000) == 0


def test_years_needed_without_salary_raises():
    with pytest.raises(ValueError):
        years_needed_for_goal(1000, 2000, 0)


# --- Full simulation ---


def test_retirement_year_by_sex():
    assert retirement_year(make_career(age=30), 2026) == 2061
    assert retirement_year(make_career(age=30, sex="female"), 2026) == 2056


def test_project_end_to_end(sample_career):
    report = project(sample_career, as_of_year=2026)

    assert isinstance(report, BenefitReport)
    assert report.retirement_year == 1996 + 65
    assert report.years_until_retirement == 35
    assert report.sick_leave_impact is not None
    assert report.sick_leave_impact.difference > 0
    assert report.years_needed_for_goal is not None
    assert report.years_needed_for_goal >= 0
    if report.nominal_monthly_pension >= 5000:
        assert report.years_needed_for_goal == 0
    assert report.real_monthly_pension <= report.nominal_monthly_pension
    assert report.national_average_benefit == 3500
    assert report.capital_based_pension is None


def test_project_replacement_rate_uses_grown_salary(sample_career):
    report = project(sample_career, as_of_year=2026)
    final_salary = 8000 * 1.04**35
    assert report.projected_final_salary == pytest.approx(final_salary, abs=0.01)
    assert report.replacement_rate == pytest.approx(
        report.nominal_monthly_pension / final_salary, abs=0.0006
    )


def test_project_later_retirement_table(sample_career):
    report = project(sample_career, as_of_year=2026)
    assert list(report.later_retirement_scenarios) == [1, 2, 5]
    plus_one, plus_two, plus_five = report.later_retirement_scenarios.values()
    assert report.nominal_monthly_pension < plus_one < plus_two < plus_five


def test_project_optional_parts_absent(sample_career):
    career = sample_career.model_copy(update={"include_sick_leave": False, "desired_monthly_pension": None})
    report = project(career, as_of_year=2026)
    assert report.sick_leave_impact is None
    assert report.years_needed_for_goal is None


def test_project_is_reproducible_for_a_given_year(sample_career):
    assert project(sample_career, 2026) == project(sample_career, 2026)
    assert project(sample_career, 2026) != project(sample_career, 2030)


def test_project_past_retirement_real_equals_nominal():
    career = make_career(age=67, work_start_year=1980, work_end_year=2020)
    report = project(career, as_of_year=2026)
    assert report.retirement_year == 2024
    assert report.real_monthly_pension == report.nominal_monthly_pension
    assert report.years_until_retirement == 0


def test_project_with_reference_data_adds_capital_based_figure(sample_career, reference_data):
    report = project(sample_career, 2026, reference_data=reference_data)
    assert report.capital_based_pension is not None
    assert report.capital_based_pension > 0


def test_project_uses_configured_constants(sample_career):
    config = EngineConfig(economics=EconomicConstants(inflation_rate=0.0))
    report = project(sample_career, 2026, config=config)
    assert report.real_monthly_pension == report.nominal_monthly_pension


def test_project_zero_salary_goal_does_not_crash():
    career = make_career(gross_salary=0, work_end_year=2040, desired_monthly_pension=1000)
    report = project(career, 2026)
    assert report.years_needed_for_goal is None


def test_report_to_dict_is_json_safe(sample_career):
    data = project(sample_career, 2026).to_dict()
    assert data["sick_leave_impact"]["difference"] == data["sick_leave_impact"]["benefit_reduction"]
    assert set(data["later_retirement_scenarios"]) == {"1", "2", "5"}
    json.dumps(data)
