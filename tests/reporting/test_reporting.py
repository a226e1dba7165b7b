import json

import pandas as pd
import pytest

from pension_model.engines import generate_extra_income_scenarios, generate_work_longer_scenarios, project, suggest_paths
from pension_model.reporting import (
    classify_pension,
    compare_to_average,
    report_to_dict,
    scenarios_to_frame,
    suggestions_to_frame,
)
from pension_model.schema import ScenarioColumns, SuggestionColumns


@pytest.mark.parametrize(
    "pension, group_id",
    [(1800, "below-minimum"), (1999.99, "below-minimum"), (3600, "average"), (7999, "above-average"), (12000, "high")],
)
def test_classify_pension(pension, group_id):
    assert classify_pension(pension).id == group_id


def test_classify_pension_below_every_group():
    assert classify_pension(1000) is None


def test_compare_to_average():
    comparison = compare_to_average(4200)
    assert comparison.national_average == 3500
    assert comparison.difference == 700
    assert comparison.ratio == 1.2
    assert comparison.above_average is True


def test_scenarios_to_frame():
    results = generate_work_longer_scenarios(3000, 8000) + generate_extra_income_scenarios(3000, 8000)
    df = scenarios_to_frame(results)
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ScenarioColumns.ordered()
    assert len(df) == 46
    assert set(df[ScenarioColumns.STRATEGY.value]) == {"work_longer", "extra_income"}


def test_scenarios_to_frame_empty():
    df = scenarios_to_frame([])
    assert df.empty
    assert list(df.columns) == ScenarioColumns.ordered()


def test_suggestions_to_frame_flattens_details():
    advice = suggest_paths(3000, 3090, 8000, 10)
    df = suggestions_to_frame(advice.suggestions)
    assert list(df.columns[:6]) == SuggestionColumns.ordered()
    assert df["id"].tolist() == ["fastest", "effortless", "investment"]
    assert df.loc[0, "extra_monthly_income"] == 2750
    assert pd.isna(df.loc[0, "monthly_investment"])


def test_suggestions_to_frame_empty():
    df = suggestions_to_frame([])
    assert df.empty
    assert list(df.columns) == SuggestionColumns.ordered()


def test_report_to_dict(sample_career):
    report = project(sample_career, 2026)
    advice = suggest_paths(report.nominal_monthly_pension, 9000, sample_career.gross_salary, report.years_until_retirement)
    scenarios = generate_extra_income_scenarios(report.nominal_monthly_pension, sample_career.gross_salary)[:3]
    data = report_to_dict(report, advice, scenarios)

    assert data["currency"] == "PLN"
    assert data["report"]["retirement_year"] == 2061
    assert data["benchmark_group"]["id"] == classify_pension(report.nominal_monthly_pension).id
    assert "gap_analysis" in data
    assert data["advice"]["needs_suggestions"] is True
    assert len(data["scenarios"]) == 3
    json.dumps(data)


def test_report_to_dict_without_goal(sample_career):
    career = sample_career.model_copy(update={"desired_monthly_pension": None})
    data = report_to_dict(project(career, 2026))
    assert "gap_analysis" not in data
    assert "advice" not in data
