import pytest

from pension_model.config import AdvisorThresholds, EngineConfig
from pension_model.engines.advisor import (
    GOAL_MET_MESSAGE,
    compute_gap,
    extra_income_for_goal,
    monthly_investment_for_goal,
    suggest_paths,
)
from pension_model.schema import EffortTier, StrategyTag


def test_compute_gap():
    gap = compute_gap(3000, 5000)
    assert gap.gap == 2000
    assert gap.gap_percentage == 40
    assert gap.has_gap is True
    assert gap.meets_goal is False


def test_compute_gap_goal_met():
    gap = compute_gap(5200, 5000)
    assert gap.gap == -200
    assert gap.has_gap is False
    assert gap.meets_goal is True


def test_compute_gap_zero_target():
    assert compute_gap(100, 0).gap_percentage == 0.0


def test_extra_income_for_goal_rounds_up_to_fifty(default_config):
    # 90 * 216 / (3 * 12 * 0.1976) = 2732.8
    assert extra_income_for_goal(90, 3, default_config.economics) == 2750


def test_monthly_investment_for_goal():
    # annuity factor for 240 months at 5%/12 is about 411
    assert monthly_investment_for_goal(500, 20, 0.05) == 50
    assert monthly_investment_for_goal(100000, 10, 0.05) == 650
    assert monthly_investment_for_goal(500, 0, 0.05) is None


@pytest.mark.parametrize("current, target", [(5000, 5000), (6000, 5000)])
def test_goal_already_met(current, target):
    result = suggest_paths(current, target, 8000, 20)
    assert result.needs_suggestions is False
    assert result.suggestions == ()
    assert result.message == GOAL_MET_MESSAGE
    assert result.gap is None


def test_small_gap_offers_fastest_effortless_and_investment():
    result = suggest_paths(3000, 3090, 8000, 10)
    assert result.needs_suggestions is True
    assert result.gap == 90
    assert [s.id for s in result.suggestions] == ["fastest", "effortless", "investment"]

    fastest = result.suggestions[0]
    assert fastest.strategy is StrategyTag.EXTRA_INCOME
    assert fastest.timeframe_years == 3
    assert fastest.details["extra_monthly_income"] == 2750
    assert fastest.details["total_earned"] == 2750 * 12 * 3
    assert fastest.effort is EffortTier.HIGH
    assert "High pace" in fastest.cons
    assert "2,750" in fastest.description

    effortless = result.suggestions[1]
    assert effortless.details == {"work_longer_years": 2, "retirement_age": 67}
    assert effortless.effort is EffortTier.LOW


def test_balanced_skipped_when_working_longer_closes_gap():
    # working 4 more years already lifts 3000 above 3500
    result = suggest_paths(3000, 3500, 8000, 20)
    ids = [s.id for s in result.suggestions]
    assert "balanced" not in ids
    assert ids == ["effortless", "investment"]


def test_balanced_sized_on_residual_gap():
    result = suggest_paths(3000, 3609, 8000, 10)
    assert [s.id for s in result.suggestions] == ["balanced", "effortless", "investment"]
    balanced = result.suggestions[0]
    assert balanced.strategy is StrategyTag.COMBINED
    assert balanced.details["work_longer_years"] == 2
    # residual 3609 - 3508.98 = 100.02 -> five-year plan of 1822 rounded up
    assert balanced.details["duration_years"] == 5
    assert balanced.details["extra_monthly_income"] == 1850
    assert balanced.timeframe_years == 7
    assert balanced.effort is EffortTier.MEDIUM


def test_investment_skipped_without_horizon():
    result = suggest_paths(3000, 3090, 8000, 0)
    assert "investment" not in [s.id for s in result.suggestions]


def test_effortless_uses_supplied_retirement_age():
    result = suggest_paths(3000, 3090, 8000, 10, retirement_age=60)
    effortless = {s.id: s for s in result.suggestions}["effortless"]
    assert effortless.details["retirement_age"] == 62


def test_realistic_fallback_for_large_gap():
    result = suggest_paths(400, 5000, 5000, 2)
    ids = [s.id for s in result.suggestions]
    assert ids == ["investment", "realistic"]
    realistic = result.suggestions[1]
    assert realistic.details["adjusted_target"] == 520
    assert realistic.details["original_target"] == 5000
    assert realistic.details["duration_years"] == 7
    assert realistic.details["extra_monthly_income"] == 1600


def test_no_fallback_for_small_gap():
    # nothing fits, but the gap is below the fallback threshold
    result = suggest_paths(3000, 4400, 0, 0)
    assert result.needs_suggestions is True
    assert result.suggestions == ()


@pytest.mark.parametrize(
    "current, target, salary, years",
    [(3000, 3090, 8000, 10), (3000, 4500, 8000, 10), (400, 5000, 5000, 2), (1000, 1200, 20000, 30), (100, 9000, 4666, 40)],
)
def test_never_more_than_four_suggestions(current, target, salary, years):
    result = suggest_paths(current, target, salary, years)
    assert len(result.suggestions) <= 4
    assert all(s.details for s in result.suggestions)
    assert all(s.pros and s.cons for s in result.suggestions)


def test_max_suggestions_truncates_in_priority_order():
    config = EngineConfig(advisor=AdvisorThresholds(max_suggestions=2))
    result = suggest_paths(3000, 3090, 8000, 10, config=config)
    assert [s.id for s in result.suggestions] == ["fastest", "effortless"]


def test_result_to_dict():
    data = suggest_paths(3000, 3090, 8000, 10).to_dict()
    assert data["needs_suggestions"] is True
    assert data["gap_percentage"] == pytest.approx(2.91)
    assert data["suggestions"][0]["strategy"] == "extra_income"
    assert isinstance(data["suggestions"][0]["pros"], list)
