# pension_model/reporting/frames.py
"""
Convert engine results into DataFrames and JSON-safe dictionaries for export.
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, Iterable, Optional

import pandas as pd

from pension_model.config.models import DEFAULT_CONFIG, EngineConfig
from pension_model.engines.advisor import AdvisorResult, SuggestedPath, compute_gap
from pension_model.engines.projection import BenefitReport
from pension_model.engines.scenarios import ScenarioResult
from pension_model.schema import ScenarioColumns, SuggestionColumns

from .benchmarks import classify_pension, compare_to_average

logger = logging.getLogger(__name__)


def scenarios_to_frame(results: Iterable[ScenarioResult]) -> pd.DataFrame:
    """One row per scenario result, columns in ``ScenarioColumns`` order."""
    rows = [r.to_dict() for r in results]
    df = pd.DataFrame(rows, columns=ScenarioColumns.ordered())
    logger.debug(f"Scenario frame shape: {df.shape}")
    return df


def suggestions_to_frame(suggestions: Iterable[SuggestedPath]) -> pd.DataFrame:
    """
    One row per suggestion. Structured details are flattened into extra
    columns after the ``SuggestionColumns`` block.
    """
    rows = []
    for s in suggestions:
        row = {
            SuggestionColumns.ID.value: s.id,
            SuggestionColumns.STRATEGY.value: s.strategy.value,
            SuggestionColumns.TITLE.value: s.title,
            SuggestionColumns.DESCRIPTION.value: s.description,
            SuggestionColumns.EFFORT.value: s.effort.value,
            SuggestionColumns.TIMEFRAME_YEARS.value: s.timeframe_years,
        }
        row.update(s.details)
        rows.append(row)

    df = pd.DataFrame(rows)
    if df.empty:
        return pd.DataFrame(columns=SuggestionColumns.ordered())
    extra = [c for c in df.columns if c not in SuggestionColumns.ordered()]
    return df[SuggestionColumns.ordered() + extra]


def report_to_dict(
    report: BenefitReport,
    advice: Optional[AdvisorResult] = None,
    scenarios: Optional[Iterable[ScenarioResult]] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Dict[str, Any]:
    """
    Assemble a JSON-safe dictionary from a benefit report and optional advice.
    """
    group = classify_pension(report.nominal_monthly_pension, config)
    out: Dict[str, Any] = {
        "currency": config.currency,
        "report": report.to_dict(),
        "benchmark_group": group.model_dump() if group is not None else None,
        "average_comparison": asdict(compare_to_average(report.nominal_monthly_pension, config)),
    }
    if report.desired_monthly_pension is not None:
        out["gap_analysis"] = asdict(compute_gap(report.nominal_monthly_pension, report.desired_monthly_pension))
    if advice is not None:
        out["advice"] = advice.to_dict()
    if scenarios is not None:
        out["scenarios"] = [s.to_dict() for s in scenarios]
    return out


__all__ = ["scenarios_to_frame", "suggestions_to_frame", "report_to_dict"]
