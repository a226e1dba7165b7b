"""
Computation engines: benefit projection, scenario generation and the goal advisor.
"""

from .advisor import AdvisorResult, GapAnalysis, SuggestedPath, compute_gap, suggest_paths
from .projection import (
    BenefitReport,
    SickLeaveImpact,
    later_retirement_bonus,
    project,
    project_nominal_pension,
    project_real_pension,
    replacement_rate,
    sick_leave_impact,
    years_needed_for_goal,
)
from .scenarios import (
    Combined,
    ExtraIncome,
    Raise,
    ScenarioResult,
    ScenarioVariant,
    WorkLonger,
    evaluate_variant,
    generate_extra_income_scenarios,
    generate_overtime_scenarios,
    generate_raise_scenarios,
    generate_work_longer_scenarios,
)
from .valorization import ProjectionError, project_capital_based_pension, quarter_of_month, valorize_capital

__all__ = [
    # Projection
    "BenefitReport",
    "SickLeaveImpact",
    "project",
    "project_nominal_pension",
    "project_real_pension",
    "replacement_rate",
    "sick_leave_impact",
    "later_retirement_bonus",
    "years_needed_for_goal",
    # Valorisation
    "ProjectionError",
    "valorize_capital",
    "quarter_of_month",
    "project_capital_based_pension",
    # Scenarios
    "WorkLonger",
    "ExtraIncome",
    "Raise",
    "Combined",
    "ScenarioVariant",
    "ScenarioResult",
    "evaluate_variant",
    "generate_work_longer_scenarios",
    "generate_extra_income_scenarios",
    "generate_raise_scenarios",
    "generate_overtime_scenarios",
    # Advisor
    "GapAnalysis",
    "SuggestedPath",
    "AdvisorResult",
    "compute_gap",
    "suggest_paths",
]
