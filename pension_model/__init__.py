"""
pension_model: retirement benefit projection, what-if scenarios and a goal advisor.

Typical use:
    >>> from pension_model import CareerRecord, project, suggest_paths
    >>> career = CareerRecord(age=30, sex="male", gross_salary=8000,
    ...                       work_start_year=2015, work_end_year=2055)
    >>> report = project(career, as_of_year=2026)
"""

from pension_model.config import DEFAULT_CONFIG, EngineConfig, load_engine_config
from pension_model.data import get_reference_data
from pension_model.engines import (
    BenefitReport,
    compute_gap,
    generate_extra_income_scenarios,
    generate_work_longer_scenarios,
    project,
    suggest_paths,
)
from pension_model.reference import ReferenceData, ReferenceDataLoadError, load_reference_data
from pension_model.schema import CareerRecord, Sex

__version__ = "0.1.0"

__all__ = [
    "CareerRecord",
    "Sex",
    "EngineConfig",
    "DEFAULT_CONFIG",
    "load_engine_config",
    "ReferenceData",
    "ReferenceDataLoadError",
    "load_reference_data",
    "get_reference_data",
    "BenefitReport",
    "project",
    "generate_work_longer_scenarios",
    "generate_extra_income_scenarios",
    "compute_gap",
    "suggest_paths",
]
