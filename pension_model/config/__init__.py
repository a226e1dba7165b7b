"""
Engine configuration: pydantic models with working defaults and YAML overlays.
"""

from .models import (
    DEFAULT_CONFIG,
    AdvisorThresholds,
    BenchmarkGroup,
    EconomicConstants,
    EngineConfig,
    ScenarioGrids,
    SexSpecific,
    ValidationLimits,
)
from .loaders import ConfigLoadError, build_engine_config, load_engine_config, load_yaml_config

__all__ = [
    "SexSpecific",
    "BenchmarkGroup",
    "EconomicConstants",
    "ScenarioGrids",
    "AdvisorThresholds",
    "ValidationLimits",
    "EngineConfig",
    "DEFAULT_CONFIG",
    "ConfigLoadError",
    "build_engine_config",
    "load_engine_config",
    "load_yaml_config",
]
