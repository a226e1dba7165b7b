import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional, Set, Union

import yaml
from cerberus import Validator
from pydantic import ValidationError

from .models import EngineConfig

# Configure logger for this module
logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_NUMBER = {"type": "number"}
_NUMBER_LIST = {"type": "list", "schema": _NUMBER}
_SEX_SPECIFIC = {
    "type": "dict",
    "schema": {"male": _NUMBER, "female": _NUMBER},
}

# Structural schema for an overlay file. Value ranges are checked afterwards
# by the pydantic models.
CONFIG_SCHEMA: Dict[str, Any] = {
    "extends": {"type": "string", "required": False},
    "currency": {"type": "string", "required": False},
    "economics": {
        "type": "dict",
        "required": False,
        "schema": {
            "contribution_rate": _NUMBER,
            "wage_growth_rate": _NUMBER,
            "inflation_rate": _NUMBER,
            "national_average_benefit": _NUMBER,
            "retirement_age": _SEX_SPECIFIC,
            "sick_days_per_year": _SEX_SPECIFIC,
            "payout_years": _SEX_SPECIFIC,
            "standard_payout_years": _NUMBER,
            "sick_leave_contribution_factor": _NUMBER,
            "working_days_per_month": _NUMBER,
            "working_hours_per_month": _NUMBER,
            "weeks_per_month": _NUMBER,
        },
    },
    "scenarios": {
        "type": "dict",
        "required": False,
        "schema": {
            "work_longer_years": {"type": "list", "schema": {"type": "integer"}},
            "extra_incomes": _NUMBER_LIST,
            "extra_income_durations": {"type": "list", "schema": {"type": "integer"}},
            "raise_rates": _NUMBER_LIST,
            "overtime_hours_per_week": {"type": "list", "schema": {"type": "integer"}},
            "later_retirement_years": {"type": "list", "schema": {"type": "integer"}},
            "high_effort_income": _NUMBER,
            "medium_effort_income": _NUMBER,
        },
    },
    "advisor": {"type": "dict", "required": False, "valuesrules": _NUMBER},
    "limits": {
        "type": "dict",
        "required": False,
        "schema": {
            "min_age": {"type": "integer"},
            "max_age": {"type": "integer"},
            "min_salary": _NUMBER,
            "max_salary": {"type": "number", "nullable": True},
            "min_work_year": {"type": "integer"},
            "max_work_year": {"type": "integer"},
        },
    },
    "benchmark_groups": {
        "type": "list",
        "required": False,
        "schema": {
            "type": "dict",
            "schema": {
                "id": {"type": "string", "required": True},
                "name": {"type": "string", "required": True},
                "amount": {"type": "number", "required": True},
                "description": {"type": "string", "required": False},
            },
        },
    },
}


class ConfigLoadError(Exception):
    """Custom exception for errors during config loading."""

    pass


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge override into base and return the result.
    """
    for key, val in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            base[key] = deep_merge(base[key], val)
        else:
            base[key] = deepcopy(val)
    return base


def load_yaml_config(config_path: PathLike) -> Dict[str, Any]:
    """
    Loads configuration data from a YAML file.

    Args:
        config_path: Path pointing to the YAML configuration file.

    Returns:
        A dictionary containing the loaded configuration (empty for an empty file).

    Raises:
        ConfigLoadError: If the file cannot be found or parsed.
    """
    if not isinstance(config_path, Path):
        config_path = Path(config_path)

    logger.info(f"Attempting to load configuration from: {config_path}")

    if not config_path.is_file():
        logger.error(f"Configuration file not found at path: {config_path}")
        raise ConfigLoadError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except OSError as e:
        logger.error(f"Configuration file could not be read: {config_path}")
        raise ConfigLoadError(f"Configuration file could not be read: {config_path}") from e
    except yaml.YAMLError as e:
        logger.exception(f"Error parsing YAML configuration file {config_path}: {e}")
        raise ConfigLoadError(f"Error parsing YAML file {config_path}") from e

    if config_data is None:
        return {}
    if not isinstance(config_data, dict):
        logger.error(f"Configuration file {config_path} did not parse into a dictionary.")
        raise ConfigLoadError(
            f"Invalid configuration format in {config_path}: Expected a dictionary."
        )

    logger.info(f"Successfully loaded configuration from {config_path}")
    return config_data


def _resolve_extends(config_path: Path, seen: Optional[Set[Path]] = None) -> Dict[str, Any]:
    """Load a YAML overlay, merging it over the file named by its ``extends`` key."""
    config_path = config_path.resolve()
    seen = set() if seen is None else seen
    if config_path in seen:
        raise ConfigLoadError(f"Circular extends detected in '{config_path}'")
    seen.add(config_path)

    cfg = load_yaml_config(config_path)
    parent = cfg.pop("extends", None)
    if not parent:
        return cfg
    parent_path = config_path.parent / parent
    if not parent_path.is_file():
        raise ConfigLoadError(f"Parent config '{parent}' not found for {config_path}")
    return deep_merge(_resolve_extends(parent_path, seen), cfg)


def build_engine_config(overrides: Optional[Dict[str, Any]] = None) -> EngineConfig:
    """
    Validate an override mapping and merge it onto the built-in defaults.

    Raises:
        ConfigLoadError: If the mapping fails the structural or value checks.
    """
    overrides = overrides or {}
    v = Validator(CONFIG_SCHEMA)
    if not v.validate(overrides):
        raise ConfigLoadError(f"Config validation failed: {v.errors}")

    merged = deep_merge(EngineConfig().model_dump(mode="json"), v.document)
    merged.pop("extends", None)
    try:
        config = EngineConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigLoadError(f"Invalid configuration values: {e}") from e

    logger.debug(f"Engine configuration resolved: {config}")
    return config


def load_engine_config(config_path: Optional[PathLike] = None) -> EngineConfig:
    """
    Load an engine configuration overlay from YAML.

    ``None`` returns the built-in defaults. An overlay may name a parent file
    with ``extends:`` (relative to itself); the child's values win.
    """
    if config_path is None:
        return EngineConfig()
    return build_engine_config(_resolve_extends(Path(config_path)))


# Expose for import
__all__ = [
    "CONFIG_SCHEMA",
    "ConfigLoadError",
    "deep_merge",
    "load_yaml_config",
    "build_engine_config",
    "load_engine_config",
]
