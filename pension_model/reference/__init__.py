"""
Reference data layer: life-expectancy and capital-indexation tables.
"""

from .parsers import (
    ReferenceDataLoadError,
    load_reference_data,
    parse_indexation_series,
    parse_lifespan_table,
    parse_percentage,
)
from .tables import (
    IndexationRecord,
    IndexationSeries,
    LifespanTable,
    ReferenceData,
    map_quarter,
)

__all__ = [
    "LifespanTable",
    "IndexationRecord",
    "IndexationSeries",
    "ReferenceData",
    "map_quarter",
    "ReferenceDataLoadError",
    "parse_percentage",
    "parse_lifespan_table",
    "parse_indexation_series",
    "load_reference_data",
]
