"""
Reading reference data from disk.
"""

from .readers import (
    DEFAULT_INDEXATION_FILE,
    DEFAULT_LIFESPAN_FILE,
    clear_reference_cache,
    get_reference_data,
    read_reference_data,
    read_reference_text,
)

__all__ = [
    "DEFAULT_LIFESPAN_FILE",
    "DEFAULT_INDEXATION_FILE",
    "read_reference_text",
    "read_reference_data",
    "get_reference_data",
    "clear_reference_cache",
]
