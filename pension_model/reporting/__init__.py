"""
Reporting helpers: benchmark placement and export to DataFrames / dictionaries.
"""

from .benchmarks import AverageComparison, classify_pension, compare_to_average
from .frames import report_to_dict, scenarios_to_frame, suggestions_to_frame

__all__ = [
    "AverageComparison",
    "classify_pension",
    "compare_to_average",
    "scenarios_to_frame",
    "suggestions_to_frame",
    "report_to_dict",
]
