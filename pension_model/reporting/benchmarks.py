# pension_model/reporting/benchmarks.py
"""
Place a projected benefit among the national benchmark groups.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from pension_model.config.models import DEFAULT_CONFIG, BenchmarkGroup, EngineConfig
from pension_model.utils.money import round_ratio, to_money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AverageComparison:
    national_average: float
    difference: float
    ratio: float
    above_average: bool


def classify_pension(pension: float, config: EngineConfig = DEFAULT_CONFIG) -> Optional[BenchmarkGroup]:
    """
    Highest benchmark group whose amount does not exceed ``pension``.

    ``None`` when the pension is below every group.
    """
    match = None
    for group in config.benchmark_groups:
        if pension >= group.amount:
            match = group
    if match is None:
        logger.debug(f"Pension {pension:.2f} is below every benchmark group")
    return match


def compare_to_average(pension: float, config: EngineConfig = DEFAULT_CONFIG) -> AverageComparison:
    """Difference and ratio between ``pension`` and the national average benefit."""
    average = config.economics.national_average_benefit
    ratio = round_ratio(pension / average, 3) if average else 0.0
    return AverageComparison(
        national_average=average,
        difference=to_money(pension - average),
        ratio=ratio,
        above_average=pension > average,
    )


__all__ = ["AverageComparison", "classify_pension", "compare_to_average"]
