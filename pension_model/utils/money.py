# pension_model/utils/money.py

import math
from decimal import Decimal, ROUND_CEILING, ROUND_HALF_UP


def _quantize(value: float, places: int) -> float:
    if not math.isfinite(value):
        return value
    unit = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(unit, rounding=ROUND_HALF_UP))


def to_money(value: float) -> float:
    """Round to two places (currency minor unit) with ROUND_HALF_UP rounding."""
    return _quantize(value, 2)


def round_ratio(value: float, places: int = 3) -> float:
    """Round a ratio or percentage with ROUND_HALF_UP rounding."""
    return _quantize(value, places)


def round_up_to_step(value: float, step: float = 50.0) -> float:
    """Round up to the next multiple of ``step`` (suggested amounts are quoted in steps of 50)."""
    if not math.isfinite(value):
        return value
    steps = (Decimal(str(value)) / Decimal(str(step))).to_integral_value(rounding=ROUND_CEILING)
    return float(steps * Decimal(str(step)))
