# pension_model/schema/enums.py

from enum import Enum


class Sex(str, Enum):
    """Statutory sex, which selects retirement age, payout horizon and sick-day averages."""

    MALE = "male"
    FEMALE = "female"


class Quarter(str, Enum):
    """Calendar quarter label as it appears in the indexation table."""

    I = "I"
    II = "II"
    III = "III"
    IV = "IV"

    @property
    def ordinal(self) -> int:
        """Zero-based position in the year (I -> 0, IV -> 3)."""
        return _QUARTER_ORDER.index(self)

    @classmethod
    def from_label(cls, label: str) -> "Quarter":
        """Parse a roman-numeral label, tolerating case and surrounding whitespace."""
        if isinstance(label, cls):
            return label
        return cls(str(label).strip().upper())

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "Quarter":
        return _QUARTER_ORDER[ordinal]


_QUARTER_ORDER = (Quarter.I, Quarter.II, Quarter.III, Quarter.IV)


class EffortTier(str, Enum):
    """Qualitative cost of a suggested strategy."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class StrategyTag(str, Enum):
    """Kind of strategy a suggestion or scenario variant represents."""

    WORK_LONGER = "work_longer"
    EXTRA_INCOME = "extra_income"
    RAISE = "raise"
    INVESTMENT = "investment"
    COMBINED = "combined"


__all__ = ["Sex", "Quarter", "EffortTier", "StrategyTag"]
