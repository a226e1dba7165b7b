# pension_model/reference/tables.py
"""
Typed, read-only reference tables consulted by the projection engine.

Two tables are modelled:

* ``LifespanTable`` - remaining life expectancy in months, keyed by age and
  the month-of-year index (0-11). Sparse in age.
* ``IndexationSeries`` - quarterly capital-indexation factors for the
  primary account and the sub-account, keyed by (year, quarter).

Both are built once by the parsers and never mutated afterwards, so a single
``ReferenceData`` instance can be shared by any number of concurrent callers.
"""

import logging
from bisect import bisect_left
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple, Union

import pandas as pd

from pension_model.schema import IndexationColumns, Quarter

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12

QuarterLike = Union[Quarter, str]

# Publication lag: a benefit determined in quarter Q of year Y is valorised
# with the factor published for the quarter below.
_DETERMINATION_TO_INDEXATION: Dict[Quarter, Tuple[int, Quarter]] = {
    Quarter.I: (-1, Quarter.III),
    Quarter.II: (-1, Quarter.IV),
    Quarter.III: (0, Quarter.I),
    Quarter.IV: (0, Quarter.II),
}


def map_quarter(year: int, quarter: QuarterLike) -> Tuple[int, Quarter]:
    """
    Map a determination quarter to the indexation quarter used to valorise capital.

    Args:
        year: Year in which the benefit is determined
        quarter: Quarter of determination (``Quarter`` or its roman label)

    Returns:
        The (year, quarter) key to look up in the indexation series

    Example:
        >>> map_quarter(2025, "I")
        (2024, <Quarter.III: 'III'>)
    """
    offset, indexation_quarter = _DETERMINATION_TO_INDEXATION[Quarter.from_label(quarter)]
    return year + offset, indexation_quarter


def _clamp_month(birth_month: int) -> int:
    return max(0, min(MONTHS_PER_YEAR - 1, int(birth_month)))


@dataclass(frozen=True)
class LifespanTable:
    """Remaining expected months of life by age and birth-month index."""

    _rows: Mapping[int, Mapping[int, float]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {
            int(age): MappingProxyType({int(m): float(v) for m, v in months.items()})
            for age, months in self._rows.items()
        }
        object.__setattr__(self, "_rows", MappingProxyType(frozen))
        object.__setattr__(self, "_ages", tuple(sorted(frozen)))

    @classmethod
    def from_rows(cls, rows: Mapping[int, Mapping[int, float]]) -> "LifespanTable":
        return cls(dict(rows))

    @property
    def ages(self) -> Tuple[int, ...]:
        return self._ages

    @property
    def max_age(self) -> Optional[int]:
        return self._ages[-1] if self._ages else None

    def __len__(self) -> int:
        return len(self._ages)

    def __contains__(self, age: object) -> bool:
        return age in self._rows

    def row(self, age: int) -> Mapping[int, float]:
        return self._rows.get(age, MappingProxyType({}))

    def resolve_age(self, age: int) -> Optional[int]:
        """
        Pick the age row used for a lookup.

        Exact match if present, otherwise the smallest tabulated age at or above
        ``age``, otherwise the largest tabulated age. ``None`` for an empty table.
        """
        if age in self._rows:
            return age
        if not self._ages:
            return None
        pos = bisect_left(self._ages, age)
        if pos < len(self._ages):
            return self._ages[pos]
        return self._ages[-1]

    def remaining_life_months(self, age: int, birth_month: int) -> float:
        """Remaining months of life at ``age`` for the given birth-month index (clamped to 0-11)."""
        resolved = self.resolve_age(age)
        if resolved is None:
            logger.debug(f"Lifespan table is empty; no remaining-life value for age {age}")
            return 0.0
        if resolved != age:
            logger.debug(f"Age {age} not tabulated; using nearest available age {resolved}")
        return self._rows[resolved].get(_clamp_month(birth_month), 0.0)


@dataclass(frozen=True)
class IndexationRecord:
    """Indexation factors published for one quarter."""

    year: int
    quarter: Quarter
    primary_factor: float
    sub_factor: float

    @property
    def key(self) -> Tuple[int, Quarter]:
        return self.year, self.quarter


@dataclass(frozen=True)
class IndexationSeries:
    """Ordered quarterly indexation records with exact (year, quarter) lookup."""

    records: Tuple[IndexationRecord, ...] = ()

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.records, key=lambda r: (r.year, r.quarter.ordinal)))
        index: Dict[Tuple[int, Quarter], IndexationRecord] = {}
        for record in ordered:
            if record.key in index:
                logger.warning(
                    f"Duplicate indexation entry for {record.year} {record.quarter.value}; keeping the later row"
                )
            index[record.key] = record
        object.__setattr__(self, "records", ordered)
        object.__setattr__(self, "_index", MappingProxyType(index))

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[IndexationRecord]:
        return iter(self.records)

    def indexation_for(self, year: int, quarter: QuarterLike) -> Optional[IndexationRecord]:
        """Exact-match lookup; ``None`` when the quarter was never published or the label is unknown."""
        try:
            key = (year, Quarter.from_label(quarter))
        except ValueError:
            return None
        return self._index.get(key)

    def to_frame(self) -> pd.DataFrame:
        """Return the series as a DataFrame, one row per quarter."""
        rows = [
            {
                IndexationColumns.YEAR.value: r.year,
                IndexationColumns.QUARTER.value: r.quarter.value,
                IndexationColumns.PRIMARY_FACTOR.value: r.primary_factor,
                IndexationColumns.SUB_FACTOR.value: r.sub_factor,
            }
            for r in self._index.values()
        ]
        return pd.DataFrame(rows, columns=IndexationColumns.ordered())


@dataclass(frozen=True)
class ReferenceData:
    """Both reference tables, loaded once and shared read-only."""

    lifespan: LifespanTable = field(default_factory=LifespanTable)
    indexation: IndexationSeries = field(default_factory=IndexationSeries)

    def remaining_life_months(self, age: int, birth_month: int) -> float:
        return self.lifespan.remaining_life_months(age, birth_month)

    def indexation_for(self, year: int, quarter: QuarterLike) -> Optional[IndexationRecord]:
        return self.indexation.indexation_for(year, quarter)


__all__ = [
    "LifespanTable",
    "IndexationRecord",
    "IndexationSeries",
    "ReferenceData",
    "map_quarter",
    "MONTHS_PER_YEAR",
]
