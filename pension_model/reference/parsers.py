# pension_model/reference/parsers.py
"""
Parsers turning raw delimited text into the reference tables.

Row-level defects (too few columns, non-numeric fields, unknown quarter
labels) are skipped and counted; they never abort a load. The only fatal
condition is not having the raw text at all, reported as
``ReferenceDataLoadError``.
"""

import io
import logging
from typing import List, Optional

import numpy as np
import pandas as pd

from pension_model.schema import Quarter

from .tables import (
    MONTHS_PER_YEAR,
    IndexationRecord,
    IndexationSeries,
    LifespanTable,
    ReferenceData,
)

logger = logging.getLogger(__name__)

LIFESPAN_HEADER_LINES = 1
INDEXATION_HEADER_LINES = 2
LIFESPAN_MIN_COLUMNS = 1 + MONTHS_PER_YEAR
INDEXATION_MIN_COLUMNS = 4


class ReferenceDataLoadError(Exception):
    """Raised when the raw text of a reference table cannot be obtained."""

    pass


def _percentages(values: pd.Series) -> pd.Series:
    """Percentage strings to multipliers; unparseable or non-finite cells become NaN."""
    cleaned = values.astype(str).str.strip().str.rstrip("%").str.strip()
    numbers = pd.to_numeric(cleaned, errors="coerce").astype(float)
    return numbers.where(np.isfinite(numbers)) / 100


def parse_percentage(value: Optional[str]) -> Optional[float]:
    """
    Convert a percentage string into a multiplier.

    ``"112.02%"`` becomes ``1.1202``. Empty, non-numeric or non-finite input
    yields ``None``.
    """
    if value is None:
        return None
    number = _percentages(pd.Series([value], dtype=object)).iloc[0]
    return None if pd.isna(number) else float(number)


def _numeric(frame: pd.DataFrame) -> pd.DataFrame:
    if frame.empty:
        return frame.astype(float)
    numbers = frame.apply(lambda col: pd.to_numeric(col.astype(str).str.strip(), errors="coerce")).astype(float)
    return numbers.where(np.isfinite(numbers))


def _read_table(raw_text: str, header_lines: int, min_columns: int) -> pd.DataFrame:
    """
    Read the data rows of a delimited table as strings.

    Blank lines are dropped. Short rows are padded with NaN, and only the
    first ``min_columns`` cells of each row are returned.
    """
    lines = [line for line in raw_text.splitlines()[header_lines:] if line.strip()]
    if not lines:
        return pd.DataFrame(columns=list(range(min_columns)), dtype=object)

    # One name per cell of the widest row, otherwise pandas turns the
    # leading cells of long rows into an index.
    width = max(min_columns, max(line.count(",") + 1 for line in lines))
    frame = pd.read_csv(io.StringIO("\n".join(lines)), header=None, names=list(range(width)), dtype=str)
    return frame.iloc[:, :min_columns]


def _quarter_or_none(label) -> Optional[Quarter]:
    try:
        return Quarter.from_label(label)
    except ValueError:
        return None


def parse_lifespan_table(raw_text: str) -> LifespanTable:
    """
    Parse the life-expectancy table.

    The first line is a header. Every following line holds an integer age and
    twelve monthly remaining-life values (months of life for birth months
    0-11). Short or non-numeric rows are skipped.
    """
    frame = _numeric(_read_table(raw_text, LIFESPAN_HEADER_LINES, LIFESPAN_MIN_COLUMNS))
    valid = frame.notna().all(axis=1) & (frame[0] % 1 == 0)

    skipped = int((~valid).sum())
    if skipped:
        logger.debug(f"Lifespan rows skipped (data row positions): {list(frame.index[~valid])}")

    rows = {
        int(row[0]): {month: float(row[month + 1]) for month in range(MONTHS_PER_YEAR)}
        for row in frame[valid].itertuples(index=False, name=None)
    }
    logger.info(f"Parsed lifespan table: {len(rows)} ages, {skipped} rows skipped")
    return LifespanTable.from_rows(rows)


def parse_indexation_series(raw_text: str) -> IndexationSeries:
    """
    Parse the quarterly indexation table.

    The first two lines are metadata and header. Every following line holds
    year, quarter label (I-IV) and two percentage strings for the primary
    account and the sub-account. Rows with an unknown quarter, an unparseable
    or non-positive factor are skipped.
    """
    raw = _read_table(raw_text, INDEXATION_HEADER_LINES, INDEXATION_MIN_COLUMNS)
    frame = pd.DataFrame(
        {
            "year": _numeric(raw[[0]])[0],
            "quarter": raw[1].map(_quarter_or_none),
            "primary": _percentages(raw[2]),
            "sub": _percentages(raw[3]),
        }
    )
    valid = (
        frame["year"].notna()
        & (frame["year"] % 1 == 0)
        & frame["quarter"].notna()
        & (frame["primary"] > 0)
        & (frame["sub"] > 0)
    )

    skipped = int((~valid).sum())
    if skipped:
        logger.debug(f"Indexation rows skipped (data row positions): {list(frame.index[~valid])}")

    records: List[IndexationRecord] = [
        IndexationRecord(year=int(year), quarter=quarter, primary_factor=float(primary), sub_factor=float(sub))
        for year, quarter, primary, sub in frame[valid].itertuples(index=False, name=None)
    ]
    series = IndexationSeries(tuple(records))
    logger.info(f"Parsed indexation series: {len(series)} quarters, {skipped} rows skipped")
    return series


def load_reference_data(raw_lifespan_text: Optional[str], raw_indexation_text: Optional[str]) -> ReferenceData:
    """
    Build the reference data model from the raw text of both tables.

    Raises:
        ReferenceDataLoadError: If either raw text is missing.
    """
    if raw_lifespan_text is None:
        raise ReferenceDataLoadError("Lifespan table text is unavailable")
    if raw_indexation_text is None:
        raise ReferenceDataLoadError("Indexation table text is unavailable")

    return ReferenceData(
        lifespan=parse_lifespan_table(raw_lifespan_text),
        indexation=parse_indexation_series(raw_indexation_text),
    )


__all__ = [
    "ReferenceDataLoadError",
    "parse_percentage",
    "parse_lifespan_table",
    "parse_indexation_series",
    "load_reference_data",
]
