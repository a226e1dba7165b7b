import pandas as pd
import pytest

from pension_model.reference import IndexationRecord, IndexationSeries, LifespanTable, map_quarter
from pension_model.schema import IndexationColumns, Quarter


def make_table():
    return LifespanTable.from_rows(
        {
            60: {m: 250.0 - m for m in range(12)},
            65: {m: 200.0 - m for m in range(12)},
            70: {m: 150.0 - m for m in range(12)},
        }
    )


@pytest.mark.parametrize(
    "quarter, expected",
    [
        ("I", (2024, Quarter.III)),
        ("II", (2024, Quarter.IV)),
        ("III", (2025, Quarter.I)),
        ("IV", (2025, Quarter.II)),
        (Quarter.IV, (2025, Quarter.II)),
    ],
)
def test_map_quarter(quarter, expected):
    assert map_quarter(2025, quarter) == expected


def test_map_quarter_rejects_unknown_label():
    with pytest.raises(ValueError):
        map_quarter(2025, "V")


def test_exact_age_lookup():
    assert make_table().remaining_life_months(65, 3) == 197.0


def test_missing_age_uses_next_higher_age():
    table = make_table()
    assert table.resolve_age(61) == 65
    assert table.remaining_life_months(61, 0) == table.remaining_life_months(65, 0)


def test_age_above_maximum_clamps_to_maximum():
    table = make_table()
    assert table.remaining_life_months(95, 4) == table.remaining_life_months(70, 4)


def test_age_below_minimum_uses_smallest_age():
    assert make_table().resolve_age(40) == 60


@pytest.mark.parametrize("month, expected", [(-3, 250.0), (0, 250.0), (11, 239.0), (40, 239.0)])
def test_birth_month_is_clamped(month, expected):
    assert make_table().remaining_life_months(60, month) == expected


def test_empty_table_returns_zero():
    table = LifespanTable()
    assert table.resolve_age(65) is None
    assert table.remaining_life_months(65, 0) == 0.0


def test_table_is_read_only():
    table = make_table()
    with pytest.raises(TypeError):
        table.row(60)[0] = 1.0


def test_indexation_lookup_is_exact_only():
    series = IndexationSeries(
        (
            IndexationRecord(2024, Quarter.II, 1.05, 1.02),
            IndexationRecord(2024, Quarter.I, 1.04, 1.01),
        )
    )
    assert [r.quarter for r in series] == [Quarter.I, Quarter.II]
    assert series.indexation_for(2024, "I").sub_factor == 1.01
    assert series.indexation_for(2024, "III") is None
    assert series.indexation_for(2023, "I") is None
    assert series.indexation_for(2024, "V") is None
    assert series.indexation_for(2024, "") is None


def test_duplicate_indexation_keeps_later_row():
    series = IndexationSeries(
        (
            IndexationRecord(2024, Quarter.I, 1.04, 1.01),
            IndexationRecord(2024, Quarter.I, 1.07, 1.03),
        )
    )
    assert len(series) == 1
    assert series.indexation_for(2024, Quarter.I).primary_factor == 1.07


def test_indexation_to_frame(reference_data):
    df = reference_data.indexation.to_frame()
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == IndexationColumns.ordered()
    assert len(df) == 4
    assert df[IndexationColumns.QUARTER.value].tolist() == ["I", "II", "III", "IV"]
