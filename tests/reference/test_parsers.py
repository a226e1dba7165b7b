import pytest

from pension_model.reference import (
    ReferenceDataLoadError,
    load_reference_data,
    parse_indexation_series,
    parse_lifespan_table,
    parse_percentage,
)
from pension_model.schema import Quarter


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("112.02%", 1.1202),
        ("100%", 1.0),
        (" 98.5 % ", 0.985),
        ("105", 1.05),
    ],
)
def test_parse_percentage(raw, expected):
    assert parse_percentage(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", ["", "abc", "%", None, "nan%", "inf"])
def test_parse_percentage_malformed_returns_none(raw):
    assert parse_percentage(raw) is None


def test_parse_lifespan_skips_header_and_bad_rows():
    months = ",".join(str(200 - m) for m in range(12))
    text = "\n".join(
        [
            "age,m0,m1,m2,m3,m4,m5,m6,m7,m8,m9,m10,m11",
            f"60,{months}",
            "61,1,2,3",  # too few columns
            f"abc,{months}",  # non-numeric age
            "62," + ",".join(["x"] * 12),  # non-numeric months
            "",
            f"65,{months}",
        ]
    )
    table = parse_lifespan_table(text)
    assert table.ages == (60, 65)
    assert table.remaining_life_months(60, 0) == 200
    assert table.remaining_life_months(65, 11) == 189


def test_parse_lifespan_header_only_gives_empty_table():
    table = parse_lifespan_table("age,m0,m1\n")
    assert len(table) == 0
    assert table.remaining_life_months(65, 0) == 0.0


def test_parse_indexation_skips_two_header_lines_and_bad_rows():
    text = "\n".join(
        [
            "Indexation factors",
            "year,quarter,primary,sub",
            "2024,I,110.00%,105.00%",
            "2024,V,110.00%,105.00%",  # unknown quarter
            "2024,II,abc,105.00%",  # bad percentage
            "2024,III,-1%,105.00%",  # non-positive factor
            "2024,IV,112.02%",  # too few columns
            "2024, iv ,112.02%,104.00%",
        ]
    )
    series = parse_indexation_series(text)
    assert len(series) == 2
    assert series.indexation_for(2024, Quarter.I).primary_factor == pytest.approx(1.10)
    assert series.indexation_for(2024, "IV").primary_factor == pytest.approx(1.1202)
    assert series.indexation_for(2024, "II") is None


def test_load_reference_data_builds_both_tables(reference_data):
    assert reference_data.lifespan.ages == (60, 62, 65, 70)
    assert len(reference_data.indexation) == 4


@pytest.mark.parametrize("lifespan, indexation", [(None, "x\ny\n"), ("age\n", None)])
def test_load_reference_data_missing_text_is_fatal(lifespan, indexation):
    with pytest.raises(ReferenceDataLoadError):
        load_reference_data(lifespan, indexation)


def test_parse_tables_tolerate_wider_rows_and_quoted_cells():
    months = ",".join(str(300 - m) for m in range(12))
    lifespan = parse_lifespan_table(
        "\n".join(
            [
                "age,m0,m1,m2,m3,m4,m5,m6,m7,m8,m9,m10,m11",
                f"61,{months}",
                f"60,{months},trailing note",
                "62," + ",".join(["inf"] * 12),  # non-finite months
            ]
        )
    )
    assert lifespan.ages == (60, 61)
    assert lifespan.remaining_life_months(60, 0) == 300

    indexation = parse_indexation_series(
        "\n".join(
            [
                "Indexation factors,,,",
                "year,quarter,primary,sub",
                '2025,"II",110.50%,105.00%,extra',
                "2025.5,III,110.00%,105.00%",  # fractional year
            ]
        )
    )
    assert len(indexation) == 1
    assert indexation.indexation_for(2025, Quarter.II).primary_factor == pytest.approx(1.105)
