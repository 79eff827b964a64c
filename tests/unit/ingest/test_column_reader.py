"""Unit tests for delimited column reading."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import GlobeIngestError
from core.types import ColumnReadOptions
from ingest.column_reader import read_columns
from tests.fixture_paths import occurrence_fixture


def test_read_columns_infers_gbif_schema() -> None:
    """Reader should type coordinates as floats and dates as integers."""
    view = read_columns(occurrence_fixture("five_rows.tsv"))

    assert view.row_count == 5
    assert view.names[:2] == ("gbifID", "scientificName")
    assert view.schema["decimalLatitude"] == "float64"
    assert view.schema["decimalLongitude"] == "float64"
    assert view.schema["year"] == "int64"
    assert view.schema["scientificName"] == "string"


def test_read_columns_empty_fields_are_null() -> None:
    """Empty numeric fields should come back as None."""
    view = read_columns(occurrence_fixture("five_rows.tsv"))

    assert view.column("decimalLongitude")[2] is None
    assert view["year"] == [2019, 2020, 2021, None, 2024]
    assert view["day"][3] is None


def test_read_columns_behaves_as_mapping() -> None:
    """Column view should support membership and length."""
    view = read_columns(occurrence_fixture("five_rows.tsv"))

    assert "decimalLatitude" in view
    assert "eventDate" not in view
    assert len(view) == 7
    with pytest.raises(KeyError):
        view.column("eventDate")


def test_read_columns_reads_coordinates_as_floats_past_sample() -> None:
    """Integer-looking coordinates stay floats so later decimals survive."""
    options = ColumnReadOptions(infer_schema_rows=2)

    view = read_columns(occurrence_fixture("mixed_types.tsv"), options)

    assert view.schema["decimalLatitude"] == "float64"
    assert view["decimalLatitude"] == [10.0, 11.0, 12.5]


def test_read_columns_widens_integer_column_past_sample(tmp_path: Path) -> None:
    """A decimal after an all-integer sample widens the column to floats."""
    source = tmp_path / "counts.tsv"
    source.write_text("individualCount\n1\n2\n3.5\n", encoding="utf-8")

    view = read_columns(source, ColumnReadOptions(infer_schema_rows=2))

    assert view.schema["individualCount"] == "float64"
    assert view["individualCount"] == [1.0, 2.0, 3.5]


def test_read_columns_nulls_values_outside_inferred_sample(tmp_path: Path) -> None:
    """Values past the sample that fit no number become null individually."""
    source = tmp_path / "depths.tsv"
    source.write_text("depth\n1.5\n2.5\nshallow\n4\n", encoding="utf-8")

    view = read_columns(source, ColumnReadOptions(infer_schema_rows=2))

    assert view.schema["depth"] == "float64"
    assert view["depth"] == [1.5, 2.5, None, 4.0]


def test_read_columns_coordinate_text_nulls_only_bad_values(tmp_path: Path) -> None:
    """Unparseable coordinate text nulls that value, not the whole column."""
    source = tmp_path / "text_latitude.tsv"
    source.write_text(
        "decimalLatitude\tdecimalLongitude\n10.5\t1\nunknown\t2\n+11.5\t3\n",
        encoding="utf-8",
    )

    view = read_columns(source)

    assert view["decimalLatitude"] == [10.5, None, 11.5]
    assert view["decimalLongitude"] == [1.0, 2.0, 3.0]


def test_read_columns_accepts_plus_signed_numbers(tmp_path: Path) -> None:
    """A leading plus sign does not demote a numeric column to text."""
    source = tmp_path / "signed.tsv"
    source.write_text("elevation\n-3\n+7\n", encoding="utf-8")

    view = read_columns(source)

    assert view.schema["elevation"] == "int64"
    assert view["elevation"] == [-3, 7]


def test_read_columns_widens_to_float_within_sample() -> None:
    """A decimal value inside the sample should make the column float."""
    view = read_columns(occurrence_fixture("mixed_types.tsv"))

    assert view.schema["decimalLatitude"] == "float64"
    assert view["decimalLatitude"] == [10.0, 11.0, 12.5]


def test_read_columns_infers_text_and_boolean_columns() -> None:
    """Non-numeric samples become text; true/false samples become booleans."""
    view = read_columns(occurrence_fixture("mixed_types.tsv"))

    assert view.schema["year"] == "string"
    assert view.schema["hasCoordinate"] == "bool"
    assert view["hasCoordinate"] == [True, False, True]


def test_read_columns_respects_delimiter_and_quoting() -> None:
    """Quoted fields may contain the delimiter."""
    options = ColumnReadOptions(delimiter=",")

    view = read_columns(occurrence_fixture("comma_quoted.csv"), options)

    assert view["occurrenceID"] == ["a,1", "b,2"]
    assert view["day"] == [4, None]


def test_read_columns_raises_for_missing_file(tmp_path: Path) -> None:
    """Reader should fail when the file is missing."""
    with pytest.raises(GlobeIngestError):
        read_columns(tmp_path / "does-not-exist.tsv")


def test_read_columns_raises_for_ragged_rows() -> None:
    """Rows with the wrong field count are a structural failure."""
    with pytest.raises(GlobeIngestError):
        read_columns(occurrence_fixture("ragged_rows.tsv"))


def test_read_columns_raises_for_empty_file(tmp_path: Path) -> None:
    """A file without a header row cannot be read."""
    empty_file = tmp_path / "empty.tsv"
    empty_file.write_text("", encoding="utf-8")

    with pytest.raises(GlobeIngestError):
        read_columns(empty_file)


def test_read_columns_raises_for_duplicate_header(tmp_path: Path) -> None:
    """Duplicate column names make columns ambiguous."""
    source = tmp_path / "duplicate.tsv"
    source.write_text("year\tyear\n2001\t2002\n", encoding="utf-8")

    with pytest.raises(GlobeIngestError):
        read_columns(source)


def test_read_columns_strips_byte_order_mark_from_header(tmp_path: Path) -> None:
    """A UTF-8 byte order mark is not part of the first column name."""
    source = tmp_path / "bom.tsv"
    source.write_bytes(b"\xef\xbb\xbfdecimalLatitude\tdecimalLongitude\n1.5\t2.5\n")

    view = read_columns(source)

    assert view.names == ("decimalLatitude", "decimalLongitude")
    assert view["decimalLatitude"] == [1.5]


def test_read_columns_quoted_header_names_match_data(tmp_path: Path) -> None:
    """Quoted header names are unquoted by the same parser as the data."""
    source = tmp_path / "quoted_header.csv"
    source.write_text('"decimalLatitude","site, name"\n1.5,"a, b"\n', encoding="utf-8")

    view = read_columns(source, ColumnReadOptions(delimiter=","))

    assert view.names == ("decimalLatitude", "site, name")
    assert view["site, name"] == ["a, b"]
