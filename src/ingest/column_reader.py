"""Delimited occurrence file reader.

This module parses GBIF-style delimited exports into typed columns with
pyarrow. Every field is first read as text, then each column's type is
inferred from a bounded prefix of rows by casting the sample, and the
whole column is cast. Integer columns holding decimals past the sample
are widened to floats. Other values that do not fit become null.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Mapping, Sequence

import pyarrow as pa
import pyarrow.compute as pc
from pyarrow import csv as pa_csv

from core.errors import GlobeIngestError
from core.logging_config import get_logger
from core.types import ColumnReadOptions

_LOGGER = get_logger(__name__)

# Tried in order; the first type every sampled value casts to wins.
_INFERENCE_ORDER: tuple[pa.DataType, ...] = (pa.int64(), pa.float64(), pa.bool_())
_CAST_ERRORS = (pa.ArrowInvalid, pa.ArrowNotImplementedError)
_TYPE_NAMES = {
    pa.int64(): "int64",
    pa.float64(): "float64",
    pa.bool_(): "bool",
    pa.string(): "string",
}


class ColumnView(Mapping[str, Sequence[object]]):
    """Read-only, column-oriented view of a parsed occurrence file.

    Indexing by column name returns the column as a list of Python
    values with ``None`` for nulls. Lists are built on first access.
    """

    def __init__(self, table: pa.Table, schema: Mapping[str, str]) -> None:
        self._table = table
        self._schema = dict(schema)
        self._cache: dict[str, list[object]] = {}

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._table.column_names)

    @property
    def row_count(self) -> int:
        return self._table.num_rows

    @property
    def schema(self) -> Mapping[str, str]:
        """Inferred type name per column, in file order."""
        return dict(self._schema)

    def column(self, name: str) -> list[object]:
        """Return one column's values.

        Raises:
            KeyError: If the column does not exist.
        """
        if name not in self._cache:
            if name not in self._schema:
                raise KeyError(name)
            self._cache[name] = self._table.column(name).to_pylist()
        return self._cache[name]

    def __getitem__(self, name: str) -> list[object]:
        return self.column(name)

    def __contains__(self, name: object) -> bool:
        return name in self._schema

    def __iter__(self) -> Iterator[str]:
        return iter(self._table.column_names)

    def __len__(self) -> int:
        return self._table.num_columns


def read_columns(
    source_path: str | Path,
    options: ColumnReadOptions | None = None,
) -> ColumnView:
    """Parse a delimited file into typed columns.

    Args:
        source_path: Path to a delimited text file with a header row.
        options: Delimiter, quote character, inference sample size, and
            columns always read as floats.

    Returns:
        Column view with inferred schema.

    Raises:
        GlobeIngestError: If the file is missing, empty, or malformed.
    """
    read_options = options or ColumnReadOptions()
    path = Path(source_path).expanduser()
    if not path.is_file():
        raise GlobeIngestError(
            f"Failed to read occurrences at {path}: file does not exist. "
            "Provide an existing GBIF export file."
        )
    parse_options = pa_csv.ParseOptions(
        delimiter=read_options.delimiter,
        quote_char=read_options.quote_char if read_options.quote_char else False,
    )
    column_names = _read_column_names(path, parse_options)
    text_table = _read_text_table(path, column_names, parse_options)
    typed_columns: dict[str, pa.ChunkedArray] = {}
    schema: dict[str, str] = {}
    for name in column_names:
        text_column = text_table.column(name)
        if name in read_options.float_columns:
            data_type = pa.float64()
        else:
            data_type = _infer_column_type(text_column, read_options.infer_schema_rows)
        typed_column, data_type = _cast_column(text_column, data_type)
        typed_columns[name] = typed_column
        schema[name] = _TYPE_NAMES[data_type]
    table = pa.table(typed_columns)
    _LOGGER.info(
        "columns_read",
        source=str(path),
        rows=table.num_rows,
        columns=table.num_columns,
    )
    return ColumnView(table, schema)


def _read_column_names(path: Path, parse_options: pa_csv.ParseOptions) -> list[str]:
    """Read column names from the header row.

    Raises:
        GlobeIngestError: If the header is missing or has duplicate names.
    """
    try:
        with pa_csv.open_csv(str(path), parse_options=parse_options) as reader:
            header = list(reader.schema.names)
    except (pa.ArrowInvalid, OSError) as error:
        raise GlobeIngestError(
            f"Failed to read header of {path}: {error}. Check the file encoding and delimiter."
        ) from error
    if not header:
        raise GlobeIngestError(
            f"Failed to read occurrences at {path}: file has no header row."
        )
    duplicates = sorted({name for name in header if header.count(name) > 1})
    if duplicates:
        raise GlobeIngestError(
            f"Failed to read occurrences at {path}: duplicate columns {duplicates}."
        )
    return header


def _read_text_table(
    path: Path,
    column_names: list[str],
    parse_options: pa_csv.ParseOptions,
) -> pa.Table:
    """Parse every column as nullable text.

    Raises:
        GlobeIngestError: If pyarrow cannot parse the file structure.
    """
    convert_options = pa_csv.ConvertOptions(
        column_types={name: pa.string() for name in column_names},
        null_values=[""],
        strings_can_be_null=True,
        quoted_strings_can_be_null=True,
    )
    try:
        return pa_csv.read_csv(
            str(path),
            parse_options=parse_options,
            convert_options=convert_options,
        )
    except (pa.ArrowInvalid, OSError) as error:
        raise GlobeIngestError(
            f"Failed to parse occurrences at {path}: {error}. "
            "Check the delimiter, quoting, and field counts."
        ) from error


def _infer_column_type(column: pa.ChunkedArray, sample_rows: int) -> pa.DataType:
    """Pick the first type every non-null sampled value casts to."""
    sample = column.slice(0, sample_rows).drop_null()
    if len(sample) == 0:
        return pa.string()
    for data_type in _INFERENCE_ORDER:
        try:
            pc.cast(_prepare_text(sample, data_type), data_type)
        except _CAST_ERRORS:
            continue
        return data_type
    return pa.string()


def _cast_column(
    column: pa.ChunkedArray,
    data_type: pa.DataType,
) -> tuple[pa.ChunkedArray, pa.DataType]:
    """Cast a text column, returning the column and its final type.

    An integer column that fails to cast is widened to floats. Values
    that still do not fit the type become null one by one.
    """
    if data_type == pa.string():
        return column, data_type
    prepared = _prepare_text(column, data_type)
    if data_type == pa.int64():
        try:
            return pc.cast(prepared, data_type), data_type
        except _CAST_ERRORS:
            data_type = pa.float64()
    try:
        return pc.cast(prepared, data_type), data_type
    except _CAST_ERRORS:
        return _cast_values(prepared, data_type), data_type


def _prepare_text(column: pa.ChunkedArray, data_type: pa.DataType) -> pa.ChunkedArray:
    """Normalize text so pyarrow's parsers accept it for ``data_type``."""
    if data_type == pa.bool_():
        return pc.utf8_lower(column)
    # Arrow's number parsers reject an explicit plus sign.
    return pc.replace_substring_regex(column, pattern=r"^\+([0-9.])", replacement=r"\1")


def _cast_values(column: pa.ChunkedArray, data_type: pa.DataType) -> pa.ChunkedArray:
    """Cast each value separately, nulling the ones that do not parse."""
    values: list[object] = []
    for text in column.to_pylist():
        if text is None:
            values.append(None)
            continue
        try:
            values.append(pa.scalar(text, type=pa.string()).cast(data_type).as_py())
        except _CAST_ERRORS:
            values.append(None)
    return pa.chunked_array([pa.array(values, type=data_type)])
