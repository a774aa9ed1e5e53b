"""
Parsed CSV data: explicit Record and Dataset types plus the pandas-backed parser.
"""

import io
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import pandas as pd

from .errors import CsvParseError, EmptyInput

logger = logging.getLogger(__name__)


class Record(Mapping):
    """One data row: column name -> cell string. Immutable once built.

    Columns the source row did not reach are simply absent.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: Mapping):
        self._cells = dict(cells)

    def __getitem__(self, column: str) -> str:
        return self._cells[column]

    def __iter__(self) -> Iterator[str]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"Record({self._cells!r})"

    def cell(self, column: str) -> Optional[str]:
        """Cell value, or None when the row has no such field."""
        return self._cells.get(column)


@dataclass(frozen=True)
class Dataset:
    """Ordered column names plus ordered records, validated on construction."""

    columns: Tuple[str, ...]
    records: Tuple[Record, ...]

    def __post_init__(self):
        columns = tuple(self.columns)
        records = tuple(r if isinstance(r, Record) else Record(r) for r in self.records)
        if len(set(columns)) != len(columns):
            raise ValueError("Column names must be unique")
        known = set(columns)
        for idx, record in enumerate(records):
            extra = set(record) - known
            if extra:
                raise ValueError(f"Record {idx} has unknown columns: {sorted(extra)}")
        object.__setattr__(self, "columns", columns)
        object.__setattr__(self, "records", records)

    @property
    def row_count(self) -> int:
        return len(self.records)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def column_values(self, column: str) -> List[Optional[str]]:
        """Every record's cell for ``column`` (None where absent), in row order."""
        return [record.cell(column) for record in self.records]

    def to_frame(self) -> pd.DataFrame:
        """String cells as a DataFrame; absent cells become NaN."""
        return pd.DataFrame.from_records(
            [dict(r) for r in self.records], columns=list(self.columns)
        )

    def to_csv_text(self) -> str:
        """Serialize back to CSV, header first."""
        return self.to_frame().to_csv(index=False, lineterminator="\n")

    def preview(self, n: int = 10) -> List[Dict[str, str]]:
        """First ``n`` records as plain dicts, missing cells shown as ''."""
        return [
            {col: (record.cell(col) or "") for col in self.columns}
            for record in self.records[:n]
        ]


def dataset_from_frame(df: pd.DataFrame) -> Dataset:
    """Build a Dataset from a string DataFrame, dropping NaN cells."""
    columns = [str(c) for c in df.columns]
    records = []
    for row in df.itertuples(index=False, name=None):
        cells = {col: value for col, value in zip(columns, row) if not pd.isna(value)}
        records.append(Record(cells))
    return Dataset(columns=tuple(columns), records=tuple(records))


def _unique_columns(header: Sequence[str]) -> List[str]:
    """Header names made unique the way pandas does it: a, a.1, a.2 ..."""
    seen = set()
    columns = []
    for idx, raw in enumerate(header):
        name = raw if raw else f"Unnamed: {idx}"
        candidate, counter = name, 1
        while candidate in seen:
            candidate = f"{name}.{counter}"
            counter += 1
        seen.add(candidate)
        columns.append(candidate)
    return columns


def parse_csv(text: str) -> Dataset:
    """Parse CSV text (first line is the header) into a Dataset.

    Every cell is read as a string and NA detection is off, so an empty field
    stays '' and a short row is padded with ''. Blank lines are skipped. The
    header fixes the field count: a data row with more fields (a trailing
    comma included) is a CsvParseError, never an implicit index column.
    Raises EmptyInput for empty or header-only input.
    """
    if text is None or not text.strip():
        raise EmptyInput("CSV data is empty")

    try:
        raw = pd.read_csv(
            io.StringIO(text),
            header=None,
            index_col=False,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        raise EmptyInput("CSV data is empty")
    except pd.errors.ParserError as e:
        raise CsvParseError(f"Could not parse CSV: {e}") from e

    if len(raw) == 0 or len(raw.columns) == 0:
        raise EmptyInput("CSV header is missing")

    df = raw.iloc[1:].reset_index(drop=True).fillna("")
    df.columns = _unique_columns([str(v) for v in raw.iloc[0]])
    if len(df) == 0:
        raise EmptyInput()

    dataset = dataset_from_frame(df)
    logger.debug("Parsed CSV: %d rows x %d columns", dataset.row_count, dataset.column_count)
    return dataset


def ensure_not_empty(dataset: Dataset) -> Dataset:
    """Guard run before analysis: header plus at least one data row."""
    if dataset.column_count == 0:
        raise EmptyInput("CSV header is missing")
    if dataset.row_count == 0:
        raise EmptyInput()
    return dataset


def make_dataset(columns: Sequence[str], rows: Sequence[Mapping]) -> Dataset:
    """Convenience constructor from plain column and row sequences."""
    return Dataset(columns=tuple(columns), records=tuple(Record(r) for r in rows))
