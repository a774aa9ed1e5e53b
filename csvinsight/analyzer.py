"""
Column analysis: type inference and missing-value percentage.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .aggregator import parse_number, round_half_up
from .dataset import Dataset, ensure_not_empty

logger = logging.getLogger(__name__)

# Type inference looks at the head of the file only.
TYPE_SAMPLE_SIZE = 100
NUMERIC_RATIO_THRESHOLD = 0.8


class ColumnType(str, Enum):
    NUMERICAL = "Numerical"
    CATEGORICAL = "Categorical"


@dataclass(frozen=True)
class ColumnProfile:
    name: str
    inferred_type: ColumnType
    missing_percentage: float


def is_missing(cell: Optional[str]) -> bool:
    """Absent, empty and whitespace-only cells all count as missing."""
    return cell is None or cell.strip() == ""


def infer_column_type(dataset: Dataset, column: str) -> ColumnType:
    """Classify a column from its first TYPE_SAMPLE_SIZE records.

    Numerical only when strictly more than 80% of the non-empty sampled
    cells parse as finite numbers; a column with no non-empty cells in the
    sample is Categorical.
    """
    sample = [record.cell(column) for record in dataset.records[:TYPE_SAMPLE_SIZE]]
    non_empty = [cell for cell in sample if cell]
    if not non_empty:
        return ColumnType.CATEGORICAL

    numeric_like = sum(1 for cell in non_empty if parse_number(cell) is not None)
    ratio = numeric_like / len(non_empty)
    if ratio > NUMERIC_RATIO_THRESHOLD:
        return ColumnType.NUMERICAL
    return ColumnType.CATEGORICAL


def missing_percentage(dataset: Dataset, column: str) -> float:
    """Percentage of missing cells over the whole dataset, one decimal."""
    ensure_not_empty(dataset)
    missing = sum(1 for cell in dataset.column_values(column) if is_missing(cell))
    return round_half_up(100 * missing / dataset.row_count, 1)


def profile_column(dataset: Dataset, column: str) -> ColumnProfile:
    return ColumnProfile(
        name=column,
        inferred_type=infer_column_type(dataset, column),
        missing_percentage=missing_percentage(dataset, column),
    )


def analyze_columns(dataset: Dataset) -> List[ColumnProfile]:
    """One ColumnProfile per column, in header order."""
    ensure_not_empty(dataset)
    profiles = [profile_column(dataset, col) for col in dataset.columns]
    logger.debug(
        "Analyzed %d columns (%d numerical)",
        len(profiles),
        sum(1 for p in profiles if p.inferred_type is ColumnType.NUMERICAL),
    )
    return profiles
