"""
Exact duplicate-row removal.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from .dataset import Dataset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DedupResult:
    dataset: Dataset
    original_rows: int
    removed_count: int

    @property
    def remaining_rows(self) -> int:
        return self.dataset.row_count


def deduplicate_rows(dataset: Dataset) -> DedupResult:
    """Drop records identical to an earlier one, keeping first occurrences.

    Two rows are duplicates when their cells, in column order, serialize to
    the same strings. An absent cell serializes as ''.
    """
    frame = dataset.to_frame().fillna("")
    duplicated = frame.duplicated(keep="first")
    kept = tuple(record for record, dup in zip(dataset.records, duplicated) if not dup)
    removed = dataset.row_count - len(kept)

    logger.info("Deduplication removed %d of %d rows", removed, dataset.row_count)
    return DedupResult(
        dataset=Dataset(columns=dataset.columns, records=kept),
        original_rows=dataset.row_count,
        removed_count=removed,
    )


def cleaned_filename(filename: str) -> str:
    """'sales.csv' -> 'sales_cleaned.csv'."""
    stem = Path(filename or "dataset").stem or "dataset"
    return f"{stem}_cleaned.csv"
