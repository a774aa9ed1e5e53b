"""
Headline figures shown beside the dashboard charts.
"""

from collections import Counter
from typing import Any, Dict, List, Optional

from .aggregator import format_number, parse_number
from .dataset import Dataset

TOP_CATEGORIES = 5


def _typed_row(dataset: Dataset, index: int) -> Dict[str, Any]:
    """Trimmed non-blank cells of one record, numbers parsed."""
    row = {}
    record = dataset.records[index]
    for column in dataset.columns:
        cell = record.cell(column)
        if cell is None or not cell.strip():
            continue
        value = cell.strip()
        number = parse_number(value)
        row[column] = number if number is not None else value
    return row


def category_counts(values: List[str], top: int = TOP_CATEGORIES) -> List[Dict[str, Any]]:
    """Top categories by count, then an 'Other' bucket for the rest."""
    counts = Counter(values)
    # Counter.most_common keeps first-seen order for ties
    ranked = counts.most_common()
    buckets = [{"name": name, "value": count} for name, count in ranked[:top]]
    other = sum(count for _, count in ranked[top:])
    if other > 0:
        buckets.append({"name": "Other", "value": other})
    return buckets


def dashboard_summary(dataset: Dataset) -> Dict[str, Any]:
    rows = [_typed_row(dataset, i) for i in range(dataset.row_count)]
    rows = [row for row in rows if row]

    numeric_column: Optional[str] = None
    category_column: Optional[str] = None
    if rows:
        first = rows[0]
        numeric_column = next((c for c in dataset.columns if isinstance(first.get(c), float)), None)
        category_column = next((c for c in dataset.columns if isinstance(first.get(c), str)), None)

    average = None
    if numeric_column:
        values = [row[numeric_column] for row in rows if isinstance(row.get(numeric_column), float)]
        if values:
            average = format_number(sum(values) / len(values))

    categories: List[Dict[str, Any]] = []
    if category_column:
        categories = category_counts(
            [row[category_column] for row in rows if isinstance(row.get(category_column), str)]
        )

    return {
        "total_rows": len(rows),
        "numeric_column": numeric_column,
        "average_numeric": average,
        "category_column": category_column,
        "category_counts": categories,
    }
