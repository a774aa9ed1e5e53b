"""
Numeric aggregate statistics for columns classified as Numerical.
"""

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import List, Optional

import numpy as np

from .dataset import Dataset
from .errors import NotComputable


@dataclass(frozen=True)
class NumericSummary:
    """Full-precision statistics; round only when presenting."""

    mean: float
    median: float
    min: float
    max: float
    std_dev: float

    def rounded(self, places: int = 2) -> "NumericSummary":
        return NumericSummary(
            mean=round_half_up(self.mean, places),
            median=round_half_up(self.median, places),
            min=round_half_up(self.min, places),
            max=round_half_up(self.max, places),
            std_dev=round_half_up(self.std_dev, places),
        )


def round_half_up(value: float, places: int) -> float:
    """Round half away from zero on the shortest decimal repr of ``value``.

    Python's round() is banker's rounding on the binary value, so 2.675
    would come out as 2.67.
    """
    quantum = Decimal(1).scaleb(-places)
    try:
        rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # magnitude beyond decimal context precision; nothing left to round
        return float(value)
    # + 0.0 folds -0.0 into 0.0
    return float(rounded) + 0.0


def format_number(value: float, places: int = 2) -> str:
    return f"{round_half_up(value, places):.{places}f}"


def parse_number(cell: Optional[str]) -> Optional[float]:
    """Parse a cell as a finite float, or None."""
    if cell is None:
        return None
    text = cell.strip()
    if not text or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def numeric_sample(dataset: Dataset, column: str) -> List[float]:
    """Every parseable value of ``column``; other cells are skipped."""
    values = (parse_number(cell) for cell in dataset.column_values(column))
    return [v for v in values if v is not None]


def _mean_and_std(arr: np.ndarray):
    """Mean and population std dev, falling back to scaled values on overflow."""
    with np.errstate(over="ignore", invalid="ignore"):
        mean = float(arr.mean())
        std = float(arr.std(ddof=0))
    if math.isfinite(mean) and math.isfinite(std):
        return mean, std
    # Both are bounded by max |x|, so the scaled pass cannot overflow
    scale = float(np.abs(arr).max())
    scaled = arr / scale
    return float(scaled.mean()) * scale, float(scaled.std(ddof=0)) * scale


def summarize_values(values: List[float]) -> NumericSummary:
    if not values:
        raise NotComputable("no numeric values")

    arr = np.sort(np.asarray(values, dtype=float))
    n = len(arr)
    # Upper-middle element for even n, not the average of the two.
    median = arr[n // 2]
    mean, std_dev = _mean_and_std(arr)
    return NumericSummary(
        mean=mean,
        median=float(median),
        min=float(arr[0]),
        max=float(arr[-1]),
        std_dev=std_dev if n > 1 else 0.0,
    )



def summarize_numeric(dataset: Dataset, column: str) -> NumericSummary:
    """Mean, median, min, max and population std dev of a column.

    Raises NotComputable when no cell parses as a number.
    """
    return summarize_values(numeric_sample(dataset, column))
