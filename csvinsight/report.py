"""
Report assembly: renders column profiles and numeric summaries as Markdown.
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence, Union

from .aggregator import NumericSummary, format_number
from .analyzer import ColumnProfile, ColumnType
from .errors import NotComputable

SummaryOrFailure = Union[NumericSummary, NotComputable]

STAT_LABELS = [
    ("Mean", "mean"),
    ("Median", "median"),
    ("Min", "min"),
    ("Max", "max"),
    ("Std Dev", "std_dev"),
]


@dataclass(frozen=True)
class Report:
    text: str
    generator: str = "statistical"

    def __str__(self) -> str:
        return self.text


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" + ("" if count == 1 else "s")


def _statistics_lines(profile: ColumnProfile, result) -> List[str]:
    lines = [f"### {profile.name}", ""]
    if isinstance(result, NumericSummary):
        for label, attr in STAT_LABELS:
            lines.append(f"- {label}: {format_number(getattr(result, attr))}")
    elif isinstance(result, NotComputable):
        lines.append(f"- N/A ({result.reason})")
    else:
        lines.append("- N/A (not computed)")
    lines.append("")
    return lines


def assemble_report(
    row_count: int,
    column_count: int,
    profiles: Sequence[ColumnProfile],
    summaries: Dict[str, SummaryOrFailure],
) -> Report:
    """Render the report sections in their fixed order.

    Overview, per-column analysis, statistics for Numerical columns and a
    closing summary sentence. Output depends only on the arguments.
    """
    lines = [
        "# Data Report",
        "",
        "## Data Overview",
        "",
        f"- Number of rows: {row_count}",
        f"- Number of columns: {column_count}",
        "",
        "## Column Analysis",
        "",
    ]
    for profile in profiles:
        lines.append(
            f"- **{profile.name}**: {profile.inferred_type.value}, "
            f"{profile.missing_percentage:.1f}% missing"
        )
    lines.extend(["", "## Basic Statistics", ""])

    numerical = [p for p in profiles if p.inferred_type is ColumnType.NUMERICAL]
    if not numerical:
        lines.extend(["No numerical columns found.", ""])
    for profile in numerical:
        lines.extend(_statistics_lines(profile, summaries.get(profile.name)))

    lines.extend([
        "## Summary",
        "",
        f"The dataset contains {_plural(row_count, 'row')} and {_plural(column_count, 'column')} "
        f"({len(numerical)} numerical, {len(profiles) - len(numerical)} categorical).",
        "",
    ])
    return Report(text="\n".join(lines))
