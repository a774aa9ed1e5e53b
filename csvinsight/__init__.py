"""CSV Insight: CSV deduplication and descriptive statistical reports."""

from .analyzer import ColumnProfile, ColumnType, analyze_columns
from .aggregator import NumericSummary, summarize_numeric
from .dataset import Dataset, Record, parse_csv
from .dedup import deduplicate_rows
from .errors import CsvInsightError, CsvParseError, EmptyInput, ExternalServiceFailure, NotComputable
from .generators import (
    AIReportGenerator,
    ReportGenerator,
    StatisticalReportGenerator,
    build_statistical_report,
    get_report_generator,
)
from .report import Report, assemble_report

__version__ = "1.0.0"
