"""
Report generators: two interchangeable strategies for Dataset -> Report.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict

from .aggregator import summarize_numeric
from .analyzer import ColumnType, analyze_columns
from .dataset import Dataset, ensure_not_empty
from .errors import EmptyInput, NotComputable
from .llm import call_llm
from .report import Report, SummaryOrFailure, assemble_report

logger = logging.getLogger(__name__)


class ReportGenerator(ABC):
    """Turns a Dataset into a Report."""

    name: str = ""

    @abstractmethod
    async def generate(self, dataset: Dataset) -> Report:
        ...


def build_statistical_report(dataset: Dataset) -> Report:
    """Analyzer -> Aggregator -> Assembler, synchronously.

    Raises EmptyInput before any analysis for a dataset without rows.
    Per-column NotComputable results are rendered, never raised.
    """
    ensure_not_empty(dataset)
    profiles = analyze_columns(dataset)

    summaries: Dict[str, SummaryOrFailure] = {}
    for profile in profiles:
        if profile.inferred_type is not ColumnType.NUMERICAL:
            continue
        try:
            summaries[profile.name] = summarize_numeric(dataset, profile.name)
        except NotComputable as e:
            logger.debug("Statistics not computable for %r: %s", profile.name, e.reason)
            summaries[profile.name] = e

    return assemble_report(dataset.row_count, dataset.column_count, profiles, summaries)


class StatisticalReportGenerator(ReportGenerator):
    name = "statistical"

    async def generate(self, dataset: Dataset) -> Report:
        return build_statistical_report(dataset)


SYSTEM_PROMPT = """You are an expert data analyst. You write clear, accurate reports about tabular datasets in valid Markdown."""

REPORT_PROMPT_TEMPLATE = """Analyze the CSV data below and write a comprehensive report.

```csv
{csv_data}
```

Use these Markdown sections, in this order:

1. **Data Overview**: number of rows (excluding the header) and number of columns.
2. **Column Analysis**: for each column, its name, its inferred data type (Numerical, Categorical, Text, Date or Boolean) and the percentage of missing or empty values with one decimal place (e.g. 15.2%).
3. **Basic Statistics**: for each Numerical column, the Mean, Median, Min, Max and Std Dev with two decimal places. If a statistic cannot be calculated, write "N/A" with a short reason and continue with the rest of the analysis.
4. **Key Insights & Observations**: patterns or relationships between columns, notable outliers or distributions, data quality issues, and suggested next steps for analysis or cleaning.
5. **Summary**: one short paragraph on the dataset's main characteristics and potential usefulness.

If the dataset is very large, say that the analysis may be based on a representative sample.
Output only the report."""


def has_minimum_input(csv_text: str) -> bool:
    """Header plus at least one data line."""
    if not csv_text:
        return False
    lines = [line for line in csv_text.strip().splitlines() if line.strip()]
    return len(lines) >= 2


class AIReportGenerator(ReportGenerator):
    """Delegates the report to a generative model; output is not deterministic."""

    name = "ai"

    async def generate(self, dataset: Dataset) -> Report:
        csv_text = dataset.to_csv_text()
        if not has_minimum_input(csv_text):
            raise EmptyInput()

        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": REPORT_PROMPT_TEMPLATE.format(csv_data=csv_text)},
        ]
        text = await call_llm(messages)
        logger.info("AI report generated (%d chars)", len(text))
        return Report(text=text, generator=self.name)


REPORT_GENERATORS = {
    StatisticalReportGenerator.name: StatisticalReportGenerator,
    AIReportGenerator.name: AIReportGenerator,
}


def get_report_generator(mode: str) -> ReportGenerator:
    """Pick a generator by name: 'statistical' or 'ai'."""
    try:
        return REPORT_GENERATORS[mode.lower()]()
    except KeyError:
        raise ValueError(f"Unknown report mode: {mode!r}. Use one of {sorted(REPORT_GENERATORS)}")
