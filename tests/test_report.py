"""
Unit tests for report assembly
"""

from csvinsight.aggregator import NumericSummary
from csvinsight.analyzer import ColumnProfile, ColumnType
from csvinsight.errors import NotComputable
from csvinsight.report import assemble_report


def _profiles():
    return [
        ColumnProfile("age", ColumnType.NUMERICAL, 12.5),
        ColumnProfile("city", ColumnType.CATEGORICAL, 0.0),
        ColumnProfile("score", ColumnType.NUMERICAL, 100.0),
    ]


class TestAssembleReport:
    """Test cases for assemble_report"""

    def setup_method(self):
        """Set up test fixtures"""
        self.summaries = {
            "age": NumericSummary(mean=31.333333, median=30.0, min=18.0, max=52.0, std_dev=11.4455),
            "score": NotComputable("no numeric values"),
        }
        self.report = assemble_report(8, 3, _profiles(), self.summaries)
        self.text = self.report.text

    def test_sections_appear_in_fixed_order(self):
        positions = [
            self.text.index(heading)
            for heading in ("## Data Overview", "## Column Analysis", "## Basic Statistics", "## Summary")
        ]

        assert positions == sorted(positions)

    def test_overview_counts(self):
        assert "- Number of rows: 8" in self.text
        assert "- Number of columns: 3" in self.text

    def test_column_lines_in_order_with_one_decimal(self):
        lines = [line for line in self.text.splitlines() if line.startswith("- **")]

        assert lines == [
            "- **age**: Numerical, 12.5% missing",
            "- **city**: Categorical, 0.0% missing",
            "- **score**: Numerical, 100.0% missing",
        ]

    def test_statistics_rounded_to_two_places(self):
        assert "- Mean: 31.33" in self.text
        assert "- Median: 30.00" in self.text
        assert "- Min: 18.00" in self.text
        assert "- Max: 52.00" in self.text
        assert "- Std Dev: 11.45" in self.text

    def test_not_computable_renders_reason(self):
        score_section = self.text.split("### score")[1].split("## Summary")[0]

        assert "N/A (no numeric values)" in score_section

    def test_categorical_columns_have_no_statistics(self):
        assert "### city" not in self.text

    def test_closing_summary_mentions_counts(self):
        summary = self.text.split("## Summary")[1]

        assert "8 rows and 3 columns" in summary

    def test_missing_summary_entry_renders_placeholder(self):
        report = assemble_report(8, 3, _profiles(), {"age": self.summaries["age"]})

        assert "N/A (not computed)" in report.text

    def test_no_numerical_columns(self):
        profiles = [ColumnProfile("city", ColumnType.CATEGORICAL, 0.0)]

        report = assemble_report(1, 1, profiles, {})

        assert "No numerical columns found." in report.text
        assert "1 row and 1 column" in report.text

    def test_identical_inputs_give_identical_text(self):
        again = assemble_report(8, 3, _profiles(), dict(self.summaries))

        assert again.text == self.text
        assert str(again) == self.text
