"""Exceptions raised by the analysis pipeline."""


class CsvInsightError(Exception):
    """Base class for all pipeline errors."""


class EmptyInput(CsvInsightError):
    """The CSV has no header or no data rows."""

    def __init__(self, message: str = "CSV data is empty or contains only a header row"):
        super().__init__(message)


class CsvParseError(CsvInsightError):
    """The CSV text could not be tokenised."""


class NotComputable(CsvInsightError):
    """Statistics for a single column cannot be computed.

    Never fatal: the report renders ``N/A`` with :attr:`reason` instead.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ExternalServiceFailure(CsvInsightError):
    """The generative-AI provider call failed."""

    def __init__(self, message: str = "Failed to generate the report. Please try again."):
        super().__init__(message)
