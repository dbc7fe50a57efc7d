"""
Exception hierarchy for PyRegress.

All exceptions inherit from PyRegressError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Numerical degeneracies are never exceptions; only bad inputs are
"""


class PyRegressError(Exception):
    """Base exception for all PyRegress errors."""
    pass


class ValidationError(PyRegressError):
    """
    Input validation failed.

    Raised when user-provided arguments fail validation checks
    (empty target name, non-numeric predictor value, bad chunk size).
    """
    pass


class IngestionError(PyRegressError):
    """
    Tabular input could not be read.

    Raised for missing or unreadable files and for row sources that are
    iterated more than once. Fatal to the whole run: there is no
    partial-row recovery.

    Attributes:
        path: Path of the offending input, if it came from a file
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class ParseError(IngestionError):
    """
    A data row could not be parsed into numeric fields.

    Attributes:
        path: Path of the input file, if any
        line: 1-based line number in the input (header is line 1)
        column: Name of the offending column, if known
        value: The raw text that failed to parse, if any
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        line: int | None = None,
        column: str | None = None,
        value: str | None = None,
    ):
        super().__init__(message, path=path)
        self.line = line
        self.column = column
        self.value = value
