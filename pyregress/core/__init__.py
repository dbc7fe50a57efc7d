"""
Core infrastructure for PyRegress.

Shared abstractions and utilities used by the regression package and the
command-line driver.

Key components:
    protocols: RowSource protocol
    rows: Streaming CSV row source
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    timing: Pass timing
"""

from pyregress.core.protocols import RowSource
from pyregress.core.result import Result
from pyregress.core.rows import CSVRowSource
from pyregress.core.exceptions import (
    PyRegressError,
    ValidationError,
    IngestionError,
    ParseError,
)

__all__ = [
    # Protocols
    "RowSource",
    # Rows
    "CSVRowSource",
    # Result
    "Result",
    # Exceptions
    "PyRegressError",
    "ValidationError",
    "IngestionError",
    "ParseError",
]
