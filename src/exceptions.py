"""
Consolidated exception hierarchy for the zoo population report pipeline.

This module provides a unified exception hierarchy that allows for:
- Per-line parse failures that are recorded instead of aborting a file
- File-level errors that each stage absorbs at its own boundary
- Hierarchical exception catching (e.g., catch all RecordParseError)
"""


# =============================================================================
# Base Exception
# =============================================================================

class ZooPipelineError(Exception):
    """Base exception for all zoo pipeline errors."""
    pass


class ConfigurationError(ZooPipelineError):
    """Raised when configuration values are invalid."""
    pass


# =============================================================================
# Input Errors
# =============================================================================

class InputFileError(ZooPipelineError):
    """Raised when an input feed cannot be opened or read."""
    pass


# =============================================================================
# Record Parsing Errors
# =============================================================================

class RecordParseError(ZooPipelineError):
    """Base exception for a single rejected arrivals line."""

    kind = "unexpected"

    def __init__(self, message: str, raw_line: str = ""):
        super().__init__(message)
        self.raw_line = raw_line


class FieldCountError(RecordParseError):
    """Raised when a line has fewer fields than required."""
    kind = "field_count"


class NumberParseError(RecordParseError):
    """Raised when age or weight is not a valid number."""
    kind = "number"


class DateParseError(RecordParseError):
    """Raised when the arrival date is not a valid calendar date."""
    kind = "date"


class TokenizeError(RecordParseError):
    """Raised when a line cannot be split into fields."""
    kind = "tokenize"


class LineDecodeError(RecordParseError):
    """Raised when a line is not valid text in the input encoding."""
    kind = "encoding"


# =============================================================================
# Output Errors
# =============================================================================

class ReportWriteError(ZooPipelineError):
    """Raised when the population report cannot be written."""
    pass
