#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Custom exceptions for bextract.

This module defines exception classes used throughout bextract to provide
more specific error information and improve error handling.
"""


class BextractError(Exception):
    """Base exception class for all bextract-specific errors."""
    pass


class FileError(BextractError):
    """Base class for file-related errors."""
    pass


class FileFormatError(FileError):
    """Error with file formatting or parsing."""
    pass


class ConfigError(BextractError):
    """
    Error with configuration parameters.

    Argument validation collects every problem before failing, so the
    individual messages are kept on ``errors``.
    """

    def __init__(self, message, errors=None):
        self.errors = list(errors) if errors else [message]
        super().__init__(message)


class LoggingConfigError(BextractError):
    """Error during logging configuration setup."""
    pass


class ReportError(BextractError):
    """Base class for BLAST report parsing errors."""
    pass


class MalformedReportError(ReportError):
    """Report lacks the query or hit markers needed to partition it."""
    pass


class HitFieldError(ReportError):
    """Error tied to one field of one hit block."""

    def __init__(self, message, field=None, line_range=None):
        """
        Initialize with the location of the offending hit.

        Args:
            message (str): Error message
            field (str, optional): Name of the field being extracted
            line_range (tuple, optional): (start, end) line indices of the hit
        """
        self.field = field
        self.line_range = line_range

        detailed_message = message
        if field:
            detailed_message = f"{field}: {message}"
        if line_range is not None:
            detailed_message += f" (lines {line_range[0]}-{line_range[1]})"

        super().__init__(detailed_message)


class MissingFieldError(HitFieldError):
    """Expected marker line is absent within the hit's line range."""
    pass


class ParseError(HitFieldError):
    """Numeric text in a hit block could not be parsed."""
    pass


class SequenceExtractionError(BextractError):
    """Error while cutting a window out of a stored sequence."""
    pass


class EmptySequenceError(SequenceExtractionError):
    """Stored sequence has zero length."""
    pass
