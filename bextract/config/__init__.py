#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration package for bextract.
"""

from .config import Config
from .logging_config import setup_logging
from .config_display import display_config
from .exceptions import (
    BextractError,
    FileError,
    FileFormatError,
    ConfigError,
    LoggingConfigError,
    ReportError,
    MalformedReportError,
    HitFieldError,
    MissingFieldError,
    ParseError,
    SequenceExtractionError,
    EmptySequenceError,
)

__all__ = [
    'Config',
    'setup_logging',
    'display_config',
    'BextractError',
    'FileError',
    'FileFormatError',
    'ConfigError',
    'LoggingConfigError',
    'ReportError',
    'MalformedReportError',
    'HitFieldError',
    'MissingFieldError',
    'ParseError',
    'SequenceExtractionError',
    'EmptySequenceError',
]
