#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging configuration module for bextract.

Contains functionality for:
1. Module-specific debug level control based on filenames
2. Debug filtering and formatting with colors
3. Log file management under the user directory

This module lets users enable debug output for a single stage of the
pipeline (for example only the report parser) while keeping the rest at
INFO level.
"""

import os
import logging
from datetime import datetime
from typing import Dict, List, Optional, Union

from .exceptions import LoggingConfigError

logger = logging.getLogger(__name__)


class ModuleDebugConfig:
    """
    Configuration for module-specific debug settings.

    Attributes:
        MODULE_DEBUG_LEVELS: Dictionary mapping module names to log levels
        FILENAME_TO_MODULE: Dictionary mapping filenames to full module paths
    """

    # All modules default to INFO level
    MODULE_DEBUG_LEVELS = {
        'bextract.main': logging.INFO,
        'bextract.core.report_processor': logging.INFO,
        'bextract.core.hit_extractor': logging.INFO,
        'bextract.core.sequence_extractor': logging.INFO,
        'bextract.core.blast_hits': logging.INFO,
        'bextract.utils.file_io': logging.INFO,
        'bextract.config.config': logging.INFO,
    }

    # Filename to module mapping for intuitive usage
    FILENAME_TO_MODULE = {
        'main': 'bextract.main',

        # Core processing files
        'report_processor': 'bextract.core.report_processor',
        'hit_extractor': 'bextract.core.hit_extractor',
        'sequence_extractor': 'bextract.core.sequence_extractor',
        'blast_hits': 'bextract.core.blast_hits',

        # Utility files
        'file_io': 'bextract.utils.file_io',

        # Config files
        'config': 'bextract.config.config',
    }


class SimpleDebugFormatter(logging.Formatter):
    """
    Simple formatter with colors for debug output.

    Attributes:
        use_colors: Whether to use ANSI color codes in output
        COLORS: Dictionary mapping log levels to ANSI color codes
    """

    def __init__(self, fmt=None, datefmt=None, use_colors=False):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

        # ANSI color codes
        self.COLORS = {
            'DEBUG': '\033[37m',      # White
            'INFO': '\033[1;37m',     # Bold White
            'WARNING': '\033[33m',    # Yellow
            'ERROR': '\033[31m',      # Red
            'CRITICAL': '\033[35m',   # Magenta
        }
        self.RESET = '\033[0m'

    def format(self, record):
        formatted_message = super().format(record)

        if self.use_colors and record.levelname in self.COLORS:
            color_code = self.COLORS[record.levelname]
            formatted_message = f"{color_code}{formatted_message}{self.RESET}"

        return formatted_message


class EnhancedDebugFilter(logging.Filter):
    """
    Filter that controls module-specific debug output.

    Attributes:
        module_levels: Dictionary mapping module names to minimum log levels

    Example:
        >>> filter_obj = EnhancedDebugFilter({'bextract.main': logging.DEBUG})
        >>> handler.addFilter(filter_obj)
    """

    def __init__(self, module_levels: Dict[str, int]):
        super().__init__()
        self.module_levels = module_levels

    def filter(self, record):
        module_name = record.name

        # Try exact match first
        if module_name in self.module_levels:
            return record.levelno >= self.module_levels[module_name]

        # Try parent module matches
        for module_pattern, level in self.module_levels.items():
            if module_name.startswith(module_pattern + '.'):
                return record.levelno >= level

        # For modules not in our config, default to INFO level
        return record.levelno >= logging.INFO


def setup_logging(debug: Union[bool, List[str], str] = False,
                  log_dir: Optional[str] = None) -> str:
    """
    Configure logging with filename-based debug control.

    Args:
        debug: Debug configuration options:
               - False: No debug logging
               - True: Universal debug for all modules
               - str: Single filename for debug (e.g., 'report_processor')
               - List[str]: List of filenames for debug
        log_dir: Directory for the log file, defaults to ~/.bextract/logs

    Returns:
        str: Path to the created log file

    Raises:
        LoggingConfigError: If logging setup fails

    Example:
        >>> log_file = setup_logging(debug=['report_processor', 'hit_extractor'])
    """
    from .config import Config

    debug_enabled, debug_modules = _normalize_debug_input(debug)

    module_config = ModuleDebugConfig.MODULE_DEBUG_LEVELS.copy()

    if debug_modules:
        for module_name in debug_modules:
            full_module_name = _resolve_module_name(module_name)
            if full_module_name:
                module_config[full_module_name] = logging.DEBUG
    elif debug_enabled:
        for module in module_config:
            module_config[module] = logging.DEBUG

    try:
        if log_dir is None:
            log_dir = os.path.join(os.path.expanduser("~"), ".bextract", "logs")
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, f"bextract_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log")

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)

        # Clear existing handlers
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        # File handler (detailed, no colors)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if debug_enabled else logging.INFO)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
        ))

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG if debug_enabled else logging.INFO)

        if debug_enabled:
            console_formatter = SimpleDebugFormatter(
                fmt='%(levelname)-8s [%(name)s] %(message)s',
                use_colors=True
            )
            console_handler.addFilter(EnhancedDebugFilter(module_config))
        else:
            console_formatter = SimpleDebugFormatter(fmt='%(message)s', use_colors=False)

        console_handler.setFormatter(console_formatter)

        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)
    except OSError as e:
        error_msg = "Failed to setup logging configuration"
        raise LoggingConfigError(f"{error_msg}: {str(e)}") from e

    main_logger = logging.getLogger("bextract")

    if debug_enabled:
        main_logger.debug("Debug logging enabled")
        main_logger.debug(f"Log file: {log_file}")
        if debug_modules:
            unresolved = [m for m in debug_modules if _resolve_module_name(m) is None]
            if unresolved:
                main_logger.warning(f"Unknown module names: {', '.join(unresolved)}")

    Config.DEBUG_MODE = debug_enabled
    return log_file


def _normalize_debug_input(debug: Union[bool, List[str], str]) -> tuple:
    """
    Normalize various debug input formats to (debug_enabled, debug_modules).

    Example:
        >>> _normalize_debug_input(['report_processor'])
        (True, ['report_processor'])
    """
    if isinstance(debug, bool):
        return debug, None
    if isinstance(debug, str):
        return True, [debug]
    if isinstance(debug, list):
        return True, debug
    return False, None


def _resolve_module_name(filename: str) -> Optional[str]:
    """Resolve a filename like 'file_io' to its full module path."""
    if filename in ModuleDebugConfig.FILENAME_TO_MODULE:
        return ModuleDebugConfig.FILENAME_TO_MODULE[filename]

    if filename in ModuleDebugConfig.MODULE_DEBUG_LEVELS:
        return filename

    return None
