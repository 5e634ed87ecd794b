#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration module for bextract.

Contains functionality for:
1. Central configuration settings management with singleton pattern
2. JSON configuration file loading and saving
3. Report marker and extraction defaults

This module provides centralized configuration management for bextract,
so report markers and run settings can be overridden from a JSON file
without touching the parsing code.
"""

import os
import json
import logging
from multiprocessing import cpu_count
from typing import Dict, Any

from .exceptions import ConfigError, FileFormatError

logger = logging.getLogger(__name__)


class Config:
    """
    Central configuration settings for bextract with singleton pattern.

    This class manages all configuration settings for bextract, providing
    a singleton pattern for consistent settings access across all modules.

    Attributes:
        DEBUG_MODE: Enable debug logging mode
        NUM_PROCESSES: Number of worker threads used to parse query zones
        QUERY_MARKER: Text identifying a query declaration line
        HIT_MARKER: Prefix identifying a hit declaration line

    Example:
        >>> config = Config.get_instance()
        >>> Config.NUM_PROCESSES = 4
        >>> Config.load_from_file("my_config.json")
    """

    # Singleton instance
    _instance = None

    #############################################################################
    #                           Pipeline Mode Options
    #############################################################################
    DEBUG_MODE = False                   # Debug logging mode (enable with --debug flag)

    #############################################################################
    #                           Performance Settings
    #############################################################################
    NUM_PROCESSES = max(1, int(cpu_count() * 0.75))  # Use 75% of cores
    SHOW_PROGRESS = True

    #############################################################################
    #                           Report Markers
    #############################################################################
    QUERY_MARKER = "Query="      # Starts a query zone
    HIT_MARKER = ">"             # Starts a hit block, stripped from the record name
    EVALUE_MARKER = "Expect"     # Score line: "Score = 100 bits (50), Expect = 2e-05"
    SUBJECT_MARKER = "Sbjct"     # Alignment line: "Sbjct  10  ACGT  13"

    #############################################################################
    #                           Extraction Options
    #############################################################################
    INCLUSIVE_WINDOW = False     # Include the residue at right + extension
    OUTPUT_FORMAT = "fasta-2line"

    def __init__(self):
        """Initialize Config instance with default values."""
        # Implementation left empty as we're using class variables
        pass

    @classmethod
    def get_instance(cls) -> 'Config':
        """
        Get the singleton instance of Config.

        Returns:
            Config: Singleton instance
        """
        if cls._instance is None:
            logger.debug("Creating new Config singleton instance")
            cls._instance = cls()
        return cls._instance

    @classmethod
    def load_from_file(cls, filepath: str) -> bool:
        """
        Load settings from a JSON configuration file.

        Keys must match existing setting names; unknown keys are logged and
        ignored. Each value must have the type of the setting it replaces;
        nothing is applied if any value does not.

        Args:
            filepath: Path to the settings file

        Returns:
            bool: True if settings were loaded successfully

        Raises:
            FileFormatError: If the file does not exist
            ConfigError: If the file cannot be read or holds invalid JSON,
                or a value has the wrong type

        Example:
            >>> Config.load_from_file("my_config.json")
            True
        """
        logger.debug(f"Loading configuration from {filepath}")

        cls.get_instance()

        if not os.path.exists(filepath):
            error_msg = f"Configuration file not found: {filepath}"
            logger.error(error_msg)
            raise FileFormatError(error_msg)

        try:
            with open(filepath, 'r') as f:
                settings = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            error_msg = f"Failed to load JSON settings from {filepath}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise ConfigError(error_msg) from e

        if not isinstance(settings, dict):
            error_msg = f"Configuration file {filepath} must contain a JSON object"
            logger.error(error_msg)
            raise ConfigError(error_msg)

        logger.debug(f"Loaded {len(settings)} settings from JSON")

        updates = {}
        errors = []
        for key, value in settings.items():
            if key.startswith('_') or not hasattr(cls, key) or callable(getattr(cls, key)):
                logger.warning(f"Ignoring unknown setting: {key}")
                continue
            expected_type = type(getattr(cls, key))
            if type(value) is not expected_type:
                errors.append(f"Setting {key} must be of type {expected_type.__name__}, "
                              f"got {type(value).__name__}")
                continue
            updates[key] = value

        if errors:
            error_msg = f"Invalid settings in {filepath}"
            logger.error(f"{error_msg}: {'; '.join(errors)}")
            raise ConfigError(error_msg, errors=errors)

        # Applied only once every value has passed
        for key, value in updates.items():
            setattr(cls, key, value)
            logger.debug(f"Updated {key} = {value}")

        return True

    @classmethod
    def save_to_file(cls, filepath: str) -> bool:
        """
        Save current settings to a JSON file.

        Args:
            filepath: Destination path

        Returns:
            bool: True if settings were saved successfully

        Raises:
            ConfigError: If the file cannot be written
        """
        try:
            with open(filepath, 'w') as f:
                json.dump(cls.get_all_settings(), f, indent=2)
            logger.debug(f"Saved configuration to {filepath}")
            return True
        except OSError as e:
            error_msg = f"Failed to save settings to {filepath}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise ConfigError(error_msg) from e

    @classmethod
    def get_all_settings(cls) -> Dict[str, Any]:
        """
        Get all settings as a dictionary.

        Returns:
            dict: Dictionary of all configuration settings

        Example:
            >>> settings = Config.get_all_settings()
            >>> print(settings['QUERY_MARKER'])
            Query=
        """
        settings = {}

        # Add all class variables that don't start with underscore
        for key in dir(cls):
            if not key.startswith('_') and not callable(getattr(cls, key)):
                settings[key] = getattr(cls, key)

        logger.debug(f"Retrieved {len(settings)} configuration settings")
        return settings
