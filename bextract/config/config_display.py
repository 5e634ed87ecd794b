#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration display module for bextract.
"""

import colorama
from colorama import Fore, Style


CATEGORIES = {
    "Pipeline Mode Options": [
        "DEBUG_MODE"
    ],
    "Performance Settings": [
        "NUM_PROCESSES", "SHOW_PROGRESS"
    ],
    "Report Markers": [
        "QUERY_MARKER", "HIT_MARKER", "EVALUE_MARKER", "SUBJECT_MARKER"
    ],
    "Extraction Options": [
        "INCLUSIVE_WINDOW", "OUTPUT_FORMAT"
    ],
}


def display_config(config_cls):
    """
    Display all configuration settings in a structured, easy-to-read format.

    Args:
        config_cls: The Config class
    """
    # Initialize colorama for cross-platform colored output
    colorama.init()

    settings = config_cls.get_all_settings()

    print(f"\n{Fore.CYAN}{'='*80}{Style.RESET_ALL}")
    print(f"{Fore.CYAN}{'bextract Configuration Settings':^80}{Style.RESET_ALL}")
    print(f"{Fore.CYAN}{'='*80}{Style.RESET_ALL}\n")

    categories = dict(CATEGORIES)

    categorized_keys = [key for keys in categories.values() for key in keys]
    other_keys = [key for key in settings if key not in categorized_keys]
    if other_keys:
        categories["Other"] = other_keys

    for category, keys in categories.items():
        print(f"{Fore.GREEN}{category}{Style.RESET_ALL}")
        print(f"{Fore.GREEN}{'-' * len(category)}{Style.RESET_ALL}")

        for key in keys:
            if key in settings:
                print(f"{Fore.YELLOW}{key}{Style.RESET_ALL}: {settings[key]!r}")
        print()

    print(f"{Fore.CYAN}{'='*80}{Style.RESET_ALL}")
    print(f"\n{Fore.WHITE}Configuration Options:{Style.RESET_ALL}")
    print(f"- View settings: {Fore.YELLOW}bextract --config{Style.RESET_ALL}")
    print(f"- Load settings: {Fore.YELLOW}bextract --config settings.json -b ... {Style.RESET_ALL}")
