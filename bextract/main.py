#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
bextract: sequence extraction from BLAST hits

A streamlined script that:
1. Loads a FASTA sequence store
2. Parses a plain-text BLAST report into query zones and hits
3. Keeps hits whose E-value does not exceed the cutoff
4. Extracts a padded window of each referenced sequence
5. Writes the windows to a FASTA file

Contains functionality for:
1. Command line argument parsing and validation
2. Configuration loading and display
3. Extraction workflow execution and error handling

This module serves as the main entry point for bextract.
"""

import os
import sys
import argparse
import logging
from typing import List, Optional, Sequence, Tuple

from tqdm import tqdm

from . import __version__
from .config import Config, setup_logging, display_config, BextractError, ConfigError
from .core import BlastReportProcessor, SequenceExtractor
from .utils import FileIO

# Set up module logger
logger = logging.getLogger(__name__)


#############################################################################
#                          Command Line Argument Parsing
#############################################################################

def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog='bextract',
        description='Extract sequences referencing blast hits and criteria.',
    )

    required_group = parser.add_argument_group('required arguments')
    option_group = parser.add_argument_group('options')

    # Values are validated after parsing so every problem can be reported at once
    required_group.add_argument('-b', '--binput', dest='blast_input', metavar='BLAST_REPORT',
                                help='The blast input file.')
    required_group.add_argument('-c', '--sinput', dest='sequence_input', metavar='FASTA',
                                help='The fasta file to extract from.')
    required_group.add_argument('-e', '--emax', dest='emax', metavar='EVALUE',
                                help='The maximum evalue allowed before discarding.')
    required_group.add_argument('-o', '--output', dest='output_path', metavar='OUTPUT',
                                help='The output file path.')
    required_group.add_argument('-p', '--extension', dest='extension', metavar='N',
                                help='How much to extend when extracting sequence based on subject bounds.')

    option_group.add_argument('--inclusive', action='store_true',
                              help='Include the residue at the padded right bound in each window.')
    option_group.add_argument('--threads', metavar='N',
                              help='Number of worker threads used to parse the report.')
    option_group.add_argument('--table', metavar='PATH',
                              help='Also write a table of accepted hits (CSV, or TSV for .tsv).')
    option_group.add_argument('--config', metavar='[.json]', nargs='?', const='DISPLAY',
                              help='Configuration file path. With no arguments, shows current settings.')
    option_group.add_argument('--debug', nargs='*', metavar='MODULE',
                              help='Enable debug mode. Use without arguments for universal debug, '
                                   'or specify module names (e.g. "--debug report_processor").')
    option_group.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    return parser


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Argument list, defaults to sys.argv[1:]

    Returns:
        Parsed arguments namespace with raw string values
    """
    args = build_parser().parse_args(argv)

    # Process debug argument
    if args.debug is not None:
        args.debug = True if len(args.debug) == 0 else args.debug
    else:
        args.debug = False

    return args


def validate_arguments(args: argparse.Namespace) -> argparse.Namespace:
    """
    Check every run argument and convert numeric values.

    All problems are collected before failing so they can be reported
    together.

    Args:
        args: Namespace from parse_arguments

    Returns:
        The namespace with ``emax`` as float, ``extension`` and ``threads`` as int

    Raises:
        ConfigError: Listing every missing or invalid argument
    """
    errors: List[str] = []

    for name, flag in (('blast_input', '-b/--binput'), ('sequence_input', '-c/--sinput'),
                       ('emax', '-e/--emax'), ('output_path', '-o/--output'),
                       ('extension', '-p/--extension')):
        if getattr(args, name) is None:
            errors.append(f"Missing required argument {flag}.")

    if args.blast_input is not None and not os.path.isfile(args.blast_input):
        errors.append("Could not obtain blast input file.")

    if args.sequence_input is not None and not os.path.isfile(args.sequence_input):
        errors.append("Could not obtain sequence input file.")

    if args.emax is not None:
        try:
            args.emax = float(args.emax)
        except ValueError:
            errors.append("Invalid emax argument.")

    if args.extension is not None:
        try:
            args.extension = int(args.extension)
            if args.extension < 0:
                raise ValueError(args.extension)
        except ValueError:
            errors.append("Invalid extension argument.")

    if args.threads is not None:
        try:
            args.threads = int(args.threads)
            if args.threads < 1:
                raise ValueError(args.threads)
        except ValueError:
            errors.append("Invalid threads argument.")

    if errors:
        raise ConfigError(f"{len(errors)} invalid argument(s)", errors=errors)

    return args


def display_errors(errors: Sequence[str]) -> None:
    """Print each argument error on its own line."""
    for error in errors:
        print(f"Error: {error}")


#############################################################################
#                           Extraction Workflow
#############################################################################

def extract_hit_windows(report, extractor: SequenceExtractor, emax: float,
                        extension: int, inclusive: Optional[bool] = None) -> Tuple[List[Tuple[str, bytes]], int]:
    """
    Filter report hits by E-value and cut their windows from the store.

    Subject bounds of minus-strand hits are reported right-to-left, so they
    are ordered before extraction.

    Args:
        report: Parsed BlastReport
        extractor: Sequence store wrapper
        emax: Inclusive E-value cutoff
        extension: Residues added on each side
        inclusive: Include the padded right bound, defaults to Config.INCLUSIVE_WINDOW

    Returns:
        Tuple of (list of (record id, window) pairs, number of hits whose
        record was not in the store)

    Raises:
        EmptySequenceError: If a referenced stored sequence is empty
        SequenceExtractionError: If a hit's bounds lie past the end of its sequence
    """
    wanted_hits = report.filter_by_evalue(emax)
    logger.info(f"{len(wanted_hits)} of {report.hit_count} hits pass E-value <= {emax}")

    hit_iter = tqdm(wanted_hits, desc="Extracting sequences") if Config.SHOW_PROGRESS else wanted_hits

    windows = []
    missing = 0
    for hit in hit_iter:
        left, right = hit.subject_bounds
        window = extractor.extract_window(hit.record_ref, (min(left, right), max(left, right)),
                                          extension, inclusive=inclusive)
        if window is None:
            missing += 1
            continue
        windows.append((hit.record_ref, window))

    if missing:
        logger.warning(f"{missing} accepted hits reference records absent from the sequence store")

    return windows, missing


def run_extraction(args: argparse.Namespace) -> bool:
    """
    Run the extraction workflow on validated arguments.

    Args:
        args: Namespace from validate_arguments

    Returns:
        True if at least one sequence was written, False otherwise

    Raises:
        BextractError: If any stage fails
    """
    logger.debug("=== MAIN WORKFLOW: EXTRACTION ===")

    extractor = SequenceExtractor.from_fasta(args.sequence_input)
    logger.info(f"Loaded {len(extractor)} sequences from {args.sequence_input}")

    report = BlastReportProcessor.load_report(args.blast_input, num_workers=args.threads)

    windows, _ = extract_hit_windows(report, extractor, args.emax, args.extension,
                                     inclusive=True if args.inclusive else None)

    written = FileIO.save_fasta(windows, args.output_path)
    logger.info(f"Wrote {written} sequences to {args.output_path}")

    if args.table:
        table = report.to_dataframe()
        table = table[table["Evalue"] <= args.emax]
        FileIO.save_hits_table(table, args.table)
        logger.info(f"Wrote hit table to {args.table}")

    logger.debug("=== END MAIN WORKFLOW: EXTRACTION ===")
    return written > 0


#############################################################################
#                          Main Pipeline Execution
#############################################################################

def run_pipeline(argv: Optional[Sequence[str]] = None) -> bool:
    """
    Run bextract.

    Handles argument parsing, configuration loading, validation and
    workflow execution.

    Args:
        argv: Argument list, defaults to sys.argv[1:]

    Returns:
        True if the run completed successfully, False otherwise
    """
    args = parse_arguments(argv)

    try:
        setup_logging(debug=args.debug)
    except BextractError as e:
        display_errors([str(e)])
        return False

    Config.get_instance()

    if args.config == 'DISPLAY':
        display_config(Config)
        return True

    try:
        if args.config:
            Config.load_from_file(args.config)

        validate_arguments(args)
    except ConfigError as e:
        display_errors(e.errors)
        return False
    except BextractError as e:
        display_errors([str(e)])
        return False

    try:
        written = run_extraction(args)
    except BextractError as e:
        logger.error(f"Extraction failed: {str(e)}")
        logger.debug(f"Error details: {str(e)}", exc_info=True)
        return False

    if not written:
        logger.info("\n=== Extraction completed with no sequences written ===")
    else:
        logger.info("\n=== Extraction completed successfully ===")
    return True


#############################################################################
#                              Entry Point
#############################################################################

def main():
    """
    Entry point for the bextract console script.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    success = run_pipeline()
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
