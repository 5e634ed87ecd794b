#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
File I/O module for bextract.

Contains functionality for:
1. Reading a BLAST text report into lines
2. FASTA sequence store reading and window writing
3. Hit summary table output

This module keeps all disk access in one place so the parsing and
extraction code only deals with in-memory lines and sequences.
"""

import os
import logging
from typing import Dict, Iterable, List, Tuple

import pandas as pd
from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from ..config import Config, FileError, FileFormatError

# Set up module logger
logger = logging.getLogger(__name__)


class FileIO:
    """
    File reading and writing for bextract.

    Example:
        >>> lines = FileIO.load_lines("hits.blast")
        >>> store = FileIO.load_fasta("contigs.fasta")
        >>> FileIO.save_fasta([("NODE_1", b"ACGT")], "windows.fasta")
        1
    """

    @staticmethod
    def load_lines(filepath: str) -> List[str]:
        """
        Read a text file into a list of lines without terminators.

        Args:
            filepath: Path to the file

        Returns:
            Lines in file order

        Raises:
            FileError: If the file doesn't exist or cannot be read
        """
        if not os.path.isfile(filepath):
            error_msg = f"Report file not found: {filepath}"
            logger.error(error_msg)
            raise FileError(error_msg)

        try:
            with open(filepath, 'r') as f:
                lines = f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            error_msg = f"Error reading file {os.path.abspath(filepath)}: {str(e)}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise FileError(error_msg) from e

        logger.debug(f"Read {len(lines)} lines from {filepath}")
        return lines

    @staticmethod
    def load_fasta(filepath: str) -> Dict[str, bytes]:
        """
        Load sequences from a FASTA file into a dictionary.

        Args:
            filepath: Path to the FASTA file

        Returns:
            Dictionary mapping record ids to sequence bytes

        Raises:
            FileError: If the FASTA file doesn't exist or cannot be read
            FileFormatError: If there's an error parsing the FASTA file
        """
        if not os.path.isfile(filepath):
            error_msg = f"FASTA file not found: {filepath}"
            logger.error(error_msg)
            raise FileError(error_msg)

        sequences = {}

        try:
            for record in SeqIO.parse(filepath, "fasta"):
                if record.id in sequences:
                    logger.warning(f"Duplicate FASTA record {record.id}, keeping the last one")
                sequences[record.id] = str(record.seq).encode("ascii")
        except OSError as e:
            error_msg = f"Error reading FASTA file {os.path.abspath(filepath)}: {str(e)}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise FileError(error_msg) from e
        except (ValueError, UnicodeError) as e:
            error_msg = f"Error parsing FASTA file {os.path.abspath(filepath)}: {str(e)}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise FileFormatError(error_msg) from e

        if not sequences and os.path.getsize(filepath) > 0:
            error_msg = f"No FASTA records found in {os.path.abspath(filepath)}"
            logger.error(error_msg)
            raise FileFormatError(error_msg)

        logger.debug(f"Successfully loaded {len(sequences)} sequences from FASTA file")
        return sequences

    @staticmethod
    def save_fasta(records: Iterable[Tuple[str, bytes]], filepath: str) -> int:
        """
        Save (record id, sequence) pairs to a FASTA file.

        Args:
            records: Pairs of record id and sequence bytes
            filepath: Output path

        Returns:
            Number of records written

        Raises:
            FileError: If the file cannot be written
        """
        seq_records = (
            SeqRecord(Seq(sequence.decode("ascii")), id=record_id, description="")
            for record_id, sequence in records
        )

        try:
            with open(filepath, 'w') as handle:
                count = SeqIO.write(seq_records, handle, Config.OUTPUT_FORMAT)
        except OSError as e:
            error_msg = f"Error writing FASTA file {os.path.abspath(filepath)}: {str(e)}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise FileError(error_msg) from e

        logger.debug(f"Saved {count} sequences to {filepath}")
        return count

    @staticmethod
    def save_hits_table(df: pd.DataFrame, filepath: str) -> str:
        """
        Save a hit summary table as CSV, or TSV for a .tsv path.

        Args:
            df: Hit table
            filepath: Output path

        Returns:
            Path of the written table

        Raises:
            FileError: If the file cannot be written
        """
        sep = '\t' if filepath.lower().endswith('.tsv') else ','

        try:
            df.to_csv(filepath, sep=sep, index=False)
        except OSError as e:
            error_msg = f"Error writing hit table {os.path.abspath(filepath)}: {str(e)}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise FileError(error_msg) from e

        logger.debug(f"Saved hit table with {len(df)} rows to {filepath}")
        return filepath
