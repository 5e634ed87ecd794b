#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Sequence window extraction module for bextract.

Cuts a padded window around a hit's subject bounds out of a sequence
store loaded from FASTA. The store is read-only after loading and can be
shared between threads without locking.
"""

import logging
from typing import Dict, Mapping, Optional, Tuple

from ..config import Config, EmptySequenceError, SequenceExtractionError
from ..utils.file_io import FileIO

# Set up module logger
logger = logging.getLogger(__name__)


class SequenceExtractor:
    """
    Extracts padded subsequences from a mapping of record ids to sequences.

    Window bounds are ``max(0, left - extension)`` and
    ``min(right + extension, len - 1)``. By default the right bound is
    exclusive, so the residue at the padded right bound is not part of the
    window; with ``inclusive=True`` it is.

    Example:
        >>> extractor = SequenceExtractor({"NODE_1": b"A" * 50})
        >>> extractor.window_bounds(50, (10, 13), 2)
        (8, 15)
        >>> len(extractor.extract_window("NODE_1", (10, 13), 2))
        7
    """

    def __init__(self, sequences: Mapping[str, bytes]):
        """
        Initialize with an already loaded sequence store.

        Args:
            sequences: Record id to raw sequence bytes
        """
        self._sequences: Dict[str, bytes] = dict(sequences)

    @classmethod
    def from_fasta(cls, filepath: str) -> 'SequenceExtractor':
        """
        Build an extractor from a FASTA file.

        Raises:
            FileError: If the file cannot be read
            FileFormatError: If the file is not valid FASTA
        """
        return cls(FileIO.load_fasta(filepath))

    def __len__(self):
        return len(self._sequences)

    def __contains__(self, record_ref):
        return self.lookup(record_ref) is not None

    def lookup(self, record_ref: str) -> Optional[bytes]:
        """
        Find the stored sequence for a record reference.

        Hit declaration lines may carry a description after the id, so the
        first whitespace token is tried when the full reference is unknown.

        Returns:
            Sequence bytes, or None if the record is not in the store
        """
        sequence = self._sequences.get(record_ref)
        if sequence is None:
            tokens = record_ref.split()
            if len(tokens) > 1:
                sequence = self._sequences.get(tokens[0])
        return sequence

    @staticmethod
    def window_bounds(length: int, bounds: Tuple[int, int], extension: int,
                      inclusive: bool = False) -> Tuple[int, int]:
        """
        Compute the half-open slice of a padded window.

        Args:
            length: Length of the stored sequence, must be positive
            bounds: (left, right) subject coordinates, left <= right expected
            extension: Residues added on each side
            inclusive: Include the residue at the clamped right bound

        Returns:
            (start, stop) suitable for slicing

        Raises:
            EmptySequenceError: If length is zero
            ValueError: If extension is negative
        """
        if length <= 0:
            raise EmptySequenceError("Cannot extract a window from an empty sequence")
        if extension < 0:
            raise ValueError(f"Extension must be non-negative, got {extension}")

        left, right = bounds
        start = max(0, left - extension)
        end = min(right + extension, length - 1)

        return start, end + 1 if inclusive else end

    def extract_window(self, record_ref: str, bounds: Tuple[int, int], extension: int,
                       inclusive: Optional[bool] = None) -> Optional[bytes]:
        """
        Extract the padded window around a hit from the store.

        Args:
            record_ref: Record id of the subject sequence
            bounds: (left, right) subject coordinates; the caller orders them
            extension: Residues added on each side, non-negative
            inclusive: Include the residue at the clamped right bound,
                defaults to Config.INCLUSIVE_WINDOW

        Returns:
            A new bytes object with the window, or None if the record is
            not in the store

        Raises:
            EmptySequenceError: If the stored sequence has zero length
            SequenceExtractionError: If the bounds lie past the end of the
                stored sequence, leaving an empty window
            ValueError: If extension is negative
        """
        sequence = self.lookup(record_ref)
        if sequence is None:
            logger.debug(f"Record {record_ref!r} not found in sequence store")
            return None

        if inclusive is None:
            inclusive = Config.INCLUSIVE_WINDOW

        try:
            start, stop = self.window_bounds(len(sequence), bounds, extension, inclusive)
        except EmptySequenceError as e:
            error_msg = f"Stored sequence for {record_ref!r} is empty"
            logger.error(error_msg)
            raise EmptySequenceError(error_msg) from e

        if start >= stop:
            error_msg = (f"Subject bounds {bounds} lie outside stored sequence {record_ref!r} "
                         f"of length {len(sequence)}")
            logger.error(error_msg)
            raise SequenceExtractionError(error_msg)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Window for {record_ref}: bounds={bounds} extension={extension} "
                         f"-> [{start}, {stop}) of {len(sequence)}")

        return bytes(sequence[start:stop])
