#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Hit field extraction module for bextract.

Reads the fields of a single hit block from a BLAST text report:
1. Record reference from the hit declaration line
2. E-value from the score line
3. Subject bounds from the first subject alignment line

Alignment blocks have no fixed length, so each field is found by scanning
forward from the start of the hit for the first line carrying its marker.
"""

import logging
import math
from typing import Callable, Optional, Sequence, Tuple

from ..config import Config, MissingFieldError, ParseError
from .blast_hits import BlastHit

# Set up module logger
logger = logging.getLogger(__name__)

LineRange = Tuple[int, int]


class HitExtractor:
    """
    Extracts record reference, E-value and subject bounds from a hit block.

    A hit block is addressed by an inclusive (start, end) range of line
    indices into the shared report lines; no text is copied.

    Example:
        >>> lines = ["> NODE_1", "Score = 100 bits, Expect = 2e-5", "Sbjct 10 ACGT 13"]
        >>> HitExtractor.parse_hit(lines, (0, 2))
        BlastHit(record_ref='NODE_1', evalue=2e-05, subject_bounds=(10, 13))
    """

    @staticmethod
    def find_first_line(lines: Sequence[str], line_range: LineRange,
                        predicate: Callable[[str], bool]) -> Optional[str]:
        """
        Return the first line in range matching the predicate.

        Args:
            lines: Report lines
            line_range: Inclusive (start, end) indices, clipped to the report
            predicate: Test applied to each line

        Returns:
            The matching line, or None if the range is exhausted
        """
        start, end = line_range
        end = min(end, len(lines) - 1)
        return next((lines[i] for i in range(start, end + 1) if predicate(lines[i])), None)

    @staticmethod
    def parse_record_ref(lines: Sequence[str], line_range: LineRange) -> str:
        """
        Read the record reference from the hit declaration line.

        Args:
            lines: Report lines
            line_range: Hit block range, starting at the declaration line

        Returns:
            Declaration line without the hit marker and surrounding whitespace
        """
        declaration = lines[line_range[0]].strip()
        if declaration.startswith(Config.HIT_MARKER):
            declaration = declaration[len(Config.HIT_MARKER):]
        return declaration.strip()

    @classmethod
    def parse_evalue(cls, lines: Sequence[str], line_range: LineRange) -> float:
        """
        Read the E-value from the first score line of the hit.

        The score line has the form ``Score = 100 bits (50), Expect = 2e-05``;
        the text after ``=`` in the second comma-separated field is parsed.

        Args:
            lines: Report lines
            line_range: Hit block range

        Returns:
            E-value as a float

        Raises:
            MissingFieldError: If the hit has no score line
            ParseError: If the E-value text is absent or not a number
        """
        score_line = cls.find_first_line(lines, line_range, lambda line: Config.EVALUE_MARKER in line)
        if score_line is None:
            error_msg = f"No line containing '{Config.EVALUE_MARKER}' found"
            logger.error(f"{error_msg} in hit at lines {line_range}")
            raise MissingFieldError(error_msg, field="evalue", line_range=line_range)

        fields = score_line.split(',')
        if len(fields) < 2 or '=' not in fields[1]:
            error_msg = f"Malformed score line: {score_line.strip()!r}"
            logger.error(f"{error_msg} in hit at lines {line_range}")
            raise ParseError(error_msg, field="evalue", line_range=line_range)

        evalue_text = fields[1].split('=')[1].strip()
        try:
            return cls.parse_evalue_text(evalue_text)
        except ValueError as e:
            error_msg = f"Invalid E-value {evalue_text!r}"
            logger.error(f"{error_msg} in hit at lines {line_range}")
            raise ParseError(error_msg, field="evalue", line_range=line_range) from e

    @staticmethod
    def parse_evalue_text(text: str) -> float:
        """
        Parse an E-value, reading a bare exponent such as ``e-10`` as ``1e-10``.

        Raises:
            ValueError: If the text is not a non-negative number
        """
        if text[:1] in ('e', 'E'):
            text = '1' + text
        value = float(text)
        if value < 0 or math.isnan(value):
            raise ValueError(f"E-value must be a non-negative number: {text}")
        return value

    @classmethod
    def parse_subject_bounds(cls, lines: Sequence[str], line_range: LineRange) -> Tuple[int, int]:
        """
        Read the subject coordinates from the first subject alignment line.

        The line has the form ``Sbjct  10  ACGT  13``; the second and fourth
        whitespace tokens are the left and right coordinates.

        Args:
            lines: Report lines
            line_range: Hit block range

        Returns:
            (left, right) as reported, not reordered

        Raises:
            MissingFieldError: If the hit has no subject line
            ParseError: If either coordinate is absent or not an integer
        """
        subject_line = cls.find_first_line(lines, line_range, lambda line: Config.SUBJECT_MARKER in line)
        if subject_line is None:
            error_msg = f"No line containing '{Config.SUBJECT_MARKER}' found"
            logger.error(f"{error_msg} in hit at lines {line_range}")
            raise MissingFieldError(error_msg, field="subject_bounds", line_range=line_range)

        tokens = subject_line.split()
        if len(tokens) < 4:
            error_msg = f"Malformed subject line: {subject_line.strip()!r}"
            logger.error(f"{error_msg} in hit at lines {line_range}")
            raise ParseError(error_msg, field="subject_bounds", line_range=line_range)

        bounds = []
        for side, token in (("left", tokens[1]), ("right", tokens[3])):
            error_msg = f"Invalid subject {side} bound {token!r}"
            if not token.isdigit():
                logger.error(f"{error_msg} in hit at lines {line_range}")
                raise ParseError(error_msg, field="subject_bounds", line_range=line_range)
            # isdigit() also accepts digits such as superscripts that int() rejects
            try:
                bounds.append(int(token))
            except ValueError as e:
                logger.error(f"{error_msg} in hit at lines {line_range}")
                raise ParseError(error_msg, field="subject_bounds", line_range=line_range) from e

        return bounds[0], bounds[1]

    @classmethod
    def parse_hit(cls, lines: Sequence[str], line_range: LineRange) -> BlastHit:
        """
        Extract all fields of one hit block.

        Args:
            lines: Report lines
            line_range: Inclusive (start, end) indices of the hit block

        Returns:
            BlastHit for the block

        Raises:
            MissingFieldError: If a required marker line is absent
            ParseError: If a numeric field cannot be parsed
        """
        hit = BlastHit(
            record_ref=cls.parse_record_ref(lines, line_range),
            evalue=cls.parse_evalue(lines, line_range),
            subject_bounds=cls.parse_subject_bounds(lines, line_range),
        )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Hit at lines {line_range}: {hit.record_ref} "
                         f"evalue={hit.evalue} bounds={hit.subject_bounds}")

        return hit
