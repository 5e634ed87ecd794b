#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
BLAST report processing module for bextract.

Contains functionality for:
1. Locating query zones in a plain-text BLAST report
2. Partitioning each zone into hit blocks
3. Parsing zones in parallel and assembling them in report order

Zones share one immutable tuple of report lines; each worker only gets
the tuple and its (start, end) line range.
"""

import logging
import concurrent.futures
from typing import List, Optional, Sequence, Tuple

from tqdm import tqdm

from ..config import Config, MalformedReportError
from ..utils.file_io import FileIO
from .blast_hits import BlastReport, HitsZone
from .hit_extractor import HitExtractor

# Set up module logger
logger = logging.getLogger(__name__)

LineRange = Tuple[int, int]


class BlastReportProcessor:
    """
    Splits a BLAST text report into query zones and hits.

    A zone runs from a query declaration line to the line before the next
    one (the last zone runs to the end of the report). Within a zone, hit
    blocks are formed the same way from the hit declaration lines.

    Example:
        >>> report = BlastReportProcessor.load_report("hits.blast")
        >>> for zone in report.zones:
        ...     print(zone.query, len(zone.hits))
    """

    @staticmethod
    def find_zone_starts(lines: Sequence[str]) -> List[int]:
        """
        Find the line indices of query declarations.

        Args:
            lines: Report lines

        Returns:
            Ascending list of indices of lines containing the query marker
        """
        return [index for index, line in enumerate(lines) if Config.QUERY_MARKER in line]

    @staticmethod
    def partition_zones(zone_starts: Sequence[int], num_lines: int) -> List[LineRange]:
        """
        Turn query declaration indices into inclusive zone ranges.

        Args:
            zone_starts: Ascending query declaration indices
            num_lines: Total number of report lines

        Returns:
            List of (start, end) ranges, contiguous and non-overlapping,
            the last one ending at ``num_lines - 1``

        Raises:
            MalformedReportError: If no query declaration was found
        """
        if not zone_starts:
            error_msg = f"No query declarations ('{Config.QUERY_MARKER}') found in report"
            logger.error(error_msg)
            raise MalformedReportError(error_msg)

        zones = [(start, next_start - 1) for start, next_start in zip(zone_starts, zone_starts[1:])]
        zones.append((zone_starts[-1], num_lines - 1))
        return zones

    @staticmethod
    def find_hit_starts(lines: Sequence[str], zone: LineRange) -> List[int]:
        """
        Find the hit declaration lines within a zone.

        Args:
            lines: Report lines
            zone: Inclusive (start, end) zone range

        Returns:
            Ascending list of indices of lines starting with the hit marker
        """
        start, end = zone
        return [i for i in range(start, end + 1) if lines[i].lstrip().startswith(Config.HIT_MARKER)]

    @staticmethod
    def partition_hits(hit_starts: Sequence[int], zone_end: int) -> List[LineRange]:
        """
        Turn hit declaration indices into inclusive hit block ranges.

        Args:
            hit_starts: Ascending hit declaration indices within one zone
            zone_end: Last line index of the zone

        Returns:
            List of (start, end) ranges, empty when the zone has no hits
        """
        if not hit_starts:
            return []

        hits = [(start, next_start - 1) for start, next_start in zip(hit_starts, hit_starts[1:])]
        hits.append((hit_starts[-1], zone_end))
        return hits

    @classmethod
    def process_zone(cls, lines: Sequence[str], zone: LineRange) -> HitsZone:
        """
        Parse every hit of one query zone.

        Args:
            lines: Shared report lines
            zone: Inclusive (start, end) zone range

        Returns:
            HitsZone labelled with the query declaration line

        Raises:
            MissingFieldError: If a hit lacks a required line
            ParseError: If a hit has unparseable numbers
        """
        hit_ranges = cls.partition_hits(cls.find_hit_starts(lines, zone), zone[1])
        hits = tuple(HitExtractor.parse_hit(lines, hit_range) for hit_range in hit_ranges)

        logger.debug(f"Zone {zone}: {len(hits)} hits")
        return HitsZone(query=lines[zone[0]], line_range=zone, hits=hits)

    @classmethod
    def parse_lines(cls, lines: Sequence[str], num_workers: Optional[int] = None) -> BlastReport:
        """
        Parse report lines into an ordered BlastReport.

        Zones are parsed concurrently on a thread pool and written back by
        zone index, so the result follows report order whatever the
        completion order. The first failing zone aborts the whole parse.

        Args:
            lines: Report lines without line terminators
            num_workers: Thread count, defaults to Config.NUM_PROCESSES

        Returns:
            BlastReport with one zone per query declaration

        Raises:
            MalformedReportError: If the report has no query declarations
            MissingFieldError: If a hit lacks a required line
            ParseError: If a hit has unparseable numbers
        """
        shared_lines = tuple(lines)
        zones = cls.partition_zones(cls.find_zone_starts(shared_lines), len(shared_lines))
        num_workers = max(1, num_workers or Config.NUM_PROCESSES)

        logger.debug(f"Parsing {len(zones)} query zones from {len(shared_lines)} lines "
                     f"with {num_workers} workers")

        results: List[Optional[HitsZone]] = [None] * len(zones)

        with concurrent.futures.ThreadPoolExecutor(max_workers=num_workers) as executor:
            future_to_index = {
                executor.submit(cls.process_zone, shared_lines, zone): index
                for index, zone in enumerate(zones)
            }

            completed = concurrent.futures.as_completed(future_to_index)
            if Config.SHOW_PROGRESS:
                completed = tqdm(completed, total=len(future_to_index), desc="Parsing query zones")

            try:
                for future in completed:
                    results[future_to_index[future]] = future.result()
            except Exception:
                for future in future_to_index:
                    future.cancel()
                raise

        report = BlastReport(zones=tuple(results))
        logger.info(f"Parsed {len(report.zones)} queries with {report.hit_count} hits")
        return report

    @classmethod
    def load_report(cls, filepath: str, num_workers: Optional[int] = None) -> BlastReport:
        """
        Read and parse a BLAST text report.

        Args:
            filepath: Path to the report
            num_workers: Thread count, defaults to Config.NUM_PROCESSES

        Returns:
            Parsed BlastReport

        Raises:
            FileError: If the report cannot be read
            ReportError: If the report cannot be parsed
        """
        lines = FileIO.load_lines(filepath)
        return cls.parse_lines(lines, num_workers=num_workers)
