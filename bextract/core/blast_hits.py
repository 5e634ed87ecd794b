#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
BLAST hit records for bextract.

A parsed report is a tuple of query zones, each holding the hits found for
that query in report order. All records are immutable once assembled.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple

import pandas as pd

logger = logging.getLogger(__name__)

HIT_TABLE_COLUMNS = ["Query", "Record", "Evalue", "Subject Start", "Subject End"]


@dataclass(frozen=True)
class BlastHit:
    """
    One alignment match inside a query zone.

    Attributes:
        record_ref: Identifier of the subject sequence
        evalue: Expect value of the match
        subject_bounds: (left, right) subject coordinates as reported,
            not reordered for minus-strand matches
    """
    record_ref: str
    evalue: float
    subject_bounds: Tuple[int, int]


@dataclass(frozen=True)
class HitsZone:
    """Hits reported for one query, with the query line used as its label."""
    query: str
    line_range: Tuple[int, int]
    hits: Tuple[BlastHit, ...] = ()


@dataclass(frozen=True)
class BlastReport:
    """
    Ordered query zones of a parsed BLAST report.

    Example:
        >>> kept = report.filter_by_evalue(1e-5)
        >>> df = report.to_dataframe()
    """
    zones: Tuple[HitsZone, ...] = ()

    @property
    def hit_count(self) -> int:
        return sum(len(zone.hits) for zone in self.zones)

    def iter_hits(self) -> Iterator[Tuple[HitsZone, BlastHit]]:
        """Yield (zone, hit) pairs in report order."""
        for zone in self.zones:
            for hit in zone.hits:
                yield zone, hit

    def filter_by_evalue(self, emax: float) -> List[BlastHit]:
        """
        Keep hits whose E-value does not exceed the cutoff.

        The cutoff is inclusive: a hit with ``evalue == emax`` is kept.

        Args:
            emax: Maximum E-value allowed

        Returns:
            List of accepted hits in report order
        """
        kept = [hit for _, hit in self.iter_hits() if hit.evalue <= emax]
        logger.debug(f"E-value filter <= {emax}: kept {len(kept)} of {self.hit_count} hits")
        return kept

    def to_dataframe(self) -> pd.DataFrame:
        """
        Build a summary table with one row per hit.

        Returns:
            DataFrame with columns Query, Record, Evalue, Subject Start, Subject End
        """
        rows = [
            {
                "Query": zone.query.strip(),
                "Record": hit.record_ref,
                "Evalue": hit.evalue,
                "Subject Start": hit.subject_bounds[0],
                "Subject End": hit.subject_bounds[1],
            }
            for zone, hit in self.iter_hits()
        ]
        return pd.DataFrame(rows, columns=HIT_TABLE_COLUMNS)
