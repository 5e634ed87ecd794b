"""
Core processing modules for bextract.

This subpackage contains the main processing functionality:
- blast_hits: Parsed report records (report, query zones, hits)
- hit_extractor: Field extraction from a single hit block
- report_processor: Zone partitioning and parallel report assembly
- sequence_extractor: Padded window extraction from a sequence store
"""

__all__ = [
    'BlastHit',
    'HitsZone',
    'BlastReport',
    'HitExtractor',
    'BlastReportProcessor',
    'SequenceExtractor',
]

from .blast_hits import BlastHit, HitsZone, BlastReport
from .hit_extractor import HitExtractor
from .report_processor import BlastReportProcessor
from .sequence_extractor import SequenceExtractor
