"""
Utility modules for bextract.

This subpackage contains utility functions:
- file_io: Report, FASTA and table reading/writing
"""

from .file_io import FileIO

__all__ = [
    'FileIO',
]
