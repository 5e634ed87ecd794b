#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
bextract: extract sequences referenced by BLAST hits.

Parses a plain-text BLAST report, keeps hits under an E-value cutoff and
writes a padded window of each referenced sequence to a FASTA file.
"""

__version__ = "1.0.0"
