#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Shared pytest fixtures for bextract tests.

This file contains fixtures that can be reused across multiple test modules.
"""

import os
import logging
import warnings

import pytest

# Import package modules
from ..config import Config
from .helpers import write_report


# ============== Suppress logging ===============
def silence_logger(logger_name):
    """Completely silence a logger by name."""
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.CRITICAL)
    logger.propagate = False
    logger.handlers = [logging.NullHandler()]


silence_logger("tqdm")

warnings.filterwarnings("ignore")


def pytest_configure(config):
    """Disable all logging messages during testing."""
    logging.disable(logging.CRITICAL)


@pytest.fixture(autouse=True)
def restore_config():
    """Snapshot Config before each test and restore it afterwards."""
    saved = Config.get_all_settings()
    Config.SHOW_PROGRESS = False
    yield
    for key, value in saved.items():
        setattr(Config, key, value)


# ============== Test data ===============

@pytest.fixture
def sample_queries():
    """Known (record_ref, evalue text, bounds) triples for three queries."""
    return [
        ("Q1", [("NODE_1", "2e-05", (10, 13)), ("NODE_2", "1e-10", (100, 140))]),
        ("Q2", []),
        ("Q3", [("NODE_3", "5.0", (40, 37)), ("NODE_1", "e-12", (0, 3)), ("NODE_2", "0.001", (5, 9))]),
    ]


@pytest.fixture
def sample_sequences():
    """Sequence store matching sample_queries."""
    return {
        "NODE_1": b"ACGTTGCAAC" * 5,   # length 50
        "NODE_2": b"GGGCCCAAAT" * 20,  # length 200
        "NODE_3": b"TTTTAAAACC" * 6,   # length 60
    }


@pytest.fixture
def fasta_file(tmp_path, sample_sequences):
    """FASTA file holding sample_sequences, wrapped at 60 columns."""
    path = tmp_path / "contigs.fasta"
    with open(path, "w") as f:
        for record_id, sequence in sample_sequences.items():
            text = sequence.decode("ascii")
            f.write(f">{record_id} assembled contig\n")
            for i in range(0, len(text), 60):
                f.write(text[i:i + 60] + "\n")
    return str(path)


@pytest.fixture
def report_file(tmp_path, sample_queries):
    """BLAST report built from sample_queries."""
    path = tmp_path / "hits.blast"
    write_report(path, sample_queries)
    return str(path)


@pytest.fixture
def output_dir(tmp_path):
    path = tmp_path / "out"
    os.makedirs(path)
    return str(path)
