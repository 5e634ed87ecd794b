#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Unit tests for the report processor module.
Tests zone and hit partitioning and parallel report assembly.
"""

import time
from unittest import mock

import pytest

# Import package modules
from ...core.report_processor import BlastReportProcessor
from ...core.blast_hits import HitsZone
from ...config import Config, FileError, MalformedReportError, MissingFieldError
from ..helpers import build_report_lines, write_report


class TestZonePartitioning:
    """Test suite for query zone partitioning."""

    def test_find_zone_starts(self):
        """Only lines carrying the query marker are zone starts."""
        lines = ["header", "Query= Q1", "Query  1 ACGT 4", "Query= Q2", "Sbjct 1 ACGT 4"]
        assert BlastReportProcessor.find_zone_starts(lines) == [1, 3]

    def test_partition_zones(self):
        """Zones run from each marker to the line before the next one."""
        zones = BlastReportProcessor.partition_zones([0, 5, 9], 12)
        assert zones == [(0, 4), (5, 8), (9, 11)]

    def test_partition_zones_cover_report(self):
        """k markers give k contiguous zones ending at the last line."""
        for starts, num_lines in (([0, 1], 2), ([0, 3, 4, 10], 11), ([0, 2, 7], 30)):
            zones = BlastReportProcessor.partition_zones(starts, num_lines)

            assert len(zones) == len(starts)
            assert [zone[0] for zone in zones] == starts
            assert zones[-1][1] == num_lines - 1
            for current, following in zip(zones, zones[1:]):
                assert current[1] + 1 == following[0]

    def test_partition_zones_single_marker(self):
        """A single query marker forms one zone running to the last line."""
        assert BlastReportProcessor.partition_zones([3], 10) == [(3, 9)]

    def test_partition_zones_no_markers(self):
        """A report without query markers is malformed, not an index error."""
        with pytest.raises(MalformedReportError):
            BlastReportProcessor.partition_zones([], 10)

    def test_parse_lines_no_markers(self):
        """Parsing text with no query markers raises MalformedReportError."""
        with pytest.raises(MalformedReportError):
            BlastReportProcessor.parse_lines(["BLASTN 2.2.31+", "", "no queries here"])

        with pytest.raises(MalformedReportError):
            BlastReportProcessor.parse_lines([])


class TestHitPartitioning:
    """Test suite for hit partitioning inside a zone."""

    def setup_method(self):
        """Set up test data before each test."""
        self.lines = build_report_lines(
            [("Q1", [("NODE_1", "1e-5", (1, 4)), ("NODE_2", "1e-6", (2, 5)), ("NODE_3", "1e-7", (3, 6))])],
            header=False,
        )

    def test_find_hit_starts(self):
        """Hit starts are the lines beginning with the hit marker."""
        starts = BlastReportProcessor.find_hit_starts(self.lines, (0, len(self.lines) - 1))
        assert len(starts) == 3
        assert all(self.lines[i].startswith("> NODE_") for i in starts)

    def test_partition_hits(self):
        """The last hit runs to the zone end."""
        assert BlastReportProcessor.partition_hits([4, 10, 20], 30) == [(4, 9), (10, 19), (20, 30)]

    def test_partition_hits_empty(self):
        """No hit markers means no hit ranges."""
        assert BlastReportProcessor.partition_hits([], 30) == []

    def test_process_zone_hit_count(self):
        """m hit markers give m hits in order."""
        zone = BlastReportProcessor.process_zone(self.lines, (0, len(self.lines) - 1))

        assert isinstance(zone, HitsZone)
        assert zone.query == "Query= Q1"
        assert [hit.record_ref for hit in zone.hits] == ["NODE_1", "NODE_2", "NODE_3"]

    def test_process_zone_without_hits(self):
        """A zone without hit markers yields an empty hit list."""
        lines = build_report_lines([("Q9", [])], header=False)
        zone = BlastReportProcessor.process_zone(lines, (0, len(lines) - 1))
        assert zone.hits == ()

    def test_hits_do_not_read_into_next_zone(self):
        """A hit missing its subject line fails even if the next zone has one."""
        lines = [
            "Query= Q1",
            "> NODE_1",
            "Score = 100 bits, Expect = 2e-5",
            "Query= Q2",
            "> NODE_2",
            "Score = 100 bits, Expect = 2e-5",
            "Sbjct 10 ACGT 13",
        ]
        with pytest.raises(MissingFieldError) as exc_info:
            BlastReportProcessor.parse_lines(lines, num_workers=1)
        assert exc_info.value.line_range == (1, 2)


class TestReportAssembly:
    """Test suite for BlastReportProcessor.parse_lines and load_report."""

    def test_end_to_end_example(self):
        """One query with one hit parses to the expected record."""
        lines = ["Query= Q1", "> NODE_1", "Score = 100 bits, Expect = 2e-5", "Sbjct 10 ACGT 13"]
        report = BlastReportProcessor.parse_lines(lines)

        assert len(report.zones) == 1
        zone = report.zones[0]
        assert zone.query == "Query= Q1"
        assert len(zone.hits) == 1
        hit = zone.hits[0]
        assert hit.record_ref == "NODE_1"
        assert hit.evalue == 2e-5
        assert hit.subject_bounds == (10, 13)

    def test_round_trip(self, sample_queries):
        """Known triples come back in report order."""
        lines = build_report_lines(sample_queries)
        report = BlastReportProcessor.parse_lines(lines, num_workers=3)

        assert [zone.query for zone in report.zones] == ["Query= Q1", "Query= Q2", "Query= Q3"]
        parsed = [
            [(hit.record_ref, hit.evalue, hit.subject_bounds) for hit in zone.hits]
            for zone in report.zones
        ]
        expected = [
            [(ref, float("1" + ev) if ev.startswith("e") else float(ev), bounds) for ref, ev, bounds in hits]
            for _, hits in sample_queries
        ]
        assert parsed == expected

    def test_zone_ranges_contiguous(self, sample_queries):
        """Assembled zones keep contiguous line ranges to the end of the report."""
        lines = build_report_lines(sample_queries)
        report = BlastReportProcessor.parse_lines(lines)

        ranges = [zone.line_range for zone in report.zones]
        assert ranges[-1][1] == len(lines) - 1
        for current, following in zip(ranges, ranges[1:]):
            assert current[1] + 1 == following[0]

    def test_order_kept_when_zones_finish_out_of_order(self):
        """Later zones finishing first does not change the report order."""
        lines = build_report_lines([(f"Q{i}", [(f"NODE_{i}", "1e-5", (i, i + 3))]) for i in range(6)])
        original = BlastReportProcessor.process_zone

        def slow_early_zones(shared_lines, zone):
            # Earlier zones sleep longer
            time.sleep(0.005 * (len(shared_lines) - zone[0]) / len(shared_lines))
            return original(shared_lines, zone)

        with mock.patch.object(BlastReportProcessor, "process_zone", side_effect=slow_early_zones):
            report = BlastReportProcessor.parse_lines(lines, num_workers=6)

        assert [zone.query for zone in report.zones] == [f"Query= Q{i}" for i in range(6)]
        assert [zone.hits[0].record_ref for zone in report.zones] == [f"NODE_{i}" for i in range(6)]

    def test_workers_share_one_line_buffer(self):
        """Every zone task receives the same immutable line tuple."""
        lines = build_report_lines([("Q1", []), ("Q2", []), ("Q3", [])])
        seen = []
        original = BlastReportProcessor.process_zone

        def record_buffer(shared_lines, zone):
            seen.append(shared_lines)
            return original(shared_lines, zone)

        with mock.patch.object(BlastReportProcessor, "process_zone", side_effect=record_buffer):
            BlastReportProcessor.parse_lines(lines, num_workers=3)

        assert len(seen) == 3
        assert isinstance(seen[0], tuple)
        assert all(buffer is seen[0] for buffer in seen)

    def test_fail_fast(self, sample_queries):
        """One malformed hit aborts the whole parse."""
        lines = build_report_lines(sample_queries)
        bad_index = max(i for i, line in enumerate(lines) if line.startswith("Sbjct"))
        lines[bad_index] = "Sbjct  five  ACGT  9"

        with pytest.raises(Exception) as exc_info:
            BlastReportProcessor.parse_lines(lines, num_workers=2)
        assert "subject_bounds" in str(exc_info.value)

    def test_default_worker_count(self, sample_queries):
        """Worker count falls back to Config.NUM_PROCESSES."""
        Config.NUM_PROCESSES = 1
        report = BlastReportProcessor.parse_lines(build_report_lines(sample_queries))
        assert report.hit_count == 5

    def test_load_report(self, tmp_path, sample_queries):
        """Reports are read from disk through FileIO."""
        path = tmp_path / "hits.blast"
        write_report(path, sample_queries)

        report = BlastReportProcessor.load_report(str(path))
        assert len(report.zones) == 3
        assert report.hit_count == 5

    def test_load_report_missing_file(self, tmp_path):
        """A missing report raises FileError."""
        with pytest.raises(FileError):
            BlastReportProcessor.load_report(str(tmp_path / "absent.blast"))
