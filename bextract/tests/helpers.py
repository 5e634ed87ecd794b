#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Builders for synthetic BLAST text reports used across the test suite.
"""

REPORT_HEADER = [
    "BLASTN 2.2.31+",
    "",
    "Reference: Zheng Zhang, Scott Schwartz, Lukas Wagner, and Webb",
    "Miller (2000), \"A greedy algorithm for aligning DNA sequences\"",
    "",
    "Database: contigs.fasta",
    "           3 sequences; 1,500 total letters",
    "",
]


def hit_block(record_ref, evalue_text, bounds, query_bounds=(1, 4), alignment="ACGT"):
    """Lines of one hit block as printed in a pairwise BLAST report."""
    left, right = bounds
    return [
        f"> {record_ref}",
        "Length=500",
        "",
        f" Score = 100 bits (50),  Expect = {evalue_text}",
        " Identities = 4/4 (100%), Gaps = 0/4 (0%)",
        " Strand=Plus/Plus",
        "",
        "",
        f"Query  {query_bounds[0]}    {alignment}  {query_bounds[1]}",
        "       " + "|" * len(alignment),
        f"Sbjct  {left}   {alignment}  {right}",
        "",
        "",
    ]


def query_zone(query_name, hits):
    """Lines of one query zone; hits are (record_ref, evalue_text, bounds) triples."""
    lines = [
        f"Query= {query_name}",
        "",
        "Length=120",
        "",
    ]
    if hits:
        lines += [
            "                                                                      Score     E",
            "Sequences producing significant alignments:                          (Bits)  Value",
            "",
        ]
        lines += [f"  {ref}  100  {evalue}" for ref, evalue, _ in hits]
        lines.append("")
        lines.append("")
        for record_ref, evalue_text, bounds in hits:
            lines += hit_block(record_ref, evalue_text, bounds)
    else:
        lines += [
            "",
            "***** No hits found *****",
            "",
            "",
        ]
    lines += [
        "Lambda      K        H",
        "    1.33    0.621     1.12",
        "",
        "Effective search space used: 22356",
        "",
        "",
    ]
    return lines


def build_report_lines(queries, header=True):
    """
    Build a report from (query_name, hits) pairs.

    Example:
        >>> lines = build_report_lines([("Q1", [("NODE_1", "2e-05", (10, 13))])])
    """
    lines = list(REPORT_HEADER) if header else []
    for query_name, hits in queries:
        lines += query_zone(query_name, hits)
    return lines


def write_report(path, queries, header=True):
    """Write a synthetic report to disk and return its lines."""
    lines = build_report_lines(queries, header=header)
    with open(path, "w") as f:
        f.write("\n".join(lines) + "\n")
    return lines
