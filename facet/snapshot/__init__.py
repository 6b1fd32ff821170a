"""
Structural Snapshot, Diff and Equality Engine

This package turns arbitrary values into comparable trees and compares
them, either as raw values (structural equality for the ``like`` matcher)
or as snapshots (difference trees for reporting).

Value kinds:
    - leaf: numbers, text, bytes, None, patterns, enum tags, sets, dates,
      and any value with no fields to enumerate
    - sequence: list, tuple, deque
    - mapping: any Mapping
    - structured: everything else, enumerated via describe_fields()

Usage:
    from facet.snapshot import build_snapshot, diff, structurally_equal

    expected = {"name": "a", "tags": [1, 2]}
    actual = {"name": "a", "tags": [1, 3]}

    structurally_equal(expected, actual)  # False

    difference = diff(build_snapshot(expected), build_snapshot(actual))
    for path, pair in difference.leaf_differences():
        print("/".join(path), pair)
"""

# Classification
from .fields import (
    ValueKind,
    classify,
    describe_fields,
    describe_shared_fields,
    is_leaf,
    leaf_equal,
)

# Models
from .models import (
    ABSENT_SUMMARY,
    MISSING_ITEM_SUMMARY,
    DiffPair,
    MappingEntry,
    Snapshot,
    printable_summary,
    summarize_value,
)

# Engines
from .builder import build_snapshot
from .diff import diff
from .equality import structurally_equal

__all__ = [
    # Classification
    "ValueKind",
    "classify",
    "describe_fields",
    "describe_shared_fields",
    "is_leaf",
    "leaf_equal",
    # Models
    "ABSENT_SUMMARY",
    "MISSING_ITEM_SUMMARY",
    "DiffPair",
    "MappingEntry",
    "Snapshot",
    "printable_summary",
    "summarize_value",
    # Engines
    "build_snapshot",
    "diff",
    "structurally_equal",
]
