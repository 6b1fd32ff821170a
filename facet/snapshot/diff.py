"""
Snapshot differencing.

diff() compares an expected Snapshot with an actual one and returns a
Snapshot-shaped tree holding only the positions that differ, or None when
the two are equal. Difference leaves carry a DiffPair of printable
summaries.
"""

from __future__ import annotations

import logging

from .fields import leaf_equal
from .models import (
    ABSENT_SUMMARY,
    MISSING_ITEM_SUMMARY,
    RECURSIVE_PREFIX,
    MappingEntry,
    Snapshot,
    printable_summary,
)

logger = logging.getLogger(__name__)


def diff(expected: Snapshot, actual: Snapshot | None) -> Snapshot | None:
    """
    Compute the difference tree between two snapshots.

    Args:
        expected: Snapshot of the expected value
        actual: Snapshot of the actual value, or None if there is no value

    Returns:
        Difference tree rooted at a node shaped like ``expected``, or None
        if there is no difference
    """
    if actual is None:
        return Snapshot.difference(
            printable_summary(expected), ABSENT_SUMMARY, expected.label
        )

    if expected.identity is not None and expected.identity == actual.identity:
        return None

    if expected.declared_type is not actual.declared_type:
        return _leaf_difference(expected, actual)

    if expected.is_leaf and actual.is_leaf:
        if leaf_equal(expected.value, actual.value):
            return None
        return _leaf_difference(expected, actual)

    if expected.is_leaf or actual.is_leaf:
        return _leaf_difference(expected, actual)

    if expected.already_referenced or actual.already_referenced:
        return Snapshot.difference(
            _tagged_summary(expected),
            _tagged_summary(actual),
            expected.label,
        )

    differences: dict[str, Snapshot] = {}
    labels = list(expected.children)
    labels.extend(label for label in actual.children if label not in expected.children)

    for label in labels:
        left = expected.children.get(label)
        right = actual.children.get(label)
        if left is None:
            difference = _missing_item(right, missing_from_expected=True)
        elif right is None:
            difference = _missing_item(left, missing_from_expected=False)
        else:
            difference = diff(left, right)
        if difference is not None:
            differences[label] = difference

    if not differences:
        return None

    # a lone value change inside a mapping entry keeps its key for context
    if expected.declared_type is MappingEntry and list(differences) == ["value"]:
        differences = {"key": expected.children["key"], **differences}

    logger.debug(
        f"{len(differences)} difference(s) under {expected.label or expected.type_name}"
    )
    return Snapshot(
        label=expected.label,
        declared_type=expected.declared_type,
        is_leaf=False,
        children=differences,
    )


def _leaf_difference(expected: Snapshot, actual: Snapshot) -> Snapshot:
    return Snapshot.difference(
        printable_summary(expected),
        printable_summary(actual),
        expected.label,
    )


def _tagged_summary(node: Snapshot) -> str:
    summary = printable_summary(node)
    if node.already_referenced:
        return f"{RECURSIVE_PREFIX} {summary}"
    return summary


def _missing_item(node: Snapshot, missing_from_expected: bool) -> Snapshot:
    """Difference for a label present on only one side."""
    if node.declared_type is MappingEntry:
        value_summary = printable_summary(node.children["value"])
        if missing_from_expected:
            pair = (MISSING_ITEM_SUMMARY, value_summary)
        else:
            pair = (value_summary, MISSING_ITEM_SUMMARY)
        return Snapshot(
            label=node.label,
            declared_type=MappingEntry,
            is_leaf=False,
            children={
                "key": node.children["key"],
                "value": Snapshot.difference(*pair, label="value"),
            },
        )

    summary = printable_summary(node)
    if missing_from_expected:
        return Snapshot.difference(MISSING_ITEM_SUMMARY, summary, node.label)
    return Snapshot.difference(summary, MISSING_ITEM_SUMMARY, node.label)
