"""
Snapshot construction.

Walks a value recursively and records its structure as a Snapshot tree.
A composite seen earlier in the same traversal is recorded as an
already-referenced node with no children, which both guards against
cycles and keeps shared sub-objects from being expanded twice.
"""

from __future__ import annotations

from typing import Any

from .fields import ValueKind, classify, describe_fields, describe_shared_fields
from .models import MappingEntry, Snapshot


def build_snapshot(
    value: Any,
    label: str | None = None,
    visited: set[int] | None = None,
) -> Snapshot:
    """
    Take a snapshot of a value.

    Args:
        value: Any value
        label: Label for the root node
        visited: Identities already captured in this traversal. Leave unset
            for a top-level call; a fresh set is created.

    Returns:
        Root Snapshot node

    Example:
        snap = build_snapshot({"a": [1, 2]})
        snap.children["entry 'a'"].children["value"].children["[1]"].value  # 2
    """
    if visited is None:
        visited = set()

    kind = classify(value)
    if kind is ValueKind.LEAF:
        return Snapshot(
            label=label,
            declared_type=type(value),
            is_leaf=True,
            value=_freeze_leaf(value),
        )

    identity = id(value)
    if identity in visited:
        return Snapshot(
            label=label,
            declared_type=type(value),
            is_leaf=False,
            identity=identity,
            already_referenced=True,
            _anchor=value,
        )
    visited.add(identity)

    children: dict[str, Snapshot] = {}
    if kind is ValueKind.SEQUENCE:
        for index, item in enumerate(value):
            item_label = sequence_label(index)
            children[item_label] = build_snapshot(item, item_label, visited)
    elif kind is ValueKind.MAPPING:
        for key, item in value.items():
            entry_label = mapping_label(key)
            children[entry_label] = _build_entry(key, item, entry_label, visited)
    else:
        for name, item in describe_shared_fields(value).items():
            children[name] = build_snapshot(item, name, visited)
        for name, item in describe_fields(value).items():
            children[name] = build_snapshot(item, name, visited)

    return Snapshot(
        label=label,
        declared_type=type(value),
        is_leaf=False,
        identity=identity,
        children=children,
        _anchor=value,
    )


def sequence_label(index: int) -> str:
    return f"[{index}]"


def mapping_label(key: Any) -> str:
    return f"entry {key!r}"


def _build_entry(key: Any, item: Any, label: str, visited: set[int]) -> Snapshot:
    return Snapshot(
        label=label,
        declared_type=MappingEntry,
        is_leaf=False,
        children={
            "key": build_snapshot(key, "key", visited),
            "value": build_snapshot(item, "value", visited),
        },
    )


def _freeze_leaf(value: Any) -> Any:
    # mutable leaves are copied so the snapshot keeps the captured state
    if isinstance(value, bytearray):
        return bytes(value)
    if isinstance(value, set):
        return frozenset(value)
    return value
