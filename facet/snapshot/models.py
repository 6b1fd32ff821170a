"""
Snapshot tree models.

A Snapshot is a cycle-safe structural picture of a value: leaves carry
their raw value, composites carry an insertion-ordered mapping of
label -> child Snapshot. Difference trees reuse the same shape, with
DiffPair values at their leaves.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

ABSENT_SUMMARY = "absent"
MISSING_ITEM_SUMMARY = "no item at this key"
RECURSIVE_PREFIX = "recursive"


@dataclass(frozen=True)
class DiffPair:
    """An expected/actual pair of printable summaries at one position."""
    expected: str
    actual: str

    def __str__(self) -> str:
        return f"expected {self.expected}, got {self.actual}"


@dataclass(frozen=True)
class MappingEntry:
    """
    A mapping key bundled with its value.

    Snapshots of mappings hold one of these per entry so that a changed key
    shows up in a diff as well as a changed value.
    """
    key: Any
    value: Any

    def describe_fields(self) -> dict[str, Any]:
        return {"key": self.key, "value": self.value}


@dataclass(frozen=True, eq=False)
class Snapshot:
    """
    One node of a snapshot (or difference) tree.

    Attributes:
        label: Index, field name or entry label under the parent node
        declared_type: Type of the captured value
        is_leaf: True when the node carries a raw value instead of children
        identity: Opaque token unique per composite instance (None for leaves,
            mapping entries and difference nodes)
        already_referenced: The composite was seen earlier in the same
            traversal; such nodes never carry children
        value: Raw leaf value, or a DiffPair on difference leaves
        children: Insertion-ordered label -> child node
    """
    label: str | None
    declared_type: type
    is_leaf: bool
    identity: int | None = None
    already_referenced: bool = False
    value: Any = None
    children: dict[str, Snapshot] = field(default_factory=dict)
    # keeps the captured composite alive so its identity is not reused
    _anchor: Any = field(default=None, repr=False)

    @classmethod
    def difference(cls, expected: str, actual: str, label: str | None = None) -> Snapshot:
        """Build a leaf difference node."""
        return cls(
            label=label,
            declared_type=DiffPair,
            is_leaf=True,
            value=DiffPair(expected, actual),
        )

    @property
    def type_name(self) -> str:
        return self.declared_type.__name__

    @property
    def is_difference(self) -> bool:
        return self.is_leaf and isinstance(self.value, DiffPair)

    def child(self, label: str) -> Snapshot | None:
        return self.children.get(label)

    def walk(self, path: tuple[str, ...] = ()) -> Iterator[tuple[tuple[str, ...], Snapshot]]:
        """Yield (path, node) for this node and every descendant, depth first."""
        yield path, self
        for label, node in self.children.items():
            yield from node.walk(path + (label,))

    def leaf_differences(self) -> list[tuple[tuple[str, ...], DiffPair]]:
        """Collect (path, DiffPair) for every difference leaf in the tree."""
        return [
            (path, node.value)
            for path, node in self.walk()
            if node.is_difference
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        data: dict[str, Any] = {
            "label": self.label,
            "type": self.type_name,
            "summary": printable_summary(self),
        }
        if self.already_referenced:
            data["already_referenced"] = True
        if self.is_difference:
            data["expected"] = self.value.expected
            data["actual"] = self.value.actual
        elif self.children:
            data["children"] = [node.to_dict() for node in self.children.values()]
        return data


def summarize_value(value: Any) -> str:
    """Printable text for a raw leaf value."""
    if value is None:
        return "None"
    if isinstance(value, (str, bytes, bytearray)):
        return repr(value)
    if isinstance(value, re.Pattern):
        return f"re.compile({value.pattern!r})"
    if isinstance(value, Enum):
        return f"{type(value).__name__}.{value.name}"
    if isinstance(value, DiffPair):
        return str(value)
    return repr(value)


def printable_summary(node: Snapshot) -> str:
    """
    Printable text for a node.

    Leaves summarize their value; composites show their type and identity.
    """
    if node.is_leaf:
        return summarize_value(node.value)
    if node.identity is None:
        return node.type_name
    return f"{node.type_name} {node.identity}"
