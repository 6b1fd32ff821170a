"""
Structural equality over raw values.

Backs the ``like`` matcher: two values are equal when their types match
and their contents are recursively equal, regardless of object identity.

Two behaviours are deliberate and relied upon:

- Mappings are compared by entry count plus a lookup of every lhs key in
  rhs (``rhs.get(key)``). A key missing from rhs reads as None, so a
  None-valued lhs entry can match a different key set of the same size.
- Re-entering a composite that was already visited falls back to direct
  (identity) equality instead of recursing. Container and dataclass ==
  would walk the cycle again unguarded, so identity is the only direct
  comparison that always terminates. Two different cyclic graphs that
  close onto the same objects compare equal past that point.
"""

from __future__ import annotations

from typing import Any

from .fields import ValueKind, classify, describe_fields, leaf_equal


def structurally_equal(lhs: Any, rhs: Any, visited: set[int] | None = None) -> bool:
    """
    Check whether two values are structurally equal.

    Args:
        lhs: First value
        rhs: Second value
        visited: Identities already entered in this comparison. Leave unset
            for a top-level call.

    Returns:
        True if the values are equal field by field
    """
    if visited is None:
        visited = set()

    if type(lhs) is not type(rhs):
        return False

    kind = classify(lhs)
    if kind is ValueKind.LEAF:
        return leaf_equal(lhs, rhs)

    if id(lhs) in visited or id(rhs) in visited:
        return lhs is rhs
    visited.add(id(lhs))
    visited.add(id(rhs))

    if kind is ValueKind.SEQUENCE:
        if len(lhs) != len(rhs):
            return False
        return all(
            structurally_equal(left, right, visited)
            for left, right in zip(lhs, rhs)
        )

    if kind is ValueKind.MAPPING:
        if len(lhs) != len(rhs):
            return False
        return all(
            structurally_equal(value, rhs.get(key), visited)
            for key, value in lhs.items()
        )

    return _fields_equal(lhs, rhs, visited)


def _fields_equal(lhs: Any, rhs: Any, visited: set[int]) -> bool:
    lhs_fields = describe_fields(lhs)
    rhs_fields = describe_fields(rhs)
    if set(lhs_fields) != set(rhs_fields):
        return False

    # every field's shape is checked before recursing into any composite
    pending: list[tuple[Any, Any]] = []
    for name, left in lhs_fields.items():
        right = rhs_fields[name]
        if type(left) is not type(right):
            return False
        if classify(left) is ValueKind.LEAF:
            if not leaf_equal(left, right):
                return False
        else:
            pending.append((left, right))

    return all(structurally_equal(left, right, visited) for left, right in pending)

