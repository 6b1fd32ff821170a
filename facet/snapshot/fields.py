"""
Value classification and field enumeration.

Every value the snapshot and equality engines see falls into one of four
kinds: a leaf (compared by value), a sequence, a mapping, or a structured
object whose fields are enumerated by name.

Structured types opt into field enumeration in one of three ways, checked
in this order:

    1. a ``describe_fields()`` method returning name -> value pairs
    2. an implementation registered on :func:`describe_fields`
    3. dataclass fields, or instance attributes as the fallback

A value offering none of these, such as most C-implemented types, has
nothing to recurse into and is treated as a leaf.

Example:
    @describe_fields.register
    def _(value: Point) -> dict[str, Any]:
        return {"x": value.x, "y": value.y}
"""

from __future__ import annotations

import dataclasses
import datetime
import numbers
import re
import types
from collections import deque
from collections.abc import Mapping
from enum import Enum
from functools import singledispatch
from typing import Any


class ValueKind(str, Enum):
    """Structural classification of a value."""
    LEAF = "leaf"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    STRUCTURED = "structured"


LEAF_TYPES: tuple[type, ...] = (
    type(None),
    bool,
    numbers.Number,
    str,
    bytes,
    bytearray,
    re.Pattern,
    Enum,
    set,
    frozenset,
    range,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.ModuleType,
)

SEQUENCE_TYPES: tuple[type, ...] = (list, tuple, deque)


def classify(value: Any) -> ValueKind:
    """Return the structural kind of a value."""
    if isinstance(value, LEAF_TYPES):
        return ValueKind.LEAF
    if isinstance(value, SEQUENCE_TYPES):
        return ValueKind.SEQUENCE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if not _has_field_source(value):
        return ValueKind.LEAF
    return ValueKind.STRUCTURED


def is_leaf(value: Any) -> bool:
    """True if the value has no members to recurse into."""
    return classify(value) is ValueKind.LEAF


def leaf_equal(lhs: Any, rhs: Any) -> bool:
    """
    Compare two leaf values.

    Patterns compare by pattern text and flags, enum members (tags) by
    identity, everything else with ``==``.
    """
    if isinstance(lhs, re.Pattern) and isinstance(rhs, re.Pattern):
        return lhs.pattern == rhs.pattern and lhs.flags == rhs.flags
    if isinstance(lhs, Enum) or isinstance(rhs, Enum):
        return lhs is rhs
    return bool(lhs == rhs)


@singledispatch
def describe_fields(value: Any) -> dict[str, Any]:
    """
    Enumerate the instance fields of a structured value, in order.

    Args:
        value: A value classified as ValueKind.STRUCTURED

    Returns:
        Insertion-ordered mapping of field name to field value
    """
    own = getattr(type(value), "describe_fields", None)
    if callable(own):
        return dict(value.describe_fields())

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: getattr(value, f.name)
            for f in dataclasses.fields(value)
            if hasattr(value, f.name)
        }

    fields: dict[str, Any] = {}
    if hasattr(value, "__dict__"):
        fields.update(vars(value))
    for name in _slot_names(type(value)):
        if name not in fields and hasattr(value, name):
            fields[name] = getattr(value, name)
    return fields


@describe_fields.register
def _describe_exception(value: BaseException) -> dict[str, Any]:
    fields: dict[str, Any] = {"args": value.args}
    fields.update(vars(value))
    return fields


def describe_shared_fields(value: Any) -> dict[str, Any]:
    """
    Enumerate class-level data attributes shared by all instances.

    Methods, descriptors, private names and names that are also instance
    fields are skipped. Types with their own ``describe_fields()`` have no
    shared fields.
    """
    if callable(getattr(type(value), "describe_fields", None)):
        return {}

    instance_names = set(describe_fields(value))
    shared: dict[str, Any] = {}
    for cls in type(value).__mro__:
        if cls is object:
            continue
        for name, attr in vars(cls).items():
            if name.startswith("_") or name in shared or name in instance_names:
                continue
            if callable(attr) or hasattr(attr, "__get__"):
                continue
            shared[name] = attr
    return shared


def _slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in cls.__mro__:
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ("__dict__", "__weakref__") and name not in names:
                names.append(name)
    return names


def _has_field_source(value: Any) -> bool:
    # values without one (C-implemented types) can only be compared with ==
    cls = type(value)
    if callable(getattr(cls, "describe_fields", None)):
        return True
    if describe_fields.dispatch(cls) is not describe_fields.registry[object]:
        return True
    if dataclasses.is_dataclass(cls):
        return True
    return hasattr(value, "__dict__") or bool(_slot_names(cls))
