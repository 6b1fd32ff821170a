from __future__ import annotations

import copy
import re
from array import array
from collections import deque
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum

import pytest

from facet.snapshot import describe_fields, structurally_equal


class Color(Enum):
    RED = 1
    CRIMSON = 1  # alias of RED
    BLUE = 2


@dataclass
class Address:
    street: str
    tags: list[str] = field(default_factory=list)


@dataclass
class Person:
    name: str
    address: Address


class Node:
    def __init__(self, name: str) -> None:
        self.name = name
        self.parent: Node | None = None
        self.children: list[Node] = []

    def add(self, child: Node) -> Node:
        child.parent = self
        self.children.append(child)
        return child


class Slotted:
    __slots__ = ("a", "b")

    def __init__(self, a: int, b: int) -> None:
        self.a = a
        self.b = b


class Temperature:
    def __init__(self, celsius: float) -> None:
        self.celsius = celsius
        self.cache = object()

    def describe_fields(self) -> dict[str, object]:
        return {"celsius": self.celsius}


def _person(street: str = "Main") -> Person:
    return Person("ada", Address(street, ["home"]))


@pytest.mark.parametrize(
    "value",
    [
        1,
        "text",
        None,
        [1, [2, 3]],
        (1, "a"),
        {"a": {"b": [1]}},
        deque([1, 2]),
        Address("Main"),
        Slotted(1, 2),
    ],
)
def test_reflexive(value: object) -> None:
    assert structurally_equal(value, value)


def test_distinct_equal_objects_are_equal_both_ways() -> None:
    lhs, rhs = _person(), _person()

    assert lhs is not rhs
    assert structurally_equal(lhs, rhs)
    assert structurally_equal(rhs, lhs)


def test_nested_field_difference() -> None:
    assert not structurally_equal(_person("Main"), _person("High"))
    assert not structurally_equal(_person("High"), _person("Main"))


def test_type_must_match_exactly() -> None:
    assert not structurally_equal(1, 1.0)
    assert not structurally_equal([1, 2], (1, 2))
    assert not structurally_equal(True, 1)


def test_sequences_compare_length_and_order() -> None:
    assert not structurally_equal([1, 2], [1, 2, 3])
    assert not structurally_equal([1, 2], [2, 1])


def test_differing_field_sets_are_not_equal() -> None:
    lhs = Node("a")
    rhs = Node("a")
    rhs.extra = True

    assert not structurally_equal(lhs, rhs)
    assert not structurally_equal(rhs, lhs)


def test_field_type_mismatch_is_not_equal() -> None:
    assert not structurally_equal(Address("1"), Address(1))  # type: ignore[arg-type]


def test_slotted_objects_compare_by_slots() -> None:
    assert structurally_equal(Slotted(1, 2), Slotted(1, 2))
    assert not structurally_equal(Slotted(1, 2), Slotted(1, 3))


def test_own_describe_fields_is_used() -> None:
    assert describe_fields(Temperature(20.0)) == {"celsius": 20.0}
    assert structurally_equal(Temperature(20.0), Temperature(20.0))


def test_registered_describe_fields_is_used() -> None:
    class Secret:
        def __init__(self, public: int, private: int) -> None:
            self.public = public
            self.private = private

    @describe_fields.register(Secret)
    def _(value: Secret) -> dict[str, object]:
        return {"public": value.public}

    assert structurally_equal(Secret(1, 2), Secret(1, 3))
    assert not structurally_equal(Secret(1, 2), Secret(2, 2))


def test_patterns_compare_by_text_and_flags() -> None:
    assert structurally_equal(re.compile("a+"), re.compile("a+"))
    assert not structurally_equal(re.compile("a+"), re.compile("a+", re.IGNORECASE))


def test_enum_members_compare_by_identity() -> None:
    assert structurally_equal(Color.RED, Color.CRIMSON)
    assert not structurally_equal(Color.RED, Color.BLUE)


def test_mapping_lookup_is_loose_for_none_values() -> None:
    # rhs.get() returns None for a missing key
    assert structurally_equal({"a": None}, {"b": None})
    assert not structurally_equal({"a": 1}, {"b": 1})


def test_mapping_values_are_compared() -> None:
    assert structurally_equal({"a": [1]}, {"a": [1]})
    assert not structurally_equal({"a": [1]}, {"a": [2]})
    assert not structurally_equal({"a": 1}, {"a": 1, "b": 2})


def test_self_referencing_list_terminates() -> None:
    lhs: list[object] = []
    lhs.append(lhs)
    rhs: list[object] = []
    rhs.append(rhs)

    assert structurally_equal(lhs, lhs)
    # past the cutoff distinct cycles fall back to identity
    assert structurally_equal(lhs, rhs) is False


def test_parent_child_graph_terminates() -> None:
    root = Node("root")
    root.add(Node("leaf"))
    other = Node("root")
    other.add(Node("leaf"))

    assert structurally_equal(root, root)
    assert structurally_equal(root, other) is False


def test_shared_subobject_is_not_rejected() -> None:
    shared = Address("Main")
    lhs = [shared, shared]
    rhs = [shared, shared]

    assert structurally_equal(lhs, rhs)


@pytest.mark.parametrize(
    ("lhs", "rhs"),
    [
        (date(2020, 1, 1), date(1999, 12, 31)),
        (datetime(2020, 1, 1, 12), datetime(2020, 1, 1, 13)),
        (timedelta(seconds=1), timedelta(seconds=2)),
        (range(3), range(10)),
        (array("i", [1]), array("i", [2])),
    ],
)
def test_values_without_fields_compare_by_value(lhs: object, rhs: object) -> None:
    assert not structurally_equal(lhs, rhs)
    assert structurally_equal(lhs, copy.copy(lhs))


def test_field_less_values_nested_in_objects() -> None:
    @dataclass
    class Event:
        when: date

    assert structurally_equal(Event(date(2020, 1, 1)), Event(date(2020, 1, 1)))
    assert not structurally_equal(Event(date(2020, 1, 1)), Event(date(2021, 1, 1)))


def test_objects_with_empty_attributes_are_still_structured() -> None:
    class Empty:
        pass

    assert structurally_equal(Empty(), Empty())
