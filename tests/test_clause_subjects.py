from __future__ import annotations

from dataclasses import dataclass
from datetime import date

import pytest

from facet.clause import Clause, OperationGroup, OperationKind, Status
from facet.errors import ClauseAborted, ClauseUsageError
from facet.reporting import TestResult


@dataclass
class Point:
    x: int
    y: int


class Box:
    def __init__(self, content: object) -> None:
        self.content = content


class Grumpy:
    def __eq__(self, other: object) -> bool:
        raise RuntimeError("no comparing")


def _clause() -> tuple[Clause, TestResult]:
    result = TestResult()
    return Clause(result), result


def test_pick_projects_subject_for_next_matcher_only() -> None:
    clause, result = _clause()

    clause.that(lambda: [1, 2, 3]).pick(len).is_(lambda: 3).and_().like(lambda: [1, 2, 3])

    assert result.status == Status.PASS
    assert clause.subject == [1, 2, 3]


def test_pick_receives_current_subject() -> None:
    clause, result = _clause()

    clause.that(lambda: {"name": "ada"}).pick(lambda subject: subject["name"]).is_(lambda: "ada")

    assert result.status == Status.PASS
    assert result.trace[1].kind is OperationKind.PICK
    assert result.trace[1].status == Status.SET


def test_pick_before_group_restores_after_group() -> None:
    clause, result = _clause()

    clause.that(lambda: "ab").pick(len).and_(
        lambda c: c.is_(lambda: 2).and_().is_type(lambda: int)
    )

    assert result.status == Status.PASS
    assert clause.subject == "ab"


def test_that_replaces_pending_pick() -> None:
    clause, result = _clause()

    clause.that(lambda: 1).pick(lambda v: v + 1).that(lambda: 10).is_(lambda: 10)

    assert result.status == Status.PASS
    assert clause.subject == 10


def test_err_captures_raised_exception() -> None:
    clause, result = _clause()

    clause.err(lambda: int("x")).is_type(lambda: ValueError)

    assert result.status == Status.PASS
    assert isinstance(clause.subject, ValueError)


def test_err_without_exception_sets_none() -> None:
    clause, result = _clause()

    clause.err(lambda: 1).is_(lambda: None)

    assert result.status == Status.PASS


def test_err_message_can_be_picked() -> None:
    clause, result = _clause()

    clause.err(lambda: {}["missing"]).is_type(lambda: KeyError).and_().pick(
        lambda e: e.args
    ).is_(lambda: ("missing",))

    assert result.status == Status.PASS


def test_is_type_accepts_tuple_of_types() -> None:
    clause, result = _clause()

    clause.that(lambda: 1).is_type(lambda: (str, int))

    assert result.status == Status.PASS


def test_like_compares_distinct_objects_by_fields() -> None:
    clause, result = _clause()

    clause.that(lambda: Box([1, 2])).like(lambda: Box([1, 2]))
    assert result.status == Status.PASS

    clause, result = _clause()

    clause.that(lambda: Box([1, 2])).is_(lambda: Box([1, 2]))
    assert result.status == Status.FAIL


def test_like_detects_field_difference() -> None:
    clause, result = _clause()

    clause.that(lambda: Point(1, 2)).like(lambda: Point(1, 3))

    assert result.status == Status.FAIL


def test_like_compares_dates_by_value() -> None:
    clause, result = _clause()

    clause.that(lambda: date(2020, 1, 1)).like(lambda: date(1999, 12, 31))

    assert result.status == Status.FAIL
    assert result.failure_diff() is not None


def test_like_with_leaf_uses_equality() -> None:
    clause, result = _clause()

    clause.that(lambda: 1).like(lambda: 1.0)

    assert result.status == Status.PASS


def test_matcher_without_subject_is_usage_error() -> None:
    clause, _ = _clause()

    with pytest.raises(ClauseUsageError):
        clause.is_(lambda: 1)


def test_pick_without_subject_is_usage_error() -> None:
    clause, _ = _clause()

    with pytest.raises(ClauseUsageError):
        clause.pick(len)


def test_non_callable_producer_is_usage_error() -> None:
    clause, _ = _clause()

    with pytest.raises(ClauseUsageError):
        clause.that(1)  # type: ignore[arg-type]


def test_raising_producer_aborts_clause() -> None:
    clause, result = _clause()

    with pytest.raises(ClauseAborted) as exc_info:
        clause.that(lambda: 1 / 0)

    assert exc_info.value.operation is OperationKind.THAT
    assert isinstance(exc_info.value.error, ZeroDivisionError)
    assert exc_info.value.__cause__ is exc_info.value.error
    assert result.status == Status.EXCEPTION

    record = result.trace[-1]
    assert record.status == Status.EXCEPTION
    assert record.group is OperationGroup.SETTER
    assert record.error_message == "ZeroDivisionError: division by zero"
    assert record.captured.declared_type is ZeroDivisionError


def test_raising_comparison_aborts_clause() -> None:
    clause, result = _clause()

    with pytest.raises(ClauseAborted) as exc_info:
        clause.that(lambda: Grumpy()).is_(lambda: 1)

    assert exc_info.value.operation is OperationKind.IS
    assert result.trace[-1].group is OperationGroup.MATCHER
    assert result.trace[-1].error_message == "RuntimeError: no comparing"


def test_is_type_with_non_type_aborts_clause() -> None:
    clause, result = _clause()

    with pytest.raises(ClauseAborted):
        clause.that(lambda: 1).is_type(lambda: "int")

    assert result.status == Status.EXCEPTION


def test_raising_group_block_aborts_clause() -> None:
    clause, result = _clause()

    def block(c: Clause) -> None:
        raise LookupError("lost")

    with pytest.raises(ClauseAborted) as exc_info:
        clause.that(lambda: 1).and_(block)

    assert exc_info.value.operation is OperationKind.AND
    assert result.trace[-2].kind is OperationKind.BLOCK_START
    assert result.trace[-1].group is OperationGroup.LOGIC
    assert result.trace[-1].error_message == "LookupError: lost"


def test_raising_pick_aborts_and_keeps_previous_records() -> None:
    clause, result = _clause()

    with pytest.raises(ClauseAborted):
        clause.that(lambda: None).pick(len)

    assert [record.kind for record in result.trace] == [OperationKind.THAT, OperationKind.PICK]
    assert result.trace[0].status == Status.SET
    assert result.trace[1].status == Status.EXCEPTION
