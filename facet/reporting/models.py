"""
Result models for facet tests.

A TestResult holds the outcome and operation trace of one clause chain,
a FacetResult groups the tests proving one behaviour, and a FacetSummary
counts facet outcomes across a run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..clause.models import OperationGroup, Status, TraceRecord
from ..errors import DuplicateTestError
from ..snapshot import Snapshot, diff

logger = logging.getLogger(__name__)


@dataclass
class TestResult:
    """
    Result of a single test within a facet.

    Attributes:
        status: pass, fail, exception or not_implemented
        trace: Every operation performed on the test's clause chain, in order
        fail_point: Index of the first failing top-level record, cleared by a
            later top-level pass
    """
    __test__ = False  # not a pytest test class

    status: Status = Status.NOT_IMPLEMENTED
    trace: list[TraceRecord] = field(default_factory=list)
    fail_point: int | None = None

    def record(self, record: TraceRecord) -> int:
        """
        Append an operation to the trace and link it to its neighbour.

        Returns:
            Index of the record in the trace
        """
        index = len(self.trace)
        record.index = index
        if self.trace:
            record.previous = index - 1
            self.trace[-1].next = index
        self.trace.append(record)
        return index

    @property
    def fail_point_record(self) -> TraceRecord | None:
        if self.fail_point is None:
            return None
        return self.trace[self.fail_point]

    def iter_trace(self) -> Iterator[TraceRecord]:
        """Walk the trace by following the ``next`` links."""
        index = 0 if self.trace else None
        while index is not None:
            record = self.trace[index]
            yield record
            index = record.next

    def failure_diff(self) -> Snapshot | None:
        """
        Difference between the expected value at the fail point and the
        subject it was matched against.

        Needs snapshots, so returns None when tracing was disabled or when
        there is no fail point.
        """
        failed = self.fail_point_record
        if failed is None or failed.captured is None:
            return None
        for record in reversed(self.trace[: failed.index]):
            if record.group is OperationGroup.SETTER:
                if record.captured is None:
                    return None
                return diff(failed.captured, record.captured)
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "status": self.status.value,
            "fail_point": self.fail_point,
            "trace": [record.to_dict() for record in self.trace],
        }


@dataclass
class FacetResult:
    """
    Result of a facet: a named group of tests proving one behaviour.

    Tests registered without a name are numbered in sequence from 1.
    """
    name: str
    tests: dict[str | int, TestResult] = field(default_factory=dict)
    exceptional: bool = False

    def register_test(self, test_name: str | int | None = None) -> TestResult:
        """
        Register a new test and return the result it should fill in.

        Args:
            test_name: Name for the test, or None to number it

        Returns:
            A fresh TestResult

        Raises:
            DuplicateTestError: If the name is already registered
        """
        if test_name is None:
            test_name = len(self.tests) + 1
        if test_name in self.tests:
            raise DuplicateTestError(self.name, test_name)

        result = TestResult()
        self.tests[test_name] = result
        logger.debug(f"Registered test {test_name!r} in facet '{self.name}'")
        return result

    def mark_exceptional(self) -> None:
        """Flag that a test in this facet raised and was aborted."""
        self.exceptional = True

    @property
    def status(self) -> Status:
        return self.get_result()

    def get_result(self) -> Status:
        """
        Overall status of the facet.

        exception if any test raised; pass if every test passed;
        not_implemented if there are no tests or none ran a matcher;
        fail otherwise.
        """
        statuses = [result.status for result in self.tests.values()]
        if self.exceptional or Status.EXCEPTION in statuses:
            return Status.EXCEPTION
        if not statuses:
            return Status.NOT_IMPLEMENTED
        if all(status == Status.PASS for status in statuses):
            return Status.PASS
        if all(status == Status.NOT_IMPLEMENTED for status in statuses):
            return Status.NOT_IMPLEMENTED
        return Status.FAIL

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "name": self.name,
            "status": self.get_result().value,
            "tests": {str(name): result.to_dict() for name, result in self.tests.items()},
        }


@dataclass
class FacetSummary:
    """
    Counts of facet outcomes.

    ``failed`` includes facets that raised. Summaries of nested groups are
    combined with ``+``.
    """
    passed: int = 0
    failed: int = 0
    not_implemented: int = 0

    @property
    def facets_ran(self) -> int:
        return self.passed + self.failed

    @property
    def total_facets(self) -> int:
        return self.facets_ran + self.not_implemented

    @classmethod
    def from_results(cls, results: Mapping[str, FacetResult]) -> FacetSummary:
        """Summarize a mapping of facet name -> FacetResult."""
        statuses = [result.get_result() for result in results.values()]
        return cls(
            passed=statuses.count(Status.PASS),
            failed=statuses.count(Status.FAIL) + statuses.count(Status.EXCEPTION),
            not_implemented=statuses.count(Status.NOT_IMPLEMENTED),
        )

    def __add__(self, other: FacetSummary) -> FacetSummary:
        if not isinstance(other, FacetSummary):
            return NotImplemented
        return FacetSummary(
            passed=self.passed + other.passed,
            failed=self.failed + other.failed,
            not_implemented=self.not_implemented + other.not_implemented,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "passed": self.passed,
            "failed": self.failed,
            "not_implemented": self.not_implemented,
            "facets_ran": self.facets_ran,
            "total_facets": self.total_facets,
        }

    def summary(self) -> str:
        """Generate a human-readable summary line."""
        return (
            f"{self.passed}/{self.total_facets} facets passed "
            f"({self.failed} failed, {self.not_implemented} not implemented)"
        )
