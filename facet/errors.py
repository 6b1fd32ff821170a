"""
Exceptions raised by the clause engine and result aggregates.

ClauseAborted is the only exception that is expected to travel through
user test code: it unwinds the remainder of a test body up to the
registration boundary (see facet.reporting.runner.run_facet).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .clause.models import OperationKind


class FacetError(Exception):
    """Base class for all facet errors."""


class ClauseAborted(FacetError):
    """
    User-supplied code raised while a clause was evaluating it.

    The failing operation has already been written to the test trace with
    status ``exception`` by the time this is raised.

    Attributes:
        operation: The operation that was running
        error: The exception raised by the user code
    """

    def __init__(self, operation: OperationKind, error: BaseException):
        super().__init__(
            f"Clause aborted in '{operation.value}': {type(error).__name__}: {error}"
        )
        self.operation = operation
        self.error = error


class ClauseUsageError(FacetError):
    """A clause chain was built in a way the evaluator cannot interpret."""


class DuplicateTestError(FacetError):
    """A test was registered under a name that already exists in its facet."""

    def __init__(self, facet_name: str, test_name: str | int):
        super().__init__(
            f"Trying to register test under a name that already exists in "
            f"facet '{facet_name}': {test_name!r}"
        )
        self.facet_name = facet_name
        self.test_name = test_name
