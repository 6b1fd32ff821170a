"""
Clause trace models.

This module defines the statuses, operation tags and the trace record
written for every call made on a clause chain.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..snapshot import Snapshot


class Status(str, Enum):
    """Outcome of an operation, a test or a facet."""
    PASS = "pass"
    FAIL = "fail"
    EXCEPTION = "exception"
    NOT_IMPLEMENTED = "not_implemented"
    SET = "set"  # setters only

    @classmethod
    def from_match(cls, matched: bool) -> Status:
        return cls.PASS if matched else cls.FAIL


class OperationGroup(str, Enum):
    """Role an operation plays in a chain."""
    SETTER = "setter"
    MATCHER = "matcher"
    LOGIC = "logic"


class OperationKind(str, Enum):
    """The call a trace record describes."""
    THAT = "that"
    PICK = "pick"
    ERR = "err"
    IS = "is"
    LIKE = "like"
    IS_TYPE = "is_type"
    NOT = "not"
    AND = "and"
    OR = "or"
    XOR = "xor"
    BLOCK_START = "block_start"
    BLOCK_END = "block_end"

    @property
    def is_operator(self) -> bool:
        return self in _OPERATORS


_OPERATORS = frozenset({OperationKind.NOT, OperationKind.AND, OperationKind.OR, OperationKind.XOR})


@dataclass
class TraceRecord:
    """
    Record of a single operation performed on a clause chain.

    Records live in the owning TestResult's trace list; ``previous`` and
    ``next`` are indices into that list.

    Attributes:
        kind: The call that was made
        group: setter, matcher or logic
        left_status: Status on the left of a logic operator when it was added
        right_status: Local result of the operation itself
        status: Resolved status after logic operators were applied
        invert: The displayed result must be flipped (preceded by a NOT)
        captured: Snapshot of the data produced or consumed, when tracing
        error_message: "Type: message" of the exception, for exception records
    """
    kind: OperationKind
    group: OperationGroup
    left_status: Status | None = None
    right_status: Status = Status.NOT_IMPLEMENTED
    status: Status = Status.NOT_IMPLEMENTED
    invert: bool = False
    captured: Snapshot | None = None
    error_message: str | None = None
    index: int | None = None
    previous: int | None = None
    next: int | None = None

    @property
    def is_resolved(self) -> bool:
        return self.status != Status.NOT_IMPLEMENTED

    @classmethod
    def setter(cls, kind: OperationKind) -> TraceRecord:
        """Create a record for a subject-setting operation."""
        return cls(kind=kind, group=OperationGroup.SETTER, right_status=Status.SET, status=Status.SET)

    @classmethod
    def matcher(cls, kind: OperationKind) -> TraceRecord:
        """Create an unresolved matcher record."""
        return cls(kind=kind, group=OperationGroup.MATCHER)

    @classmethod
    def logic(cls, kind: OperationKind, left_status: Status | None) -> TraceRecord:
        """Create an unresolved logic record (operator or block marker)."""
        return cls(kind=kind, group=OperationGroup.LOGIC, left_status=left_status)

    @classmethod
    def exception(
        cls,
        kind: OperationKind,
        group: OperationGroup,
        error: BaseException,
    ) -> TraceRecord:
        """Create a record for user code that raised."""
        return cls(
            kind=kind,
            group=group,
            right_status=Status.EXCEPTION,
            status=Status.EXCEPTION,
            error_message=f"{type(error).__name__}: {error}",
        )

    def display_status(self) -> Status:
        """
        The status a report should show for this record.

        Unlike ``status``, which is the cumulative result of the chain at this
        point, this reflects whether the operation itself contributed to a
        pass, flipping the local result when a NOT applies to it.
        """
        if self.right_status == Status.EXCEPTION:
            return Status.EXCEPTION
        if self.status == Status.SET:
            return Status.SET
        if self.status == Status.PASS:
            return Status.PASS
        if self.invert and self.right_status == Status.FAIL:
            return Status.PASS
        if self.invert and self.right_status == Status.PASS:
            return Status.FAIL
        return self.status

    def switch_inversion(self) -> None:
        """Toggle whether this record's displayed result is flipped."""
        self.invert = not self.invert

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "index": self.index,
            "kind": self.kind.value,
            "group": self.group.value,
            "left_status": self.left_status.value if self.left_status else None,
            "right_status": self.right_status.value,
            "status": self.status.value,
            "display_status": self.display_status().value,
            "invert": self.invert,
            "captured": self.captured.to_dict() if self.captured else None,
            "error_message": self.error_message,
            "previous": self.previous,
            "next": self.next,
        }

    def __str__(self) -> str:
        """Format as a one-line trace entry."""
        line = f"{self.kind.value}: {self.display_status().value}"
        if self.error_message:
            line += f" ({self.error_message})"
        return line
