"""
Clause evaluation engine.

A Clause is a chain of setters, matchers and logic operators evaluated
left to right against a subject:

    clause.that(lambda: 3).is_(lambda: 3).and_().not_().is_(lambda: 4)

Operators wait for the next matcher (or group block) to resolve. A NOT
issued while another operator is still waiting pushes that operator aside;
once the NOT resolves, its outcome resolves the deferred operator too.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from ..config import Options
from ..errors import ClauseAborted, ClauseUsageError
from ..snapshot import build_snapshot, is_leaf, structurally_equal
from .models import OperationGroup, OperationKind, Status, TraceRecord

if TYPE_CHECKING:
    from ..reporting.models import TestResult

logger = logging.getLogger(__name__)

Producer = Callable[[], Any]
GroupBlock = Callable[["Clause"], Any]


def combine_status(left: Status | None, operator: OperationKind, right: Status) -> Status:
    """
    Resolve a logic operator.

    Args:
        left: Cumulative status on the operator's left (ignored by NOT)
        operator: NOT, AND, OR or XOR
        right: Result of the matcher or group on the operator's right

    Returns:
        Status.PASS or Status.FAIL
    """
    left_pass = left == Status.PASS
    right_pass = right == Status.PASS

    if operator is OperationKind.AND:
        return Status.from_match(left_pass and right_pass)
    if operator is OperationKind.OR:
        return Status.from_match(left_pass or right_pass)
    if operator is OperationKind.XOR:
        return Status.from_match(left_pass != right_pass)
    if operator is OperationKind.NOT:
        return Status.from_match(right == Status.FAIL)
    raise ValueError(f"Not a logic operator: {operator.value}")


class Clause:
    """
    Stateful evaluator for one test's clause chain.

    Every call returns the clause so calls can be chained, and writes a
    record to the bound TestResult's trace. The cumulative status is kept
    in ``result.status`` after every call.

    Setters:
        that(producer): evaluate producer, make the result the subject
        pick(producer): like that, but producer receives the subject, and the
            subject is restored after the next matcher or group resolves
        err(block): run block; the raised exception (or None) is the subject

    Matchers:
        is_(producer): subject == produced value
        like(producer): subject structurally equal to the produced value
        is_type(producer): isinstance(subject, produced type)

    Operators (each optionally takes a block grouping a nested chain):
        not_, and_, or_, xor

    If a producer, block or comparison raises, the failure is recorded with
    status ``exception`` and ClauseAborted is raised to end the test.

    Example:
        result = TestResult()
        clause = Clause(result)
        clause.that(lambda: [1, 2, 3]).pick(len).is_(lambda: 3).and_().like(lambda: [1, 2, 3])
        result.status  # Status.PASS
    """

    def __init__(self, result: TestResult, options: Options | None = None):
        self.result = result
        self.options = options or Options()
        self._subject: Any = None
        self._has_subject = False
        # (value,) while a pick is waiting to be undone
        self._restore: tuple[Any] | None = None
        self._active: TraceRecord | None = None
        self._deferred: TraceRecord | None = None
        self._depth = 0

    @property
    def subject(self) -> Any:
        """The value currently under test."""
        return self._subject

    @property
    def status(self) -> Status:
        return self.result.status

    # ─────────────────────────────────────────────────────────────────────
    # Setters
    # ─────────────────────────────────────────────────────────────────────

    def that(self, producer: Producer) -> Clause:
        """Set the subject to the value returned by producer."""
        value = self._produce(OperationKind.THAT, OperationGroup.SETTER, producer)
        self._set_subject(OperationKind.THAT, value)
        return self

    def pick(self, producer: Callable[[Any], Any]) -> Clause:
        """
        Project the subject for the next matcher only.

        producer receives the current subject. Its result becomes the subject
        until the next matcher or group resolves, after which the original
        subject is back in place.
        """
        self._require_subject(OperationKind.PICK)
        original = self._subject
        value = self._produce(OperationKind.PICK, OperationGroup.SETTER, producer, original)
        self._set_subject(OperationKind.PICK, value)
        self._restore = (original,)
        return self

    def err(self, block: Producer) -> Clause:
        """
        Run code that is expected to raise.

        The raised exception becomes the subject, or None if nothing was
        raised. Pair with a matcher, usually is_type, to assert on it.
        """
        _require_callable(OperationKind.ERR, block)
        try:
            block()
        except Exception as e:
            logger.debug(f"err captured {type(e).__name__}: {e}")
            value: Any = e
        else:
            value = None
        self._set_subject(OperationKind.ERR, value)
        return self

    # ─────────────────────────────────────────────────────────────────────
    # Matchers
    # ─────────────────────────────────────────────────────────────────────

    def is_(self, producer: Producer) -> Clause:
        """Match if the subject equals the produced value."""
        self._require_subject(OperationKind.IS)
        expected = self._produce(OperationKind.IS, OperationGroup.MATCHER, producer)
        matched = self._check(OperationKind.IS, lambda: self._subject == expected)
        self._match(OperationKind.IS, matched, expected)
        return self

    def like(self, producer: Producer) -> Clause:
        """
        Match if the subject is structurally equal to the produced value.

        Two distinct objects whose fields are all equal are alike. Leaf
        values are compared with ==.
        """
        self._require_subject(OperationKind.LIKE)
        expected = self._produce(OperationKind.LIKE, OperationGroup.MATCHER, producer)

        def compare() -> bool:
            if is_leaf(expected):
                return self._subject == expected
            return structurally_equal(self._subject, expected)

        matched = self._check(OperationKind.LIKE, compare)
        self._match(OperationKind.LIKE, matched, expected)
        return self

    def is_type(self, producer: Producer) -> Clause:
        """Match if the subject is an instance of the produced type (or tuple of types)."""
        self._require_subject(OperationKind.IS_TYPE)
        expected = self._produce(OperationKind.IS_TYPE, OperationGroup.MATCHER, producer)
        matched = self._check(OperationKind.IS_TYPE, lambda: isinstance(self._subject, expected))
        self._match(OperationKind.IS_TYPE, matched, expected)
        return self

    # ─────────────────────────────────────────────────────────────────────
    # Logic operators
    # ─────────────────────────────────────────────────────────────────────

    def not_(self, block: GroupBlock | None = None) -> Clause:
        """Invert the next matcher, or the group in block."""
        return self._logic(OperationKind.NOT, block)

    def and_(self, block: GroupBlock | None = None) -> Clause:
        """Both the left side and the next matcher (or group) must pass."""
        return self._logic(OperationKind.AND, block)

    def or_(self, block: GroupBlock | None = None) -> Clause:
        """The left side or the next matcher (or group) must pass."""
        return self._logic(OperationKind.OR, block)

    def xor(self, block: GroupBlock | None = None) -> Clause:
        """Exactly one of the left side and the next matcher (or group) must pass."""
        return self._logic(OperationKind.XOR, block)

    # ─────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────

    def _logic(self, kind: OperationKind, block: GroupBlock | None) -> Clause:
        self._add_operator(kind)
        if block is not None:
            self._group(kind, block)
        return self

    def _add_operator(self, kind: OperationKind) -> None:
        active = self._active
        waiting = active is not None and not active.is_resolved

        if kind is OperationKind.NOT:
            left = active.status if active is not None else Status.PASS
            if waiting:
                if self._deferred is not None:
                    logger.debug(
                        f"Deferred '{self._deferred.kind.value}' replaced by "
                        f"'{active.kind.value}'"
                    )
                self._deferred = active
        else:
            if waiting:
                raise ClauseUsageError(
                    f"'{kind.value}' cannot follow '{active.kind.value}' before "
                    f"a matcher resolves it"
                )
            left = active.status if active is not None else self.result.status

        record = TraceRecord.logic(kind, left)
        self.result.status = Status.NOT_IMPLEMENTED
        self._active = record
        self.result.record(record)

    def _group(self, owner: OperationKind, block: GroupBlock) -> None:
        """Evaluate block as a parenthesized sub-chain over the same subject."""
        _require_callable(owner, block)
        outer_active = self._active
        outer_deferred = self._deferred
        outer_status = self.result.status
        outer_restore = self._restore

        self.result.status = Status.PASS
        self._active = None
        self._deferred = None
        self._restore = None
        self.result.record(TraceRecord.logic(OperationKind.BLOCK_START, Status.PASS))

        self._depth += 1
        try:
            block(self)
        except (ClauseAborted, ClauseUsageError):
            raise
        except Exception as e:
            self._abort(owner, OperationGroup.LOGIC, e)
        finally:
            self._depth -= 1

        block_result = self.result.status
        if block_result == Status.NOT_IMPLEMENTED:
            raise ClauseUsageError(
                f"Group block for '{owner.value}' ended with an unresolved operator"
            )

        self._active = outer_active
        self._deferred = outer_deferred
        self._restore = outer_restore
        self.result.status = outer_status

        end = TraceRecord.logic(OperationKind.BLOCK_END, outer_status)
        self.result.record(end)
        self._resolve(end, block_result)

    def _set_subject(self, kind: OperationKind, value: Any) -> None:
        record = TraceRecord.setter(kind)
        if self.options.tracing_enabled:
            record.captured = build_snapshot(value)
        self.result.record(record)

        if self.result.status == Status.NOT_IMPLEMENTED:
            self.result.status = Status.PASS
        self._subject = value
        self._has_subject = True
        self._restore = None

    def _match(self, kind: OperationKind, matched: bool, expected: Any) -> None:
        record = TraceRecord.matcher(kind)
        if self.options.tracing_enabled:
            record.captured = build_snapshot(expected)
        self.result.record(record)
        self._resolve(record, Status.from_match(matched))

    def _resolve(self, record: TraceRecord, local: Status) -> None:
        """
        Combine a local result with any waiting operators.

        The record becomes the new left-hand side for the next operator.
        """
        record.right_status = local
        result = local

        active = self._active
        if active is not None and not active.is_resolved:
            active.right_status = local
            active.status = combine_status(active.left_status, active.kind, local)
            result = active.status
            logger.debug(
                f"{active.kind.value}({_value(active.left_status)}, {local.value}) -> {result.value}"
            )

            deferred = self._deferred
            if deferred is not None:
                deferred.right_status = result
                deferred.status = combine_status(deferred.left_status, deferred.kind, result)
                result = deferred.status
                self._deferred = None
                logger.debug(
                    f"deferred {deferred.kind.value}({_value(deferred.left_status)}, "
                    f"{deferred.right_status.value}) -> {result.value}"
                )

            if active.kind is OperationKind.NOT:
                record.invert = True

        record.status = result
        self._active = record
        self.result.status = result

        if self._depth == 0:
            if result == Status.FAIL and self.result.fail_point is None:
                self.result.fail_point = record.index
            elif result == Status.PASS:
                self.result.fail_point = None

        if self._restore is not None:
            self._subject = self._restore[0]
            self._restore = None
            logger.debug("Subject restored after pick")

    def _produce(
        self,
        kind: OperationKind,
        group: OperationGroup,
        producer: Callable[..., Any],
        *args: Any,
    ) -> Any:
        _require_callable(kind, producer)
        try:
            return producer(*args)
        except Exception as e:
            self._abort(kind, group, e)

    def _check(self, kind: OperationKind, predicate: Callable[[], Any]) -> bool:
        try:
            return bool(predicate())
        except Exception as e:
            self._abort(kind, OperationGroup.MATCHER, e)

    def _abort(self, kind: OperationKind, group: OperationGroup, error: Exception) -> None:
        """Record user code that raised and end the test."""
        record = TraceRecord.exception(kind, group, error)
        if self.options.tracing_enabled:
            record.captured = build_snapshot(error)
        self.result.record(record)
        self.result.status = Status.EXCEPTION
        logger.info(f"Clause aborted in '{kind.value}': {record.error_message}")
        raise ClauseAborted(kind, error) from error

    def _require_subject(self, kind: OperationKind) -> None:
        if not self._has_subject:
            raise ClauseUsageError(
                f"'{kind.value}' needs a subject; start the chain with that() or err()"
            )


def _require_callable(kind: OperationKind, value: Any) -> None:
    if not callable(value):
        raise ClauseUsageError(
            f"'{kind.value}' expects a callable, got {type(value).__name__}"
        )


def _value(status: Status | None) -> str:
    return status.value if status is not None else "-"
