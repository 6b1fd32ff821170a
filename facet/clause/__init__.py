"""
Clause Evaluator

This package provides the fluent chain used to state what a test expects
of a subject.

Supported operations:
    - that / pick / err: set the subject
    - is_ / like / is_type: match against the subject
    - not_ / and_ / or_ / xor: combine matches, optionally over a grouped block

Usage:
    from facet.clause import Clause, Status
    from facet.reporting import TestResult

    result = TestResult()
    clause = Clause(result)

    clause.that(lambda: {"id": 1}).like(lambda: {"id": 1})
    clause.and_(lambda c: c.pick(len).is_(lambda: 1).or_().is_(lambda: 2))

    if result.status == Status.PASS:
        print("✅ Clause passed")
    else:
        for record in result.trace:
            print(record)
"""

# Models
from .models import OperationGroup, OperationKind, Status, TraceRecord

# Engine
from .engine import Clause, combine_status

__all__ = [
    # Models
    "Status",
    "OperationGroup",
    "OperationKind",
    "TraceRecord",
    # Engine
    "Clause",
    "combine_status",
]
