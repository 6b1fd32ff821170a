"""
Facet - Fluent Assertion Framework

This package provides a fluent clause chain for stating expectations,
a structural snapshot and diff engine for explaining failures, and the
result aggregates a runner collects.

Subpackages:
    - clause: The clause evaluator and its trace records
    - snapshot: Value snapshots, differences and structural equality
    - reporting: Test, facet and summary results, and run_facet
    - config: Run options and their YAML loader

Usage:
    from facet import FacetSummary, run_facet

    def strings(f):
        f.that(lambda: "abc").pick(len).is_(lambda: 3).and_().is_type(lambda: str)
        f.err(lambda: int("x"), name="bad int").is_type(lambda: ValueError)

    result = run_facet("strings", strings)
    summary = FacetSummary.from_results({"strings": result})
    print(summary.summary())

    for name, test in result.tests.items():
        difference = test.failure_diff()
        if difference is not None:
            for path, node in difference.leaf_differences():
                print(name, "/".join(path), node.value)
"""

__version__ = "0.1.0"

# Re-export clause for convenience
from .clause import (
    # Models
    OperationGroup,
    OperationKind,
    Status,
    TraceRecord,
    # Engine
    Clause,
    combine_status,
)

# Re-export snapshot for convenience
from .snapshot import (
    DiffPair,
    MappingEntry,
    Snapshot,
    build_snapshot,
    describe_fields,
    diff,
    printable_summary,
    structurally_equal,
)

# Re-export reporting for convenience
from .reporting import (
    # Models
    FacetResult,
    FacetSummary,
    TestResult,
    # Runner
    Facet,
    run_facet,
    run_facets,
)

# Re-export config for convenience
from .config import (
    Options,
    TraceCategory,
    ValidationResult,
    load_options,
    parse_options_yaml,
)

# Errors
from .errors import ClauseAborted, ClauseUsageError, DuplicateTestError, FacetError

__all__ = [
    # Package info
    "__version__",
    # Clause - Models
    "Status",
    "OperationGroup",
    "OperationKind",
    "TraceRecord",
    # Clause - Engine
    "Clause",
    "combine_status",
    # Snapshot
    "Snapshot",
    "DiffPair",
    "MappingEntry",
    "build_snapshot",
    "describe_fields",
    "diff",
    "printable_summary",
    "structurally_equal",
    # Reporting - Models
    "TestResult",
    "FacetResult",
    "FacetSummary",
    # Reporting - Runner
    "Facet",
    "run_facet",
    "run_facets",
    # Config
    "Options",
    "TraceCategory",
    "ValidationResult",
    "load_options",
    "parse_options_yaml",
    # Errors
    "FacetError",
    "ClauseAborted",
    "ClauseUsageError",
    "DuplicateTestError",
]
