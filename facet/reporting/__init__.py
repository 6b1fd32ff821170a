"""
Results for Facet Runs

This package provides the result aggregates a run produces and the
registration boundary that creates them.

Features:
    - Per-test status and full operation trace
    - Per-facet status rollup with unique test names
    - Summary counts that combine across groupings
    - Difference tree for a failing test
    - JSON serialization

Usage:
    from facet.reporting import FacetSummary, run_facet

    def lists(f):
        f.that(lambda: [1, 2]).like(lambda: [1, 2])
        f.that(lambda: [1, 2], name="length").pick(len).is_(lambda: 2)

    result = run_facet("lists", lists)
    result.get_result()  # Status.PASS

    summary = FacetSummary.from_results({"lists": result})
    print(summary.summary())
"""

# Models
from .models import FacetResult, FacetSummary, TestResult

# Runner
from .runner import Facet, run_facet, run_facets

__all__ = [
    # Models
    "TestResult",
    "FacetResult",
    "FacetSummary",
    # Runner
    "Facet",
    "run_facet",
    "run_facets",
]
