"""
Registration boundary for facet tests.

A facet body receives a Facet and starts one clause chain per test. If user
code inside a chain raises, the chain aborts, the facet is marked
exceptional and run_facet returns; other facets are unaffected.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..clause.engine import Clause
from ..config import Options
from ..errors import ClauseAborted
from .models import FacetResult, FacetSummary

logger = logging.getLogger(__name__)


class Facet:
    """
    Entry point handed to a facet body.

    Example:
        def addition(f: Facet) -> None:
            f.that(lambda: 1 + 1).is_(lambda: 2)
            f.that(lambda: 1 + 1, name="not three").not_().is_(lambda: 3)

        result = run_facet("addition", addition)
    """

    def __init__(self, result: FacetResult, options: Options | None = None):
        self.result = result
        self.options = options or Options()

    @property
    def name(self) -> str:
        return self.result.name

    def clause(self, name: str | int | None = None) -> Clause:
        """Register a test and return its evaluator without starting the chain."""
        test_result = self.result.register_test(name)
        return Clause(test_result, self.options)

    def that(self, producer: Callable[[], Any], name: str | int | None = None) -> Clause:
        """Register a test whose chain starts with that(producer)."""
        return self.clause(name).that(producer)

    def err(self, block: Callable[[], Any], name: str | int | None = None) -> Clause:
        """Register a test whose chain starts with err(block)."""
        return self.clause(name).err(block)


def run_facet(
    name: str,
    body: Callable[[Facet], Any],
    options: Options | None = None,
) -> FacetResult:
    """
    Run a facet body and collect its results.

    Args:
        name: Name of the behaviour the facet proves
        body: Callable receiving a Facet
        options: Run options, defaults to Options()

    Returns:
        FacetResult with every test the body registered
    """
    result = FacetResult(name)
    facet = Facet(result, options)

    logger.info(f"Running facet '{name}'")
    try:
        body(facet)
    except ClauseAborted as e:
        result.mark_exceptional()
        logger.info(f"Facet '{name}' aborted: {e}")

    logger.info(f"Facet '{name}' finished: {result.get_result().value}")
    return result


def run_facets(
    bodies: dict[str, Callable[[Facet], Any]],
    options: Options | None = None,
) -> tuple[dict[str, FacetResult], FacetSummary]:
    """
    Run several facets in order.

    Returns:
        Tuple of (facet name -> FacetResult, FacetSummary)
    """
    results = {name: run_facet(name, body, options) for name, body in bodies.items()}
    summary = FacetSummary.from_results(results)
    logger.info(summary.summary())
    return results, summary
