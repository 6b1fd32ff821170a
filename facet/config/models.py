"""
Typed options for a test run.

Options decide which results an output layer shows, and through that
whether the clause engine needs to capture snapshots at all.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TraceCategory(str, Enum):
    """The four levels of detail a report can show."""
    FACETS = "facets"
    TESTS = "tests"
    OPERATORS = "operators"
    OPERATOR_DATA = "operator_data"


# Flag characters accepted in compact trace strings, e.g. "fen"
STATUS_FLAGS = {
    "p": "pass",
    "f": "fail",
    "e": "exception",
    "n": "not_implemented",
}
DATA_FLAGS = {
    **STATUS_FLAGS,
    "s": "set",
    "d": "diff",
}


def _conditions(
    passed: bool,
    failed: bool,
    exception: bool,
    not_implemented: bool,
) -> dict[str, bool]:
    return {
        "pass": passed,
        "fail": failed,
        "exception": exception,
        "not_implemented": not_implemented,
    }


def flags_for(category: TraceCategory) -> dict[str, str]:
    """Flag characters valid for a category."""
    return DATA_FLAGS if category is TraceCategory.OPERATOR_DATA else STATUS_FLAGS


@dataclass
class Options:
    """
    Settings for a test run.

    Each ``show_*`` map says, per condition, whether that level of detail
    is shown. Keys are status values ("pass", "fail", "exception",
    "not_implemented"); operator data also has "set" and "diff".
    """
    show_facets: dict[str, bool] = field(
        default_factory=lambda: _conditions(False, True, True, True)
    )
    show_tests: dict[str, bool] = field(
        default_factory=lambda: _conditions(False, True, True, False)
    )
    show_operators: dict[str, bool] = field(
        default_factory=lambda: _conditions(False, True, True, False)
    )
    show_operator_data: dict[str, bool] = field(
        default_factory=lambda: {
            **_conditions(False, False, True, False),
            "set": True,
            "diff": True,
        }
    )
    show_diff: bool = True
    indent: str = "  "
    line_length: int = 160
    stop_on_fail: bool = False

    @property
    def tracing_enabled(self) -> bool:
        """
        True if any trace output can be shown at all.

        When False the clause engine skips snapshot capture. Statuses are
        computed the same either way.
        """
        return all(
            any(conditions.values())
            for conditions in (
                self.show_facets,
                self.show_tests,
                self.show_operators,
                self.show_operator_data,
            )
        )

    def conditions(self, category: TraceCategory) -> dict[str, bool]:
        """Get the show map for a category."""
        return {
            TraceCategory.FACETS: self.show_facets,
            TraceCategory.TESTS: self.show_tests,
            TraceCategory.OPERATORS: self.show_operators,
            TraceCategory.OPERATOR_DATA: self.show_operator_data,
        }[TraceCategory(category)]

    def set_condition(self, category: TraceCategory, condition: str, show: bool) -> None:
        """Show or hide one condition in one category."""
        conditions = self.conditions(category)
        if condition not in conditions:
            raise ValueError(
                f"Unknown condition '{condition}' for {TraceCategory(category).value}"
            )
        conditions[condition] = show

    def set_trace(self, category: TraceCategory, flags: str | None) -> None:
        """
        Apply a compact flag string to a category.

        Every condition whose flag character is present is shown, every other
        one hidden. ``None`` hides everything.

        Args:
            category: Which show map to update
            flags: e.g. "fen" (fail, exception, not implemented)

        Raises:
            ValueError: If the string contains an unknown flag character
        """
        category = TraceCategory(category)
        valid = flags_for(category)
        flags = flags or ""
        unknown = sorted(set(flags) - set(valid))
        if unknown:
            raise ValueError(
                f"Unknown trace flag(s) {''.join(unknown)!r} for {category.value}; "
                f"valid flags are {''.join(valid)!r}"
            )
        for char, condition in valid.items():
            self.set_condition(category, condition, char in flags)

    def trace_all(self) -> None:
        """Show every condition in every category."""
        for category in TraceCategory:
            self.set_trace(category, "".join(flags_for(category)))

    @classmethod
    def silent(cls) -> Options:
        """Options with every condition hidden (tracing disabled)."""
        options = cls()
        for category in TraceCategory:
            options.set_trace(category, None)
        return options
