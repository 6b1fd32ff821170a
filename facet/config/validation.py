"""
Validation for run options files.

This module checks raw parsed YAML against the options schema and
reports every problem with its path and a suggestion.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .models import TraceCategory, flags_for


# ─────────────────────────────────────────────────────────────────────────────
# Problems found in an options document
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ValidationError:
    """
    One problem in an options document.

    ``path`` is dotted from the document root, e.g. "trace.operators".
    """
    path: str
    message: str
    value: Any = None
    suggestion: str | None = None

    def __str__(self) -> str:
        line = f"{self.path}: {self.message}"
        if self.value is not None:
            line += f" (got {self.value!r})"
        if self.suggestion:
            line += f"\n    hint: {self.suggestion}"
        return line


@dataclass
class ValidationResult:
    """Every problem found while checking an options document."""
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def paths(self) -> list[str]:
        """Paths of the offending fields, in the order they were reported."""
        return [error.path for error in self.errors]

    def add_error(
        self,
        path: str,
        message: str,
        value: Any = None,
        suggestion: str | None = None
    ) -> None:
        self.errors.append(ValidationError(path, message, value, suggestion))

    def __str__(self) -> str:
        if self.is_valid:
            return "facet options: ok"
        header = f"facet options: {len(self.errors)} problem(s)"
        return "\n".join([header, *(f"  - {error}" for error in self.errors)])


# ─────────────────────────────────────────────────────────────────────────────
# Options Validator
# ─────────────────────────────────────────────────────────────────────────────

class OptionsValidator:
    """Validates raw parsed YAML against the options schema."""

    TOP_LEVEL = {"trace", "show_diff", "indent", "line_length", "stop_on_fail"}
    TRACE_KEYS = {category.value for category in TraceCategory} | {"all"}
    BOOLEAN_FIELDS = ("show_diff", "stop_on_fail")

    def __init__(self, data: dict[str, Any]):
        self.data = data
        self.result = ValidationResult()

    def validate(self) -> ValidationResult:
        """Run all validation checks and return result."""
        self._validate_top_level()
        self._validate_trace()
        self._validate_booleans()
        self._validate_indent()
        self._validate_line_length()
        return self.result

    def _validate_top_level(self) -> None:
        for key in sorted(set(self.data) - self.TOP_LEVEL, key=str):
            self.result.add_error(
                str(key),
                f"Unknown top-level field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(self.TOP_LEVEL))}"
            )

    def _validate_trace(self) -> None:
        trace = self.data.get("trace")
        if trace is None:
            return
        if not isinstance(trace, dict):
            self.result.add_error(
                "trace",
                "Must be an object",
                value=trace
            )
            return

        for key in sorted(set(trace) - self.TRACE_KEYS, key=str):
            self.result.add_error(
                f"trace.{key}",
                f"Unknown trace category '{key}'",
                suggestion=f"Valid categories are: {', '.join(sorted(self.TRACE_KEYS))}"
            )

        show_all = trace.get("all")
        if show_all is not None and not isinstance(show_all, bool):
            self.result.add_error(
                "trace.all",
                "Must be a boolean",
                value=show_all
            )

        for category in TraceCategory:
            if category.value not in trace:
                continue
            flags = trace[category.value]
            if flags is None:
                continue
            if not isinstance(flags, str):
                self.result.add_error(
                    f"trace.{category.value}",
                    "Must be a string of flag characters",
                    value=flags,
                    suggestion="Use e.g. 'fe' for fail and exception"
                )
                continue
            valid = flags_for(category)
            unknown = sorted(set(flags) - set(valid))
            if unknown:
                self.result.add_error(
                    f"trace.{category.value}",
                    f"Unknown flag(s): {''.join(unknown)}",
                    value=flags,
                    suggestion=", ".join(f"{char}={name}" for char, name in valid.items())
                )

    def _validate_booleans(self) -> None:
        for name in self.BOOLEAN_FIELDS:
            value = self.data.get(name)
            if value is not None and not isinstance(value, bool):
                self.result.add_error(
                    name,
                    "Must be a boolean",
                    value=value
                )

    def _validate_indent(self) -> None:
        indent = self.data.get("indent")
        if indent is not None and not isinstance(indent, str):
            self.result.add_error(
                "indent",
                "Must be a string",
                value=indent,
                suggestion="Quote the value, e.g. indent: \"  \""
            )

    def _validate_line_length(self) -> None:
        line_length = self.data.get("line_length")
        if line_length is None:
            return
        if isinstance(line_length, bool) or not isinstance(line_length, int) or line_length < 1:
            self.result.add_error(
                "line_length",
                "Must be a positive integer",
                value=line_length
            )
