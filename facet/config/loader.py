"""
Options loader.

This module provides the public API for loading and validating run
options from YAML files or strings.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .models import Options, TraceCategory
from .validation import OptionsValidator, ValidationResult

logger = logging.getLogger(__name__)


def load_options(path: str | Path) -> tuple[Options | None, ValidationResult]:
    """
    Load and validate run options from a YAML file.

    Args:
        path: Path to the YAML options file

    Returns:
        Tuple of (Options or None, ValidationResult)
        If validation fails, Options will be None.

    Example:
        options, result = load_options("facet.yaml")
        if not result.is_valid:
            print(result)
            sys.exit(1)
    """
    path = Path(path)

    if not path.exists():
        result = ValidationResult()
        result.add_error(
            str(path),
            "File not found",
            suggestion="Check the file path is correct"
        )
        return None, result

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error(
            str(path),
            f"Invalid YAML syntax: {e}",
            suggestion="Check YAML formatting (indentation, colons, etc.)"
        )
        return None, result

    return _options_from_data(data, str(path))


def parse_options_yaml(yaml_string: str) -> tuple[Options | None, ValidationResult]:
    """
    Validate run options from a YAML string.

    An empty document yields the default options.

    Args:
        yaml_string: YAML content as a string

    Returns:
        Tuple of (Options or None, ValidationResult)
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error("yaml", f"Invalid YAML syntax: {e}")
        return None, result

    return _options_from_data(data, "yaml")


def _options_from_data(data: Any, source: str) -> tuple[Options | None, ValidationResult]:
    if data is None:
        logger.warning(f"Options document {source} is empty, using defaults")
        return Options(), ValidationResult()

    if not isinstance(data, dict):
        result = ValidationResult()
        result.add_error(
            source,
            "Options must be a YAML object (not a list or scalar)",
            value=type(data).__name__
        )
        return None, result

    result = OptionsValidator(data).validate()
    if not result.is_valid:
        return None, result

    return build_options(data), result


def build_options(data: dict[str, Any]) -> Options:
    """Convert validated options data to an Options instance."""
    options = Options()

    trace = data.get("trace") or {}
    if trace.get("all"):
        options.trace_all()
    else:
        for category in TraceCategory:
            if category.value in trace:
                options.set_trace(category, trace[category.value])

    for name in ("show_diff", "stop_on_fail", "indent", "line_length"):
        if data.get(name) is not None:
            setattr(options, name, data[name])

    logger.debug(f"Loaded options, tracing enabled: {options.tracing_enabled}")
    return options
