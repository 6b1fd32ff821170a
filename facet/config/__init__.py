"""
Run Options

This package provides the options that control how much of a run is
traced and shown, and a YAML loader for them.

Trace flags:
    p = pass, f = fail, e = exception, n = not implemented
    s = set, d = diff (operator data only)

Usage:
    from facet.config import Options, load_options

    # Defaults: show failures and exceptions
    options = Options()

    # Or from a file
    options, result = load_options("facet.yaml")
    if not result.is_valid:
        print(result)

    # Compact flag strings
    options.set_trace("operators", "pfen")
    options.tracing_enabled  # True
"""

# Public API
from .loader import build_options, load_options, parse_options_yaml

# Models
from .models import DATA_FLAGS, STATUS_FLAGS, Options, TraceCategory

# Validation
from .validation import OptionsValidator, ValidationError, ValidationResult

__all__ = [
    # Loader functions
    "load_options",
    "parse_options_yaml",
    "build_options",
    # Models
    "Options",
    "TraceCategory",
    "STATUS_FLAGS",
    "DATA_FLAGS",
    # Validation
    "ValidationResult",
    "ValidationError",
    "OptionsValidator",
]
