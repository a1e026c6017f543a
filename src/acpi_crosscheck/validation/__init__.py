"""Validation system for ACPI Cross-Check.

This module provides the data store filled by table decoders and the
validators that cross-check its contents:

- **Data store**: AcpiDataStore - category-keyed record copies (see data_store.py)
- **Layouts**: Fixed-offset record layouts the validators read (see layouts.py)
- **Models**: ValidationContext, CheckResult, ValidationReport
- **Checks**: Individual check implementations (see validation/checks/)
- **Registry**: run_validator(), run_validation(), print_report()

Usage:
    >>> from acpi_crosscheck.validation import AcpiDataStore, run_validation, print_report
    >>> store = AcpiDataStore()
    >>> # ... decoders call store.store(...) ...
    >>> report = run_validation(store)
    >>> print_report(report)
    >>> store.free()
"""

from __future__ import annotations

from .data_store import AcpiDataStore, Record
from .models import CheckResult, ValidationContext, ValidationReport
from .registry import VALIDATOR_LIST, print_report, run_validation, run_validator
from .sink import DiagnosticSink

__all__ = [
    # Data store
    "AcpiDataStore",
    "Record",
    # Data models
    "CheckResult",
    "ValidationContext",
    "ValidationReport",
    "DiagnosticSink",
    # Runner functions
    "VALIDATOR_LIST",
    "run_validator",
    "run_validation",
    "print_report",
]
