"""Validation data models.

This module defines core data structures for validation:
- ValidationContext: Everything a validator may read or report to
- CheckResult: Outcome of a single validation check
- ValidationReport: Aggregated results from all validators that ran
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import List, Optional

from acpi_crosscheck.core.config import AcpiViewConfig
from acpi_crosscheck.core.enums import ReportOption
from .data_store import AcpiDataStore
from .sink import DiagnosticSink


@dataclass(frozen=True)
class ValidationContext:
    """Inputs and outputs of one validation pass.

    Attributes:
        store: Data store populated by the table decoders.
        config: Configuration of the current invocation.
        sink: Receives every diagnostic produced by the validators.
    """

    store: AcpiDataStore
    config: AcpiViewConfig = field(default_factory=AcpiViewConfig)
    sink: DiagnosticSink = field(default_factory=DiagnosticSink)


@dataclass(frozen=True)
class CheckResult:
    """Result of a single validation check.

    Attributes:
        check_id: Unique identifier for the check (e.g., "processor_ids").
        severity: Severity level - "error" for critical issues, "warning" for review items.
        passed: True if check passed without issues, False otherwise.
        fail_count: Number of failures detected (0 if passed).
        messages: Detailed failure messages.
        skipped: True when the data needed by the check was not available.
            A skipped check is neither a pass nor a failure.

    Examples:
        >>> CheckResult(
        ...     check_id="processor_ids",
        ...     severity="error",
        ...     passed=False,
        ...     fail_count=1,
        ...     messages=["PPTT Processor ID 4 is not found in the MADT."]
        ... )
    """

    check_id: str
    severity: str  # "error" | "warning"
    passed: bool
    fail_count: int
    messages: List[str] = field(default_factory=list)
    skipped: bool = False

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if self.severity not in ("error", "warning"):
            raise ValueError(f"Invalid severity: {self.severity}. Must be 'error' or 'warning'.")
        if self.passed and self.fail_count != 0:
            raise ValueError("passed=True requires fail_count=0")
        if not self.passed and self.fail_count == 0:
            raise ValueError("passed=False requires fail_count > 0")
        if self.skipped and not self.passed:
            raise ValueError("skipped=True requires passed=True")

    @classmethod
    def skip(cls, check_id: str, severity: str, reason: str) -> "CheckResult":
        return cls(check_id, severity, passed=True, fail_count=0, messages=[reason], skipped=True)


@dataclass
class ValidationReport:
    """Aggregated validation results for one invocation.

    Attributes:
        results: List of check results from every validator that ran.
        report_option: Report option the validators ran under.
        validators: Names of the validators that were dispatched.
        sink: Sink that received the diagnostics (if any).
    """

    results: List[CheckResult]
    report_option: ReportOption = ReportOption.ALL
    validators: List[str] = field(default_factory=list)
    sink: Optional[DiagnosticSink] = None

    def has_errors(self) -> bool:
        """Check if any error-level check failed. Warnings never fail a report."""
        return any(r.severity == "error" and not r.passed for r in self.results)

    def get_error_count(self) -> int:
        """Count total number of error-level failures."""
        return sum(r.fail_count for r in self.results if r.severity == "error" and not r.passed)

    def get_warning_count(self) -> int:
        """Count total number of warning-level failures."""
        return sum(r.fail_count for r in self.results if r.severity == "warning" and not r.passed)

    def get_failed_checks(self, severity: Optional[str] = None) -> List[CheckResult]:
        """Get all failed checks, optionally filtered by severity."""
        return [
            r for r in self.results if not r.passed and (severity is None or r.severity == severity)
        ]

    def get_skipped_checks(self) -> List[CheckResult]:
        return [r for r in self.results if r.skipped]

    def summary(self) -> str:
        """Generate a concise text summary of validation results.

        Examples:
            >>> print(report.summary())
            Validation Summary:
              Report: ALL (validators: ACPI_STANDARD)
              Checks: 1 executed (0 passed, 0 skipped, 1 failed)
              Issues: 1 errors, 0 warnings
        """
        total = len(self.results)
        skipped = len(self.get_skipped_checks())
        passed = sum(1 for r in self.results if r.passed) - skipped
        failed = len(self.get_failed_checks())
        validators = ", ".join(self.validators) if self.validators else "none"

        return (
            f"Validation Summary:\n"
            f"  Report: {self.report_option.name} (validators: {validators})\n"
            f"  Checks: {total} executed ({passed} passed, {skipped} skipped, "
            f"{failed} failed)\n"
            f"  Issues: {self.get_error_count()} errors, {self.get_warning_count()} warnings"
        )

    def to_console_summary(self) -> str:
        """Generate a concise summary for console output."""
        lines = [self.summary(), ""]

        failed_checks = self.get_failed_checks()
        skipped_checks = self.get_skipped_checks()

        if not failed_checks:
            lines.append("All validation checks passed.")
        else:
            lines.append("Check Details:")
            for result in failed_checks:
                lines.append(
                    f"- {result.check_id} ({result.severity}): {result.fail_count} failures"
                )
                for msg in result.messages:
                    lines.append(f"   - {msg}")

        for result in skipped_checks:
            reason = result.messages[0] if result.messages else "data unavailable"
            lines.append(f"- {result.check_id} skipped: {reason}")

        return "\n".join(lines)

    def to_json(self) -> str:
        """Generate a detailed JSON validation report."""
        report_data = {
            "metadata": {
                "report_option": self.report_option.name,
                "validators": list(self.validators),
            },
            "summary": {
                "total_rules": len(self.results),
                "skipped": len(self.get_skipped_checks()),
                "failed": len(self.get_failed_checks()),
                "errors": self.get_error_count(),
                "warnings": self.get_warning_count(),
            },
            "results": [
                {
                    "check_id": r.check_id,
                    "severity": r.severity,
                    "passed": r.passed,
                    "skipped": r.skipped,
                    "fail_count": r.fail_count,
                    "messages": r.messages,
                }
                for r in self.results
            ],
            "diagnostics": list(self.sink.messages) if self.sink is not None else [],
        }
        return json.dumps(report_data, indent=2, ensure_ascii=False)


__all__ = ["ValidationContext", "CheckResult", "ValidationReport"]
