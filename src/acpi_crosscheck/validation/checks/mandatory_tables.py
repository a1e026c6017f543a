"""Arm SBBR mandatory table check.

Counts the instances of every installed table signature and reports each
table the selected SBBR version requires but the platform does not install.
"""

from __future__ import annotations

from collections import Counter
from typing import List

from acpi_crosscheck.core.config import AcpiViewConfig
from acpi_crosscheck.core.enums import MetaDataType, ReportOption, SbbrVersion
from acpi_crosscheck.core.errors import AcpiViewError, RecordLayoutError, RecordsNotFoundError
from acpi_crosscheck.core.signature import convert_str_to_acpi_signature
from ..config import get_mandatory_tables, get_severity
from ..layouts import installed_table_signature
from ..models import CheckResult, ValidationContext


class MandatoryTablesCheck:
    """Validate that all tables mandated by an SBBR version are installed."""

    check_id = "mandatory_tables"

    def __init__(self, version: SbbrVersion) -> None:
        self.version = SbbrVersion(version)

    def validate(self, context: ValidationContext) -> List[CheckResult]:
        sink = context.sink
        severity = get_severity(self.check_id)
        messages: List[str] = []

        def fail(message: str) -> None:
            sink.error(message)
            messages.append(message)

        try:
            records = context.store.get_all(MetaDataType.INSTALLED_TABLES)
        except RecordsNotFoundError:
            reason = "Installed table signatures are not available."
            sink.notice(f"{self.version.label} validation skipped: {reason}")
            return [CheckResult.skip(self.check_id, severity, reason)]
        except AcpiViewError as e:
            fail(f"Cannot get installed table list. Status = {e}")
            return [CheckResult(self.check_id, severity, False, len(messages), messages)]

        table_counts: Counter = Counter()
        for index, record in enumerate(records):
            try:
                table_counts[installed_table_signature(record)] += 1
            except RecordLayoutError as e:
                fail(f"Installed table record {index}: {e}")

        for name in get_mandatory_tables(self.version):
            if table_counts[convert_str_to_acpi_signature(name)] == 0:
                fail(f"{self.version.label} mandatory table {name} is missing.")

        if messages:
            sink.notice(f"{self.version.label} validation failed.")
        return [
            CheckResult(
                check_id=self.check_id,
                severity=severity,
                passed=not messages,
                fail_count=len(messages),
                messages=messages,
            )
        ]

    def applies_to(self, config: AcpiViewConfig) -> bool:
        """Needs every installed table, so not for single-table reports."""
        return config.report_option != ReportOption.SELECTED
