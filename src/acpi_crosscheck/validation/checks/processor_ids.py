"""Processor ID consistency check.

Every processor described as a leaf node in the PPTT must also be described by
a GICC structure in the MADT, matched by ACPI processor UID. Cluster (non-leaf)
nodes carry IDs of their own and are never compared.

Layouts read (see ``validation/layouts.py``):
    - MADT_GICC: ``AcpiProcessorUid`` at offset 8
    - PPTT_PROCS: ``Flags`` at offset 4, ``AcpiProcessorId`` at offset 12
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from acpi_crosscheck.core.config import AcpiViewConfig
from acpi_crosscheck.core.enums import MetaDataType, ReportOption
from acpi_crosscheck.core.errors import AcpiViewError, RecordLayoutError, RecordsNotFoundError
from ..config import get_severity
from ..data_store import Record
from ..layouts import gicc_processor_uid, is_leaf_node, pptt_flags, pptt_processor_id
from ..models import CheckResult, ValidationContext


class ProcessorIdCheck:
    """Validate that processor IDs match across the MADT and the PPTT."""

    check_id = "processor_ids"

    def validate(self, context: ValidationContext) -> List[CheckResult]:
        """Compare PPTT leaf processor IDs against the MADT GICC UIDs.

        Args:
            context: Validation context holding the populated store.

        Returns:
            A single CheckResult. It is marked skipped when either table's
            processor data is not available.
        """
        store = context.store
        sink = context.sink
        severity = get_severity(self.check_id)
        messages: List[str] = []
        errors_before = sink.error_count

        def fail(message: str) -> None:
            sink.error(message)
            messages.append(message)

        def finish() -> List[CheckResult]:
            fail_count = sink.error_count - errors_before
            if fail_count:
                sink.notice("Validate processor ID failed.", level=logging.ERROR)
            return [
                CheckResult(
                    check_id=self.check_id,
                    severity=severity,
                    passed=fail_count == 0,
                    fail_count=fail_count,
                    messages=messages,
                )
            ]

        try:
            madt_records = store.get_all(MetaDataType.MADT_GICC)
        except RecordsNotFoundError:
            return self._skipped(context, "MADT processor data is not available.")
        except AcpiViewError as e:
            fail(f"Cannot get MADT processor list. Status = {e}")
            return finish()

        try:
            madt_count = store.count(MetaDataType.MADT_GICC)
        except AcpiViewError as e:
            fail(f"Cannot get MADT processor list length. Status = {e}")
            return finish()

        try:
            pptt_records = store.get_all(MetaDataType.PPTT_PROCS)
        except RecordsNotFoundError:
            return self._skipped(context, "PPTT processor data is not available.")
        except AcpiViewError as e:
            fail(f"Cannot get PPTT processor list. Status = {e}")
            return finish()

        try:
            madt_ids = self._extract_madt_ids(madt_records, madt_count, fail)
        except MemoryError:
            fail("Failed to allocate resources for MADT ID list.")
            return finish()

        for index, record in enumerate(pptt_records):
            try:
                # Make sure this is a real processor and not a cluster.
                if not is_leaf_node(pptt_flags(record)):
                    continue
                processor_id = pptt_processor_id(record)
            except RecordLayoutError as e:
                fail(f"PPTT processor record {index}: {e}")
                continue

            if processor_id not in madt_ids:
                fail(f"PPTT Processor ID {processor_id} is not found in the MADT.")

        return finish()

    def applies_to(self, config: AcpiViewConfig) -> bool:
        """Run only for multi-table reports with consistency checking enabled."""
        return config.consistency_checking and config.report_option != ReportOption.SELECTED

    @staticmethod
    def _extract_madt_ids(
        madt_records: Tuple[Record, ...],
        madt_count: int,
        fail: Callable[[str], None],
    ) -> List[Optional[int]]:
        madt_ids: List[Optional[int]] = [None] * madt_count
        for index, record in enumerate(madt_records):
            try:
                madt_ids[index] = gicc_processor_uid(record)
            except RecordLayoutError as e:
                fail(f"MADT GICC record {index}: {e}")
        return madt_ids

    def _skipped(self, context: ValidationContext, reason: str) -> List[CheckResult]:
        context.sink.notice(f"Processor ID validation skipped: {reason}")
        return [CheckResult.skip(self.check_id, get_severity(self.check_id), reason)]
