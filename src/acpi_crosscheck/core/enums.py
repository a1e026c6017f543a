"""Core enumerations used across the package."""

from __future__ import annotations

from enum import IntEnum


class MetaDataType(IntEnum):
    """Categories of data that can be stored in the ACPI data store.

    Values are dense and ordered; adding a category is a code change.
    """

    PPTT_PROCS = 0  # PPTT processor hierarchy node structures
    MADT_GICC = 1  # MADT GICC structures
    INSTALLED_TABLES = 2  # Signatures of all installed ACPI tables


class ReportOption(IntEnum):
    """ACPI table reporting options."""

    ALL = 0
    SELECTED = 1
    TABLE_LIST = 2
    DUMP_BIN_FILE = 3


class ValidatorId(IntEnum):
    """IDs of all known validators.

    Each value is also the position of the validator in the registry.
    """

    ACPI_STANDARD = 0  # Platform agnostic ACPI spec checks
    SBBR_1_0 = 1
    SBBR_1_1 = 2
    SBBR_1_2 = 3


class SbbrVersion(IntEnum):
    """Arm Server Base Boot Requirements versions."""

    V1_0 = 0
    V1_1 = 1
    V1_2 = 2

    @property
    def label(self) -> str:
        return f"SBBR {self.name[1:].replace('_', '.')}"


__all__ = ["MetaDataType", "ReportOption", "ValidatorId", "SbbrVersion"]
