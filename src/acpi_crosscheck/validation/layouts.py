"""Fixed-offset record layouts expected by the validators.

The data store keeps payloads opaque. Each category is filled by a single
decoder and read by validators that assume the layouts below (all fields are
little-endian, as in the ACPI tables themselves):

- ``MetaDataType.MADT_GICC``: an ACPI 6.4 GIC CPU Interface (GICC) structure.
  ``AcpiProcessorUid`` is the ``uint32`` at offset 8.
- ``MetaDataType.PPTT_PROCS``: an ACPI 6.4 PPTT processor hierarchy node.
  ``Flags`` is the ``uint32`` at offset 4 (bit 3: node is a leaf),
  ``AcpiProcessorId`` the ``uint32`` at offset 12.
- ``MetaDataType.INSTALLED_TABLES``: a 4-byte table signature.
"""

from __future__ import annotations

import struct

from acpi_crosscheck.core.errors import RecordLayoutError
from acpi_crosscheck.core.signature import SIGNATURE_LENGTH, convert_str_to_acpi_signature
from .data_store import Record

# MADT GICC (ACPI 6.4, Table 5.37)
GICC_STRUCTURE = struct.Struct("<BBHIIIIIQQQQIQQBBH")
GICC_TYPE = 0x0B
GICC_LENGTH = GICC_STRUCTURE.size
GICC_ENABLED = 1 << 0
_GICC_UID_OFFSET = 8

# PPTT processor hierarchy node (ACPI 6.4, Table 5.155)
PPTT_PROCESSOR_STRUCTURE = struct.Struct("<BB2xIIII")
PPTT_PROCESSOR_TYPE = 0x00
PPTT_PROCESSOR_LENGTH = PPTT_PROCESSOR_STRUCTURE.size
PPTT_PHYSICAL_PACKAGE = 1 << 0
PPTT_ACPI_PROCESSOR_ID_VALID = 1 << 1
PPTT_PROCESSOR_IS_A_THREAD = 1 << 2
PPTT_NODE_IS_A_LEAF = 1 << 3
PPTT_IDENTICAL_IMPLEMENTATION = 1 << 4
_PPTT_FLAGS_OFFSET = 4
_PPTT_ID_OFFSET = 12

_UINT32 = struct.Struct("<I")
_SIGNATURE = struct.Struct("=I")


def _read_uint32(record: Record, offset: int, field_name: str) -> int:
    end = offset + _UINT32.size
    if record.length < end or len(record.data) < end:
        raise RecordLayoutError(
            f"{record.kind.name} record of {record.length} bytes is too short "
            f"for {field_name} at offset {offset}"
        )
    return _UINT32.unpack_from(record.data, offset)[0]


def gicc_processor_uid(record: Record) -> int:
    """Return the ``AcpiProcessorUid`` of a MADT GICC record."""
    return _read_uint32(record, _GICC_UID_OFFSET, "AcpiProcessorUid")


def pptt_flags(record: Record) -> int:
    """Return the ``Flags`` of a PPTT processor record."""
    return _read_uint32(record, _PPTT_FLAGS_OFFSET, "Flags")


def pptt_processor_id(record: Record) -> int:
    """Return the ``AcpiProcessorId`` of a PPTT processor record."""
    return _read_uint32(record, _PPTT_ID_OFFSET, "AcpiProcessorId")


def is_leaf_node(flags: int) -> bool:
    return bool(flags & PPTT_NODE_IS_A_LEAF)


def installed_table_signature(record: Record) -> int:
    """Return the signature held by an installed-table record."""
    if record.length < SIGNATURE_LENGTH or len(record.data) < SIGNATURE_LENGTH:
        raise RecordLayoutError(
            f"{record.kind.name} record of {record.length} bytes is too short "
            f"for a table signature"
        )
    return _SIGNATURE.unpack_from(record.data, 0)[0]


def pack_gicc(
    acpi_processor_uid: int,
    cpu_interface_number: int = 0,
    flags: int = GICC_ENABLED,
    mpidr: int = 0,
) -> bytes:
    """Build a MADT GICC structure with the given identifiers."""
    return GICC_STRUCTURE.pack(
        GICC_TYPE,
        GICC_LENGTH,
        0,  # Reserved
        cpu_interface_number,
        acpi_processor_uid,
        flags,
        0,  # ParkingProtocolVersion
        0,  # PerformanceInterruptGsiv
        0,  # ParkedAddress
        0,  # PhysicalBaseAddress
        0,  # GICV
        0,  # GICH
        0,  # VGICMaintenanceInterrupt
        0,  # GICRBaseAddress
        mpidr,
        0,  # ProcessorPowerEfficiencyClass
        0,  # Reserved2
        0,  # SpeOverflowInterrupt
    )


def pack_pptt_processor(
    acpi_processor_id: int,
    leaf: bool = True,
    parent: int = 0,
    flags: int = PPTT_ACPI_PROCESSOR_ID_VALID,
) -> bytes:
    """Build a PPTT processor hierarchy node without private resources."""
    if leaf:
        flags |= PPTT_NODE_IS_A_LEAF
    else:
        flags &= ~PPTT_NODE_IS_A_LEAF
    return PPTT_PROCESSOR_STRUCTURE.pack(
        PPTT_PROCESSOR_TYPE,
        PPTT_PROCESSOR_LENGTH,
        flags,
        parent,
        acpi_processor_id,
        0,  # NumberOfPrivateResources
    )


def pack_table_signature(name: str) -> bytes:
    """Build an installed-table record from a table name."""
    return _SIGNATURE.pack(convert_str_to_acpi_signature(name))


__all__ = [
    "GICC_LENGTH",
    "PPTT_PROCESSOR_LENGTH",
    "PPTT_NODE_IS_A_LEAF",
    "gicc_processor_uid",
    "pptt_flags",
    "pptt_processor_id",
    "is_leaf_node",
    "installed_table_signature",
    "pack_gicc",
    "pack_pptt_processor",
    "pack_table_signature",
]
