"""Tests for the record layouts the validators read."""

import struct

import pytest

from acpi_crosscheck.core.enums import MetaDataType
from acpi_crosscheck.core.errors import RecordLayoutError
from acpi_crosscheck.core.signature import convert_str_to_acpi_signature
from acpi_crosscheck.validation.data_store import Record
from acpi_crosscheck.validation.layouts import (
    GICC_LENGTH,
    PPTT_NODE_IS_A_LEAF,
    PPTT_PROCESSOR_LENGTH,
    gicc_processor_uid,
    installed_table_signature,
    is_leaf_node,
    pack_gicc,
    pack_pptt_processor,
    pack_table_signature,
    pptt_flags,
    pptt_processor_id,
)


def _record(kind: MetaDataType, payload: bytes) -> Record:
    return Record(kind=kind, length=len(payload), data=payload)


def test_structure_sizes():
    """GICC and PPTT processor structures have their ACPI 6.4 sizes."""
    assert GICC_LENGTH == 80
    assert PPTT_PROCESSOR_LENGTH == 20


def test_gicc_uid_is_read_at_offset_8():
    payload = pack_gicc(0x12345678, cpu_interface_number=7)
    assert payload[0] == 0x0B
    assert payload[1] == GICC_LENGTH
    assert struct.unpack_from("<I", payload, 4)[0] == 7
    assert struct.unpack_from("<I", payload, 8)[0] == 0x12345678
    assert gicc_processor_uid(_record(MetaDataType.MADT_GICC, payload)) == 0x12345678


def test_pptt_fields():
    payload = pack_pptt_processor(42, leaf=True, parent=0x30)
    record = _record(MetaDataType.PPTT_PROCS, payload)

    assert payload[0] == 0x00
    assert payload[1] == PPTT_PROCESSOR_LENGTH
    assert struct.unpack_from("<I", payload, 8)[0] == 0x30
    assert pptt_processor_id(record) == 42
    assert pptt_flags(record) & PPTT_NODE_IS_A_LEAF
    assert is_leaf_node(pptt_flags(record)) is True


def test_pptt_cluster_is_not_leaf():
    payload = pack_pptt_processor(1, leaf=False, flags=PPTT_NODE_IS_A_LEAF)
    assert is_leaf_node(pptt_flags(_record(MetaDataType.PPTT_PROCS, payload))) is False


def test_short_records_raise_layout_error():
    with pytest.raises(RecordLayoutError, match="AcpiProcessorUid"):
        gicc_processor_uid(_record(MetaDataType.MADT_GICC, bytes(11)))
    with pytest.raises(RecordLayoutError, match="AcpiProcessorId"):
        pptt_processor_id(_record(MetaDataType.PPTT_PROCS, bytes(15)))
    with pytest.raises(RecordLayoutError, match="Flags"):
        pptt_flags(_record(MetaDataType.PPTT_PROCS, bytes(7)))
    with pytest.raises(RecordLayoutError):
        installed_table_signature(_record(MetaDataType.INSTALLED_TABLES, b"AB"))


def test_minimal_records_are_enough():
    """Validators only need the bytes up to the fields they read."""
    gicc = pack_gicc(3)[:12]
    pptt = pack_pptt_processor(4)[:16]
    assert gicc_processor_uid(_record(MetaDataType.MADT_GICC, gicc)) == 3
    assert pptt_processor_id(_record(MetaDataType.PPTT_PROCS, pptt)) == 4


def test_table_signature_round_trip():
    payload = pack_table_signature("apic")
    record = _record(MetaDataType.INSTALLED_TABLES, payload)
    assert installed_table_signature(record) == convert_str_to_acpi_signature("APIC")
