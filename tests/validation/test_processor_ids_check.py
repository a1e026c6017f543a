"""Tests for the ProcessorIdCheck (MADT vs PPTT processor IDs).

Covers the mismatch counting contract, leaf filtering, the not-found policy
for missing tables and the report-option gate.
"""

import logging
from dataclasses import replace

import pytest

from acpi_crosscheck.core.config import AcpiViewConfig
from acpi_crosscheck.core.enums import MetaDataType, ReportOption
from acpi_crosscheck.core.errors import InvalidParameterError
from acpi_crosscheck.validation.checks.processor_ids import ProcessorIdCheck
from acpi_crosscheck.validation.layouts import pack_pptt_processor


def test_all_leaf_ids_found(context, add_gicc, add_pptt):
    add_gicc(0, 1, 2, 3)
    for processor_id in (0, 1, 2, 3):
        add_pptt(processor_id)

    (result,) = ProcessorIdCheck().validate(context)

    assert result.passed is True
    assert result.skipped is False
    assert result.fail_count == 0
    assert context.sink.error_count == 0


def test_single_missing_leaf_reports_exactly_one_mismatch(context, add_gicc, add_pptt):
    """MADT {1,2,3} vs PPTT leaves {2,3,4}: only ID 4 is reported."""
    add_gicc(1, 2, 3)
    for processor_id in (2, 3, 4):
        add_pptt(processor_id)

    (result,) = ProcessorIdCheck().validate(context)

    assert context.sink.error_count == 1
    assert result.passed is False
    assert result.fail_count == 1
    assert result.severity == "error"
    assert result.messages == ["PPTT Processor ID 4 is not found in the MADT."]


def test_non_leaf_nodes_never_mismatch(context, add_gicc, add_pptt):
    add_gicc(1, 2, 3)
    add_pptt(100, leaf=False)
    add_pptt(4, leaf=False)
    add_pptt(2)

    (result,) = ProcessorIdCheck().validate(context)

    assert result.passed is True
    assert context.sink.error_count == 0


def test_scan_continues_after_each_mismatch(context, add_gicc, add_pptt):
    """Every missing leaf is reported once, in PPTT order."""
    add_gicc(0)
    for processor_id in (7, 0, 8, 9):
        add_pptt(processor_id)

    (result,) = ProcessorIdCheck().validate(context)

    assert context.sink.error_count == 3
    assert result.fail_count == 3
    assert result.messages == [
        "PPTT Processor ID 7 is not found in the MADT.",
        "PPTT Processor ID 8 is not found in the MADT.",
        "PPTT Processor ID 9 is not found in the MADT.",
    ]


def test_duplicate_missing_ids_each_counted(context, add_gicc, add_pptt):
    add_gicc(0)
    add_pptt(5)
    add_pptt(5)

    ProcessorIdCheck().validate(context)

    assert context.sink.error_count == 2


def test_missing_madt_is_not_found_not_failure(context, add_pptt):
    """Absent controller entries skip the check without counting errors."""
    add_pptt(1)

    (result,) = ProcessorIdCheck().validate(context)

    assert result.skipped is True
    assert result.passed is True
    assert result.fail_count == 0
    assert "MADT" in result.messages[0]
    assert context.sink.error_count == 0


def test_missing_pptt_is_not_found_not_failure(context, add_gicc):
    add_gicc(1, 2)

    (result,) = ProcessorIdCheck().validate(context)

    assert result.skipped is True
    assert "PPTT" in result.messages[0]
    assert context.sink.error_count == 0


def test_other_fetch_failure_is_counted(context, add_gicc, add_pptt, monkeypatch):
    add_gicc(1)
    add_pptt(1)

    def _broken_get_all(meta_type):
        raise InvalidParameterError("store corrupted")

    monkeypatch.setattr(context.store, "get_all", _broken_get_all)

    (result,) = ProcessorIdCheck().validate(context)

    assert result.passed is False
    assert result.fail_count == 1
    assert context.sink.error_count == 1
    assert "Cannot get MADT processor list" in result.messages[0]


def test_count_failure_is_counted(context, add_gicc, add_pptt, monkeypatch):
    add_gicc(1)
    add_pptt(1)

    def _broken_count(meta_type):
        raise InvalidParameterError("store corrupted")

    monkeypatch.setattr(context.store, "count", _broken_count)

    (result,) = ProcessorIdCheck().validate(context)

    assert result.fail_count == 1
    assert "list length" in result.messages[0]


def test_truncated_pptt_record_reported_and_scan_continues(context, add_gicc, add_pptt):
    add_gicc(1)
    short = pack_pptt_processor(1)[:8]
    context.store.store(MetaDataType.PPTT_PROCS, MetaDataType.PPTT_PROCS, short, len(short))
    add_pptt(2)

    (result,) = ProcessorIdCheck().validate(context)

    assert context.sink.error_count == 2
    assert "too short" in result.messages[0]
    assert result.messages[1] == "PPTT Processor ID 2 is not found in the MADT."


def test_truncated_cluster_record_is_skipped_without_diagnostic(context, add_gicc, add_pptt):
    """Only Flags is read from a non-leaf node; nothing past it has to exist."""
    add_gicc(1)
    cluster = pack_pptt_processor(0, leaf=False, parent=20)[:8]
    context.store.store(
        MetaDataType.PPTT_PROCS, MetaDataType.PPTT_PROCS, cluster, len(cluster)
    )
    add_pptt(1)

    (result,) = ProcessorIdCheck().validate(context)

    assert result.passed is True
    assert result.fail_count == 0
    assert context.sink.error_count == 0


def test_truncated_madt_record_does_not_match_id_zero(context, add_pptt):
    context.store.store(MetaDataType.MADT_GICC, MetaDataType.MADT_GICC, b"\x0b\x50", 2)
    add_pptt(0)

    (result,) = ProcessorIdCheck().validate(context)

    assert result.fail_count == 2
    assert result.messages[-1] == "PPTT Processor ID 0 is not found in the MADT."


def test_aggregate_failure_logged_but_not_counted(context, add_gicc, add_pptt, caplog):
    add_gicc(1)
    add_pptt(2)

    with caplog.at_level(logging.INFO):
        ProcessorIdCheck().validate(context)

    assert "Validate processor ID failed." in caplog.text
    assert context.sink.error_count == 1


@pytest.mark.parametrize(
    "report_option, expected",
    [
        (ReportOption.ALL, True),
        (ReportOption.SELECTED, False),
        (ReportOption.TABLE_LIST, True),
        (ReportOption.DUMP_BIN_FILE, True),
    ],
)
def test_applies_only_outside_selected_mode(report_option, expected):
    config = replace(AcpiViewConfig(), report_option=report_option)
    assert ProcessorIdCheck().applies_to(config) is expected


def test_does_not_apply_without_consistency_checking():
    config = replace(AcpiViewConfig(), consistency_checking=False)
    assert ProcessorIdCheck().applies_to(config) is False
