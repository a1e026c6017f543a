"""Shared pytest fixtures for data store and validator testing."""

from typing import Callable, Iterable

import pytest

from acpi_crosscheck.core.config import AcpiViewConfig
from acpi_crosscheck.core.enums import MetaDataType
from acpi_crosscheck.validation.data_store import AcpiDataStore
from acpi_crosscheck.validation.layouts import (
    pack_gicc,
    pack_pptt_processor,
    pack_table_signature,
)
from acpi_crosscheck.validation.models import ValidationContext
from acpi_crosscheck.validation.sink import DiagnosticSink


@pytest.fixture
def store():
    """A freshly initialised data store, freed after the test."""
    data_store = AcpiDataStore()
    yield data_store
    data_store.free()


@pytest.fixture
def sink() -> DiagnosticSink:
    return DiagnosticSink()


@pytest.fixture
def context(store, sink) -> ValidationContext:  # pylint: disable=redefined-outer-name
    """Validation context with the default (report all) configuration."""
    return ValidationContext(store=store, config=AcpiViewConfig(), sink=sink)


@pytest.fixture
def add_gicc(store) -> Callable[..., None]:  # pylint: disable=redefined-outer-name
    """Store one MADT GICC record per processor UID."""

    def _add(*uids: int) -> None:
        for uid in uids:
            payload = pack_gicc(uid)
            store.store(MetaDataType.MADT_GICC, MetaDataType.MADT_GICC, payload, len(payload))

    return _add


@pytest.fixture
def add_pptt(store) -> Callable[..., None]:  # pylint: disable=redefined-outer-name
    """Store one PPTT processor record."""

    def _add(processor_id: int, leaf: bool = True, parent: int = 0) -> None:
        payload = pack_pptt_processor(processor_id, leaf=leaf, parent=parent)
        store.store(MetaDataType.PPTT_PROCS, MetaDataType.PPTT_PROCS, payload, len(payload))

    return _add


@pytest.fixture
def add_tables(store) -> Callable[[Iterable[str]], None]:  # pylint: disable=redefined-outer-name
    """Store installed table signatures."""

    def _add(names: Iterable[str]) -> None:
        for name in names:
            payload = pack_table_signature(name)
            store.store(
                MetaDataType.INSTALLED_TABLES,
                MetaDataType.INSTALLED_TABLES,
                payload,
                len(payload),
            )

    return _add
