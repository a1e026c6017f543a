"""Load decoded table records from a YAML file into the data store.

The binary table decoders live outside this package. This loader plays their
role for the CLI and for fixtures: it packs each described structure with the
layouts from ``validation/layouts.py`` and pushes it into the store exactly as
a decoder would.

File layout::

    installed_tables: [XSDT, FACP, DSDT, APIC, GTDT, DBG2, SPCR, PPTT]
    madt_gicc:
      - {uid: 0, cpu_interface: 0, mpidr: 0x0}
      - {uid: 1, cpu_interface: 1, mpidr: 0x100}
    pptt_processors:
      - {id: 0, leaf: false}              # cluster node
      - {id: 0, leaf: true, parent: 20}
    raw:                                  # pre-packed payloads, hex encoded
      - {category: MADT_GICC, kind: MADT_GICC, data: "0b50..."}
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml

from acpi_crosscheck.core.config import parse_enum
from acpi_crosscheck.core.enums import MetaDataType
from acpi_crosscheck.validation.data_store import AcpiDataStore
from acpi_crosscheck.validation.layouts import (
    pack_gicc,
    pack_pptt_processor,
    pack_table_signature,
)


def _as_list(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def _push(store: AcpiDataStore, meta_type: MetaDataType, payload: bytes) -> None:
    store.store(meta_type, meta_type, payload, len(payload))


def store_records(data: Dict[str, Any], store: AcpiDataStore) -> int:
    """Push every record described by ``data`` into ``store``.

    Returns:
        Number of records stored.

    Raises:
        ValueError: If an entry is malformed.
        AcpiViewError: If the store rejects a record.
    """
    stored = 0

    for name in _as_list(data, "installed_tables"):
        _push(store, MetaDataType.INSTALLED_TABLES, pack_table_signature(str(name)))
        stored += 1

    for index, entry in enumerate(_as_list(data, "madt_gicc")):
        if not isinstance(entry, dict) or "uid" not in entry:
            raise ValueError(f"madt_gicc[{index}] must be a mapping with a 'uid'")
        payload = pack_gicc(
            int(entry["uid"]),
            cpu_interface_number=int(entry.get("cpu_interface", index)),
            mpidr=int(entry.get("mpidr", 0)),
        )
        _push(store, MetaDataType.MADT_GICC, payload)
        stored += 1

    for index, entry in enumerate(_as_list(data, "pptt_processors")):
        if not isinstance(entry, dict) or "id" not in entry:
            raise ValueError(f"pptt_processors[{index}] must be a mapping with an 'id'")
        payload = pack_pptt_processor(
            int(entry["id"]),
            leaf=bool(entry.get("leaf", True)),
            parent=int(entry.get("parent", 0)),
        )
        _push(store, MetaDataType.PPTT_PROCS, payload)
        stored += 1

    for index, entry in enumerate(_as_list(data, "raw")):
        if not isinstance(entry, dict) or "category" not in entry or "data" not in entry:
            raise ValueError(f"raw[{index}] must be a mapping with 'category' and 'data'")
        category = parse_enum(MetaDataType, entry["category"])
        kind = parse_enum(MetaDataType, entry.get("kind", category))
        try:
            payload = bytes.fromhex(str(entry["data"]))
        except ValueError as e:
            raise ValueError(f"raw[{index}] data is not valid hex: {e}") from e
        store.store(category, kind, payload, len(payload))
        stored += 1

    return stored


def load_records_file(records_path: Path, store: AcpiDataStore) -> int:
    """Load a YAML records file into ``store``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file cannot be parsed or an entry is malformed.
    """
    if not records_path.exists():
        raise FileNotFoundError(f"Records file not found: {records_path}")
    try:
        with records_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse records file {records_path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Records file {records_path} must contain a mapping")

    stored = store_records(data, store)
    logging.info("Loaded %d records from %s", stored, records_path)
    return stored


__all__ = ["load_records_file", "store_records"]
