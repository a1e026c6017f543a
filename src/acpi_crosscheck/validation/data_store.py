"""Storing and accessing ACPI data collected from parsers.

The store keeps one ordered, append-only sequence of records per
:class:`~acpi_crosscheck.core.enums.MetaDataType`. Payloads are opaque: the
store copies and returns them but never interprets their contents. See
``validation/layouts.py`` for the layouts validators expect.

The store does not log. Failures are raised and reported by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from acpi_crosscheck.core.enums import MetaDataType
from acpi_crosscheck.core.errors import (
    InvalidCategoryError,
    InvalidParameterError,
    OutOfResourcesError,
    RecordsNotFoundError,
)

# Record lengths are a single byte.
MAX_RECORD_LENGTH = 0xFF


@dataclass(frozen=True)
class Record:
    """A copy of one structure extracted from an ACPI table.

    Attributes:
        kind: Meta data type the record was tagged with.
        length: Number of payload bytes (0-255).
        data: The owned payload.
    """

    kind: MetaDataType
    length: int
    data: bytes


def _resolve_type(value: Any) -> MetaDataType:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidCategoryError(value)
    try:
        return MetaDataType(value)
    except ValueError as e:
        raise InvalidCategoryError(value) from e


class AcpiDataStore:
    """Category-keyed collection of records for one invocation.

    Examples:
        >>> store = AcpiDataStore()
        >>> store.store(MetaDataType.INSTALLED_TABLES, MetaDataType.INSTALLED_TABLES, b"APIC", 4)
        >>> store.count(MetaDataType.INSTALLED_TABLES)
        1
    """

    def __init__(self) -> None:
        self._records: Dict[MetaDataType, List[Record]] = {}
        self.init()

    def init(self) -> None:
        """Reset every category to an empty sequence."""
        self._records = {meta_type: [] for meta_type in MetaDataType}

    def store(
        self,
        list_type: MetaDataType,
        node_type: MetaDataType,
        data: Optional[bytes],
        length: int,
    ) -> None:
        """Store a copy of ``length`` bytes of ``data`` under ``list_type``.

        Args:
            list_type: Category whose sequence receives the record.
            node_type: Type to tag the record with.
            data: Bytes-like object holding the structure to store.
            length: Number of bytes to copy (0-255).

        Raises:
            InvalidCategoryError: If either type is not a known category.
            InvalidParameterError: If ``data`` is missing or ``length`` is out of range.
            OutOfResourcesError: If the copy could not be allocated.
        """
        list_key = _resolve_type(list_type)
        node_kind = _resolve_type(node_type)

        if data is None:
            raise InvalidParameterError("Data to store is None")
        if isinstance(length, bool) or not isinstance(length, int):
            raise InvalidParameterError(f"Length must be an integer, got {length!r}")
        if not 0 <= length <= MAX_RECORD_LENGTH:
            raise InvalidParameterError(
                f"Length {length} is outside 0..{MAX_RECORD_LENGTH}"
            )

        try:
            view = memoryview(data).cast("B")
        except TypeError as e:
            raise InvalidParameterError(
                f"Data must be bytes-like, got {type(data).__name__}"
            ) from e
        if length > view.nbytes:
            raise InvalidParameterError(
                f"Length {length} exceeds the {view.nbytes} bytes available"
            )

        try:
            record = Record(kind=node_kind, length=length, data=view[:length].tobytes())
        except MemoryError as e:
            raise OutOfResourcesError(
                "Failed to allocate resources for node data."
            ) from e

        self._records[list_key].append(record)

    def count(self, meta_type: MetaDataType) -> int:
        """Return the number of records stored for ``meta_type``.

        Raises:
            InvalidCategoryError: If ``meta_type`` is not a known category.
            RecordsNotFoundError: If nothing was stored for ``meta_type``.
                The exception's ``count`` is 0.
        """
        key = _resolve_type(meta_type)
        records = self._records[key]
        if not records:
            raise RecordsNotFoundError(key)
        return len(records)

    def get_all(self, meta_type: MetaDataType) -> Tuple[Record, ...]:
        """Return the records stored for ``meta_type`` in insertion order.

        Raises:
            InvalidCategoryError: If ``meta_type`` is not a known category.
            RecordsNotFoundError: If nothing was stored for ``meta_type``.
        """
        key = _resolve_type(meta_type)
        records = self._records[key]
        if not records:
            raise RecordsNotFoundError(key)
        return tuple(records)

    def free(self) -> None:
        """Release all stored records, leaving every category empty."""
        for records in self._records.values():
            records.clear()
        self.init()

    def is_empty(self) -> bool:
        return not any(self._records.values())

    def summary_frame(self) -> pd.DataFrame:
        """Return one row per category with its record count and total bytes."""
        rows = [
            {
                "category": meta_type.name,
                "records": len(records),
                "bytes": sum(r.length for r in records),
            }
            for meta_type, records in sorted(self._records.items())
        ]
        return pd.DataFrame(rows, columns=["category", "records", "bytes"])


__all__ = ["AcpiDataStore", "Record", "MAX_RECORD_LENGTH"]
