"""Exception hierarchy for the data store and validator dispatch."""

from __future__ import annotations

from typing import Any


class AcpiViewError(Exception):
    """Base class for all errors raised by this package."""


class InvalidParameterError(AcpiViewError, ValueError):
    """A required argument is missing or out of range."""


class InvalidCategoryError(InvalidParameterError):
    """A meta data type is outside the known enumeration."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Meta data type is not recognised: {value!r}")
        self.value = value


class RecordsNotFoundError(AcpiViewError, LookupError):
    """No records have been stored for a category.

    This means "no data", not "bad data": the decoder producing the category
    never ran or produced nothing.
    """

    count = 0

    def __init__(self, category: Any) -> None:
        super().__init__(f"No meta data stored for {category!s}")
        self.category = category


class OutOfResourcesError(AcpiViewError, MemoryError):
    """Memory for a record copy or working storage could not be allocated."""


class RegistryIntegrityError(AcpiViewError):
    """A registry entry's ID does not match its position in the registry."""

    def __init__(self, requested_id: int, entry_id: int) -> None:
        super().__init__(
            f"Validator cannot be retrieved. ValidatorId = {requested_id} "
            f"(registry entry holds {entry_id})"
        )
        self.requested_id = requested_id
        self.entry_id = entry_id


class RecordLayoutError(AcpiViewError, ValueError):
    """A stored record is too short for the layout a validator expects."""


__all__ = [
    "AcpiViewError",
    "InvalidParameterError",
    "InvalidCategoryError",
    "RecordsNotFoundError",
    "OutOfResourcesError",
    "RegistryIntegrityError",
    "RecordLayoutError",
]
