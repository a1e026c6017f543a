"""ACPI Cross-Check: metadata store and validators for decoded ACPI tables.

Table decoders push the structures they recognise into an
:class:`~acpi_crosscheck.validation.data_store.AcpiDataStore`; once every table
has been decoded, validators read the store back and cross-check the records
of independent tables against each other.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
