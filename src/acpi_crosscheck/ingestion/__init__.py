"""Stand-ins for the table decoders that populate the data store."""

from .records_file import load_records_file, store_records

__all__ = ["load_records_file", "store_records"]
