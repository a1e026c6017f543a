"""ACPI table signature helpers.

A signature is the 4-byte table name packed into a ``uint32`` in the native
byte order, matching how signatures are compared against table headers.
"""

from __future__ import annotations

import struct

_SIGNATURE = struct.Struct("=I")
SIGNATURE_LENGTH = _SIGNATURE.size


def convert_str_to_acpi_signature(name: str) -> int:
    """Convert a table name to an ACPI table signature.

    At most the first four characters are used and conversion stops at the
    first NUL. ASCII lowercase letters are upper-cased, every other character
    keeps its low byte. Shorter names are zero padded.

    Args:
        name: Table name such as ``"xsdt"`` or ``"APIC"``.

    Returns:
        The packed 32-bit signature.

    Raises:
        TypeError: If ``name`` is not a string.

    Examples:
        >>> convert_str_to_acpi_signature("xsdt") == convert_str_to_acpi_signature("XSDT")
        True
    """
    if not isinstance(name, str):
        raise TypeError(f"Table name must be a string, got {type(name).__name__}")

    raw = bytearray(SIGNATURE_LENGTH)
    for index, char in enumerate(name[:SIGNATURE_LENGTH]):
        if char == "\0":
            break
        if "a" <= char <= "z":
            char = char.upper()
        raw[index] = ord(char) & 0xFF

    return _SIGNATURE.unpack(bytes(raw))[0]


def acpi_signature_to_bytes(signature: int) -> bytes:
    """Return the four raw bytes of a packed signature."""
    return _SIGNATURE.pack(signature)


def acpi_signature_to_str(signature: int) -> str:
    """Render a packed signature as text, dropping trailing padding."""
    return acpi_signature_to_bytes(signature).rstrip(b"\0").decode("latin-1")


__all__ = [
    "SIGNATURE_LENGTH",
    "convert_str_to_acpi_signature",
    "acpi_signature_to_bytes",
    "acpi_signature_to_str",
]
