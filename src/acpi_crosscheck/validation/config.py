"""Validation configuration constants.

This module centralizes severity rules and the Arm SBBR mandatory table lists.

Severity Levels:
    - "error": Tables disagree with each other or a required table is missing
    - "warning": Issues that warrant review but may be legitimate
"""

from __future__ import annotations

from typing import Dict, Tuple

from acpi_crosscheck.core.enums import SbbrVersion

# ============================================================================
# SEVERITY RULES
# ============================================================================

_SEVERITY_MAP: Dict[str, str] = {
    "processor_ids": "error",
    "mandatory_tables": "error",
}


# ============================================================================
# SBBR MANDATORY TABLES
# ============================================================================
# Reference(s):
#   - Arm Server Base Boot Requirements 1.0, March 2016
#   - Arm Server Base Boot Requirements 1.1, May 2018
#   - Arm Server Base Boot Requirements 1.2, September 2019

SBBR_1_0_MANDATORY_TABLES: Tuple[str, ...] = (
    "DSDT",
    "FACP",
    "GTDT",
    "APIC",
    "DBG2",
    "SPCR",
)

# PPTT became mandatory with SBBR 1.1
SBBR_1_1_MANDATORY_TABLES: Tuple[str, ...] = SBBR_1_0_MANDATORY_TABLES + ("PPTT",)

SBBR_1_2_MANDATORY_TABLES: Tuple[str, ...] = SBBR_1_1_MANDATORY_TABLES

_MANDATORY_TABLES: Dict[SbbrVersion, Tuple[str, ...]] = {
    SbbrVersion.V1_0: SBBR_1_0_MANDATORY_TABLES,
    SbbrVersion.V1_1: SBBR_1_1_MANDATORY_TABLES,
    SbbrVersion.V1_2: SBBR_1_2_MANDATORY_TABLES,
}


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def get_severity(check_id: str) -> str:
    """Get severity level for a check.

    Raises:
        ValueError: If check_id is unknown.

    Examples:
        >>> get_severity("processor_ids")
        'error'
    """
    if check_id not in _SEVERITY_MAP:
        raise ValueError(f"Unknown check_id: {check_id}")
    return _SEVERITY_MAP[check_id]


def get_mandatory_tables(version: SbbrVersion) -> Tuple[str, ...]:
    """Return the names of the tables an SBBR version requires.

    Raises:
        ValueError: If version is not a known SBBR version.
    """
    try:
        return _MANDATORY_TABLES[SbbrVersion(version)]
    except (KeyError, ValueError) as e:
        raise ValueError(f"Unknown SBBR version: {version!r}") from e
