"""Per-invocation acpiview configuration.

The configuration is an immutable value passed explicitly to the validation
controller. Use :func:`dataclasses.replace` or the helper methods to derive
modified copies.

YAML layout accepted by :func:`load_config`::

    report_option: all          # all | selected | table_list | dump_bin_file
    consistency_checking: true
    colour_highlighting: false
    selected_table: null        # e.g. "PPTT"; implies report_option: selected
    validator:
      enabled: false
      id: SBBR_1_2
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

import yaml

from acpi_crosscheck.core.enums import ReportOption, ValidatorId
from acpi_crosscheck.core.signature import convert_str_to_acpi_signature

_E = TypeVar("_E", bound=IntEnum)


@dataclass(frozen=True)
class SelectedAcpiTable:
    """The user selection detailing which ACPI table is to be examined.

    Attributes:
        signature: 32-bit signature of the selected table.
        name: User friendly name of the selected table.
        found: True once the selected table has been found in the system.
    """

    signature: int
    name: str
    found: bool = False


@dataclass(frozen=True)
class AcpiViewConfig:
    """Options controlling reporting and validation for one invocation."""

    report_option: ReportOption = ReportOption.ALL
    consistency_checking: bool = True
    colour_highlighting: bool = False
    validator_status: bool = False
    validator_id: ValidatorId = ValidatorId.ACPI_STANDARD
    selected_table: Optional[SelectedAcpiTable] = None

    def select_table(self, name: str) -> "AcpiViewConfig":
        """Return a copy reporting only the table called ``name``.

        Raises:
            ValueError: If ``name`` is empty.
        """
        if not name:
            raise ValueError("Table name must not be empty")
        selected = SelectedAcpiTable(
            signature=convert_str_to_acpi_signature(name),
            name=name,
        )
        return replace(self, report_option=ReportOption.SELECTED, selected_table=selected)

    def with_validator(self, validator_id: ValidatorId) -> "AcpiViewConfig":
        """Return a copy that runs ``validator_id`` after parsing."""
        return replace(self, validator_status=True, validator_id=ValidatorId(validator_id))


def parse_enum(enum_cls: Type[_E], value: Any) -> _E:
    """Resolve an enum member from its name (case insensitive) or value.

    Raises:
        ValueError: If ``value`` names no member of ``enum_cls``.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().upper().replace("-", "_").replace(".", "_")
        try:
            return enum_cls[key]
        except KeyError:
            pass
    elif isinstance(value, int) and not isinstance(value, bool):
        try:
            return enum_cls(value)
        except ValueError:
            pass
    valid = ", ".join(m.name for m in enum_cls)
    raise ValueError(f"Unknown {enum_cls.__name__}: {value!r}. Valid values: {valid}")


def config_from_dict(data: Dict[str, Any]) -> AcpiViewConfig:
    """Build a configuration from a mapping, falling back to defaults."""
    config = AcpiViewConfig()

    if "report_option" in data and data["report_option"] is not None:
        config = replace(config, report_option=parse_enum(ReportOption, data["report_option"]))
    if "consistency_checking" in data:
        config = replace(config, consistency_checking=bool(data["consistency_checking"]))
    if "colour_highlighting" in data:
        config = replace(config, colour_highlighting=bool(data["colour_highlighting"]))

    validator = data.get("validator") or {}
    if not isinstance(validator, dict):
        raise ValueError(f"'validator' must be a mapping, got {type(validator).__name__}")
    if validator.get("id") is not None:
        config = replace(config, validator_id=parse_enum(ValidatorId, validator["id"]))
    if "enabled" in validator:
        config = replace(config, validator_status=bool(validator["enabled"]))

    selected = data.get("selected_table")
    if selected:
        config = config.select_table(str(selected))

    return config


def load_config(config_path: Path) -> AcpiViewConfig:
    """Load an acpiview configuration from a YAML file.

    Args:
        config_path: Path to the YAML file.

    Returns:
        The resulting configuration. An empty file yields the defaults.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file cannot be parsed or holds unknown values.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse config file {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return config_from_dict(data)


__all__ = [
    "AcpiViewConfig",
    "SelectedAcpiTable",
    "config_from_dict",
    "load_config",
    "parse_enum",
]
