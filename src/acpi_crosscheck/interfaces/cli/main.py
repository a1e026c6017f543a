import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import colorlog

from acpi_crosscheck.core.config import AcpiViewConfig, load_config, parse_enum
from acpi_crosscheck.core.enums import ReportOption, ValidatorId
from acpi_crosscheck.core.errors import AcpiViewError
from acpi_crosscheck.core.signature import convert_str_to_acpi_signature

REPORT_OPTION_CHOICES = list(ReportOption.__members__.keys())
VALIDATOR_CHOICES = list(ValidatorId.__members__.keys())

try:
    from acpi_crosscheck import __version__ as _PACKAGE_VERSION
except ImportError:  # pragma: no cover - defensive fallback
    _PACKAGE_VERSION = "unknown"  # type: ignore[assignment]


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _build_config(args: argparse.Namespace) -> AcpiViewConfig:
    """Resolve the invocation config: YAML file first, then CLI overrides."""
    config_arg = getattr(args, "config", None)
    config = load_config(Path(config_arg)) if config_arg else AcpiViewConfig()

    if getattr(args, "report_option", None):
        config = replace(config, report_option=parse_enum(ReportOption, args.report_option))
    if getattr(args, "no_consistency_check", False):
        config = replace(config, consistency_checking=False)
    if getattr(args, "select", None):
        config = config.select_table(args.select)
    if getattr(args, "validator", None):
        config = config.with_validator(parse_enum(ValidatorId, args.validator))
    return config


def cmd_validate(args: argparse.Namespace) -> int:
    """Load decoded records and cross-validate them.

    Returns:
        0 if all validations passed without errors
        1 if the configuration or records could not be loaded
        2 if any validation errors were found
    """
    from acpi_crosscheck.ingestion import load_records_file
    from acpi_crosscheck.validation import AcpiDataStore, run_validation

    try:
        config = _build_config(args)
    except (FileNotFoundError, ValueError) as e:
        logging.error("Invalid configuration: %s", e)
        return 1

    store = AcpiDataStore()
    try:
        try:
            load_records_file(Path(args.records), store)
        except (FileNotFoundError, ValueError, AcpiViewError) as e:
            logging.error("Failed to load records: %s", e)
            return 1

        if store.is_empty():
            logging.warning("No records found in %s", args.records)

        if getattr(args, "show_store", False):
            print(store.summary_frame().to_string(index=False))
            print()

        report = run_validation(store, config)
    finally:
        store.free()

    if getattr(args, "json", False):
        print(report.to_json())
    else:
        print(report.to_console_summary())

    if report.has_errors():
        logging.warning(
            "Validation failed: %d errors, %d warnings",
            report.get_error_count(),
            report.get_warning_count(),
        )
        return 2
    return 0


def cmd_signature(args: argparse.Namespace) -> int:
    """Print the packed ACPI signature of each table name."""
    for name in args.names:
        print(f"{name}: 0x{convert_str_to_acpi_signature(name):08X}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="acpi-crosscheck",
        description=f"ACPI Cross-Check (v{_PACKAGE_VERSION})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    p_validate = sub.add_parser("validate", help="Cross-validate decoded ACPI table records")
    p_validate.add_argument(
        "--records",
        required=True,
        help="YAML file describing the decoded table records",
    )
    p_validate.add_argument(
        "--config",
        default=None,
        help="acpiview YAML configuration (e.g. config/acpiview.yaml)",
    )
    p_validate.add_argument(
        "--report-option",
        type=str.upper,
        choices=REPORT_OPTION_CHOICES,
        help="Report option the validators run under (case insensitive)",
    )
    p_validate.add_argument(
        "--select",
        default=None,
        help="Report only the named table (e.g. PPTT); disables cross-table checks",
    )
    p_validate.add_argument(
        "--validator",
        type=str.upper,
        choices=VALIDATOR_CHOICES,
        help="Additional validator to run (case insensitive)",
    )
    p_validate.add_argument(
        "--no-consistency-check",
        action="store_true",
        help="Disable the ACPI standard consistency checks",
    )
    p_validate.add_argument("--json", action="store_true", help="Print the report as JSON")
    p_validate.add_argument(
        "--show-store",
        action="store_true",
        help="Print the number of records stored per category",
    )
    p_validate.set_defaults(func=cmd_validate)

    p_signature = sub.add_parser("signature", help="Convert table names to ACPI signatures")
    p_signature.add_argument("names", nargs="+", help="Table names (up to 4 characters)")
    p_signature.set_defaults(func=cmd_signature)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
