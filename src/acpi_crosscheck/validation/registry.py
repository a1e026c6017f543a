"""Validator registry and runner.

This module orchestrates validators:
- VALIDATOR_LIST: Every validator, at the position matching its ValidatorId
- run_validator(): Dispatch a single validator by ID
- run_validation(): Run the validators an invocation's configuration asks for
- print_report(): Display validation results to console

Adding a validator means adding a ValidatorId member, writing a procedure
taking a ValidationContext, and appending a ValidatorEntry at the position
equal to the new ID.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from acpi_crosscheck.core.config import AcpiViewConfig
from acpi_crosscheck.core.enums import SbbrVersion, ValidatorId
from acpi_crosscheck.core.errors import RegistryIntegrityError
from .checks import ValidationCheck
from .checks.mandatory_tables import MandatoryTablesCheck
from .checks.processor_ids import ProcessorIdCheck
from .data_store import AcpiDataStore
from .models import CheckResult, ValidationContext, ValidationReport
from .sink import DiagnosticSink

ValidatorProc = Callable[[ValidationContext], List[CheckResult]]


@dataclass(frozen=True)
class ValidatorEntry:
    """A validator ID and the procedure it dispatches to."""

    id: ValidatorId
    name: str
    procedure: ValidatorProc


def _run_checks(checks: Iterable[ValidationCheck], context: ValidationContext) -> List[CheckResult]:
    results: List[CheckResult] = []
    for check in checks:
        if check.applies_to(context.config):
            results.extend(check.validate(context))
        else:
            logging.debug(
                "Skipping %s for report option %s",
                check.check_id,
                context.config.report_option.name,
            )
    return results


# Platform agnostic ACPI spec checks
ACPI_STANDARD_CHECKS = (ProcessorIdCheck(),)


def acpi_standard_validate(context: ValidationContext) -> List[CheckResult]:
    """Entry point for platform agnostic ACPI validations."""
    return _run_checks(ACPI_STANDARD_CHECKS, context)


def sbbr10_validate(context: ValidationContext) -> List[CheckResult]:
    return _run_checks((MandatoryTablesCheck(SbbrVersion.V1_0),), context)


def sbbr11_validate(context: ValidationContext) -> List[CheckResult]:
    return _run_checks((MandatoryTablesCheck(SbbrVersion.V1_1),), context)


def sbbr12_validate(context: ValidationContext) -> List[CheckResult]:
    return _run_checks((MandatoryTablesCheck(SbbrVersion.V1_2),), context)


# List of all validators that can be run
VALIDATOR_LIST = (
    ValidatorEntry(ValidatorId.ACPI_STANDARD, "ACPI_STANDARD", acpi_standard_validate),
    ValidatorEntry(ValidatorId.SBBR_1_0, "SBBR_1_0", sbbr10_validate),
    ValidatorEntry(ValidatorId.SBBR_1_1, "SBBR_1_1", sbbr11_validate),
    ValidatorEntry(ValidatorId.SBBR_1_2, "SBBR_1_2", sbbr12_validate),
)


def run_validator(validator_id: int, context: ValidationContext) -> Optional[List[CheckResult]]:
    """Run the validator with the given ID.

    Unknown IDs and registry entries whose ID does not match their position
    are logged and nothing is invoked. Only this dispatch is abandoned.

    Args:
        validator_id: The ID of the validator to run.
        context: Store, configuration and sink passed to the validator.

    Returns:
        The results produced by the validator, or None when it was not
        invoked.
    """
    if (
        isinstance(validator_id, bool)
        or not isinstance(validator_id, int)
        or not 0 <= validator_id < len(VALIDATOR_LIST)
    ):
        logging.warning("ValidatorId is not recognised. ValidatorId = %s.", validator_id)
        return None

    validator = VALIDATOR_LIST[validator_id]
    if validator.id != validator_id:
        logging.error("%s", RegistryIntegrityError(int(validator_id), int(validator.id)))
        return None

    logging.debug("Running validator %s", validator.name)
    return validator.procedure(context)


def run_validation(
    store: AcpiDataStore,
    config: Optional[AcpiViewConfig] = None,
    sink: Optional[DiagnosticSink] = None,
) -> ValidationReport:
    """Run the validators requested by ``config`` against a populated store.

    The ACPI standard validator runs when consistency checking is enabled;
    the configured validator runs when ``config.validator_status`` is set.
    Each validator runs at most once.

    Args:
        store: Data store populated during table decoding.
        config: Invocation configuration. Defaults to AcpiViewConfig().
        sink: Sink receiving diagnostics. A new one is created if omitted.

    Returns:
        ValidationReport aggregating the results of every validator that ran.

    Examples:
        >>> report = run_validation(store, AcpiViewConfig())
        >>> print(report.summary())
    """
    config = config if config is not None else AcpiViewConfig()
    sink = sink if sink is not None else DiagnosticSink()
    context = ValidationContext(store=store, config=config, sink=sink)

    validator_ids: List[int] = []
    if config.consistency_checking:
        validator_ids.append(ValidatorId.ACPI_STANDARD)
    if config.validator_status and config.validator_id not in validator_ids:
        validator_ids.append(config.validator_id)

    all_results: List[CheckResult] = []
    names: List[str] = []
    for validator_id in validator_ids:
        results = run_validator(validator_id, context)
        if results is None:
            continue
        all_results.extend(results)
        names.append(ValidatorId(validator_id).name)

    return ValidationReport(
        results=all_results,
        report_option=config.report_option,
        validators=names,
        sink=sink,
    )


def print_report(report: ValidationReport) -> None:
    """Print validation report to console.

    Displays a summary followed by details of all failed checks.
    """
    print(report.summary())
    print()

    failed = report.get_failed_checks()

    if not failed:
        print("All validation checks passed.")
    else:
        print("Failed Checks:")
        for result in failed:
            print(f"- {result.check_id} ({result.severity}): {result.fail_count} failures")
            for msg in result.messages:
                print(f"   - {msg}")

    for result in report.get_skipped_checks():
        reason = result.messages[0] if result.messages else "data unavailable"
        print(f"- {result.check_id} skipped: {reason}")
