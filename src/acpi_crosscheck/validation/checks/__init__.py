"""Validation checks base interface.

This module defines the protocol (interface) that all validation checks must implement.
Each check reads one or more categories of the data store and reports every
inconsistency it finds through the context's diagnostic sink.

To implement a new validation check:

1. Create a new file in this directory (e.g., `my_check.py`)
2. Define a class that implements the ValidationCheck protocol
3. Implement the required methods: `validate()` and `applies_to()`
4. Declare the record layouts it reads in `validation/layouts.py`
5. Add the check to a validator profile in registry.py

Example:
    ```python
    # checks/my_check.py
    from typing import List
    from acpi_crosscheck.core.config import AcpiViewConfig
    from ..models import CheckResult, ValidationContext

    class MyCheck:
        def validate(self, context: ValidationContext) -> List[CheckResult]:
            # Validation logic here
            return [CheckResult(...)]

        def applies_to(self, config: AcpiViewConfig) -> bool:
            return True  # Applies to every report option
    ```
"""

from __future__ import annotations

from typing import List, Protocol

from acpi_crosscheck.core.config import AcpiViewConfig
from ..models import CheckResult, ValidationContext


class ValidationCheck(Protocol):
    """Protocol defining the interface for validation checks.

    Methods:
        validate: Run the validation check and return results.
        applies_to: Determine if the check is meaningful under a configuration.
    """

    check_id: str

    def validate(self, context: ValidationContext) -> List[CheckResult]:
        """Run the validation check.

        Args:
            context: Store to read, configuration and diagnostic sink.

        Returns:
            List of CheckResult objects.
        """
        ...

    def applies_to(self, config: AcpiViewConfig) -> bool:
        """Check if this validation applies under ``config``.

        Cross-table checks need every table decoded, so they do not apply
        when only a single selected table is reported.
        """
        ...


__all__ = ["ValidationCheck"]
