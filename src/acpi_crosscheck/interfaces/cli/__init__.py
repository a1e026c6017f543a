"""acpi-crosscheck command line interface."""
