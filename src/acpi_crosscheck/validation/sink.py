"""Diagnostic sink shared by the validators of one invocation.

Validators report every detected inconsistency here: the message is logged and
the matching counter is incremented exactly once per call.
"""

from __future__ import annotations

import logging
from typing import List


class DiagnosticSink:
    """Error/warning counters plus the messages that produced them."""

    def __init__(self) -> None:
        self.error_count = 0
        self.warning_count = 0
        self.messages: List[str] = []

    def error(self, message: str) -> None:
        """Report one error and increment the error counter."""
        self.error_count += 1
        self.messages.append(f"ERROR: {message}")
        logging.error(message)

    def warning(self, message: str) -> None:
        """Report one warning and increment the warning counter."""
        self.warning_count += 1
        self.messages.append(f"WARNING: {message}")
        logging.warning(message)

    def notice(self, message: str, level: int = logging.INFO) -> None:
        """Log a message without touching the counters."""
        logging.log(level, message)


__all__ = ["DiagnosticSink"]
