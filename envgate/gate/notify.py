# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Notification channel.

The host owns the surface the user actually looks at (a dialog, a status bar,
an admin banner), so the gate only depends on the Notifier protocol. The
default LogNotifier writes the notice to the structured log, which is what the
CLI and headless hosts use.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Protocol

from envgate.logging.logger import get_logger, resolve_log_level


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Notifier(Protocol):
    """Anything that can show a message to the user. Fire-and-forget."""

    def notify(self, message: str, severity: Severity) -> None: ...


_SEVERITY_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.INFO: logging.INFO,
}


class LogNotifier:
    """
    Deliver notices as structured log entries.

    The notice logger's threshold is capped at ERROR, so a rejection notice
    is shown even when the rest of the log is set to CRITICAL.
    """

    def __init__(
        self,
        name: str = "envgate.notice",
        log_level: str = "INFO",
        log_file: Optional[Path] = None,
    ) -> None:
        level = min(resolve_log_level(log_level), logging.ERROR)
        self._logger = get_logger(
            name, log_level=logging.getLevelName(level), log_file=log_file
        )

    def notify(self, message: str, severity: Severity) -> None:
        self._logger.log(
            _SEVERITY_LEVELS[severity],
            message,
            extra={"severity": severity.value},
        )
