# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Abort & notify: the only way out of a failed check.

Order matters. The user is told first, then initialization stops. reject()
never returns normally.
"""

from typing import NoReturn

from envgate.gate.errors import CompatibilityError, ExtensionHalted
from envgate.gate.notify import Notifier, Severity


def reject(error: CompatibilityError, notifier: Notifier) -> NoReturn:
    """
    Report an unmet requirement and halt the extension.

    Args:
        error: The first unmet requirement.
        notifier: Host-owned channel that shows the message to the user.

    Raises:
        ExtensionHalted: Always.
    """
    notifier.notify(error.rendered_message, Severity.ERROR)
    raise ExtensionHalted(error)
