# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Errors produced by the gate.

CompatibilityError is the record describing an unmet requirement. It is data,
not an exception: the checker returns it. ExtensionHalted is the exception the
abort pathway raises to stop initialization, and it carries the record.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CompatibilityError:
    """
    An unmet requirement.

    Attributes:
        key: Dimension that failed, e.g. "python".
        title: Short label, e.g. "Python Version Too Low".
        message: Full explanation with the versions filled in.
        origin: Where the check ran and which dimension failed, "<origin>:<key>".
    """

    key: str
    title: str
    message: str
    origin: str

    @property
    def rendered_message(self) -> str:
        """The text shown to the user."""
        return f"{self.title}: {self.message} ({self.origin})"


class ExtensionHalted(Exception):
    """
    Raised when the gate rejects an extension.

    The host's bootstrap must catch this and stop loading the extension. It
    must not retry within the same process.
    """

    def __init__(self, error: CompatibilityError) -> None:
        super().__init__(error.rendered_message)
        self.error = error
