# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Fail-fast compatibility check.

Descriptors are evaluated in the order the registry produced them. The first
one whose floor is not met becomes the result and nothing after it is looked
at. The list is never modified.
"""

import logging
from collections.abc import Sequence
from typing import Optional

from envgate.gate.errors import CompatibilityError
from envgate.requirements.descriptor import RequirementDescriptor
from envgate.versioning.comparator import is_unmet

logger = logging.getLogger(__name__)


def check(
    descriptors: Sequence[RequirementDescriptor],
    *,
    origin: str = "envgate",
    inclusive: bool = True,
) -> Optional[CompatibilityError]:
    """
    Check each descriptor's current version against its floor.

    Args:
        descriptors: Descriptors in evaluation order.
        origin: Where the check is being run from, usually the extension name.
        inclusive: Whether current == required satisfies the floor.

    Returns:
        None if every requirement is met, otherwise the CompatibilityError for
        the first unmet one.

    Raises:
        InvalidVersionError: If a descriptor holds an unparseable version.
    """
    for descriptor in descriptors:
        unmet = is_unmet(descriptor.required_value, descriptor.current_value, inclusive=inclusive)
        logger.debug(
            "requirement_checked",
            extra={
                "key": descriptor.key,
                "current": descriptor.current_value,
                "required": descriptor.required_value,
                "met": not unmet,
            },
        )
        if unmet:
            return CompatibilityError(
                key=descriptor.key,
                title=descriptor.title,
                message=descriptor.message,
                origin=f"{origin}:{descriptor.key}",
            )
    return None
