# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Version comparison for requirement floors.

Versions are compared semantically with packaging's PEP 440 rules, not as
strings. That gives us the behavior every floor check needs:
  - release components compared numerically, left to right ("6.10" > "6.9")
  - missing trailing components count as zero ("2.0" == "2.0.0")
  - pre/post/dev suffixes are ordered ("6.3rc1" < "6.3" < "6.3.post1")
  - a leading "v" and "-RC1" style separators are normalized
  - a vendor suffix after a separator is ignored when the whole string isn't
    PEP 440 ("8.1.2-1ubuntu2" compares as "8.1.2")

Everything here is pure. Same inputs, same answer, no side effects.

Equality policy: by default, running exactly the required version satisfies
the floor. Pass inclusive=False to get the stricter behavior where the current
version must be strictly greater than the floor.
"""

import re

from packaging.version import InvalidVersion, Version

from envgate.config.exceptions import InvalidVersionError

# Dotted-numeric release followed by a separator and an arbitrary build suffix.
_SUFFIXED_RELEASE = re.compile(r"^v?(?P<release>[0-9]+(?:\.[0-9]+)*)[-+_~]\S*$", re.IGNORECASE)


def parse_version(value: str) -> Version:
    """
    Parse a version string into a comparable Version.

    Args:
        value: Version string such as "3.11", "6.4.2", "6.5-RC1" or
            "8.1.2-1ubuntu2".

    Returns:
        The parsed packaging Version.

    Raises:
        InvalidVersionError: If the value is empty, not a string, or not a
            recognizable version.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidVersionError(f"Version must be a non-empty string, got {value!r}")
    text = value.strip()
    try:
        return Version(text)
    except InvalidVersion as err:
        match = _SUFFIXED_RELEASE.match(text)
        if match is None:
            raise InvalidVersionError(f"Cannot parse version '{value}': {err}") from err
    return Version(match.group("release"))


def is_unmet(required: str, current: str, *, inclusive: bool = True) -> bool:
    """
    Return True when `current` does not satisfy the minimum `required` version.

    Args:
        required: The minimum acceptable version.
        current: The version observed in the running environment.
        inclusive: When True (the default) current == required satisfies the
            floor. When False, equality is reported as unmet.

    Raises:
        InvalidVersionError: If either version cannot be parsed.
    """
    floor = parse_version(required)
    observed = parse_version(current)
    if inclusive:
        return observed < floor
    return observed <= floor
