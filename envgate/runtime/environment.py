# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Observed versions of the running environment.

These are the "current" side of every built-in requirement: the interpreter
the extension is running on and the host framework that loaded it. Both are
read synchronously from in-process state; nothing here does network I/O.
"""

import platform
import sys
from importlib import metadata
from typing import NamedTuple

from envgate.config.exceptions import RequirementConfigError


class SystemInfo(NamedTuple):
    """Snapshot of the current system environment, for diagnostics."""

    python_version: str
    implementation: str
    platform: str
    architecture: str


def get_python_version() -> str:
    """Return the running interpreter version as "major.minor.micro"."""
    major, minor, micro = sys.version_info[:3]
    return f"{major}.{minor}.{micro}"


def get_framework_version(distribution: str) -> str:
    """
    Look up the installed version of the host framework's distribution.

    Args:
        distribution: Distribution name as published on the package index.

    Returns:
        The installed version string.

    Raises:
        RequirementConfigError: If the distribution is not installed. A missing
            framework means there is nothing to compare, which is a setup
            problem rather than a version that is too low.
    """
    try:
        return metadata.version(distribution)
    except metadata.PackageNotFoundError as err:
        raise RequirementConfigError(
            f"Cannot determine framework version: distribution '{distribution}' is not installed"
        ) from err


def get_system_info() -> SystemInfo:
    """Collect basic system information for logging and diagnostics."""
    return SystemInfo(
        python_version=platform.python_version(),
        implementation=platform.python_implementation(),
        platform=platform.system(),
        architecture=platform.machine(),
    )
