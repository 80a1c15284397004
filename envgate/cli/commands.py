# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the envgate CLI.

Each function here corresponds to one CLI subcommand and returns an exit code.
No print() calls. Everything goes through the structured logger.
"""

import argparse
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Optional

from envgate.cli.exit_codes import (
    CONFIG_ERROR,
    REQUIREMENT_UNMET,
    RUNTIME_ERROR,
    SUCCESS,
    USER_ERROR,
)
from envgate.config.exceptions import ConfigError
from envgate.config.loader import load_config
from envgate.config.schema import EnvGateConfig
from envgate.gate.bootstrap import CompatibilityGate
from envgate.gate.errors import ExtensionHalted
from envgate.gate.notify import LogNotifier
from envgate.logging.logger import get_logger
from envgate.requirements.registry import build_registry
from envgate.runtime.environment import get_system_info
from envgate.versioning.comparator import is_unmet


def _load_and_configure(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, Optional[EnvGateConfig], logging.Logger]:
    """
    The shared setup every command needs: load config, set up logging.

    Returns a tuple of (exit_code, config, logger). If exit_code is not SUCCESS,
    the caller should return it immediately.
    """
    logger = get_logger(f"envgate.cli.{command_name}", log_level=args.log_level or "INFO")

    if args.config is None:
        return SUCCESS, None, logger

    try:
        config = load_config(Path(args.config))
    except ConfigError as err:
        logger.error(
            "Configuration error",
            extra={"command": command_name, "error": str(err)},
        )
        return CONFIG_ERROR, None, logger

    log_level = args.log_level or config.global_config.log_level
    log_file = Path(config.global_config.log_file) if config.global_config.log_file else None
    get_logger("envgate", log_level=log_level, log_file=log_file)

    return SUCCESS, config, logger


def _framework_override(args: argparse.Namespace) -> Optional[Callable[[], str]]:
    if args.framework_version is None:
        return None
    version: str = args.framework_version
    return lambda: version


def handle_check(args: argparse.Namespace) -> int:
    """Run the gate. Exit REQUIREMENT_UNMET if any floor isn't met."""
    exit_code, config, logger = _load_and_configure(args, "check")
    if exit_code != SUCCESS:
        return exit_code

    if config is None:
        logger.error("A config file is required", extra={"command": "check"})
        return USER_ERROR

    try:
        gate = CompatibilityGate.from_config(
            config,
            notifier=LogNotifier(
                log_level=args.log_level or config.global_config.log_level,
                log_file=(
                    Path(config.global_config.log_file)
                    if config.global_config.log_file
                    else None
                ),
            ),
            framework_version=_framework_override(args),
        )
        gate.run()
    except ExtensionHalted as halted:
        logger.error(
            "Environment check failed",
            extra={"command": "check", "key": halted.error.key, "origin": halted.error.origin},
        )
        return REQUIREMENT_UNMET
    except ConfigError as err:
        logger.error(
            "Configuration error",
            extra={"command": "check", "error": str(err)},
        )
        return CONFIG_ERROR
    except Exception as err:
        logger.error(
            "Runtime error",
            extra={"command": "check", "error": str(err)},
            exc_info=True,
        )
        return RUNTIME_ERROR

    logger.info(
        "Environment check passed",
        extra={"command": "check", "extension": config.global_config.extension_name},
    )
    return SUCCESS


def handle_info(args: argparse.Namespace) -> int:
    """Log system info and, with a config, every requirement's current and required version."""
    exit_code, config, logger = _load_and_configure(args, "info")
    if exit_code != SUCCESS:
        return exit_code

    from envgate import __version__

    system_info = get_system_info()
    logger.info(
        "System information",
        extra={
            "envgate_version": __version__,
            "python_version": system_info.python_version,
            "implementation": system_info.implementation,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
            "config": args.config,
        },
    )

    if config is None:
        return SUCCESS

    try:
        registry = build_registry(config, framework_version=_framework_override(args))
        for descriptor in registry.specifications():
            logger.info(
                "Requirement",
                extra={
                    "key": descriptor.key,
                    "current": descriptor.current_value,
                    "required": descriptor.required_value,
                    "met": not is_unmet(
                        descriptor.required_value,
                        descriptor.current_value,
                        inclusive=config.requirements.equal_satisfies,
                    ),
                },
            )
    except ConfigError as err:
        logger.error(
            "Configuration error",
            extra={"command": "info", "error": str(err)},
        )
        return CONFIG_ERROR

    return SUCCESS
