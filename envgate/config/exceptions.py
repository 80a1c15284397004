# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Custom exceptions for the configuration system.

We keep these separate so that the CLI and the gate can catch config-specific
failures without importing the entire config machinery. A requirement that
cannot be evaluated (missing or unparseable version) is a configuration
problem, never a version mismatch, so it lives here too.
"""


class ConfigError(Exception):
    """Base for all configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when a config file cannot be read from disk or parsed as YAML."""


class ConfigValidationError(ConfigError):
    """
    Raised when a config file parses fine but fails schema validation.
    This covers missing required fields, type mismatches, unknown keys and
    version strings that cannot be parsed.
    """


class RequirementConfigError(ConfigError):
    """Raised when a requirement descriptor is missing its current or required value."""


class InvalidVersionError(RequirementConfigError):
    """Raised when a version string cannot be parsed for comparison."""
