# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The requirement descriptor — one compatibility dimension, ready to compare.

A descriptor pairs what the environment is running (current_value) with the
floor the extension needs (required_value), plus the text a user sees when the
floor is not met. Descriptors are frozen; hooks that want to change one build
a new one (dataclasses.replace or RequirementDescriptor.for_version).
"""

from dataclasses import dataclass

from envgate.config.exceptions import RequirementConfigError

TITLE_TEMPLATE = "{label} Version Too Low"
MESSAGE_TEMPLATE = (
    "{label} {required} or higher is required. You are currently running {label} {current}."
)


@dataclass(frozen=True)
class RequirementDescriptor:
    """
    A single requirement dimension.

    Attributes:
        key: Dimension identifier, e.g. "python" or "framework".
        current_value: Version observed in the running environment.
        required_value: Minimum acceptable version.
        title: Short label for the failure, e.g. "Python Version Too Low".
        message: Full explanation with both versions filled in.

    Raises:
        RequirementConfigError: If current_value or required_value is missing.
    """

    key: str
    current_value: str
    required_value: str
    title: str
    message: str

    def __post_init__(self) -> None:
        for field_name in ("current_value", "required_value"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                raise RequirementConfigError(
                    f"Requirement '{self.key}' has no {field_name.replace('_', ' ')} "
                    f"(got {value!r})"
                )

    @classmethod
    def for_version(
        cls,
        key: str,
        label: str,
        current: str,
        required: str,
    ) -> "RequirementDescriptor":
        """
        Build a descriptor with the standard "<label> Version Too Low" wording.

        This is what the built-in dimensions use, and what hooks should use to
        add dimensions of the same shape.
        """
        return cls(
            key=key,
            current_value=current,
            required_value=required,
            title=TITLE_TEMPLATE.format(label=label),
            message=MESSAGE_TEMPLATE.format(label=label, required=required, current=current),
        )
