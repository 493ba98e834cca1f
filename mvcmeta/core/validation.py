"""Validation rules declared on model properties.

Rules are attached with typing.Annotated or dataclass field metadata:

    @dataclass
    class Registration:
        password: Annotated[str, RequiredAttribute(), StringLengthAttribute(100, minimum_length=8)]
        confirm: Annotated[str, CompareAttribute("password")]

Error messages come from, in order of precedence: a resource class
attribute (error_message_resource_type + error_message_resource_name),
an explicit error_message template, or the rule's default template.
Templates use positional `{0}`, `{1}` placeholders.
"""

import re
from typing import Any

_MISSING = object()


class ValidationAttribute:
    """Base class for validation rules."""

    default_error_message = "The field {0} is invalid."

    def __init__(
        self,
        error_message: str | None = None,
        error_message_resource_name: str | None = None,
        error_message_resource_type: type | None = None,
    ):
        self.error_message = error_message
        self.error_message_resource_name = error_message_resource_name
        self.error_message_resource_type = error_message_resource_type

    @property
    def error_message_string(self) -> str:
        """The message template after resource lookup.

        Raises:
            ValueError: If both a message and a resource name are set, if only
                one of resource type and name is set, or if the resource type
                has no string attribute of that name.
        """
        has_resource_name = bool(self.error_message_resource_name)
        has_resource_type = self.error_message_resource_type is not None

        if has_resource_name and self.error_message:
            raise ValueError(
                "Either error_message or error_message_resource_name must be set, but not both."
            )
        if has_resource_name != has_resource_type:
            raise ValueError(
                "Both error_message_resource_type and error_message_resource_name "
                "need to be set on this attribute."
            )

        if has_resource_name:
            return self._lookup_resource()

        return self.error_message or self.default_error_message

    def _lookup_resource(self) -> str:
        resource_type = self.error_message_resource_type
        name = self.error_message_resource_name
        if not hasattr(resource_type, name):
            raise ValueError(
                f"The resource type '{resource_type.__name__}' does not have an "
                f"accessible attribute named '{name}'."
            )
        value = getattr(resource_type, name)
        if not isinstance(value, str):
            raise ValueError(
                f"The attribute '{name}' on resource type '{resource_type.__name__}' "
                "is not a string."
            )
        return value

    def format_error_message(self, name: str) -> str:
        """Format the error message for a field display name."""
        return self.error_message_string.format(name)

    def is_valid(self, value: Any, instance: Any = None) -> bool:
        return True

    def get_validation_error(self, value: Any, instance: Any, display_name: str) -> str | None:
        """Error message if `value` fails the rule, else None."""
        if self.is_valid(value, instance):
            return None
        return self.format_error_message(display_name)


class RequiredAttribute(ValidationAttribute):
    """The value must be present; strings must not be blank."""

    default_error_message = "The {0} field is required."

    def __init__(self, allow_empty_strings: bool = False, **kwargs: Any):
        super().__init__(**kwargs)
        self.allow_empty_strings = allow_empty_strings

    def is_valid(self, value: Any, instance: Any = None) -> bool:
        if value is None:
            return False
        if isinstance(value, str) and not self.allow_empty_strings:
            return bool(value.strip())
        return True


class StringLengthAttribute(ValidationAttribute):
    """The string length must be within bounds."""

    default_error_message = "The field {0} must be a string with a maximum length of {1}."
    including_minimum_message = (
        "The field {0} must be a string with a minimum length of {2} "
        "and a maximum length of {1}."
    )

    def __init__(self, maximum_length: int, minimum_length: int = 0, **kwargs: Any):
        super().__init__(**kwargs)
        if maximum_length < 0:
            raise ValueError("maximum_length must be non-negative")
        if minimum_length > maximum_length:
            raise ValueError(
                f"minimum_length ({minimum_length}) cannot exceed maximum_length ({maximum_length})"
            )
        self.maximum_length = maximum_length
        self.minimum_length = minimum_length

    @property
    def error_message_string(self) -> str:
        template = super().error_message_string
        if (
            template == self.default_error_message
            and self.minimum_length != 0
        ):
            return self.including_minimum_message
        return template

    def format_error_message(self, name: str) -> str:
        return self.error_message_string.format(name, self.maximum_length, self.minimum_length)

    def is_valid(self, value: Any, instance: Any = None) -> bool:
        if value is None:
            return True
        if not isinstance(value, str):
            return False
        return self.minimum_length <= len(value) <= self.maximum_length


class RangeAttribute(ValidationAttribute):
    """A number within an inclusive range."""

    default_error_message = "The field {0} must be between {1} and {2}."

    def __init__(self, minimum: int | float, maximum: int | float, **kwargs: Any):
        super().__init__(**kwargs)
        if minimum > maximum:
            raise ValueError(f"minimum ({minimum}) cannot exceed maximum ({maximum})")
        self.minimum = minimum
        self.maximum = maximum

    def format_error_message(self, name: str) -> str:
        return self.error_message_string.format(name, self.minimum, self.maximum)

    def is_valid(self, value: Any, instance: Any = None) -> bool:
        if value is None or value == "":
            return True
        try:
            number = float(value)
        except (TypeError, ValueError):
            return False
        return self.minimum <= number <= self.maximum


class RegularExpressionAttribute(ValidationAttribute):
    """The whole string must match a pattern."""

    default_error_message = "The field {0} must match the regular expression '{1}'."

    def __init__(self, pattern: str, **kwargs: Any):
        super().__init__(**kwargs)
        if not pattern:
            raise ValueError("pattern must be a non-empty string")
        self.pattern = pattern
        self._regex = re.compile(pattern)

    def format_error_message(self, name: str) -> str:
        return self.error_message_string.format(name, self.pattern)

    def is_valid(self, value: Any, instance: Any = None) -> bool:
        if value is None or value == "":
            return True
        return self._regex.fullmatch(str(value)) is not None


class CompareAttribute(ValidationAttribute):
    """The value must equal another property of the same model."""

    default_error_message = "'{0}' and '{1}' do not match."
    missing_property_message = "Could not find a property named {0}."

    def __init__(self, other_property: str, **kwargs: Any):
        super().__init__(**kwargs)
        if not other_property:
            raise ValueError("other_property must be a non-empty string")
        self.other_property = other_property
        self.other_property_display_name: str | None = None

    def format_error_message(self, name: str, other_display_name: str | None = None) -> str:
        other = other_display_name or self.other_property_display_name or self.other_property
        return self.error_message_string.format(name, other)

    def is_valid(self, value: Any, instance: Any = None) -> bool:
        other = getattr(instance, self.other_property, _MISSING)
        if other is _MISSING:
            return False
        return value == other

    def get_validation_error(self, value: Any, instance: Any, display_name: str) -> str | None:
        if not hasattr(instance, self.other_property):
            return self.missing_property_message.format(self.other_property)
        return super().get_validation_error(value, instance, display_name)
