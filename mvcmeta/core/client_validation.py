"""Client-side validation metadata.

Adapters turn validation rules into the `data-val-*` HTML attributes read
by browser-side validation scripts. Adapters only add entries: a key that
is already present in the attribute dictionary is left untouched.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from .models import ModelMetadata
from .ports import ClientModelValidator, ModelMetadataProvider, StringLocalizer
from .validation import (
    CompareAttribute,
    RangeAttribute,
    RegularExpressionAttribute,
    RequiredAttribute,
    StringLengthAttribute,
    ValidationAttribute,
)

logger = logging.getLogger(__name__)


@dataclass
class ClientModelValidationContext:
    """Everything an adapter needs to render one field's attributes."""

    action_context: Any
    model_metadata: ModelMetadata
    metadata_provider: ModelMetadataProvider
    attributes: dict[str, str] = field(default_factory=dict)


def merge_attribute(attributes: dict[str, str], key: str, value: str) -> bool:
    """Add `key` unless it is already present. First write wins.

    Returns:
        True if the entry was added.
    """
    if key in attributes:
        return False
    attributes[key] = value
    return True


class AttributeAdapterBase(ClientModelValidator):
    """Shared message handling for validation attribute adapters."""

    def __init__(self, attribute: ValidationAttribute, string_localizer: StringLocalizer | None):
        self.attribute = attribute
        self._string_localizer = string_localizer

    def get_error_message(self, model_metadata: ModelMetadata, *arguments: Any) -> str:
        """Localized message when possible, else the attribute's own message.

        The localizer is used only for an explicit error_message that is not
        backed by a resource class; the message is the lookup key.
        """
        attribute = self.attribute
        if (
            self._string_localizer is not None
            and attribute.error_message
            and not attribute.error_message_resource_name
            and attribute.error_message_resource_type is None
        ):
            return self._string_localizer.localize(attribute.error_message, *arguments).value

        return self.format_error_message(model_metadata, *arguments)

    def format_error_message(self, model_metadata: ModelMetadata, *arguments: Any) -> str:
        return self.attribute.format_error_message(model_metadata.get_display_name())

    def get_context_error_message(self, context: ClientModelValidationContext) -> str:
        metadata = context.model_metadata
        return self.get_error_message(metadata, metadata.get_display_name())


class CompareAttributeAdapter(AttributeAdapterBase):
    """Renders `data-val-equalto` for a field compared with another field."""

    attribute: CompareAttribute

    def __init__(self, attribute: CompareAttribute, string_localizer: StringLocalizer | None):
        super().__init__(attribute, string_localizer)
        self._other_property = "*." + attribute.other_property

    def add_validation(self, context: ClientModelValidationContext) -> None:
        merge_attribute(context.attributes, "data-val", "true")
        merge_attribute(context.attributes, "data-val-equalto", self.get_context_error_message(context))
        merge_attribute(context.attributes, "data-val-equalto-other", self._other_property)

    def get_context_error_message(self, context: ClientModelValidationContext) -> str:
        display_name = context.model_metadata.get_display_name()
        other_display_name = self.get_other_property_display_name(context)
        return self.get_error_message(context.model_metadata, display_name, other_display_name)

    def format_error_message(self, model_metadata: ModelMetadata, *arguments: Any) -> str:
        display_name, other_display_name = arguments
        return self.attribute.format_error_message(display_name, other_display_name)

    def get_other_property_display_name(self, context: ClientModelValidationContext) -> str:
        """Display name of the compared property, else its raw name."""
        attribute = self.attribute
        if attribute.other_property_display_name:
            return attribute.other_property_display_name

        container_type = context.model_metadata.container_type
        if container_type is not None:
            other = context.metadata_provider.get_metadata_for_property(
                container_type, attribute.other_property
            )
            if other is not None:
                return other.get_display_name()

        return attribute.other_property


class RequiredAttributeAdapter(AttributeAdapterBase):
    """Renders `data-val-required`."""

    def add_validation(self, context: ClientModelValidationContext) -> None:
        merge_attribute(context.attributes, "data-val", "true")
        merge_attribute(context.attributes, "data-val-required", self.get_context_error_message(context))


class StringLengthAttributeAdapter(AttributeAdapterBase):
    """Renders `data-val-length` with its maximum and non-zero minimum."""

    attribute: StringLengthAttribute

    def add_validation(self, context: ClientModelValidationContext) -> None:
        attribute = self.attribute
        merge_attribute(context.attributes, "data-val", "true")
        merge_attribute(context.attributes, "data-val-length", self.get_context_error_message(context))
        merge_attribute(context.attributes, "data-val-length-max", str(attribute.maximum_length))
        if attribute.minimum_length != 0:
            merge_attribute(context.attributes, "data-val-length-min", str(attribute.minimum_length))

    def get_context_error_message(self, context: ClientModelValidationContext) -> str:
        metadata = context.model_metadata
        return self.get_error_message(
            metadata,
            metadata.get_display_name(),
            self.attribute.maximum_length,
            self.attribute.minimum_length,
        )


class RangeAttributeAdapter(AttributeAdapterBase):
    """Renders `data-val-range` with its bounds."""

    attribute: RangeAttribute

    def add_validation(self, context: ClientModelValidationContext) -> None:
        merge_attribute(context.attributes, "data-val", "true")
        merge_attribute(context.attributes, "data-val-range", self.get_context_error_message(context))
        merge_attribute(context.attributes, "data-val-range-min", str(self.attribute.minimum))
        merge_attribute(context.attributes, "data-val-range-max", str(self.attribute.maximum))

    def get_context_error_message(self, context: ClientModelValidationContext) -> str:
        metadata = context.model_metadata
        return self.get_error_message(
            metadata, metadata.get_display_name(), self.attribute.minimum, self.attribute.maximum
        )


class RegularExpressionAttributeAdapter(AttributeAdapterBase):
    """Renders `data-val-regex` with its pattern."""

    attribute: RegularExpressionAttribute

    def add_validation(self, context: ClientModelValidationContext) -> None:
        merge_attribute(context.attributes, "data-val", "true")
        merge_attribute(context.attributes, "data-val-regex", self.get_context_error_message(context))
        merge_attribute(context.attributes, "data-val-regex-pattern", self.attribute.pattern)

    def get_context_error_message(self, context: ClientModelValidationContext) -> str:
        metadata = context.model_metadata
        return self.get_error_message(metadata, metadata.get_display_name(), self.attribute.pattern)


class ValidationAttributeAdapterProvider:
    """Chooses the client adapter for a validation attribute."""

    def __init__(self) -> None:
        self._adapters: dict[type, type[AttributeAdapterBase]] = {
            CompareAttribute: CompareAttributeAdapter,
            RequiredAttribute: RequiredAttributeAdapter,
            StringLengthAttribute: StringLengthAttributeAdapter,
            RangeAttribute: RangeAttributeAdapter,
            RegularExpressionAttribute: RegularExpressionAttributeAdapter,
        }

    def register(
        self, attribute_type: type[ValidationAttribute], adapter_type: type[AttributeAdapterBase]
    ) -> None:
        """Use `adapter_type` for attributes of `attribute_type` and its subclasses."""
        self._adapters[attribute_type] = adapter_type

    def get_attribute_adapter(
        self, attribute: ValidationAttribute, string_localizer: StringLocalizer | None
    ) -> AttributeAdapterBase | None:
        """Adapter for `attribute`, or None if it has no client-side form."""
        for klass in type(attribute).__mro__:
            adapter_type = self._adapters.get(klass)
            if adapter_type is not None:
                return adapter_type(attribute, string_localizer)
        return None


def render_client_validation(
    model_metadata: ModelMetadata,
    metadata_provider: ModelMetadataProvider,
    string_localizer: StringLocalizer | None = None,
    adapter_provider: ValidationAttributeAdapterProvider | None = None,
    action_context: Any = None,
) -> dict[str, str]:
    """Run every client adapter for a property and return its attributes."""
    adapter_provider = adapter_provider or ValidationAttributeAdapterProvider()
    context = ClientModelValidationContext(
        action_context=action_context,
        model_metadata=model_metadata,
        metadata_provider=metadata_provider,
    )
    for attribute in model_metadata.validator_metadata:
        adapter = adapter_provider.get_attribute_adapter(attribute, string_localizer)
        if adapter is None:
            logger.debug(
                f"No client adapter for {type(attribute).__name__} on "
                f"{model_metadata.get_display_name()}"
            )
            continue
        adapter.add_validation(context)
    return context.attributes
