"""Port interfaces for the mvcmeta metadata toolkit.

These abstract base classes define the boundaries between core
metadata logic and the services it relies on. Implementations live in
the adapters/ package (and in core.metadata for model metadata).

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - OutputFormatter: Which media types a body type can be written as
   - ModelMetadataProvider: Display names and validators of model types
   - StringLocalizer: Localized validation messages

2. **Driving Ports** (the host framework calls into core)
   - ClientModelValidator: Emit client validation attributes for a field
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .media_types import MediaType, MediaTypeCollection
from .models import LocalizedString, ModelMetadata

if TYPE_CHECKING:
    from .client_validation import ClientModelValidationContext


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class OutputFormatter(ABC):
    """Port for serializing response bodies to a set of media types.

    Subclasses populate `supported_media_types` in their constructor and
    decide which body types they can write.
    """

    def __init__(self) -> None:
        self.supported_media_types = MediaTypeCollection()

    def can_write_type(self, object_type: Any) -> bool:
        """Whether this formatter can write bodies of `object_type`."""
        return True

    def get_supported_content_types(
        self, content_type: str | None, object_type: Any
    ) -> list[str] | None:
        """Media types this formatter can produce for `object_type`.

        Args:
            content_type: Requested content type, or None for any.
                May contain wildcards, e.g. "text/*".
            object_type: Body type to be written.

        Returns:
            None if the type cannot be written or none of the supported
            media types fall within `content_type`. Otherwise the matching
            media types (all of them when `content_type` is None). A
            wildcard media type such as "application/*+json" contributes
            `content_type` itself when the requested type falls within it.

        Raises:
            ValueError: If the formatter declares no supported media types.
        """
        if not self.supported_media_types:
            raise ValueError(
                f"{type(self).__name__} must declare at least one supported media type"
            )

        if not self.can_write_type(object_type):
            return None

        if content_type is None:
            return list(self.supported_media_types)

        requested = MediaType.parse(content_type)
        matching: list[str] = []
        for media_type in self.supported_media_types:
            supported = MediaType.parse(media_type)
            if supported.has_wildcard:
                # e.g. "application/*+json" admits "application/vnd.api+json"
                if requested.is_subset_of(supported):
                    match = content_type
                else:
                    continue
            elif supported.is_subset_of(requested):
                match = media_type
            else:
                continue
            if match not in matching:
                matching.append(match)
        return matching or None

    @abstractmethod
    def write(self, value: Any, declared_type: Any = None) -> bytes:
        """Serialize a response body.

        Args:
            value: The object to write.
            declared_type: Declared body type; defaults to type(value).

        Returns:
            The encoded body.

        Raises:
            ValueError: If the value cannot be written by this formatter.
        """


class ModelMetadataProvider(ABC):
    """Port for describing model types and their properties."""

    @abstractmethod
    def get_metadata_for_type(self, model_type: Any) -> ModelMetadata:
        """Metadata for a model type itself."""

    @abstractmethod
    def get_metadata_for_properties(self, container_type: type) -> list[ModelMetadata]:
        """Metadata for every declared property of `container_type`, in order."""

    def get_metadata_for_property(
        self, container_type: type, property_name: str
    ) -> ModelMetadata | None:
        """Metadata for one property, or None if it does not exist."""
        for metadata in self.get_metadata_for_properties(container_type):
            if metadata.property_name == property_name:
                return metadata
        return None


class StringLocalizer(ABC):
    """Port for looking up localized message templates."""

    @abstractmethod
    def localize(self, name: str, *arguments: Any) -> LocalizedString:
        """Look up `name` and format it with `arguments`.

        Returns:
            LocalizedString. When no resource exists the value is `name`
            formatted with the arguments and `resource_not_found` is True.
        """


# ============================================================================
# DRIVING PORTS (Host framework calls into core)
# ============================================================================


class ClientModelValidator(ABC):
    """Port for emitting client validation attributes for a field."""

    @abstractmethod
    def add_validation(self, context: "ClientModelValidationContext") -> None:
        """Add `data-val-*` entries to `context.attributes`.

        Existing entries are never overwritten.
        """
