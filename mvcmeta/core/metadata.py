"""Model metadata providers.

Metadata is read from the places Python models already declare it:

- `typing.Annotated` extras (DisplayAttribute, ValidationAttribute instances)
- dataclass `field(metadata={"display": ..., "validators": [...]})`
- pydantic `Field(title=...)` and Annotated metadata on model fields
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Annotated, Any, get_args, get_origin, get_type_hints

from .models import ModelMetadata
from .ports import ModelMetadataProvider
from .validation import ValidationAttribute

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplayAttribute:
    """Human-readable name and description of a property."""

    name: str | None = None
    description: str | None = None


def _split_annotated(hint: Any) -> tuple[Any, tuple[Any, ...]]:
    if get_origin(hint) is Annotated:
        base, *extras = get_args(hint)
        return base, tuple(extras)
    return hint, ()


def _is_pydantic_model(model_type: Any) -> bool:
    return isinstance(getattr(model_type, "model_fields", None), dict) and hasattr(
        model_type, "model_validate"
    )


class DefaultModelMetadataProvider(ModelMetadataProvider):
    """Reads display names and validators from model declarations.

    Results are cached per container type.
    """

    include_details = True

    def __init__(self) -> None:
        self._cache: dict[Any, list[ModelMetadata]] = {}

    def get_metadata_for_type(self, model_type: Any) -> ModelMetadata:
        return ModelMetadata(model_type=model_type)

    def get_metadata_for_properties(self, container_type: type) -> list[ModelMetadata]:
        cached = self._cache.get(container_type)
        if cached is None:
            if _is_pydantic_model(container_type):
                cached = self._pydantic_properties(container_type)
            else:
                cached = self._annotated_properties(container_type)
            self._cache[container_type] = cached
        return list(cached)

    def _annotated_properties(self, container_type: type) -> list[ModelMetadata]:
        try:
            hints = get_type_hints(container_type, include_extras=True)
        except (NameError, TypeError) as e:
            logger.warning(f"Could not resolve annotations of {container_type!r}: {e}")
            return []

        field_metadata: dict[str, Any] = {}
        if dataclasses.is_dataclass(container_type):
            field_metadata = {f.name: f.metadata for f in dataclasses.fields(container_type)}

        properties: list[ModelMetadata] = []
        for name, hint in hints.items():
            if name.startswith("_"):
                continue
            model_type, extras = _split_annotated(hint)
            extra_metadata = field_metadata.get(name, {})
            declarations = list(extras)
            if "display" in extra_metadata:
                declarations.append(extra_metadata["display"])
            declarations.extend(extra_metadata.get("validators", ()))
            properties.append(
                self._create_property(container_type, name, model_type, declarations, None)
            )
        return properties

    def _pydantic_properties(self, container_type: type) -> list[ModelMetadata]:
        properties: list[ModelMetadata] = []
        for name, field_info in container_type.model_fields.items():
            properties.append(
                self._create_property(
                    container_type,
                    name,
                    field_info.annotation,
                    list(field_info.metadata),
                    field_info.title,
                )
            )
        return properties

    def _create_property(
        self,
        container_type: type,
        name: str,
        model_type: Any,
        declarations: list[Any],
        title: str | None,
    ) -> ModelMetadata:
        if not self.include_details:
            return ModelMetadata(
                model_type=model_type,
                container_type=container_type,
                property_name=name,
            )

        display_name = title
        for declaration in declarations:
            if isinstance(declaration, DisplayAttribute) and declaration.name:
                display_name = declaration.name

        return ModelMetadata(
            model_type=model_type,
            container_type=container_type,
            property_name=name,
            display_name=display_name,
            validator_metadata=tuple(
                d for d in declarations if isinstance(d, ValidationAttribute)
            ),
        )


class EmptyModelMetadataProvider(DefaultModelMetadataProvider):
    """Exposes types and property names only; no display names or validators."""

    include_details = False
