"""JSON output formatter.

Implements OutputFormatter with pydantic's TypeAdapter, so dataclasses,
pydantic models, and standard containers are all serialized the same way.
"""

import logging
from typing import Any

from pydantic import PydanticSchemaGenerationError, TypeAdapter

from mvcmeta.core.models import VOID
from mvcmeta.core.ports import OutputFormatter

logger = logging.getLogger(__name__)


class JsonOutputFormatter(OutputFormatter):
    """Writes response bodies as JSON."""

    def __init__(self, indent: int | None = None):
        """Initialize JSON output formatter.

        Args:
            indent: Indentation for pretty-printed output, None for compact.
        """
        super().__init__()
        self.indent = indent
        self.supported_media_types.extend(
            ["application/json", "text/json", "application/*+json"]
        )
        self._adapters: dict[Any, TypeAdapter] = {}

    def can_write_type(self, object_type: Any) -> bool:
        return object_type is not VOID

    def write(self, value: Any, declared_type: Any = None) -> bytes:
        object_type = declared_type if declared_type is not None else type(value)
        try:
            adapter = self._get_adapter(object_type)
            return adapter.dump_json(value, indent=self.indent)
        except PydanticSchemaGenerationError as e:
            logger.error(f"Cannot serialize {object_type!r} as JSON: {e}")
            raise ValueError(f"Type {object_type!r} cannot be written as JSON") from e

    def _get_adapter(self, object_type: Any) -> TypeAdapter:
        adapter = self._adapters.get(object_type)
        if adapter is None:
            adapter = TypeAdapter(object_type)
            self._adapters[object_type] = adapter
        return adapter
