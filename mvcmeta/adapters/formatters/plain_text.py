"""Plain text output formatter.

Implements OutputFormatter for string bodies only.
"""

from typing import Any

from mvcmeta.core.ports import OutputFormatter


class PlainTextOutputFormatter(OutputFormatter):
    """Writes string response bodies as text/plain."""

    def __init__(self, encoding: str = "utf-8"):
        super().__init__()
        self.encoding = encoding
        self.supported_media_types.append("text/plain")

    def can_write_type(self, object_type: Any) -> bool:
        return isinstance(object_type, type) and issubclass(object_type, str)

    def write(self, value: Any, declared_type: Any = None) -> bytes:
        if not isinstance(value, str):
            raise ValueError(
                f"PlainTextOutputFormatter can only write str, got {type(value).__name__}"
            )
        return value.encode(self.encoding)
