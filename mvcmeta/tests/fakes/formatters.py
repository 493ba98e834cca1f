"""Fake OutputFormatter implementation for testing."""

from typing import Any

from mvcmeta.core.ports import OutputFormatter


class FakeOutputFormatter(OutputFormatter):
    """Output formatter with configurable media types and writable types.

    Records every get_supported_content_types call for test assertions.
    """

    def __init__(
        self,
        media_types: tuple[str, ...] = ("application/json",),
        writable_types: tuple[type, ...] | None = None,
    ):
        """Initialize the formatter.

        Args:
            media_types: Supported media types.
            writable_types: Types this formatter can write; None means all.
        """
        super().__init__()
        self.supported_media_types.extend(media_types)
        self.writable_types = writable_types
        self.requests: list[tuple[str | None, Any]] = []

    def can_write_type(self, object_type: Any) -> bool:
        if self.writable_types is None:
            return True
        return isinstance(object_type, type) and issubclass(object_type, self.writable_types)

    def get_supported_content_types(
        self, content_type: str | None, object_type: Any
    ) -> list[str] | None:
        self.requests.append((content_type, object_type))
        return super().get_supported_content_types(content_type, object_type)

    def write(self, value: Any, declared_type: Any = None) -> bytes:
        return repr(value).encode()
