"""Fake StringLocalizer implementation for testing."""

from typing import Any

from mvcmeta.core.models import LocalizedString
from mvcmeta.core.ports import StringLocalizer


class FakeStringLocalizer(StringLocalizer):
    """Localizer with canned responses keyed by (name, arguments).

    Captures all lookups for test assertions. Unknown lookups return the
    name unchanged with resource_not_found set.
    """

    def __init__(self):
        """Initialize with no canned responses."""
        self.responses: dict[tuple[str, tuple[Any, ...]], str] = {}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def setup(self, name: str, arguments: tuple[Any, ...], value: str) -> None:
        """Return `value` when `name` is looked up with exactly `arguments`."""
        self.responses[(name, tuple(arguments))] = value

    def localize(self, name: str, *arguments: Any) -> LocalizedString:
        self.calls.append((name, arguments))
        value = self.responses.get((name, arguments))
        if value is None:
            return LocalizedString(name, name, resource_not_found=True)
        return LocalizedString(name, value)

    def get_last_call(self) -> tuple[str, tuple[Any, ...]] | None:
        """Get the most recent lookup, if any."""
        if self.calls:
            return self.calls[-1]
        return None
