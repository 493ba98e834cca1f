"""In-memory string localizer.

Implements StringLocalizer over a mapping of message keys to templates.
"""

from collections.abc import Mapping
from typing import Any

from mvcmeta.core.models import LocalizedString
from mvcmeta.core.ports import StringLocalizer


def format_template(template: str, arguments: tuple[Any, ...]) -> str:
    """Format a positional template; templates without arguments are returned as-is."""
    if not arguments:
        return template
    return template.format(*arguments)


class DictionaryStringLocalizer(StringLocalizer):
    """Looks up templates in a fixed mapping."""

    def __init__(self, templates: Mapping[str, str]):
        self.templates = dict(templates)

    def localize(self, name: str, *arguments: Any) -> LocalizedString:
        template = self.templates.get(name)
        if template is None:
            return LocalizedString(name, format_template(name, arguments), resource_not_found=True)
        return LocalizedString(name, format_template(template, arguments))
