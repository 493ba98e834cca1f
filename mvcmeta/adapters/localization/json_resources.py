"""JSON resource file localizer.

Implements StringLocalizer over per-culture JSON files:

    resources/
        ValidationMessages.json         (neutral)
        ValidationMessages.fr.json
        ValidationMessages.fr-CA.json

Lookups try the most specific culture first ("fr-CA"), then its parent
cultures ("fr"), then the neutral file.
"""

import json
import logging
from pathlib import Path
from typing import Any

from mvcmeta.core.models import LocalizedString
from mvcmeta.core.ports import StringLocalizer

from .dictionary import format_template

logger = logging.getLogger(__name__)


def culture_fallbacks(culture: str | None) -> list[str | None]:
    """'fr-CA' -> ['fr-CA', 'fr', None]."""
    chain: list[str | None] = []
    if culture:
        parts = culture.replace("_", "-").split("-")
        for end in range(len(parts), 0, -1):
            chain.append("-".join(parts[:end]))
    chain.append(None)
    return chain


class JsonResourceStringLocalizer(StringLocalizer):
    """Looks up templates in `<base_name>[.<culture>].json` files.

    Files are read lazily and cached. A missing file is treated as empty.
    """

    def __init__(self, resources_path: str | Path, base_name: str, culture: str | None = None):
        """Initialize the localizer.

        Args:
            resources_path: Directory holding the resource files.
            base_name: File name stem shared by all cultures.
            culture: Culture name such as "fr-CA"; None for neutral only.
        """
        self.resources_path = Path(resources_path)
        self.base_name = base_name
        self.culture = culture
        self._resources: dict[str | None, dict[str, str]] = {}

    def localize(self, name: str, *arguments: Any) -> LocalizedString:
        for culture in culture_fallbacks(self.culture):
            template = self._load(culture).get(name)
            if template is not None:
                return LocalizedString(name, format_template(template, arguments))

        logger.debug(f"No resource '{name}' for culture {self.culture or 'neutral'}")
        return LocalizedString(name, format_template(name, arguments), resource_not_found=True)

    def with_culture(self, culture: str | None) -> "JsonResourceStringLocalizer":
        """A localizer over the same resources for another culture."""
        return JsonResourceStringLocalizer(self.resources_path, self.base_name, culture)

    def _resource_file(self, culture: str | None) -> Path:
        if culture is None:
            return self.resources_path / f"{self.base_name}.json"
        return self.resources_path / f"{self.base_name}.{culture}.json"

    def _load(self, culture: str | None) -> dict[str, str]:
        if culture in self._resources:
            return self._resources[culture]

        path = self._resource_file(culture)
        resources: dict[str, str] = {}
        if path.is_file():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                logger.error(f"Invalid resource file {path}: {e}")
                raise ValueError(f"Invalid resource file {path}: {e}") from e
            if not isinstance(data, dict):
                raise ValueError(f"Resource file {path} must contain a JSON object")
            resources = {str(key): str(value) for key, value in data.items()}

        self._resources[culture] = resources
        return resources
