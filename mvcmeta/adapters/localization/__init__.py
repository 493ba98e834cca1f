"""String localizer adapters.

Implementations supply localized validation messages:
- In-memory dictionary of templates
- Per-culture JSON resource files
"""

from .dictionary import DictionaryStringLocalizer
from .json_resources import JsonResourceStringLocalizer

__all__ = ["DictionaryStringLocalizer", "JsonResourceStringLocalizer"]
