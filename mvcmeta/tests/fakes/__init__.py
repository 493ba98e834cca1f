"""Fake implementations of core ports for testing.

These in-memory implementations allow core metadata logic to be tested
without the real adapters:

- FakeOutputFormatter: Configurable media types, recorded requests
- FakeStringLocalizer: Canned localized messages, recorded lookups
"""

from .formatters import FakeOutputFormatter
from .localization import FakeStringLocalizer

__all__ = [
    "FakeOutputFormatter",
    "FakeStringLocalizer",
]
