"""Output formatter adapters.

Implementations describe and write response bodies:
- JSON (pydantic TypeAdapter)
- Plain text (str bodies only)
"""

from .json_formatter import JsonOutputFormatter
from .plain_text import PlainTextOutputFormatter

__all__ = ["JsonOutputFormatter", "PlainTextOutputFormatter"]
