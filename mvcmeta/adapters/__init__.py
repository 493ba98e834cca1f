"""External adapters for the mvcmeta toolkit.

This package contains all external dependencies (pydantic serialization,
resource files, the command line) and provides implementations of the
core port interfaces.

Adapter Organization:

- formatters/: Output formatters (JSON, plain text)
- localization/: String localizers (in-memory, JSON resource files)
- cli/: Command-line describe commands
"""
