"""Tests for adapter implementations.

Formatters, localizers and CLI commands are exercised against
real pydantic serialization and temporary resource files.
"""
