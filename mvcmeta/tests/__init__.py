"""Test suite for the mvcmeta toolkit.

Organized into three categories:

1. core/: Unit tests for core metadata logic
   - No external dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Tests for adapter implementations
   - Formatters, localizers and CLI commands
   - Uses temporary directories for resource files

3. fakes/: Port implementations for testing
   - In-memory implementations of OutputFormatter, StringLocalizer
   - Used by core unit tests
"""
