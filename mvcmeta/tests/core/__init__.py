"""Unit tests for core metadata logic.

These tests use fake port implementations instead of the real
formatter and localizer adapters.
"""
