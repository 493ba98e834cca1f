"""mvcmeta: API response and client validation metadata for MVC controllers."""

__version__ = "0.1.0"
