"""Catalog model, options, type overrides, SQLite type mapping, naming and query modelling for generating Go database code."""

__version__ = "0.1.0"
__all__ = ["__version__"]