"""transdiff — find missing and stale translations in documentation trees."""

__version__ = "0.1.0"
