"""Redirect and URL canonicalization for documentation sites."""

__version__ = "0.1.0"
