"""Build search index records from a documentation source tree."""

__version__ = "0.1.0"
