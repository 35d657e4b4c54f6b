"""Trace symbolic link chains down to their canonical paths."""

__version__ = "0.1.0"
