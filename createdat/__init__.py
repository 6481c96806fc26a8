"""Rename files after the date they were created."""

__version__ = "0.3.0"
