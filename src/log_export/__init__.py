"""Locate, bundle and clean up the current component logs."""

__version__ = "0.1.0"
