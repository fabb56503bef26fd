"""Touchscreen weather forecast display: polling pipeline and helpers."""

__version__ = "0.1.0"
