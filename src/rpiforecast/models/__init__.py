"""Data model base classes for rpiforecast.

This package provides LenientModel, the base for the raw OpenWeather
payload blocks, which turns every missing or unusable field into its
zero value instead of failing validation.
"""

from rpiforecast.models.base import LenientModel

__all__ = ["LenientModel"]
