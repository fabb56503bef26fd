"""Application settings management.

This package provides:
- ConfigStore: sectioned key/value view over config.yaml
- UserSettings: typed settings built from a ConfigStore
"""

from rpiforecast.settings.store import ConfigStore
from rpiforecast.settings.user import LoggingSettings, UserSettings, WeatherSettings

__all__ = ["ConfigStore", "LoggingSettings", "UserSettings", "WeatherSettings"]
