"""Sectioned key/value configuration store.

Configuration files are YAML mappings of sections to keys::

    Weather:
      OpenWeatherApiKey: ${OWM_API_KEY}
      Latitude: 48.400002

and are addressed as ``"Section/Key"`` (``"Weather/Latitude"``). Lookups of
missing keys never fail: they log a warning and return the caller's
default.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any, ClassVar, Final

import yaml
from dotenv import load_dotenv

logger: Final = logging.getLogger(__name__)

# Load environment variables from .env file(s)
load_dotenv()

_TRUE_STRINGS: Final = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS: Final = frozenset({"0", "false", "no", "off", ""})


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


def _flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}/{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, name))
        else:
            flat[name] = value
    return flat


class ConfigStore:
    """Read-only view over a flattened configuration mapping."""

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("config.yaml"),
        Path("~/.config/rpiforecast/config.yaml").expanduser(),
        Path("/etc/rpiforecast/config.yaml"),
    ]
    ENV_VAR: ClassVar[str] = "RPIFORECAST_CONFIG"

    def __init__(self, values: Mapping[str, Any] | None = None, source: Path | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})
        self.source = source

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None, source: Path | None = None) -> ConfigStore:
        """Build a store from a nested section mapping."""
        return cls(_flatten(data or {}), source)

    @classmethod
    def resolve_path(cls, path: Path | None = None) -> Path:
        """Find the configuration file to use.

        Args:
            path: Explicit path, wins over everything else

        Returns:
            Path of an existing configuration file

        Raises:
            FileNotFoundError: If no config file is found
        """
        if path is not None:
            if not path.exists():
                raise FileNotFoundError(f"Config file not found: {path}")
            return path

        # Check environment variable first
        env_path = os.environ.get(cls.ENV_VAR)
        if env_path:
            path = Path(env_path)
            if not path.exists():
                raise FileNotFoundError(f"Config file from {cls.ENV_VAR} not found: {path}")
            return path

        for default_path in cls.DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                return default_path

        raise FileNotFoundError(
            f"No configuration file found. Create config.yaml or set {cls.ENV_VAR}."
        )

    @classmethod
    def load(cls, path: Path | None = None) -> ConfigStore:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Populated ConfigStore

        Raises:
            FileNotFoundError: If no config file is found
            RuntimeError: If the config file cannot be parsed
        """
        path = cls.resolve_path(path)

        try:
            raw = _interpolate_env(path.read_text(encoding="utf-8"))
            data = yaml.safe_load(raw)
        except (OSError, yaml.YAMLError) as exc:
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        if data is not None and not isinstance(data, Mapping):
            raise RuntimeError(f"Config file {path} must contain a mapping of sections")

        logger.info("Loaded configuration from %s", path)
        return cls.from_mapping(data, source=path)

    # ---- lookups ----
    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def get_value(self, key: str, default: Any = "") -> Any:
        """Get the raw value stored under ``key``.

        Args:
            key: ``"Section/Key"`` path
            default: Value returned when the key is missing

        Returns:
            The stored value, or ``default`` (logged as a warning)
        """
        if key not in self._values:
            logger.warning("Config key not found: %s", key)
            return default
        return self._values[key]

    def get_str(self, key: str, default: str = "") -> str:
        value = self.get_value(key, default)
        return default if value is None else str(value)

    def get_float(self, key: str, default: float = 0.0) -> float:
        value = self.get_value(key, default)
        try:
            return float(value)
        except (TypeError, ValueError):
            logger.warning("Config key %s is not a number: %r", key, value)
            return default

    def get_int(self, key: str, default: int = 0) -> int:
        value = self.get_value(key, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("Config key %s is not an integer: %r", key, value)
            return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get_value(key, default)
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        logger.warning("Config key %s is not a boolean: %r", key, value)
        return default
