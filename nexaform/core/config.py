"""
NexaForm Configuration Management
=================================

Layered configuration for form defaults.

Configuration Loading Priority (highest to lowest):
1. Runtime overrides (config.set)
2. Environment variables (NEXAFORM_*)
3. Application sources (config.add_source)
4. Package defaults

Environment variable names map to dotted keys by lower-casing and
turning "_" into ".":

    NEXAFORM_FORM_LOCALE=PL        ->  form.locale = "PL"
    NEXAFORM_FORM_LINEBREAK=false  ->  form.linebreak = False

Example:
    config = get_config()
    config.get("form.theme")               # "plain"
    config.get("form.missing", "default")  # "default"
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, TypeVar, Union

from nexaform.utils.logger import Logger, configure_logging

T = TypeVar("T")

ENV_PREFIX = "NEXAFORM_"

DEFAULTS: Dict[str, Any] = {
    "form": {
        "locale": "EN",
        "theme": "plain",
        "linebreak": True,
        "method": "POST",
    },
    "log": {
        "level": "INFO",
        "format": "text",
    },
}


@dataclass
class ConfigSource:
    """Represents a configuration source with priority."""
    name: str
    data: Dict[str, Any]
    priority: int = 0


class Config:
    """
    Configuration container.

    Provides hierarchical access with dot notation and typed getters.

    Example:
        config = Config()
        config.set("form.theme", "bootstrap")

        config.get("form.theme")              # "bootstrap"
        config.get_bool("form.linebreak")     # True
    """

    def __init__(self, defaults: Optional[Mapping[str, Any]] = None, environ: Optional[Mapping[str, str]] = None) -> None:
        self._sources: List[ConfigSource] = []
        self._cache: Dict[str, Any] = {}
        self._merged: Dict[str, Any] = {}
        self._dirty = True

        self.add_source("defaults", json.loads(json.dumps(defaults if defaults is not None else DEFAULTS)), priority=0)
        self._load_env_overrides(os.environ if environ is None else environ)

    def _load_env_overrides(self, environ: Mapping[str, str]) -> None:
        """Load overrides from NEXAFORM_* environment variables."""
        overrides: Dict[str, Any] = {}

        for key, value in environ.items():
            if key.startswith(ENV_PREFIX):
                config_key = key[len(ENV_PREFIX):].lower().replace("_", ".")
                overrides[config_key] = self._parse_env_value(value)

        if overrides:
            self.add_source("env_vars", self._unflatten(overrides), priority=100)

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to appropriate type."""
        if value.lower() in ("true", "yes", "on"):
            return True
        if value.lower() in ("false", "no", "off"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        if value.startswith(("{", "[")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _unflatten(self, flat: Dict[str, Any]) -> Dict[str, Any]:
        """Convert flat dot-notation keys to nested dict."""
        result: Dict[str, Any] = {}

        for key, value in flat.items():
            parts = key.split(".")
            current = result

            for part in parts[:-1]:
                current = current.setdefault(part, {})

            current[parts[-1]] = value

        return result

    def add_source(
        self,
        name: str,
        data: Dict[str, Any],
        priority: int = 10,
    ) -> None:
        """Add a configuration source."""
        self._sources.append(ConfigSource(name=name, data=data, priority=priority))
        self._dirty = True
        self._cache.clear()

    def _merge(self) -> None:
        """Merge all sources into single configuration."""
        if not self._dirty:
            return

        self._merged = {}
        for source in sorted(self._sources, key=lambda s: s.priority):
            self._deep_merge(self._merged, source.data)

        self._dirty = False
        self._cache.clear()

    def _deep_merge(self, base: Dict, override: Dict) -> None:
        """Deep merge override into base."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            elif isinstance(value, dict):
                base[key] = {}
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: T = None) -> Union[Any, T]:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "form.locale")
            default: Default value if key not found
        """
        self._merge()

        if key in self._cache:
            return self._cache[key]

        current: Any = self._merged

        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        self._cache[key] = current
        return current

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get configuration value as boolean."""
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "yes", "1", "on")
        return bool(value)

    def get_str(self, key: str, default: str = "") -> str:
        """Get configuration value as string."""
        value = self.get(key, default)
        return default if value is None else str(value)

    def set(self, key: str, value: Any) -> None:
        """
        Set a runtime configuration value.

        Runtime values have the highest priority.
        """
        runtime = next((s for s in self._sources if s.name == "runtime"), None)

        if runtime is None:
            runtime = ConfigSource(name="runtime", data={}, priority=1000)
            self._sources.append(runtime)

        parts = key.split(".")
        current = runtime.data

        for part in parts[:-1]:
            current = current.setdefault(part, {})

        current[parts[-1]] = value
        self._dirty = True
        self._cache.clear()

    def has(self, key: str) -> bool:
        """Check if configuration key exists."""
        return self.get(key) is not None

    def section(self, prefix: str) -> Dict[str, Any]:
        """Get all values under a prefix."""
        value = self.get(prefix)
        return dict(value) if isinstance(value, dict) else {}

    def __getitem__(self, key: str) -> Any:
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def apply_logging(self) -> "Logger":
        """Configure the package logger from the log.* keys."""
        return configure_logging(
            level=self.get_str("log.level", "INFO"),
            format=self.get_str("log.format", "text"),
            log_file=self.get("log.file"),
        )


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Drop the global instance; the next get_config() re-reads the environment."""
    global _config
    _config = None
