"""
Formflow Configuration
======================

Layered configuration with dot-notation access.

Loading priority (highest to lowest):
1. Runtime overrides (`Config.set`)
2. Environment variables (FORMFLOW_*)
3. Configuration file (`Config.load_file`)
4. Built-in defaults

Environment variable names map to keys by dropping the prefix,
lowercasing, and using a double underscore between levels:

    FORMFLOW_FORM__REQUIRED_MESSAGE  ->  form.required_message
    FORMFLOW_LOGGING__LEVEL          ->  logging.level

Example:
    config = get_config()
    config.get("form.required_message")  # "This field is required"
    config.set("logging.level", "DEBUG")
"""

from __future__ import annotations

import importlib.util
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, TypeVar, Union

T = TypeVar("T")

ENV_PREFIX = "FORMFLOW_"

DEFAULTS: Dict[str, Any] = {
    "form": {
        "required_message": "This field is required",
    },
    "logging": {
        "level": "INFO",
        "format": "text",
        "colors": True,
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

    Example:
        config = Config()
        config.set("form.required_message", "Please fill this in")

        config.get("form.required_message")     # "Please fill this in"
        config.get("form.missing", "default")   # "default"
    """

    def __init__(self, defaults: Optional[Mapping[str, Any]] = None) -> None:
        self._sources: List[ConfigSource] = []
        self._merged: Dict[str, Any] = {}
        self._dirty = True

        if defaults:
            self.add_source("defaults", _deep_copy(defaults), priority=0)

    def load_file(self, path: Union[str, Path]) -> None:
        """
        Load configuration from a Python or JSON file.

        A Python file provides a module-level ``config`` dict, or
        its public module variables are used.
        """
        path = Path(path)
        if not path.exists():
            return

        if path.suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        else:
            data = self._load_python_config(path)

        self.add_source(f"file:{path.name}", data, priority=10)

    def _load_python_config(self, path: Path) -> Dict[str, Any]:
        """Load configuration from Python file."""
        spec = importlib.util.spec_from_file_location("formflow_config", path)
        if spec is None or spec.loader is None:
            return {}

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        if hasattr(module, "config"):
            return module.config

        return {
            key: value
            for key, value in vars(module).items()
            if not key.startswith("_")
        }

    def load_env(self, environ: Optional[Mapping[str, str]] = None) -> None:
        """Load overrides from FORMFLOW_* environment variables.

        Values are coerced to bool, int or JSON unless the key already
        holds a string, in which case the raw text is kept.
        """
        environ = os.environ if environ is None else environ
        overrides: Dict[str, Any] = {}

        for key, value in environ.items():
            if key.startswith(ENV_PREFIX):
                config_key = key[len(ENV_PREFIX):].lower().replace("__", ".")
                if isinstance(self.get(config_key), str):
                    overrides[config_key] = value
                else:
                    overrides[config_key] = self._parse_env_value(value)

        if overrides:
            self.add_source("env_vars", self._unflatten(overrides), priority=100)

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to appropriate type."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
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
        priority: int = 0,
    ) -> None:
        """Add a configuration source."""
        self._sources.append(ConfigSource(name=name, data=data, priority=priority))
        self._dirty = True

    def _merge(self) -> None:
        """Merge all sources into single configuration."""
        if not self._dirty:
            return

        # Lower priority first, so higher overrides
        self._merged = {}
        for source in sorted(self._sources, key=lambda s: s.priority):
            _deep_merge(self._merged, source.data)

        self._dirty = False

    def get(self, key: str, default: T = None) -> Union[Any, T]:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "logging.level")
            default: Default value if key not found
        """
        self._merge()

        current: Any = self._merged
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get configuration value as boolean."""
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "yes", "1")
        return bool(value)

    def get_str(self, key: str, default: str = "") -> str:
        """Get configuration value as string."""
        value = self.get(key, default)
        return value if isinstance(value, str) else str(value)

    def set(self, key: str, value: Any) -> None:
        """
        Set a runtime configuration value.

        Runtime values have the highest priority.
        """
        runtime_source = None
        for source in self._sources:
            if source.name == "runtime":
                runtime_source = source
                break

        if runtime_source is None:
            runtime_source = ConfigSource(name="runtime", data={}, priority=1000)
            self._sources.append(runtime_source)

        parts = key.split(".")
        current = runtime_source.data

        for part in parts[:-1]:
            current = current.setdefault(part, {})

        current[parts[-1]] = value
        self._dirty = True

    def has(self, key: str) -> bool:
        """Check if configuration key exists."""
        return self.get(key) is not None

    def all(self) -> Dict[str, Any]:
        """Get all configuration as dict."""
        self._merge()
        return _deep_copy(self._merged)

    def __getitem__(self, key: str) -> Any:
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: str) -> bool:
        return self.has(key)


def _deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> None:
    """Deep merge override into base."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        elif isinstance(value, dict):
            base[key] = _deep_copy(value)
        else:
            base[key] = value


def _deep_copy(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        key: _deep_copy(value) if isinstance(value, dict) else value
        for key, value in data.items()
    }


_config: Optional[Config] = None


def get_config() -> Config:
    """Get the process configuration, built from defaults and environment."""
    global _config
    if _config is None:
        _config = Config(DEFAULTS)
        _config.load_env()
    return _config


def reset_config() -> None:
    """Drop the process configuration so the next access rebuilds it."""
    global _config
    _config = None


def config(key: str, default: Any = None) -> Any:
    """Shortcut function for configuration access."""
    return get_config().get(key, default)
