"""TOML config loader with environment variable overrides."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any


class ConfigError(Exception):
    """Raised when config loading or validation fails."""


_CACHE_BACKENDS = ("memory", "redis")


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base, returning a new dict."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides(config: dict[str, Any], prefix: str = "WINGO") -> dict[str, Any]:
    """Apply environment variable overrides.

    Env var naming: WINGO__section__key=value (double underscore separator).
    Nested keys: WINGO__backtest__max_tested=30
    """
    result = dict(config)
    env_prefix = f"{prefix}__"

    for env_key, env_value in os.environ.items():
        if not env_key.startswith(env_prefix):
            continue

        parts = env_key[len(env_prefix) :].lower().split("__")
        target = result
        for part in parts[:-1]:
            if part not in target:
                target[part] = {}
            if isinstance(target[part], dict):
                target[part] = dict(target[part])
                target = target[part]
            else:
                break
        else:
            final_key = parts[-1]
            target[final_key] = _coerce_value(env_value)

    return result


def _coerce_value(value: str) -> Any:
    """Coerce string env var value to appropriate Python type.

    Numeric conversion is attempted BEFORE boolean so "0"/"1" stay integers.
    """
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        pass
    if value.lower() in ("true", "yes"):
        return True
    if value.lower() in ("false", "no"):
        return False
    return value


class ConfigLoader:
    """Load and merge TOML config files with env var overrides."""

    def __init__(
        self,
        config_dir: str | Path = "config",
        env: str | None = None,
    ) -> None:
        self._config_dir = Path(config_dir)
        self._env = env or os.environ.get("WINGO_ENV", "development")
        self._config: dict[str, Any] = {}

    def load(self) -> dict[str, Any]:
        """Load config: default.toml -> {env}.toml -> env vars."""
        default_path = self._config_dir / "default.toml"
        if not default_path.exists():
            msg = f"Default config not found: {default_path}"
            raise ConfigError(msg)

        self._config = self._load_toml(default_path)

        env_path = self._config_dir / f"{self._env}.toml"
        if env_path.exists():
            env_config = self._load_toml(env_path)
            self._config = _deep_merge(self._config, env_config)

        self._config = _apply_env_overrides(self._config)
        return self._config

    def get(self, dotted_key: str, default: Any = None) -> Any:
        """Get a config value using dotted notation: 'backtest.max_tested'."""
        if not self._config:
            self.load()

        parts = dotted_key.split(".")
        current: Any = self._config
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def validate_ranges(self) -> None:
        """Validate session, backtest and data source settings.

        Raises:
            ConfigError: If any parameter is out of its valid range.
        """
        if not self._config:
            self.load()

        errors: list[str] = []

        min_records = self.get("session.min_records")
        if min_records is not None and min_records < 1:
            errors.append(f"session.min_records must be >= 1, got {min_records}")

        ttl = self.get("session.prediction_ttl_seconds")
        if ttl is not None and ttl <= 0:
            errors.append(f"session.prediction_ttl_seconds must be > 0, got {ttl}")

        max_tested = self.get("backtest.max_tested")
        if max_tested is not None and max_tested < 1:
            errors.append(f"backtest.max_tested must be >= 1, got {max_tested}")

        reserve = self.get("backtest.trailing_reserve")
        if reserve is not None and reserve < 0:
            errors.append(f"backtest.trailing_reserve must be >= 0, got {reserve}")

        min_history = self.get("backtest.min_history")
        if min_history is not None and min_history < 2:
            errors.append(f"backtest.min_history must be >= 2, got {min_history}")

        timeout = self.get("data_source.timeout_seconds")
        if timeout is not None and timeout <= 0:
            errors.append(f"data_source.timeout_seconds must be > 0, got {timeout}")

        backend = self.get("cache.backend")
        if backend is not None and backend not in _CACHE_BACKENDS:
            errors.append(
                f"cache.backend must be one of {', '.join(_CACHE_BACKENDS)}, got {backend!r}"
            )

        if errors:
            msg = "Config validation failed:\n  " + "\n  ".join(errors)
            raise ConfigError(msg)

    @property
    def config(self) -> dict[str, Any]:
        if not self._config:
            self.load()
        return self._config

    @staticmethod
    def _load_toml(path: Path) -> dict[str, Any]:
        with open(path, "rb") as f:
            return tomllib.load(f)
