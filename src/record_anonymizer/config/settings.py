"""Service settings.

Settings come from environment variables (prefix ANONYMIZER_) and can be
overlaid from a YAML file:

    anonymizer:
      output_dir: /var/lib/anonymizer/out
      anonymized_suffix: _masked
      default_strategy: PSEUDONYMIZATION
"""

import os
import threading
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from record_anonymizer.core.exceptions import UnknownStrategyError
from record_anonymizer.core.strategies import resolve_strategy_type

ENV_PREFIX = "ANONYMIZER_"
VALID_LOG_LEVELS = {"debug", "info", "warning", "error", "critical"}
VALID_LOG_FORMATS = {"json", "text"}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration.

    Attributes:
        host: Bind address for the HTTP server.
        port: Bind port for the HTTP server (kept as text until validated).
        log_level: Logging level name.
        log_format: "json" or "text".
        output_dir: Directory anonymized files are written to.
        anonymized_suffix: Suffix inserted before the output file extension.
        default_strategy: Strategy used when a request names none.
        default_preserve_format: Format preservation default for requests.
    """

    host: str = "0.0.0.0"
    port: str = "8000"
    log_level: str = "info"
    log_format: str = "json"
    output_dir: str = "anonymized-files"
    anonymized_suffix: str = "_anon"
    default_strategy: str = "MASKING"
    default_preserve_format: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from ANONYMIZER_* environment variables."""
        defaults = cls()
        return cls(
            host=os.getenv(f"{ENV_PREFIX}HOST", defaults.host),
            port=os.getenv(f"{ENV_PREFIX}PORT", defaults.port),
            log_level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level).lower(),
            log_format=os.getenv(f"{ENV_PREFIX}LOG_FORMAT", defaults.log_format).lower(),
            output_dir=os.getenv(f"{ENV_PREFIX}OUTPUT_DIR", defaults.output_dir),
            anonymized_suffix=os.getenv(
                f"{ENV_PREFIX}ANONYMIZED_SUFFIX", defaults.anonymized_suffix
            ),
            default_strategy=os.getenv(
                f"{ENV_PREFIX}DEFAULT_STRATEGY", defaults.default_strategy
            ),
            default_preserve_format=_env_bool(
                f"{ENV_PREFIX}DEFAULT_PRESERVE_FORMAT", defaults.default_preserve_format
            ),
        )

    def with_yaml(self, path: Path | str) -> "Settings":
        """Return a copy overlaid with values from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the YAML structure is invalid or names an
                unknown setting.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError("Configuration root must be a mapping")
        section: Any = data.get("anonymizer", {})
        if not isinstance(section, dict):
            raise ValueError("'anonymizer' section must be a mapping")

        known = {f.name for f in fields(self)}
        unknown = sorted(set(section) - known)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(unknown)}")

        overrides = {
            key: value if key == "default_preserve_format" else str(value)
            for key, value in section.items()
        }
        return replace(self, **overrides)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "Settings":
        """Load environment settings, then overlay a YAML file."""
        return cls.from_env().with_yaml(path)

    def validate(self) -> list[str]:
        """Validate the settings.

        Returns:
            List of validation error messages (empty if all valid).
        """
        errors = []

        try:
            port = int(self.port)
            if not (1 <= port <= 65535):
                errors.append(f"{ENV_PREFIX}PORT must be between 1 and 65535, got: {port}")
        except ValueError:
            errors.append(f"{ENV_PREFIX}PORT must be an integer, got: {self.port}")

        if self.log_level.lower() not in VALID_LOG_LEVELS:
            errors.append(
                f"{ENV_PREFIX}LOG_LEVEL must be one of {sorted(VALID_LOG_LEVELS)}, "
                f"got: {self.log_level}"
            )

        if self.log_format.lower() not in VALID_LOG_FORMATS:
            errors.append(
                f"{ENV_PREFIX}LOG_FORMAT must be one of {sorted(VALID_LOG_FORMATS)}, "
                f"got: {self.log_format}"
            )

        try:
            resolve_strategy_type(self.default_strategy)
        except UnknownStrategyError as e:
            errors.append(f"{ENV_PREFIX}DEFAULT_STRATEGY is invalid: {e}")

        if not self.output_dir:
            errors.append(f"{ENV_PREFIX}OUTPUT_DIR must not be empty")

        return errors


_settings: Optional[Settings] = None
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    """Get the process-wide settings, loading them on first use.

    ANONYMIZER_CONFIG_FILE, when set, names a YAML file overlaid on the
    environment settings.
    """
    global _settings

    if _settings is None:
        with _settings_lock:
            if _settings is None:
                config_file = os.getenv(f"{ENV_PREFIX}CONFIG_FILE")
                if config_file:
                    _settings = Settings.from_yaml(config_file)
                else:
                    _settings = Settings.from_env()

    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() reloads them."""
    global _settings
    with _settings_lock:
        _settings = None
