"""Configuration service reading archive settings from the environment."""

import math
import os
from collections.abc import Mapping
from pathlib import Path

import structlog

from ..models import ArchiveConfig
from .errors import ConfigurationError

log = structlog.stdlib.get_logger()

API_KEY_VAR = "FORTNITE_API_KEY"
BASE_URL_VAR = "FORTNITE_API_BASE_URL"
OUTPUT_DIR_VAR = "FORTNITE_ARCHIVE_DIR"
REQUEST_DELAY_VAR = "FORTNITE_REQUEST_DELAY"
LAST_SEASON_VAR = "FORTNITE_LAST_SEASON"
LOG_LEVEL_VAR = "LOG_LEVEL"
LOG_DIR_VAR = "LOG_DIR"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Builds an ``ArchiveConfig`` once at start from environment variables."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ: Mapping[str, str] = os.environ if environ is None else environ

    def load_config(self) -> ArchiveConfig:
        """Load configuration from the environment.

        Unparsable numeric values fall back to their defaults with a warning.

        Raises:
            ConfigurationError: If the resulting configuration is invalid
        """
        defaults = self._get_default_config()
        env = self._environ

        log_dir_raw = env.get(LOG_DIR_VAR, "").strip()
        config = ArchiveConfig(
            api_key=env.get(API_KEY_VAR, "").strip() or None,
            output_dir=Path(env.get(OUTPUT_DIR_VAR, "").strip() or defaults.output_dir),
            base_url=(env.get(BASE_URL_VAR, "").strip() or defaults.base_url).rstrip("/"),
            request_delay=self._parse_number(REQUEST_DELAY_VAR, float, defaults.request_delay),
            first_season=defaults.first_season,
            last_season=self._parse_number(LAST_SEASON_VAR, int, defaults.last_season),
            fish_first_season=defaults.fish_first_season,
            log_level=(env.get(LOG_LEVEL_VAR, "").strip() or defaults.log_level).upper(),
            log_dir=Path(log_dir_raw) if log_dir_raw else None,
        )

        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise ConfigurationError(
                "Invalid archive configuration",
                errors=validation_result.errors,
            )

        return config

    def validate_config(self, config: ArchiveConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        if not config.base_url.startswith(("http://", "https://")):
            errors.append("base_url must be an http(s) URL")

        if (
            not isinstance(config.request_delay, (int, float))
            or not math.isfinite(config.request_delay)
            or config.request_delay < 0
        ):
            errors.append("request_delay must be a non-negative number")
        elif config.request_delay > 60:
            errors.append("request_delay should not exceed 60 seconds")

        if config.first_season < 1:
            errors.append("first_season must be a positive integer")
        if config.last_season < config.first_season:
            errors.append("last_season must not be before first_season")
        if not config.first_season <= config.fish_first_season <= config.last_season:
            errors.append("fish_first_season must fall within the season range")

        if config.log_level not in VALID_LOG_LEVELS:
            errors.append(f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}")

        return ValidationResult(len(errors) == 0, errors)

    def _get_default_config(self) -> ArchiveConfig:
        """Get default configuration."""
        return ArchiveConfig(api_key=None, output_dir=Path.cwd())

    def _parse_number(self, name: str, kind: type, default: int | float) -> int | float:
        """Parse a numeric environment variable, keeping the default on bad input."""
        raw = self._environ.get(name, "").strip()
        if not raw:
            return default
        try:
            return kind(raw)
        except ValueError:
            log.warning("Ignoring unparsable setting, using default", setting=name, value=raw, default=default)
            return default
