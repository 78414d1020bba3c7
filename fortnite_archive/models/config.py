"""Configuration data models."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ArchiveConfig:
    """Archive run settings, built once at process start."""
    api_key: str | None
    output_dir: Path
    base_url: str = "https://fortniteapi.io"
    request_delay: float = 1.0
    first_season: int = 1
    last_season: int = 38
    fish_first_season: int = 11  # Fishing was introduced in Chapter 2 Season 1
    log_level: str = "INFO"
    log_dir: Path | None = None
