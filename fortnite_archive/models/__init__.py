"""Data models for the Fortnite data archive."""

from .config import ArchiveConfig
from .summary import FetchStatus, RunSummary

__all__ = [
    "ArchiveConfig",
    "FetchStatus",
    "RunSummary",
]
