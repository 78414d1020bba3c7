"""Service layer: API access, caching, README generation and orchestration."""

from .archive import ArchiveRunner
from .config import ConfigurationService, ValidationResult
from .errors import (
    AppError,
    ConfigurationError,
    ErrorCategory,
    ErrorHandlingService,
    FileSystemError,
    NetworkError,
    UserFriendlyError,
    ValidationError,
    get_error_service,
)
from .filesystem import FileSystemService
from .http_client import ApiClientService, delay
from .readme import ReadmeGeneratorService
from .resources import ResourceFetcherService, ResourceSpec
from .versions import extract_game_versions

__all__ = [
    "ApiClientService",
    "AppError",
    "ArchiveRunner",
    "ConfigurationError",
    "ConfigurationService",
    "ErrorCategory",
    "ErrorHandlingService",
    "FileSystemError",
    "FileSystemService",
    "NetworkError",
    "ReadmeGeneratorService",
    "ResourceFetcherService",
    "ResourceSpec",
    "UserFriendlyError",
    "ValidationError",
    "ValidationResult",
    "delay",
    "extract_game_versions",
    "get_error_service",
]
