"""Game version extraction from the seasons list.

Point-of-interest data is keyed by ``major.minor`` game version. Versions are
collected from every season's patch list, deduplicated by exact string and
ordered numerically, so ``"9.01" < "9.30" < "10.00"``.
"""

import re
from collections.abc import Iterable
from typing import Any

VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)", re.ASCII)

# Top-level season fields that some API revisions fill with a version string
SEASON_VERSION_FIELDS = ("gameVersion", "patchVersion", "version")


def normalize_version(value: Any) -> str | None:
    """Return the leading ``major.minor`` of a version string, or None."""
    if not isinstance(value, str):
        return None
    match = VERSION_PATTERN.match(value.strip())
    if match is None:
        return None
    return f"{match.group(1)}.{match.group(2)}"


def version_key(token: str) -> tuple[int, int]:
    """Numeric sort key for a ``major.minor`` token."""
    major, minor = token.split(".", 1)
    return int(major), int(minor)


def to_filename_safe(token: str) -> str:
    return token.replace(".", "_")


def from_filename_safe(text: str) -> str:
    return text.replace("_", ".")


def _season_candidates(season: Any) -> Iterable[Any]:
    if not isinstance(season, dict):
        return
    patches = season.get("patchList")
    if isinstance(patches, list):
        for patch in patches:
            if isinstance(patch, dict):
                yield patch.get("version")
    for field in SEASON_VERSION_FIELDS:
        yield season.get(field)


def extract_game_versions(seasons: Iterable[Any]) -> list[str]:
    """Collect the distinct game versions referenced by a seasons list.

    Args:
        seasons: The ``seasons`` array of the seasons-list response

    Returns:
        Version tokens, ascending by (major, minor)
    """
    seen: set[str] = set()
    versions: list[str] = []
    for season in seasons:
        for candidate in _season_candidates(season):
            token = normalize_version(candidate)
            if token is not None and token not in seen:
                seen.add(token)
                versions.append(token)

    versions.sort(key=version_key)
    return versions
