"""Per-resource fetchers backed by a file-existence cache."""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from ..models import FetchStatus
from .filesystem import FileSystemService
from .http_client import ApiClientService
from .versions import to_filename_safe

log = structlog.stdlib.get_logger()


def result_truthy(payload: Any) -> bool:
    return isinstance(payload, dict) and bool(payload.get("result"))


def result_not_false(payload: Any) -> bool:
    return isinstance(payload, dict) and payload.get("result") is not False


def has_seasons(payload: Any) -> bool:
    return isinstance(payload, dict) and isinstance(payload.get("seasons"), list)


@dataclass(frozen=True)
class ResourceSpec:
    """How one API resource maps onto a cache file."""
    label: str
    directory: str
    filename: str
    path: str
    is_success: Callable[[Any], bool]

    def describe(self, key: int | str | None = None) -> str:
        return self.label if key is None else f"{self.label} {key}"

    def filename_for(self, key: int | str | None = None) -> str:
        if key is None:
            return self.filename
        return self.filename.format(key=to_filename_safe(str(key)))

    def path_for(self, key: int | str | None = None) -> str:
        if key is None:
            return self.path
        return self.path.format(key=key)


# Each endpoint signals success differently; keep the predicates separate.
BATTLEPASS = ResourceSpec(
    "Battlepass Season", "battlepasses", "season_{key}.json",
    "/v2/battlepass?lang=en&season={key}", result_truthy,
)
CHALLENGES = ResourceSpec(
    "Challenges Season", "challenges", "season_{key}.json",
    "/v3/challenges?season={key}&lang=en", result_not_false,
)
SEASONS_LIST = ResourceSpec(
    "Seasons list", "seasons", "seasons_list.json",
    "/v1/seasons/list?lang=en", has_seasons,
)
WEAPONS = ResourceSpec(
    "Weapons list", "weapons", "weapons_list.json",
    "/v1/weapons/list", result_not_false,
)
FISH = ResourceSpec(
    "Fish Season", "fish", "season_{key}.json",
    "/v1/loot/fish?lang=en&season={key}", result_not_false,
)
POI = ResourceSpec(
    "POI", "poi", "poi_{key}.json",
    "/v2/game/poi?lang=en&gameVersion={key}", result_not_false,
)
VEHICLES = ResourceSpec(
    "Vehicles", "vehicles", "vehicles.json",
    "/v2/game/vehicles", result_not_false,
)

ALL_RESOURCES = (BATTLEPASS, CHALLENGES, SEASONS_LIST, WEAPONS, FISH, POI, VEHICLES)


class ResourceFetcherService:
    """Fetches resources into the archive, skipping any already on disk.

    Cache policy is "never revalidate": a present file is authoritative no
    matter how old or how complete it is, and is never rewritten.
    """

    def __init__(
        self,
        api_client: ApiClientService,
        filesystem: FileSystemService,
        output_dir: Path,
    ) -> None:
        self.api_client = api_client
        self.filesystem = filesystem
        self.output_dir = output_dir

    def cache_path(self, spec: ResourceSpec, key: int | str | None = None) -> Path:
        return self.output_dir / spec.directory / spec.filename_for(key)

    async def fetch(self, spec: ResourceSpec, key: int | str | None = None) -> FetchStatus:
        """Fetch one resource unless its cache file already exists.

        Args:
            spec: Resource definition
            key: Season number or version token; None for singletons

        Returns:
            CACHED, SAVED or UNAVAILABLE

        Raises:
            OSError: If the cache file cannot be written
        """
        status, _ = await self._fetch(spec, key)
        return status

    async def fetch_seasons_list(self) -> tuple[FetchStatus, list[Any]]:
        """Fetch the seasons list and return its status and ``seasons`` array.

        A cached document is read back instead of fetched; an unavailable or
        malformed one yields an empty list.
        """
        status, payload = await self._fetch(SEASONS_LIST)
        if status is FetchStatus.CACHED:
            try:
                payload = self.filesystem.load_json(self.cache_path(SEASONS_LIST))
            except ValueError as e:
                log.warning("Cached seasons list is unreadable", error=str(e))
                return status, []
        if not has_seasons(payload):
            return status, []
        return status, payload["seasons"]

    async def _fetch(self, spec: ResourceSpec, key: int | str | None = None) -> tuple[FetchStatus, Any]:
        name = spec.describe(key)
        path = self.cache_path(spec, key)

        if self.filesystem.exists(path):
            log.info("✓ Already cached", resource=name, path=str(path))
            return FetchStatus.CACHED, None

        log.info("Fetching", resource=name)
        payload = await self.api_client.fetch_json(spec.path_for(key))

        if payload is None or not spec.is_success(payload):
            log.warning("✗ Not available", resource=name)
            return FetchStatus.UNAVAILABLE, None

        self.filesystem.save_json(payload, path)
        log.info("✓ Saved", resource=name, path=str(path))
        return FetchStatus.SAVED, payload
