"""Archive run orchestration."""

import structlog

from ..models import ArchiveConfig, FetchStatus, RunSummary
from .filesystem import FileSystemService
from .http_client import ApiClientService, delay
from .readme import ReadmeGeneratorService
from .resources import (
    ALL_RESOURCES,
    BATTLEPASS,
    CHALLENGES,
    FISH,
    POI,
    VEHICLES,
    WEAPONS,
    ResourceFetcherService,
    ResourceSpec,
)
from .versions import extract_game_versions

log = structlog.stdlib.get_logger()


class ArchiveRunner:
    """Runs the fixed fetch sequence and regenerates the README.

    Every network-touching step is followed by the configured delay, whether
    it hit the cache or not. Per-resource failures never stop the run.
    """

    def __init__(
        self,
        config: ArchiveConfig,
        api_client: ApiClientService,
        filesystem: FileSystemService | None = None,
    ) -> None:
        self.config = config
        self.filesystem = filesystem or FileSystemService()
        self.fetcher = ResourceFetcherService(api_client, self.filesystem, config.output_dir)
        self.readme = ReadmeGeneratorService(
            self.filesystem,
            config.output_dir,
            fish_first_season=config.fish_first_season,
        )

    async def run(self) -> RunSummary:
        """Fetch everything not yet cached, then rebuild the README.

        Raises:
            OSError: If the archive tree cannot be created, written or scanned
        """
        summary = RunSummary()
        self._prepare()

        status, seasons = await self.fetcher.fetch_seasons_list()
        summary.record(status)
        await self._pause()

        log.info("🔫 Fetching weapons")
        await self._fetch(summary, WEAPONS)

        log.info("🚗 Fetching vehicles")
        await self._fetch(summary, VEHICLES)

        all_seasons = range(self.config.first_season, self.config.last_season + 1)

        log.info("📦 Fetching battle passes", first=all_seasons.start, last=all_seasons.stop - 1)
        for season in all_seasons:
            await self._fetch(summary, BATTLEPASS, season)

        log.info("🎯 Fetching challenges", first=all_seasons.start, last=all_seasons.stop - 1)
        for season in all_seasons:
            await self._fetch(summary, CHALLENGES, season)

        fish_seasons = range(self.config.fish_first_season, self.config.last_season + 1)
        log.info("🐟 Fetching fish", first=fish_seasons.start, last=fish_seasons.stop - 1)
        for season in fish_seasons:
            await self._fetch(summary, FISH, season)

        log.info("🗺️ Fetching POI")
        summary.game_versions = extract_game_versions(seasons)
        if not summary.game_versions:
            log.warning("⚠️ No game versions found in seasons list, skipping POI fetch")
        else:
            log.info(
                "Found game versions",
                count=len(summary.game_versions),
                versions=", ".join(summary.game_versions),
            )
            for version in summary.game_versions:
                await self._fetch(summary, POI, version)

        self.readme.generate()

        log.info(
            "✅ Done",
            cached=summary.cached,
            saved=summary.saved,
            unavailable=summary.unavailable,
        )
        return summary

    def _prepare(self) -> None:
        if not self.config.api_key:
            log.warning("FORTNITE_API_KEY is not set, the API will reject every request")
        for spec in ALL_RESOURCES:
            self.filesystem.ensure_directory(self.config.output_dir / spec.directory)

    async def _fetch(self, summary: RunSummary, spec: ResourceSpec, key: int | str | None = None) -> FetchStatus:
        status = await self.fetcher.fetch(spec, key)
        summary.record(status)
        await self._pause()
        return status

    async def _pause(self) -> None:
        await delay(self.config.request_delay)
