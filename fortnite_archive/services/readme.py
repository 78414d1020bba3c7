"""README generation from the archive's on-disk contents."""

import re
from datetime import date
from pathlib import Path

import structlog

from .filesystem import FileSystemService
from .resources import (
    BATTLEPASS,
    CHALLENGES,
    FISH,
    POI,
    SEASONS_LIST,
    VEHICLES,
    WEAPONS,
    ResourceSpec,
)
from .versions import from_filename_safe, version_key

log = structlog.stdlib.get_logger()

SEASON_FILE_PATTERN = re.compile(r"^season_(\d+)\.json$", re.ASCII)
POI_FILE_PATTERN = re.compile(r"^poi_(\d+_\d+)\.json$", re.ASCII)

README_NAME = "README.md"


class ReadmeGeneratorService:
    """Rebuilds the archive README from what is actually on disk.

    Independent of any in-memory fetch results, so a partial run still
    produces an accurate index.
    """

    def __init__(
        self,
        filesystem: FileSystemService,
        output_dir: Path,
        fish_first_season: int = 11,
    ) -> None:
        self.filesystem = filesystem
        self.output_dir = output_dir
        self.fish_first_season = fish_first_season

    @property
    def readme_path(self) -> Path:
        return self.output_dir / README_NAME

    def collect_seasons(self, spec: ResourceSpec) -> list[int]:
        """Season numbers with a cache file, ascending."""
        names = self.filesystem.list_file_names(self.output_dir / spec.directory)
        seasons = [int(m.group(1)) for m in map(SEASON_FILE_PATTERN.match, names) if m]
        return sorted(seasons)

    def collect_versions(self) -> list[str]:
        """POI version tokens with a cache file, ascending by (major, minor)."""
        names = self.filesystem.list_file_names(self.output_dir / POI.directory)
        versions = [from_filename_safe(m.group(1)) for m in map(POI_FILE_PATTERN.match, names) if m]
        return sorted(versions, key=version_key)

    def render(self, today: date | None = None) -> str:
        """Render the README document."""
        today = today or date.today()

        battlepasses = self.collect_seasons(BATTLEPASS)
        challenges = self.collect_seasons(CHALLENGES)
        fish = self.collect_seasons(FISH)
        versions = self.collect_versions()

        lines = [
            "# Fortnite Data Archive",
            "",
            "Fortnite data obtained from [FortniteAPI.io](https://fortniteapi.io/)",
            "",
            "## 📊 Available Data",
            "",
            f"### Battle Passes ({len(battlepasses)} seasons)",
        ]
        lines += self._season_links(BATTLEPASS, battlepasses)

        lines += ["", f"### Challenges ({len(challenges)} seasons)"]
        lines += self._season_links(CHALLENGES, challenges)

        lines += ["", f"### Fish ({len(fish)} seasons, from Season {self.fish_first_season})"]
        lines += self._season_links(FISH, fish)

        lines += ["", f"### POI ({len(versions)} game versions)"]
        lines += [
            f"- [Version {version}]({POI.directory}/{POI.filename_for(version)})"
            for version in versions
        ]

        lines += ["", "### Weapons", self._singleton_link(WEAPONS, "Weapons List")]
        lines += ["", "### Vehicles", self._singleton_link(VEHICLES, "Vehicles")]
        lines += ["", "### Seasons Info", self._singleton_link(SEASONS_LIST, "Complete list of seasons")]

        lines += [
            "",
            "## 🔄 Updates",
            "",
            "Run `fortnite-archive` to add newly published data. Files already present are never re-downloaded.",
            "",
            f"**Last update:** {today.isoformat()}",
            "",
            "## 📝 Data Source",
            "",
            "All data comes from [FortniteAPI.io](https://fortniteapi.io)",
            "",
        ]
        return "\n".join(lines)

    def generate(self, today: date | None = None) -> Path:
        """Overwrite the README with a fresh render.

        Raises:
            OSError: If a category directory cannot be scanned or the README written
        """
        text = self.render(today)
        self.filesystem.write_text(text, self.readme_path)
        log.info("README generated", path=str(self.readme_path))
        return self.readme_path

    @staticmethod
    def _season_links(spec: ResourceSpec, seasons: list[int]) -> list[str]:
        return [f"- [Season {season}]({spec.directory}/{spec.filename_for(season)})" for season in seasons]

    def _singleton_link(self, spec: ResourceSpec, title: str) -> str:
        if not self.filesystem.exists(self.output_dir / spec.directory / spec.filename):
            return f"- {title} (not available)"
        return f"- [{title}]({spec.directory}/{spec.filename})"
