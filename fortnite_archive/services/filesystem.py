"""File system service for the archive's JSON cache files."""

import json
from pathlib import Path
from typing import Any

import structlog

log = structlog.stdlib.get_logger()


class FileSystemService:
    """Service for file system operations on the archive tree."""

    def exists(self, path: Path) -> bool:
        """Whether a cache file is already present."""
        return path.is_file()

    def save_json(self, data: Any, path: Path) -> None:
        """Save data as indented JSON to the specified path.

        The payload is written to a temporary sibling first and moved into
        place, so an interrupted write never leaves a partial cache file.

        Args:
            data: JSON-serializable payload
            path: Path to save the file

        Raises:
            OSError: If file cannot be written
            ValueError: If data cannot be serialized to JSON
        """
        self.ensure_directory(path.parent)
        temp_path = path.with_suffix(path.suffix + ".tmp")

        try:
            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(path)
        except (TypeError, ValueError) as e:
            temp_path.unlink(missing_ok=True)
            log.error("Failed to serialize data to JSON", path=str(path), error=str(e))
            raise ValueError(f"Cannot serialize data to JSON: {e}") from e
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            log.error("Failed to save JSON data", path=str(path), error=str(e))
            raise

        log.debug("JSON data saved", path=str(path), size=path.stat().st_size)

    def load_json(self, path: Path) -> Any:
        """Load JSON data from the specified path.

        Raises:
            FileNotFoundError: If file does not exist
            ValueError: If file contains invalid JSON
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            log.error("Invalid JSON in file", path=str(path), error=str(e))
            raise ValueError(f"Invalid JSON in file {path}: {e}") from e

    def write_text(self, text: str, path: Path) -> None:
        """Overwrite a text file in full."""
        self.ensure_directory(path.parent)
        path.write_text(text, encoding="utf-8")
        log.debug("Text file written", path=str(path), size=len(text))

    def ensure_directory(self, path: Path) -> None:
        """Ensure that a directory exists, creating it if necessary.

        Raises:
            OSError: If the path exists as a file or cannot be created
        """
        if path.exists():
            if not path.is_dir():
                log.error("Path exists but is not a directory", path=str(path))
                raise OSError(f"Path exists but is not a directory: {path}")
            return

        path.mkdir(parents=True, exist_ok=True)
        log.debug("Directory created", path=str(path))

    def list_file_names(self, directory: Path, suffix: str = ".json") -> list[str]:
        """List names of files in a directory ending with ``suffix``.

        Raises:
            FileNotFoundError: If directory does not exist
            OSError: If directory cannot be read
        """
        try:
            names = [entry.name for entry in directory.iterdir() if entry.is_file() and entry.name.endswith(suffix)]
        except OSError as e:
            log.error("Failed to list files", directory=str(directory), error=str(e))
            raise

        log.debug("Listed files in directory", directory=str(directory), suffix=suffix, count=len(names))
        return names
