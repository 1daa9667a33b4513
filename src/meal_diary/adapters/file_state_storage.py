"""Local JSON file storage for the state blob."""

from dataclasses import dataclass
from pathlib import Path

from meal_diary.services.state import StateStorage


@dataclass
class FileStateStorage(StateStorage):
    """Stores each key as a JSON file inside a directory."""

    directory: Path

    def load(self, key: str) -> str | None:
        """Return the file contents for a key, if the file exists."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def save(self, key: str, blob: str) -> None:
        """Write the blob atomically by replacing a temporary file."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(blob, encoding="utf-8")
        tmp_path.replace(path)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"
