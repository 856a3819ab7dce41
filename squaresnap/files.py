"""Numbered, dated screenshot files in a configurable directory."""

from __future__ import annotations

import fnmatch
import logging
import os
import re
from datetime import date
from pathlib import Path

from PIL import Image

from .settings import (
    FILE_FORMAT,
    FILE_PREFIX,
    SAVE_PATH_KEY,
    Settings,
    default_save_path,
)

log = logging.getLogger(__name__)

_NUMBER = re.compile(r"[+-]?\d+")


class FileManager:
    """Chooses file names for screenshots and writes them to the save directory."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._save_path = Path(settings.get(SAVE_PATH_KEY, str(default_save_path())))
        self._try_ensure()

    @property
    def save_path(self) -> Path:
        """Directory screenshots are written to."""
        return self._save_path

    @save_path.setter
    def save_path(self, path: str | os.PathLike[str]) -> None:
        new_path = Path(path)
        if new_path != self._save_path:
            self._save_path = new_path
            self._settings.set(SAVE_PATH_KEY, str(new_path))
            self._try_ensure()

    def _try_ensure(self) -> None:
        try:
            self.ensure_save_path_exists()
        except OSError as exc:
            log.warning("Failed to create directory %s: %s", self._save_path, exc)

    def ensure_save_path_exists(self) -> Path:
        """Create the save directory if needed; raise OSError if that fails."""
        self._save_path.mkdir(parents=True, exist_ok=True)
        return self._save_path

    @staticmethod
    def _prefix(today: date) -> str:
        return f"{FILE_PREFIX}-{today:%Y%m%d}"

    def next_file_number(self, today: date | None = None) -> int:
        """Return one more than the highest number used for ``today``'s files."""
        prefix = self._prefix(today or date.today())
        pattern = f"{prefix}*.png"
        try:
            entries = list(self._save_path.iterdir())
        except OSError:
            return 1

        highest = 0
        for entry in entries:
            if not fnmatch.fnmatchcase(entry.name, pattern) or not entry.is_file():
                continue
            digits = entry.name[len(prefix):len(prefix) + 3].strip()
            if _NUMBER.fullmatch(digits):
                highest = max(highest, int(digits))
        return highest + 1

    def generate_file_name(self, today: date | None = None) -> str:
        """Return the next free file name, such as ``<prefix>-YYYYMMDDNNN.png``."""
        today = today or date.today()
        number = self.next_file_number(today)
        return f"{self._prefix(today)}{number:03d}.{FILE_FORMAT}"

    def save_image(self, image: Image.Image, today: date | None = None) -> Path:
        """Write ``image`` under the next free name and return its path."""
        self.ensure_save_path_exists()
        file_path = self._save_path / self.generate_file_name(today)
        image.save(file_path, format=FILE_FORMAT.upper())
        log.debug("Image saved to %s", file_path)
        return file_path