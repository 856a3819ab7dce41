"""Application constants and a small persistent key/value settings store."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

log = logging.getLogger(__name__)

APP_NAME = "SquareSnap"
APP_VERSION = "1.0.0"

FILE_PREFIX = APP_NAME
FILE_FORMAT = "png"

DEFAULT_WINDOW_SIZE = 400
MIN_WINDOW_SIZE = 300
PREVIEW_WINDOW_PADDING = 20

DEFAULT_DARK_MODE = True

SAVE_SHORTCUT = "Ctrl+S"
CANCEL_SHORTCUT = "Esc"

SAVE_PATH_KEY = "savePath"
DARK_MODE_KEY = "darkMode"


def default_settings_path() -> Path:
    """Return the per-user location of the settings file."""
    return Path(user_config_dir(APP_NAME, APP_NAME)) / "settings.json"


def default_save_path() -> Path:
    """Return the directory screenshots are saved to unless configured otherwise."""
    return Path.home() / "Pictures" / APP_NAME


class Settings:
    """Key/value settings persisted as a JSON document.

    Every change is written to disk at once. A missing or unreadable file
    yields an empty store, so defaults apply.
    """

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self.path = Path(path) if path is not None else default_settings_path()
        self._values: dict[str, Any] = self._load()

    def _load(self) -> dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            log.warning("Ignoring unreadable settings file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            log.warning("Ignoring malformed settings file %s", self.path)
            return {}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for ``key``, or ``default`` if it is unset."""
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` and write the settings file."""
        self._values[key] = value
        self._write()

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".settings-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(self._values, handle, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise