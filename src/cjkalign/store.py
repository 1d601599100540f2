"""Profile and settings persistence.

Both stores write whole JSON documents through a temp file + ``os.replace``
so readers never see a half-written file. Read failures of any kind degrade
to the compiled-in defaults: these files hold cosmetic preferences, and a
broken one must never stop fonts from being applied.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import re
import tempfile
from pathlib import Path

from pydantic import ValidationError

from cjkalign.config import PROFILE_FILE_EXT, PROFILES_SUBDIR, SETTINGS_FILENAME
from cjkalign.schema import AppState, ProfileData

logger = logging.getLogger(__name__)

PROFILE_NAME_PATTERN = re.compile(r"^[^./\\][^/\\]*$")


def _atomic_write_text(path: Path, text: str) -> None:
    """Replace ``path`` with ``text``, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_path, path)
    except OSError:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def _read_json(path: Path) -> dict | None:
    """Read a JSON object from ``path``, returning None when absent or unreadable."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read %s: %s", path, e)
        return None

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Invalid JSON in %s: %s", path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Root element of %s is not a JSON object", path)
        return None
    return data


class ProfileStore:
    """Reads and writes ``<directory>/<profile>.json`` files."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    @classmethod
    def in_config_dir(cls, config_dir: str | Path) -> ProfileStore:
        return cls(Path(config_dir) / PROFILES_SUBDIR)

    def path_for(self, name: str) -> Path:
        """Return the file path of profile ``name``.

        Raises:
            ValueError: If the name is empty, starts with a dot or contains a
                path separator.
        """
        if not name or not PROFILE_NAME_PATTERN.match(name):
            msg = f"Invalid profile name: '{name}'"
            raise ValueError(msg)
        return self.directory / f"{name}{PROFILE_FILE_EXT}"

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def read(self, name: str) -> ProfileData | None:
        """Read a profile file, returning None if it is missing, unreadable or malformed."""
        path = self.path_for(name)
        data = _read_json(path)
        if data is None:
            if not path.exists():
                logger.info("Profile '%s' has no file at %s", name, path)
            return None

        try:
            return ProfileData.model_validate(data)
        except ValidationError as e:
            logger.warning("Malformed profile '%s': %s", name, e)
            return None

    def load(self, name: str) -> ProfileData:
        """Load a profile, falling back to the compiled-in tables.

        Missing files, unreadable files, invalid JSON and schema violations all
        produce ``ProfileData.fallback()``. No partial recovery is attempted.
        """
        data = self.read(name)
        if data is None:
            return ProfileData.fallback()
        return data

    def save(self, name: str, data: ProfileData) -> Path:
        """Regenerate the profile file from ``data``. Returns the written path."""
        path = self.path_for(name)
        document = {"fontnames": data.fontnames, "fontscales": data.fontscales}
        _atomic_write_text(path, json.dumps(document, indent=2, ensure_ascii=False) + "\n")
        logger.info("Saved profile '%s' to %s", name, path)
        return path

    def ensure(self, name: str) -> ProfileData:
        """Load a profile, writing the fallback tables first if it has no file."""
        if not self.exists(name):
            data = ProfileData.fallback()
            self.save(name, data)
            return data
        return self.load(name)

    def regenerate(self, name: str) -> ProfileData:
        """Overwrite a profile with the fallback tables."""
        data = ProfileData.fallback()
        self.save(name, data)
        return data


class SettingsStore:
    """Persists ``AppState`` to ``<config_dir>/settings.json``."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    @classmethod
    def in_config_dir(cls, config_dir: str | Path) -> SettingsStore:
        return cls(Path(config_dir) / SETTINGS_FILENAME)

    def load(self) -> AppState:
        data = _read_json(self.path)
        if data is None:
            return AppState()
        try:
            return AppState.model_validate(data)
        except ValidationError as e:
            logger.warning("Malformed settings file %s (%s), using defaults", self.path, e)
            return AppState()

    def save(self, state: AppState) -> None:
        _atomic_write_text(self.path, state.model_dump_json(indent=2) + "\n")
