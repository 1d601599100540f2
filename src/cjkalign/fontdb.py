"""Installed font discovery.

Answers "is a font family with this name installed?" by reading the name
tables of font files found in the platform font directories.
"""

from __future__ import annotations

import logging
import os
import platform
from collections.abc import Iterable, Iterator
from pathlib import Path

from fontTools.ttLib import TTCollection, TTFont

from cjkalign.config import COLLECTION_EXTENSIONS, FAMILY_NAME_IDS, FONT_EXTENSIONS

logger = logging.getLogger(__name__)


def system_font_dirs() -> list[Path]:
    """Font directories for the current platform (existing or not)."""
    system = platform.system()

    if system == "Windows":
        windir = os.environ.get("WINDIR", "C:\\Windows")
        dirs = [Path(windir) / "Fonts"]
        local = os.environ.get("LOCALAPPDATA")
        if local:
            dirs.append(Path(local) / "Microsoft" / "Windows" / "Fonts")
        return dirs
    if system == "Darwin":
        return [
            Path("/System/Library/Fonts"),
            Path("/Library/Fonts"),
            Path("~/Library/Fonts").expanduser(),
        ]
    return [
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        Path("~/.fonts").expanduser(),
        Path("~/.local/share/fonts").expanduser(),
    ]


def iter_font_files(dirs: Iterable[str | Path]) -> Iterator[Path]:
    """Yield font files under ``dirs`` recursively, skipping missing directories."""
    for directory in dirs:
        root = Path(directory)
        if not root.is_dir():
            continue
        for path in sorted(root.rglob("*")):
            if path.suffix.lower() in FONT_EXTENSIONS and path.is_file():
                yield path


def _face_names(font: TTFont) -> set[str]:
    """Family and full names from one face's name table, all platforms."""
    names: set[str] = set()
    if "name" not in font:
        return names
    for record in font["name"].names:
        if record.nameID not in FAMILY_NAME_IDS:
            continue
        try:
            value = record.toUnicode()
        except UnicodeDecodeError:
            continue
        value = value.strip()
        if value:
            names.add(value)
    return names


def read_family_names(path: str | Path) -> set[str]:
    """Read every family/full name declared by a font file or collection."""
    path = Path(path)
    if path.suffix.lower() in COLLECTION_EXTENSIONS:
        collection = TTCollection(str(path), lazy=True)
        try:
            names: set[str] = set()
            for font in collection.fonts:
                names |= _face_names(font)
            return names
        finally:
            collection.close()

    font = TTFont(str(path), lazy=True, fontNumber=0)
    try:
        return _face_names(font)
    finally:
        font.close()


class InstalledFonts:
    """Lazily scanned index of installed font names.

    Name matching is case-insensitive. The index is built on first query and
    kept until ``rescan()``.
    """

    def __init__(self, font_dirs: Iterable[str | Path] | None = None):
        self.font_dirs = [Path(d) for d in font_dirs] if font_dirs else system_font_dirs()
        self._names: set[str] | None = None

    def rescan(self) -> None:
        self._names = None

    def names(self) -> set[str]:
        if self._names is None:
            self._names = self._scan()
        return self._names

    def _scan(self) -> set[str]:
        found: set[str] = set()
        count = 0
        for path in iter_font_files(self.font_dirs):
            try:
                found |= {name.casefold() for name in read_family_names(path)}
            except Exception as e:  # malformed files raise assorted fontTools and struct errors
                logger.debug("Skipping unreadable font %s: %s", path, e)
                continue
            count += 1
        logger.info("Indexed %d font files, %d names", count, len(found))
        return found

    def is_font_available(self, name: str) -> bool:
        return name.casefold() in self.names()
