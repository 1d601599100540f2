"""First-available font resolution over ordered candidate lists."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from cjkalign.config import REQUIRED_ROLES, ROLE_NAMES, SIZE_DIRECTIVE_MARKER

logger = logging.getLogger(__name__)

AvailabilityPredicate = Callable[[str], bool]


def format_size(size: float | str) -> str:
    """Format a point size the way font specs expect it: 14.0 -> "14", 10.5 -> "10.5"."""
    if isinstance(size, str):
        return size
    return f"{size:g}"


def build_font_spec(font_name: str, size: float | str) -> str:
    """Combine a font name and size into a font spec string.

    "Monaco", 12.5            -> "Monaco-12.5"
    "Monaco", ":pixelsize=14" -> "Monaco:pixelsize=14"
    """
    if isinstance(size, str) and size.startswith(SIZE_DIRECTIVE_MARKER):
        return f"{font_name}{size}"
    return f"{font_name}-{format_size(size)}"


@dataclass(frozen=True)
class ResolvedFonts:
    """The installed font chosen for each role, or None when nothing matched."""

    english: str | None = None
    chinese: str | None = None
    symbol: str | None = None
    extb: str | None = None

    def get(self, role: str) -> str | None:
        return getattr(self, role)

    def missing_required(self) -> list[str]:
        return [role for role in REQUIRED_ROLES if self.get(role) is None]


class FontResolver:
    """Picks the first installed candidate of each role.

    Args:
        is_available: Predicate telling whether a font name is installed.
        cache: Remember predicate answers per name. Answers are never
            invalidated implicitly; call ``clear_cache()`` after installing fonts.
    """

    def __init__(self, is_available: AvailabilityPredicate, *, cache: bool = True):
        self._is_available = is_available
        self._cache: dict[str, bool] | None = {} if cache else None

    def clear_cache(self) -> None:
        if self._cache is not None:
            self._cache.clear()

    def available(self, name: str) -> bool:
        if self._cache is None:
            return self._is_available(name)
        if name not in self._cache:
            self._cache[name] = self._is_available(name)
        return self._cache[name]

    def resolve_role(self, candidates: Sequence[str]) -> str | None:
        """Return the first available candidate, in list order, or None."""
        for name in candidates:
            if self.available(name):
                return name
        return None

    def resolve(self, fontnames: Sequence[Sequence[str]]) -> ResolvedFonts:
        """Resolve every role of a profile's fontnames table."""
        chosen: dict[str, str | None] = {}
        for index, role in enumerate(ROLE_NAMES):
            candidates = fontnames[index] if index < len(fontnames) else ()
            chosen[role] = self.resolve_role(candidates)
            if chosen[role] is None and candidates:
                logger.info(
                    "No installed font for role '%s' among %d candidates", role, len(candidates)
                )
        return ResolvedFonts(**chosen)
