"""Font-size stepping, scale lookup and the persisted profile registry."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from cjkalign.config import (
    DEFAULT_FONT_SIZE,
    FALLBACK_SCALE_INDEX,
    FONT_SIZE_STEPS,
    NEUTRAL_SCALE,
)
from cjkalign.schema import AppState
from cjkalign.store import SettingsStore

logger = logging.getLogger(__name__)


def step_size(
    current: float,
    direction: int,
    steps: Sequence[float] = FONT_SIZE_STEPS,
) -> float | None:
    """Return the size one step away from ``current``.

    ``direction`` is +1 (walk the table ascending) or -1 (descending). Returns
    None when ``current`` is not in the table or is already the last element
    in that direction; there is no wraparound.
    """
    if direction not in (1, -1):
        msg = f"Step direction must be +1 or -1, got {direction}"
        raise ValueError(msg)

    walk = list(steps) if direction > 0 else list(reversed(steps))
    if current not in walk:
        return None
    index = walk.index(current)
    if index + 1 >= len(walk):
        return None
    return walk[index + 1]


def scale_for(
    size: float,
    scales: Sequence[float],
    steps: Sequence[float] = FONT_SIZE_STEPS,
) -> float:
    """Look up the CJK scale for an English font size.

    Sizes outside the step table use the table's second entry. A scale table
    shorter than the step table yields NEUTRAL_SCALE past its end.
    """
    index = steps.index(size) if size in steps else FALLBACK_SCALE_INDEX
    if index < len(scales):
        return scales[index]
    return NEUTRAL_SCALE


class FontSizeState:
    """Owns the ``AppState`` and persists every change through a SettingsStore."""

    def __init__(self, store: SettingsStore):
        self._store = store
        self._state = store.load()

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def profiles(self) -> list[str]:
        return list(self._state.profiles)

    @property
    def current_profile(self) -> str:
        """The active profile, or the first registered one if the selection is stale."""
        active = self._state.active_profile
        if active in self._state.profiles:
            return active
        return self._state.profiles[0]

    def _index_of(self, name: str) -> int:
        try:
            return self._state.profiles.index(name)
        except ValueError:
            msg = f"Unknown profile: '{name}' (known: {', '.join(self._state.profiles)})"
            raise ValueError(msg) from None

    def _save(self) -> None:
        self._store.save(self._state)

    def profile_size(self, name: str) -> float:
        """Remembered font size of a profile, DEFAULT_FONT_SIZE when none is stored."""
        if name not in self._state.profiles:
            return DEFAULT_FONT_SIZE
        index = self._state.profiles.index(name)
        sizes = self._state.profile_sizes
        if len(sizes) != len(self._state.profiles) or index >= len(sizes):
            return DEFAULT_FONT_SIZE
        return sizes[index]

    def set_profile_size(self, name: str, size: float) -> None:
        """Remember ``size`` for profile ``name``.

        A size list whose length differs from the registry is rebuilt to all
        defaults before the write; the rebuilt list is persisted.
        """
        index = self._index_of(name)
        if len(self._state.profile_sizes) != len(self._state.profiles):
            logger.info(
                "Profile size table has %d entries for %d profiles, resetting to %s",
                len(self._state.profile_sizes),
                len(self._state.profiles),
                DEFAULT_FONT_SIZE,
            )
            self._state.profile_sizes = [DEFAULT_FONT_SIZE] * len(self._state.profiles)
        self._state.profile_sizes[index] = size
        self._save()

    def set_active_profile(self, name: str) -> None:
        self._index_of(name)
        self._state.active_profile = name
        self._save()

    def next_profile_name(self) -> str:
        """Name following the active profile.

        A selection missing from the registry maps to the first profile. The
        last profile has no successor and stays selected.
        """
        profiles = self._state.profiles
        active = self._state.active_profile
        if active not in profiles:
            return profiles[0]
        index = profiles.index(active)
        if index + 1 >= len(profiles):
            return active
        return profiles[index + 1]

    def configure_profiles(self, names: Sequence[str]) -> None:
        """Replace the profile registry.

        Sizes are left untouched; a length mismatch is repaired on the next
        size write.
        """
        self._state = AppState(
            active_profile=self._state.active_profile,
            profiles=list(names),
            profile_sizes=self._state.profile_sizes,
        )
        self._save()
