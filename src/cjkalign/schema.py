"""Pydantic v2 models for profile files and persisted application state."""

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cjkalign.config import (
    DEFAULT_PROFILES,
    FALLBACK_FONT_NAMES,
    FALLBACK_FONT_SCALES,
    REQUIRED_ROLES,
    ROLE_NAMES,
)


class ProfileData(BaseModel):
    """Font-name candidate lists and per-size CJK scales of one profile."""

    model_config = ConfigDict(extra="ignore")

    fontnames: list[list[str]]
    fontscales: list[float]

    @field_validator("fontnames")
    @classmethod
    def required_roles_present(cls, v: list[list[str]]) -> list[list[str]]:
        if len(v) < len(REQUIRED_ROLES):
            msg = f"fontnames must list at least {len(REQUIRED_ROLES)} roles, got {len(v)}"
            raise ValueError(msg)
        return v

    @field_validator("fontscales")
    @classmethod
    def scales_positive(cls, v: list[float]) -> list[float]:
        if not v:
            msg = "fontscales must have at least one entry"
            raise ValueError(msg)
        for i, scale in enumerate(v):
            if not math.isfinite(scale):
                msg = f"fontscales[{i}] must be a finite number, got {scale}"
                raise ValueError(msg)
            if scale <= 0:
                msg = f"fontscales[{i}] must be > 0, got {scale}"
                raise ValueError(msg)
        return v

    @classmethod
    def fallback(cls) -> "ProfileData":
        """Fresh copy of the compiled-in tables."""
        return cls(
            fontnames=[list(names) for names in FALLBACK_FONT_NAMES],
            fontscales=list(FALLBACK_FONT_SCALES),
        )

    def candidates(self, role: str) -> list[str]:
        """Candidate list for a role name, empty when the profile omits it."""
        index = ROLE_NAMES.index(role)
        if index >= len(self.fontnames):
            return []
        return self.fontnames[index]


class AppState(BaseModel):
    """Active profile, profile registry and remembered size per profile.

    ``profile_sizes`` is index-aligned with ``profiles``. The two can drift
    apart when the registry is edited by hand; ``FontSizeState`` repairs the
    size list before writing to it.
    """

    active_profile: str | None = None
    profiles: list[str] = Field(default_factory=lambda: list(DEFAULT_PROFILES), min_length=1)
    profile_sizes: list[float] = Field(default_factory=list)

    @model_validator(mode="after")
    def profile_names_unique(self) -> "AppState":
        seen: set[str] = set()
        for name in self.profiles:
            if name in seen:
                msg = f"Duplicate profile name: '{name}'"
                raise ValueError(msg)
            seen.add(name)
        return self
