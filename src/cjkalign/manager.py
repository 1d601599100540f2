"""Profile switching and font application.

``FontManager`` ties the profile store, the size state and the font resolver
together and hands the result to a renderer. Every user command ends in at
most one ``Renderer.apply_fonts`` call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cjkalign.config import DEFAULT_FONT_SIZE, FONT_SIZE_STEPS, NEUTRAL_SCALE
from cjkalign.editing import bump_scale
from cjkalign.renderer import Renderer
from cjkalign.resolver import FontResolver, ResolvedFonts, format_size
from cjkalign.schema import ProfileData
from cjkalign.state import FontSizeState, scale_for, step_size
from cjkalign.store import ProfileStore

logger = logging.getLogger(__name__)


@dataclass
class ApplyResult:
    """What was sent to the renderer."""

    profile: str
    size: float | str
    scale: float
    fonts: ResolvedFonts
    used_fallback: bool = False


class FontManager:
    def __init__(
        self,
        renderer: Renderer,
        profiles: ProfileStore,
        sizes: FontSizeState,
        resolver: FontResolver | None = None,
    ):
        self.renderer = renderer
        self.profiles = profiles
        self.sizes = sizes
        self.resolver = resolver or FontResolver(renderer.is_font_available)

    @property
    def current_profile(self) -> str:
        return self.sizes.current_profile

    def load_profile(self, profile: str) -> tuple[ProfileData, bool]:
        """Return (data, used_fallback). A profile without a file gets one written."""
        data = self.profiles.read(profile)
        if data is not None:
            return data, False

        if self.profiles.exists(profile):
            data = ProfileData.fallback()
        else:
            data = self.profiles.ensure(profile)
        logger.info("Profile '%s' uses fallback tables; CJK alignment may need tuning", profile)
        return data, True

    def editable_profile(self, profile: str) -> ProfileData:
        """Return profile data that is safe to modify and save back.

        A missing profile gets a fallback file written first.

        Raises:
            ValueError: If the profile file exists but cannot be read or parsed.
        """
        data = self.profiles.read(profile)
        if data is not None:
            return data
        if self.profiles.exists(profile):
            msg = (
                f"Profile '{profile}' is malformed; "
                "fix it with 'cjkalign edit' or 'cjkalign regenerate'"
            )
            raise ValueError(msg)
        return self.profiles.ensure(profile)

    def _render(
        self,
        profile: str,
        data: ProfileData,
        size: float | str,
        scale: float,
        used_fallback: bool,
    ) -> ApplyResult:
        fonts = self.resolver.resolve(data.fontnames)
        missing = fonts.missing_required()
        if missing:
            logger.warning(
                "Profile '%s': no installed font for %s, leaving it to the host default",
                profile,
                ", ".join(missing),
            )
        self.renderer.apply_fonts(
            fonts.english, fonts.chinese, fonts.symbol, size, scale, extb=fonts.extb
        )
        return ApplyResult(profile, size, scale, fonts, used_fallback)

    def apply(self, profile: str | None = None) -> ApplyResult:
        """Apply a profile (default: the current one) at its remembered size."""
        profile = profile or self.current_profile
        size = self.sizes.profile_size(profile)
        data, used_fallback = self.load_profile(profile)
        return self._render(profile, data, size, scale_for(size, data.fontscales), used_fallback)

    # -- font size ---------------------------------------------------------------------

    def _step(self, direction: int) -> ApplyResult | None:
        profile = self.current_profile
        size = self.sizes.profile_size(profile)
        new_size = step_size(size, direction)
        if new_size is None:
            logger.info("Font size %s has no step in direction %+d", format_size(size), direction)
            return None
        self.sizes.set_profile_size(profile, new_size)
        return self.apply(profile)

    def increase_font_size(self) -> ApplyResult | None:
        return self._step(1)

    def decrease_font_size(self) -> ApplyResult | None:
        return self._step(-1)

    def reset_font_size(self) -> ApplyResult:
        profile = self.current_profile
        self.sizes.set_profile_size(profile, DEFAULT_FONT_SIZE)
        return self.apply(profile)

    # -- profiles ----------------------------------------------------------------------

    def select_profile(self, name: str) -> ApplyResult:
        self.sizes.set_active_profile(name)
        return self.apply(name)

    def next_profile(self) -> ApplyResult:
        return self.select_profile(self.sizes.next_profile_name())

    def regenerate_profile(self, profile: str | None = None) -> ApplyResult:
        """Overwrite a profile with the fallback tables and apply it."""
        profile = profile or self.current_profile
        self.profiles.regenerate(profile)
        return self.apply(profile)

    # -- scale tuning ------------------------------------------------------------------

    def test_scale(
        self, size: float | str, scale: float, profile: str | None = None
    ) -> ApplyResult:
        """Preview a size/scale pair without persisting anything."""
        if scale <= 0:
            msg = f"Scale must be > 0, got {scale}"
            raise ValueError(msg)
        profile = profile or self.current_profile
        data = self.profiles.read(profile)
        used_fallback = data is None
        if data is None:
            data = ProfileData.fallback()
        return self._render(profile, data, size, scale, used_fallback)

    def save_scales(self, scales: list[float], profile: str | None = None) -> ApplyResult:
        """Replace a profile's scale table, keeping its font names, and re-apply."""
        profile = profile or self.current_profile
        data = self.editable_profile(profile)
        self.profiles.save(profile, ProfileData(fontnames=data.fontnames, fontscales=scales))
        return self.apply(profile)

    def nudge_scale(self, size: float, delta: float, profile: str | None = None) -> ApplyResult:
        """Adjust the stored scale for ``size`` by ``delta``, save, and preview it."""
        if size not in FONT_SIZE_STEPS:
            msg = f"Size {format_size(size)} is not a supported step"
            raise ValueError(msg)
        profile = profile or self.current_profile
        data = self.editable_profile(profile)

        index = FONT_SIZE_STEPS.index(size)
        scales = list(data.fontscales)
        if index >= len(scales):
            scales.extend([NEUTRAL_SCALE] * (index + 1 - len(scales)))
        scales[index] = bump_scale(scales[index], delta)

        updated = ProfileData(fontnames=data.fontnames, fontscales=scales)
        self.profiles.save(profile, updated)
        return self._render(profile, updated, size, scales[index], False)
