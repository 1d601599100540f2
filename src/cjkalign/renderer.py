"""Renderer contract and a console renderer that prints font specs.

A renderer is the host-side collaborator: it knows which fonts are installed
and applies a resolved set of fonts. Everything past ``apply_fonts`` (faces,
fontsets, redisplay) is the host's business.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from cjkalign.fontdb import InstalledFonts
from cjkalign.resolver import build_font_spec, format_size


class Renderer(Protocol):
    def is_font_available(self, name: str) -> bool: ...

    def apply_fonts(
        self,
        english: str | None,
        chinese: str | None,
        symbol: str | None,
        size: float | str,
        scale: float,
        extb: str | None = None,
    ) -> None: ...


class ConsoleRenderer:
    """Reports the font specs a host editor should apply.

    Availability is answered by an ``InstalledFonts`` index. Each role is
    written as one ``role: spec`` line through ``echo``; the CJK roles carry the
    scale so the host can rescale them.
    """

    def __init__(self, fonts: InstalledFonts, echo: Callable[[str], None] = print):
        self.fonts = fonts
        self.echo = echo

    def is_font_available(self, name: str) -> bool:
        return self.fonts.is_font_available(name)

    def apply_fonts(
        self,
        english: str | None,
        chinese: str | None,
        symbol: str | None,
        size: float | str,
        scale: float,
        extb: str | None = None,
    ) -> None:
        rows = [
            ("english", english, ""),
            ("chinese", chinese, f" (scale {scale:.2f})"),
            ("symbol", symbol, ""),
            ("extb", extb, f" (scale {scale:.2f})"),
        ]
        self.echo(f"size: {format_size(size)}")
        for role, name, suffix in rows:
            if name is None:
                self.echo(f"{role + ':':<9}(none)")
                continue
            self.echo(f"{role + ':':<9}{build_font_spec(name, size)}{suffix}")
