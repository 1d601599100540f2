"""CLI helper objects, decorators and output functions for cjkalign."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import click

from cjkalign.config import SCALE_NUDGE_STEP, SIZE_DIRECTIVE_MARKER
from cjkalign.fontdb import InstalledFonts
from cjkalign.manager import FontManager
from cjkalign.renderer import ConsoleRenderer
from cjkalign.resolver import format_size
from cjkalign.state import FontSizeState
from cjkalign.store import ProfileStore, SettingsStore

if TYPE_CHECKING:
    from cjkalign.manager import ApplyResult
    from cjkalign.renderer import Renderer


@dataclass
class AppContext:
    """Per-invocation state shared by all commands through ``ctx.obj``.

    ``renderer`` may be supplied up front (tests, embedding hosts); otherwise a
    ConsoleRenderer over the installed fonts in ``font_dirs`` is built.
    """

    config_dir: Path
    font_dirs: list[Path] | None = None
    renderer: Renderer | None = None
    _manager: FontManager | None = field(default=None, init=False, repr=False)

    @property
    def manager(self) -> FontManager:
        if self._manager is None:
            renderer = self.renderer or ConsoleRenderer(
                InstalledFonts(self.font_dirs), echo=click.echo
            )
            self._manager = FontManager(
                renderer,
                ProfileStore.in_config_dir(self.config_dir),
                FontSizeState(SettingsStore.in_config_dir(self.config_dir)),
            )
        return self._manager


pass_app = click.make_pass_decorator(AppContext)


def nudge_options(func):
    """Decorator that adds the scale step options shared by nudge commands."""
    options = [
        click.option(
            "--step",
            type=float,
            default=SCALE_NUDGE_STEP,
            show_default=True,
            help="Amount to change the scale by",
        ),
        click.option("--down", is_flag=True, help="Decrease the scale instead of increasing it"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _parse_size(raw: str) -> float | str:
    """Accept a point size ("12.5") or a size directive (":pixelsize=14")."""
    if raw.startswith(SIZE_DIRECTIVE_MARKER):
        return raw
    try:
        return float(raw)
    except ValueError:
        msg = f"'{raw}' is not a number or a {SIZE_DIRECTIVE_MARKER} directive"
        raise click.BadParameter(msg) from None


def _fail(error: Exception) -> None:
    """Print an error in the standard format and exit with status 1."""
    click.secho(f"Error: {error}", fg="red", err=True)
    sys.exit(1)


def _print_apply_result(result: ApplyResult | None, no_step: str | None = None) -> None:
    """Print the standard summary after fonts were applied."""
    if result is None:
        if no_step:
            click.secho(no_step, fg="yellow")
        return

    click.secho(
        f"Applied profile '{result.profile}' at {format_size(result.size)} "
        f"(scale {result.scale:.2f})",
        fg="green",
    )
    if result.used_fallback:
        click.secho(
            "  Using built-in fallback tables; CJK alignment may need tuning (cjkalign tune)",
            fg="yellow",
        )
    missing = result.fonts.missing_required()
    if missing:
        click.secho(f"  No installed font for: {', '.join(missing)}", fg="yellow")


def _print_issues(path: Path | str, issues: list[str]) -> None:
    click.secho(f"Validation issues in {path} ({len(issues)}):", fg="yellow")
    for issue in issues:
        click.echo(f"  - {issue}")
