"""CLI entry point for cjkalign - keep CJK and Latin fonts aligned in monospaced layouts."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from cjkalign.cli_helpers import (
    AppContext,
    _fail,
    _parse_size,
    _print_apply_result,
    _print_issues,
    nudge_options,
    pass_app,
)
from cjkalign.config import APP_NAME, ROLE_NAMES
from cjkalign.resolver import format_size

# -- CLI group --------------------------------------------------------------------------


@click.group()
@click.version_option(version="0.1.0", prog_name="cjkalign")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False),
    envvar="CJKALIGN_CONFIG_DIR",
    default=None,
    help="Directory holding settings.json and profiles/",
)
@click.option(
    "--font-dir",
    "font_dirs",
    type=click.Path(file_okay=False),
    multiple=True,
    envvar="CJKALIGN_FONT_DIRS",
    help="Font directory to search (repeatable, default: system font directories)",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx: click.Context, config_dir, font_dirs, verbose: bool):
    """Align CJK and Latin fonts in monospaced editor layouts."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    if ctx.obj is None:
        ctx.obj = AppContext(
            config_dir=Path(config_dir or click.get_app_dir(APP_NAME)),
            font_dirs=[Path(d) for d in font_dirs] or None,
        )


# -- state -----------------------------------------------------------------------------


@cli.command()
@pass_app
def show(app: AppContext):
    """Show the current profile, size, scale and resolved fonts without applying them."""
    from cjkalign.schema import ProfileData
    from cjkalign.state import scale_for

    manager = app.manager
    profile = manager.current_profile
    size = manager.sizes.profile_size(profile)
    data = manager.profiles.read(profile)
    used_fallback = data is None
    if data is None:
        data = ProfileData.fallback()
    fonts = manager.resolver.resolve(data.fontnames)

    click.echo(f"Profile: {profile}")
    click.echo(f"  Size:  {format_size(size)}")
    click.echo(f"  Scale: {scale_for(size, data.fontscales):.2f}")
    for role in ROLE_NAMES:
        click.echo(f"  {role + ':':<9}{fonts.get(role) or '(none)'}")
    if used_fallback:
        click.secho(
            "  Profile file missing or malformed; built-in fallback tables apply", fg="yellow"
        )


@cli.command("apply")
@click.option("-p", "--profile", default=None, help="Profile to apply (default: current)")
@pass_app
def apply_cmd(app: AppContext, profile):
    """Apply a profile at its remembered font size."""
    try:
        result = app.manager.apply(profile)
    except ValueError as e:
        _fail(e)
    _print_apply_result(result)


# -- font size -------------------------------------------------------------------------


@cli.command()
@pass_app
def increase(app: AppContext):
    """Step the font size up."""
    _print_apply_result(app.manager.increase_font_size(), "Already at the largest font size")


@cli.command()
@pass_app
def decrease(app: AppContext):
    """Step the font size down."""
    _print_apply_result(app.manager.decrease_font_size(), "Already at the smallest font size")


@cli.command()
@pass_app
def reset(app: AppContext):
    """Reset the current profile's font size to the default."""
    _print_apply_result(app.manager.reset_font_size())


# -- profiles --------------------------------------------------------------------------


@cli.command()
@click.argument("name")
@pass_app
def switch(app: AppContext, name):
    """Make NAME the active profile and apply it."""
    try:
        result = app.manager.select_profile(name)
    except ValueError as e:
        _fail(e)
    _print_apply_result(result)


@cli.command("next")
@pass_app
def next_cmd(app: AppContext):
    """Switch to the next profile in the registry."""
    _print_apply_result(app.manager.next_profile())


@cli.command()
@click.option("--set", "names", default=None, help="Comma-separated profile names to register")
@pass_app
def profiles(app: AppContext, names):
    """List registered profiles, or replace the registry with --set."""
    manager = app.manager
    if names is not None:
        name_list = [n.strip() for n in names.split(",") if n.strip()]
        try:
            for name in name_list:
                manager.profiles.path_for(name)
            manager.sizes.configure_profiles(name_list)
        except ValueError as e:
            _fail(e)

    current = manager.current_profile
    for name in manager.sizes.profiles:
        marker = "*" if name == current else " "
        note = "" if manager.profiles.exists(name) else "  (no file)"
        size = format_size(manager.sizes.profile_size(name))
        click.echo(f"{marker} {name:<16} {size:>5}{note}")


@cli.command()
@click.argument("name", required=False)
@pass_app
def edit(app: AppContext, name):
    """Open a profile file in $EDITOR, then validate and apply it."""
    from cjkalign.validator import validate_file

    manager = app.manager
    profile = name or manager.current_profile
    try:
        manager.profiles.ensure(profile)
        path = manager.profiles.path_for(profile)
    except ValueError as e:
        _fail(e)

    click.edit(filename=str(path))

    issues = validate_file(path)
    if issues:
        _print_issues(path, issues)
    _print_apply_result(manager.apply(profile))


@cli.command()
@click.argument("name", required=False)
@pass_app
def tune(app: AppContext, name):
    """Edit a profile's size/scale table in $EDITOR and apply the result."""
    from cjkalign.editing import format_scale_table, parse_scale_table

    manager = app.manager
    profile = name or manager.current_profile
    try:
        data = manager.editable_profile(profile)
    except ValueError as e:
        _fail(e)

    edited = click.edit(format_scale_table(data.fontscales), extension=".txt")
    if edited is None:
        click.echo("No changes.")
        return

    try:
        scales = parse_scale_table(edited)
    except ValueError as e:
        _fail(e)
    _print_apply_result(manager.save_scales(scales, profile))


@cli.command()
@click.argument("name", required=False)
@click.confirmation_option(prompt="Overwrite the profile with the built-in tables?")
@pass_app
def regenerate(app: AppContext, name):
    """Rewrite a profile file from the built-in fallback tables."""
    try:
        result = app.manager.regenerate_profile(name)
    except ValueError as e:
        _fail(e)
    _print_apply_result(result)


# -- scale tuning ----------------------------------------------------------------------


@cli.command("test-scale")
@click.argument("size")
@click.argument("scale", type=float)
@pass_app
def test_scale(app: AppContext, size, scale):
    """Preview SIZE with CJK SCALE without saving anything."""
    from cjkalign.preview import alignment_sample

    try:
        result = app.manager.test_scale(_parse_size(size), scale)
    except ValueError as e:
        _fail(e)
    _print_apply_result(result)
    click.echo(alignment_sample(result.size, result.scale))


@cli.command()
@click.argument("size", type=float)
@nudge_options
@pass_app
def nudge(app: AppContext, size, step, down):
    """Nudge the saved CJK scale for SIZE and preview it."""
    from cjkalign.preview import alignment_sample

    delta = -step if down else step
    try:
        result = app.manager.nudge_scale(size, delta)
    except ValueError as e:
        _fail(e)
    _print_apply_result(result)
    click.echo(alignment_sample(result.size, result.scale))


@cli.command("at-point")
@click.argument("text_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("offset", type=int)
@click.option(
    "--nudge", "do_nudge", is_flag=True, help="Change the scale on the row, not just preview it"
)
@nudge_options
@pass_app
def at_point(app: AppContext, text_file, offset, do_nudge, step, down):
    """Preview (or nudge) the size/scale row at OFFSET in a scale-table TEXT_FILE.

    Meant for editor integrations: pass the buffer file and the cursor offset.
    """
    from cjkalign.editing import increment_scale_at_point, read_scale_at_point
    from cjkalign.preview import alignment_sample

    path = Path(text_file)
    text = path.read_text(encoding="utf-8")
    try:
        if do_nudge:
            text, size, scale = increment_scale_at_point(text, offset, -step if down else step)
            path.write_text(text, encoding="utf-8")
        else:
            size, scale = read_scale_at_point(text, offset)
        result = app.manager.test_scale(size, scale)
    except ValueError as e:
        _fail(e)
    _print_apply_result(result)
    click.echo(alignment_sample(result.size, result.scale))


# -- inspection ------------------------------------------------------------------------


@cli.command("validate")
@click.argument("name", required=False)
@pass_app
def validate_cmd(app: AppContext, name):
    """Validate a profile file."""
    from cjkalign.validator import validate_file

    profile = name or app.manager.current_profile
    try:
        path = app.manager.profiles.path_for(profile)
    except ValueError as e:
        _fail(e)

    issues = validate_file(path)
    if not issues:
        click.secho(f"Validation passed: {path}", fg="green")
        return
    _print_issues(path, issues)
    sys.exit(1)


@cli.command("preview")
@pass_app
def preview_cmd(app: AppContext):
    """Print the alignment sample table for the current size and scale."""
    from cjkalign.preview import alignment_sample
    from cjkalign.state import scale_for

    manager = app.manager
    profile = manager.current_profile
    size = manager.sizes.profile_size(profile)
    data = manager.profiles.load(profile)
    click.echo(alignment_sample(size, scale_for(size, data.fontscales)))


@cli.command()
@click.argument("name", required=False)
@pass_app
def fonts(app: AppContext, name):
    """Show every candidate font of a profile and whether it is installed."""
    manager = app.manager
    profile = name or manager.current_profile
    try:
        data = manager.profiles.load(profile)
    except ValueError as e:
        _fail(e)

    resolved = manager.resolver.resolve(data.fontnames)
    for role in ROLE_NAMES:
        chosen = resolved.get(role)
        click.echo(f"{role}: {chosen or '(none)'}")
        for candidate in data.candidates(role):
            mark = "x" if manager.resolver.available(candidate) else " "
            click.echo(f"  [{mark}] {candidate}")
