"""Editable text form of a scale table and cursor-position helpers.

The text form has one ``size scale`` row per step, e.g.::

    # size  scale
    9       1.05
    10.5    1.05

Editor integrations hand us the buffer text and a cursor offset; the row
under the cursor is previewed or nudged.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from cjkalign.config import FONT_SIZE_STEPS, MIN_SCALE, NEUTRAL_SCALE, SCALE_PRECISION
from cjkalign.resolver import format_size

SCALE_TABLE_HEADER = "# size  scale"
ROW_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s+(\d+(?:\.\d+)?)\s*(#.*)?$")


def bump_scale(value: float, delta: float) -> float:
    """Add ``delta`` to a scale, rounded to SCALE_PRECISION and never below MIN_SCALE."""
    return max(MIN_SCALE, round(value + delta, SCALE_PRECISION))


def _format_scale(scale: float) -> str:
    if round(scale, SCALE_PRECISION) == scale:
        return f"{scale:.{SCALE_PRECISION}f}"
    return repr(scale)


def format_scale_table(scales: Sequence[float], steps: Sequence[float] = FONT_SIZE_STEPS) -> str:
    """Render scales as editable ``size scale`` rows, one per step.

    Steps past the end of ``scales`` get a row at NEUTRAL_SCALE.
    """
    lines = [SCALE_TABLE_HEADER]
    for i, size in enumerate(steps):
        scale = scales[i] if i < len(scales) else NEUTRAL_SCALE
        lines.append(f"{format_size(size):<7} {_format_scale(scale)}")
    return "\n".join(lines) + "\n"


def parse_scale_table(text: str, steps: Sequence[float] = FONT_SIZE_STEPS) -> list[float]:
    """Parse the text form back into a scale list aligned with ``steps``.

    Raises:
        ValueError: On a malformed row, a size outside ``steps``, a repeated
            size, a non-positive scale, or a missing size.
    """
    by_size: dict[float, float] = {}
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        match = ROW_PATTERN.match(line)
        if match is None:
            msg = f"Line {lineno}: expected 'size scale', got {stripped!r}"
            raise ValueError(msg)
        size, scale = float(match.group(1)), float(match.group(2))
        if size not in steps:
            msg = f"Line {lineno}: size {format_size(size)} is not a supported step"
            raise ValueError(msg)
        if size in by_size:
            msg = f"Line {lineno}: size {format_size(size)} listed twice"
            raise ValueError(msg)
        if scale <= 0:
            msg = f"Line {lineno}: scale must be > 0, got {scale}"
            raise ValueError(msg)
        by_size[size] = scale

    missing = [format_size(s) for s in steps if s not in by_size]
    if missing:
        msg = f"Missing sizes: {', '.join(missing)}"
        raise ValueError(msg)
    return [by_size[s] for s in steps]


def line_bounds(text: str, offset: int) -> tuple[int, int]:
    """Return (start, end) of the line containing ``offset``, end exclusive of the newline."""
    if not 0 <= offset <= len(text):
        msg = f"Offset {offset} outside text of length {len(text)}"
        raise ValueError(msg)
    start = text.rfind("\n", 0, offset) + 1
    end = text.find("\n", offset)
    if end == -1:
        end = len(text)
    return start, end


def _row_at_point(text: str, offset: int) -> tuple[int, re.Match[str]]:
    start, end = line_bounds(text, offset)
    match = ROW_PATTERN.match(text[start:end])
    if match is None:
        msg = f"No 'size scale' row at offset {offset}"
        raise ValueError(msg)
    return start, match


def read_scale_at_point(text: str, offset: int) -> tuple[float, float]:
    """Return the (size, scale) pair on the row under ``offset``."""
    _, match = _row_at_point(text, offset)
    return float(match.group(1)), float(match.group(2))


def increment_scale_at_point(text: str, offset: int, delta: float) -> tuple[str, float, float]:
    """Nudge the scale on the row under ``offset``.

    Returns (new_text, size, new_scale). Only the scale token is rewritten;
    the size and any trailing comment are kept as typed.
    """
    start, match = _row_at_point(text, offset)
    size, scale = float(match.group(1)), float(match.group(2))
    new_scale = bump_scale(scale, delta)
    token_start, token_end = match.span(2)
    new_text = (
        text[: start + token_start] + _format_scale(new_scale) + text[start + token_end :]
    )
    return new_text, size, new_scale
