"""Mixed Latin/CJK sample table for judging alignment."""

from __future__ import annotations

import unicodedata
from collections.abc import Sequence

from cjkalign.resolver import format_size

WIDE_CATEGORIES = ("W", "F")

SAMPLE_ROWS: tuple[tuple[str, str], ...] = (
    ("英文", "ABCDEFGHIJ abcdefghij"),
    ("数字", "0123456789 +-*/=<>()"),
    ("中文", "中文字符与英文对齐"),
    ("混排", "中文English混排测试"),
    ("标点", "，。、；：？！“”"),
)


def display_width(text: str) -> int:
    """Terminal column count: East Asian wide/fullwidth characters take two columns."""
    width = 0
    for char in text:
        if unicodedata.combining(char):
            continue
        width += 2 if unicodedata.east_asian_width(char) in WIDE_CATEGORIES else 1
    return width


def pad(text: str, width: int) -> str:
    return text + " " * max(0, width - display_width(text))


def render_table(rows: Sequence[Sequence[str]]) -> str:
    """Draw rows as an ASCII box table, padding each column by display width.

    When the CJK font is scaled correctly every ``|`` lines up.
    """
    if not rows:
        return ""

    col_count = max(len(row) for row in rows)
    cells = [list(row) + [""] * (col_count - len(row)) for row in rows]
    widths = [max(display_width(row[i]) for row in cells) for i in range(col_count)]

    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
    lines = [border]
    for row in cells:
        lines.append("| " + " | ".join(pad(cell, w) for cell, w in zip(row, widths)) + " |")
    lines.append(border)
    return "\n".join(lines)


def alignment_sample(size: float | str, scale: float) -> str:
    """Sample table with a header naming the size/scale pair under test."""
    header = f"size {format_size(size)}, scale {scale:.2f}"
    return header + "\n" + render_table(SAMPLE_ROWS)
