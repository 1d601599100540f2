"""Sanity checks on the compiled-in tables."""

from cjkalign.config import (
    DEFAULT_FONT_SIZE,
    FALLBACK_FONT_NAMES,
    FALLBACK_FONT_SCALES,
    FONT_SIZE_STEPS,
    REQUIRED_ROLES,
    ROLE_NAMES,
)


def test_steps_strictly_increasing():
    assert all(a < b for a, b in zip(FONT_SIZE_STEPS, FONT_SIZE_STEPS[1:]))


def test_scales_align_with_steps():
    assert len(FALLBACK_FONT_SCALES) == len(FONT_SIZE_STEPS) == 9
    assert all(scale > 0 for scale in FALLBACK_FONT_SCALES)


def test_default_size_is_a_step():
    assert DEFAULT_FONT_SIZE in FONT_SIZE_STEPS


def test_one_fallback_list_per_role():
    assert len(FALLBACK_FONT_NAMES) == len(ROLE_NAMES)
    for i, role in enumerate(ROLE_NAMES):
        if role in REQUIRED_ROLES:
            assert FALLBACK_FONT_NAMES[i]
