"""Shared fixtures for cjkalign tests."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from cjkalign.manager import FontManager
from cjkalign.state import FontSizeState
from cjkalign.store import ProfileStore, SettingsStore

# -- Fakes ------------------------------------------------------------------


class FakeRenderer:
    """Renderer that answers availability from a fixed set and records apply calls."""

    def __init__(self, installed=()):
        self.installed = set(installed)
        self.queries: list[str] = []
        self.calls: list[dict] = []

    def is_font_available(self, name):
        self.queries.append(name)
        return name in self.installed

    def apply_fonts(self, english, chinese, symbol, size, scale, extb=None):
        self.calls.append(
            {
                "english": english,
                "chinese": chinese,
                "symbol": symbol,
                "size": size,
                "scale": scale,
                "extb": extb,
            }
        )

    @property
    def last(self):
        return self.calls[-1]


# -- Paths and stores -------------------------------------------------------


@pytest.fixture()
def config_dir(tmp_path):
    """Empty configuration directory."""
    return tmp_path / "config"


@pytest.fixture()
def profile_store(config_dir):
    return ProfileStore.in_config_dir(config_dir)


@pytest.fixture()
def settings_store(config_dir):
    return SettingsStore.in_config_dir(config_dir)


@pytest.fixture()
def size_state(settings_store):
    return FontSizeState(settings_store)


@pytest.fixture()
def renderer():
    """Fake renderer with one font installed per required role, plus a symbol font."""
    return FakeRenderer(installed={"Consolas", "微软雅黑", "Symbola"})


@pytest.fixture()
def manager(renderer, profile_store, size_state):
    return FontManager(renderer, profile_store, size_state)


# -- Font files -------------------------------------------------------------


def build_font(path: Path, family: str, style: str = "Regular") -> Path:
    """Write a minimal one-glyph TrueType font whose name table declares ``family``."""
    pen = TTGlyphPen(None)
    pen.moveTo((0, 0))
    pen.lineTo((500, 0))
    pen.lineTo((500, 500))
    pen.lineTo((0, 500))
    pen.closePath()

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef"])
    fb.setupCharacterMap({})
    fb.setupGlyf({".notdef": pen.glyph()})
    fb.setupHorizontalMetrics({".notdef": (500, 0)})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family, "styleName": style})
    fb.setupOS2()
    fb.setupPost()
    path.parent.mkdir(parents=True, exist_ok=True)
    fb.save(str(path))
    return path


@pytest.fixture()
def make_font():
    return build_font


@pytest.fixture()
def fake_renderer_cls():
    return FakeRenderer
