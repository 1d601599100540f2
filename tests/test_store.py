"""Tests for profile and settings persistence."""

import json

import pytest

from cjkalign.config import FALLBACK_FONT_NAMES, FALLBACK_FONT_SCALES
from cjkalign.schema import AppState, ProfileData
from cjkalign.store import ProfileStore, SettingsStore


def _write(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class TestProfileStoreLoad:
    def test_missing_profile_returns_fallback_tables(self, profile_store):
        data = profile_store.load("demo")
        assert data.fontnames == [list(names) for names in FALLBACK_FONT_NAMES]
        assert data.fontscales == list(FALLBACK_FONT_SCALES)

    def test_load_does_not_create_file(self, profile_store):
        profile_store.load("demo")
        assert not profile_store.exists("demo")

    def test_invalid_json_returns_fallback(self, profile_store):
        _write(profile_store.path_for("demo"), "{not json")
        assert profile_store.load("demo") == ProfileData.fallback()

    def test_schema_violation_returns_fallback(self, profile_store):
        _write(
            profile_store.path_for("demo"),
            json.dumps({"fontnames": [["Monaco"]], "fontscales": [1.0]}),
        )
        assert profile_store.load("demo") == ProfileData.fallback()

    def test_non_positive_scale_returns_fallback(self, profile_store):
        _write(
            profile_store.path_for("demo"),
            json.dumps({"fontnames": [["Monaco"], ["SimHei"]], "fontscales": [1.0, 0]}),
        )
        assert profile_store.load("demo") == ProfileData.fallback()

    def test_non_object_root_returns_fallback(self, profile_store):
        _write(profile_store.path_for("demo"), "[1, 2, 3]")
        assert profile_store.load("demo") == ProfileData.fallback()

    def test_read_reports_missing_as_none(self, profile_store):
        assert profile_store.read("demo") is None

    def test_undecodable_file_returns_fallback(self, profile_store):
        path = profile_store.path_for("demo")
        path.parent.mkdir(parents=True)
        path.write_bytes(b'{"fontnames": "\xff\xfe"}')
        assert profile_store.read("demo") is None
        assert profile_store.load("demo") == ProfileData.fallback()

    def test_non_finite_scale_returns_fallback(self, profile_store):
        _write(
            profile_store.path_for("demo"),
            '{"fontnames": [["Monaco"], ["SimHei"]], "fontscales": [NaN, Infinity]}',
        )
        assert profile_store.load("demo") == ProfileData.fallback()


class TestProfileStoreSave:
    def test_round_trip(self, profile_store):
        data = ProfileData(
            fontnames=[["Fira Code", "Hack"], ["等距更纱黑体 SC", "Noto Sans CJK SC"], []],
            fontscales=[1.0, 1.05, 1.1, 1.15, 1.2, 1.25, 1.3, 1.35, 1.4],
        )
        profile_store.save("work", data)
        assert profile_store.load("work") == data

    def test_creates_missing_directories(self, tmp_path):
        store = ProfileStore(tmp_path / "a" / "b" / "profiles")
        path = store.save("demo", ProfileData.fallback())
        assert path.is_file()
        assert path.name == "demo.json"

    def test_overwrites_whole_file(self, profile_store):
        path = profile_store.path_for("demo")
        _write(path, json.dumps({"fontnames": [["x"], ["y"]], "fontscales": [1.0], "extra": 1}))
        profile_store.save("demo", ProfileData.fallback())
        saved = json.loads(path.read_text(encoding="utf-8"))
        assert set(saved) == {"fontnames", "fontscales"}

    def test_non_ascii_names_written_verbatim(self, profile_store):
        path = profile_store.save("demo", ProfileData.fallback())
        assert "微软雅黑" in path.read_text(encoding="utf-8")

    def test_no_temp_files_left_behind(self, profile_store):
        profile_store.save("demo", ProfileData.fallback())
        assert [p.name for p in profile_store.directory.iterdir()] == ["demo.json"]

    def test_ensure_writes_fallback_once(self, profile_store):
        data = profile_store.ensure("demo")
        assert data == ProfileData.fallback()
        assert profile_store.exists("demo")

        custom = ProfileData(fontnames=[["Hack"], ["SimHei"]], fontscales=[1.2])
        profile_store.save("demo", custom)
        assert profile_store.ensure("demo") == custom

    def test_regenerate_overwrites(self, profile_store):
        profile_store.save("demo", ProfileData(fontnames=[["Hack"], ["SimHei"]], fontscales=[1.2]))
        profile_store.regenerate("demo")
        assert profile_store.load("demo") == ProfileData.fallback()


class TestProfileNames:
    @pytest.mark.parametrize("name", ["", ".hidden", "a/b", "..", "a\\b"])
    def test_invalid_names_raise(self, profile_store, name):
        with pytest.raises(ValueError, match="Invalid profile name"):
            profile_store.path_for(name)

    @pytest.mark.parametrize("name", ["program", "org-mode", "read book", "中文"])
    def test_valid_names(self, profile_store, name):
        assert profile_store.path_for(name).name == f"{name}.json"


class TestSettingsStore:
    def test_missing_file_gives_defaults(self, settings_store):
        assert settings_store.load() == AppState()

    def test_round_trip(self, settings_store):
        state = AppState(active_profile="b", profiles=["a", "b"], profile_sizes=[14, 16])
        settings_store.save(state)
        assert settings_store.load() == state

    def test_malformed_file_gives_defaults(self, settings_store):
        _write(settings_store.path, json.dumps({"profiles": []}))
        assert settings_store.load() == AppState()

    def test_undecodable_file_gives_defaults(self, settings_store):
        settings_store.path.parent.mkdir(parents=True, exist_ok=True)
        settings_store.path.write_bytes(b"\xff\xfe{}")
        assert settings_store.load() == AppState()

    def test_in_config_dir(self, tmp_path):
        assert SettingsStore.in_config_dir(tmp_path).path == tmp_path / "settings.json"
