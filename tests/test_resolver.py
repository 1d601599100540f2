"""Tests for first-available font resolution and font spec strings."""

import pytest

from cjkalign.resolver import FontResolver, ResolvedFonts, build_font_spec, format_size


class TestBuildFontSpec:
    def test_point_size(self):
        assert build_font_spec("Monaco", 12.5) == "Monaco-12.5"

    def test_integral_float_drops_decimal(self):
        assert build_font_spec("Monaco", 14.0) == "Monaco-14"

    def test_int_size(self):
        assert build_font_spec("Monaco", 9) == "Monaco-9"

    def test_pixel_size_directive(self):
        assert build_font_spec("Monaco", ":pixelsize=14") == "Monaco:pixelsize=14"

    def test_other_string_size(self):
        assert build_font_spec("Monaco", "13") == "Monaco-13"

    def test_name_with_spaces(self):
        assert build_font_spec("DejaVu Sans Mono", 10.5) == "DejaVu Sans Mono-10.5"


class TestFormatSize:
    @pytest.mark.parametrize(("size", "expected"), [(9, "9"), (10.5, "10.5"), (22.0, "22")])
    def test_numbers(self, size, expected):
        assert format_size(size) == expected

    def test_string_passthrough(self):
        assert format_size(":pixelsize=12") == ":pixelsize=12"


class TestResolveRole:
    def test_first_available_wins(self):
        resolver = FontResolver(lambda name: name in {"B", "C"})
        assert resolver.resolve_role(["A", "B", "C"]) == "B"

    def test_none_available(self):
        resolver = FontResolver(lambda name: False)
        assert resolver.resolve_role(["A", "B"]) is None

    def test_empty_candidates(self):
        resolver = FontResolver(lambda name: True)
        assert resolver.resolve_role([]) is None

    def test_stops_at_first_match(self):
        asked = []

        def available(name):
            asked.append(name)
            return name == "B"

        FontResolver(available, cache=False).resolve_role(["A", "B", "C"])
        assert asked == ["A", "B"]

    def test_deterministic_across_calls(self):
        resolver = FontResolver(lambda name: name in {"C", "B"})
        results = {resolver.resolve_role(["A", "B", "C"]) for _ in range(5)}
        results.add(resolver.resolve_role(["A", "B", "C"]))
        assert results == {"B"}

    def test_cache_queries_predicate_once(self):
        asked = []

        def available(name):
            asked.append(name)
            return name == "B"

        resolver = FontResolver(available)
        resolver.resolve_role(["A", "B"])
        resolver.resolve_role(["A", "B"])
        assert asked == ["A", "B"]

    def test_clear_cache_requeries(self):
        installed = {"B"}
        resolver = FontResolver(lambda name: name in installed)
        assert resolver.resolve_role(["A", "B"]) == "B"
        installed.add("A")
        assert resolver.resolve_role(["A", "B"]) == "B"
        resolver.clear_cache()
        assert resolver.resolve_role(["A", "B"]) == "A"


class TestResolve:
    def test_all_roles(self):
        resolver = FontResolver(lambda name: name in {"Hack", "SimHei", "Symbola", "HanaMinB"})
        fonts = resolver.resolve(
            [["Monaco", "Hack"], ["SimHei"], ["Symbola"], ["HanaMinB"]]
        )
        assert fonts == ResolvedFonts("Hack", "SimHei", "Symbola", "HanaMinB")
        assert fonts.missing_required() == []

    def test_missing_optional_roles(self):
        resolver = FontResolver(lambda name: name in {"Hack", "SimHei"})
        fonts = resolver.resolve([["Hack"], ["SimHei"]])
        assert fonts.symbol is None
        assert fonts.extb is None
        assert fonts.missing_required() == []

    def test_missing_required_role(self):
        resolver = FontResolver(lambda name: name == "Hack")
        fonts = resolver.resolve([["Hack"], ["SimHei"]])
        assert fonts.missing_required() == ["chinese"]
