"""Tests for hs_width.py - visible width measurement."""

import pytest

from hs_config import CacheConfig
from hs_width import (
    WidthCalculator,
    crop_visible,
    get_calculator,
    get_default_calculator,
    get_width,
    get_widths,
    sanitize_content,
    strip_ansi,
)

GREEN = "\x1b[32m"
GREY = "\x1b[38;5;240m"
RESET = "\x1b[39m"


@pytest.fixture
def calculator():
    return WidthCalculator(CacheConfig(default_size=4))


class TestVisibleWidth:
    def test_plain_text(self):
        assert get_width("Hello") == 5

    def test_empty(self):
        assert get_width("") == 0

    def test_color_escapes_do_not_count(self):
        assert get_width(f"{GREEN}done{RESET}") == 4
        assert get_width(f"{GREY}abc{RESET}") == 3

    def test_escape_only_is_zero(self):
        assert get_width(f"{GREEN}{RESET}") == 0

    @pytest.mark.parametrize("text", [
        f"{GREEN}ok{RESET}",
        f"a{GREY}b{RESET}c",
        f"\x1b[1;31mbold red\x1b[0m",
        "no escapes",
    ])
    def test_ansi_transparency(self, text):
        assert get_width(text) == get_width(strip_ansi(text))

    def test_wide_characters(self):
        assert get_width("你好") == 4

    def test_box_drawing_is_single_width(self):
        assert get_width("╭─┬─╮") == 5

    def test_control_characters_count_as_zero(self, calculator):
        assert calculator.get_width("a\tb") == 2
        assert calculator.stats["control_chars_handled"] == 1


class TestStripAnsi:
    def test_removes_color_sequences(self):
        assert strip_ansi(f"{GREEN}ok{RESET} {GREY}x") == "ok x"

    def test_leaves_plain_text(self):
        assert strip_ansi("[32m") == "[32m"


class TestCrop:
    def test_short_text_unchanged(self):
        assert crop_visible("abc", 5) == "abc"

    def test_crop_keeps_escapes(self):
        cropped = crop_visible(f"{GREEN}abcdef{RESET}", 3)
        assert cropped == f"{GREEN}abc{RESET}"
        assert get_width(cropped) == 3

    def test_wide_character_not_split(self):
        cropped = crop_visible("a你好", 2)
        assert cropped == "a"

    def test_crop_stops_at_first_character_that_does_not_fit(self):
        assert crop_visible("a你bcd", 2) == "a"

    def test_crop_keeps_trailing_escapes_after_cut(self):
        cropped = crop_visible(f"a你{GREEN}bc{RESET}", 2)
        assert cropped == f"a{GREEN}{RESET}"

    def test_zero_width(self):
        assert crop_visible(f"{GREEN}abc", 0) == GREEN


class TestCache:
    def test_hits_and_misses(self, calculator):
        calculator.get_width("abc")
        calculator.get_width("abc")
        stats = calculator.get_stats()
        assert stats["cache_hits"] == 1
        assert stats["cache_misses"] == 1
        assert stats["cache_hit_rate"] == 0.5

    def test_lru_eviction(self, calculator):
        for text in ["a", "bb", "ccc", "dddd", "eeeee"]:
            calculator.get_width(text)
        stats = calculator.get_stats()
        assert stats["cache_entries"] == 4
        assert stats["cache_evictions"] == 1

    def test_disabled_cache(self):
        calculator = WidthCalculator(CacheConfig(enable_caching=False))
        assert calculator.get_width("abc") == 3
        assert calculator.get_width("abc") == 3
        assert calculator.get_stats()["cache_entries"] == 0
        assert calculator.stats["calculations"] == 2

    def test_clear_cache(self, calculator):
        calculator.get_width("abc")
        calculator.clear_cache()
        assert calculator.get_stats()["cache_entries"] == 0


class TestBatch:
    def test_get_widths(self):
        assert get_widths(["Hello", f"{GREEN}ok{RESET}", "你", ""]) == [5, 2, 2, 0]


class TestSanitizeContent:
    def test_tab_becomes_space(self):
        assert sanitize_content("a\tb") == "a b"

    def test_color_escapes_survive(self):
        assert sanitize_content(f"{GREEN}a\x07b{RESET}") == f"{GREEN}a b{RESET}"

    def test_plain_text_unchanged(self):
        assert sanitize_content("你好 ok") == "你好 ok"


class TestSharedCalculators:
    def test_default_cache_config_uses_default_calculator(self):
        assert get_calculator(CacheConfig()) is get_default_calculator()
        assert get_calculator(None) is get_default_calculator()

    def test_one_calculator_per_cache_config(self):
        first = get_calculator(CacheConfig(default_size=7))
        assert get_calculator(CacheConfig(default_size=7)) is first
        assert first is not get_default_calculator()

    def test_calculator_honours_disabled_cache(self):
        calculator = get_calculator(CacheConfig(enable_caching=False))
        calculator.get_width("abc")
        assert calculator.get_stats()["cache_entries"] == 0
        assert calculator.get_stats()["cache_enabled"] is False
