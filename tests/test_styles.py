"""Tests for text style presets."""

import pytest

from rtg.editor import STYLES, decorate_text, get_style, register_style, style_for_class
from rtg.models import EmojiPosition, ScreenPosition, StyleClass, TextStyle


def test_presets_exist() -> None:
    for name in ("hook", "numbered", "cta", "location_label", "title"):
        assert isinstance(get_style(name), TextStyle)


def test_get_style_returns_a_copy() -> None:
    style = get_style("numbered")
    style.font_size = 99
    assert STYLES["numbered"].font_size == 24


def test_unknown_style() -> None:
    with pytest.raises(ValueError):
        get_style("comic-sans")


def test_register_style() -> None:
    register_style("subtitle", TextStyle(font_size=14, position=ScreenPosition.BOTTOM))
    try:
        assert get_style("subtitle").font_size == 14
    finally:
        STYLES.pop("subtitle")


def test_style_for_class_positions() -> None:
    assert style_for_class(StyleClass.HOOK).position == ScreenPosition.CENTER
    assert style_for_class(StyleClass.NUMBERED).position == ScreenPosition.TOP
    assert style_for_class(StyleClass.CTA).emoji_position == EmojiPosition.AFTER


def test_title_emoji_replaces_preset_except_for_cta() -> None:
    assert style_for_class(StyleClass.HOOK, emoji="☕").emoji == "☕"
    assert style_for_class(StyleClass.NUMBERED, emoji="☕").emoji == "☕"
    assert style_for_class(StyleClass.CTA, emoji="☕").emoji == "\U0001F446"
    assert STYLES["hook"].emoji == "✨"


def test_decorate_text() -> None:
    assert decorate_text("1. Cafe A", get_style("numbered")) == "\U0001F4CD 1. Cafe A"
    assert decorate_text("Follow", get_style("cta")) == "Follow \U0001F446"
    assert decorate_text("Lisbon", get_style("hook")) == "✨ Lisbon ✨"
    assert decorate_text("Plain", get_style("title")) == "Plain"
