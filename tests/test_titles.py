"""Tests for title and caption heuristics."""

from rtg.allocation import (
    detect_emoji,
    display_name,
    extract_numbered_items,
    parse_item_list,
    parse_title,
    strip_number,
)


def test_numbered_items_in_title() -> None:
    hints = parse_title("Best cafes ☕ 1. Cafe A 2. Park B #lisbon")

    assert hints.items == ["Cafe A", "Park B"]
    assert hints.item_count == 2
    assert hints.hook_text == "Best cafes ☕"
    assert hints.emoji == "☕"


def test_count_hint() -> None:
    hints = parse_title("7 best rooftop bars in Madrid")
    assert hints.items == []
    assert hints.item_count == 7


def test_bare_number_is_capped() -> None:
    assert parse_title("Rome in 48 hours").item_count == 10
    assert parse_title("Rome in 3 days").item_count == 3


def test_default_count_without_numbers() -> None:
    hints = parse_title("Hidden gems of Porto")
    assert hints.item_count == 5
    assert hints.hook_text == "Hidden gems of Porto"
    assert parse_title("", default_count=4).item_count == 4
    assert parse_title("").hook_text is None


def test_hook_falls_back_to_title_start() -> None:
    hints = parse_title("1. Cafe A 2. Park B")
    assert hints.hook_text == "1. Cafe A 2. Park B"


def test_short_fragments_are_not_items() -> None:
    assert extract_numbered_items("1. ab 2. Real place") == ["Real place"]


def test_strip_number_and_display_name() -> None:
    assert strip_number("3. Old Town") == "Old Town"
    assert strip_number("12) Harbour") == "Harbour"
    assert strip_number("Harbour 2") == "Harbour 2"
    assert display_name("  Cafe   A ") == "Cafe A"
    assert display_name("x" * 45) == "x" * 40 + "..."


def test_detect_emoji() -> None:
    assert detect_emoji("Tokyo eats \U0001F363 list") == "\U0001F363"
    assert detect_emoji("no emoji here") is None


def test_parse_item_list_lines() -> None:
    text = "1. Cafe A\n2) Park B\n\n  Museum C  \n"
    assert parse_item_list(text) == ["Cafe A", "Park B", "Museum C"]


def test_parse_item_list_inline() -> None:
    assert parse_item_list("1. Cafe A 2. Park B") == ["Cafe A", "Park B"]
