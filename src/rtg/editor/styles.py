"""Text overlay style presets."""

from typing import Dict, Optional

from ..models import EmojiPosition, StyleClass, TextStyle

PIN_EMOJI = "\U0001F4CD"
SPARKLES_EMOJI = "✨"
POINT_UP_EMOJI = "\U0001F446"


# Preset styles
STYLES: Dict[str, TextStyle] = {
    "hook": TextStyle(
        font_family="Montserrat",
        font_size=26,
        font_weight="800",
        text_shadow="2px 2px 6px rgba(0,0,0,0.9)",
        has_emoji=True,
        emoji=SPARKLES_EMOJI,
        emoji_position=EmojiPosition.BOTH,
        position="center",
        alignment="center",
    ),
    "numbered": TextStyle(
        font_family="Inter",
        font_size=24,
        font_weight="700",
        text_shadow="1px 1px 3px rgba(0,0,0,0.9)",
        has_emoji=True,
        emoji=PIN_EMOJI,
        emoji_position=EmojiPosition.BEFORE,
        position="top",
        alignment="left",
    ),
    "cta": TextStyle(
        font_family="Poppins",
        font_size=20,
        font_weight="600",
        has_emoji=True,
        emoji=POINT_UP_EMOJI,
        emoji_position=EmojiPosition.AFTER,
        position="center",
        alignment="center",
    ),
    "location_label": TextStyle(
        font_family="Poppins",
        font_size=22,
        font_weight="700",
        background_color="rgba(0,0,0,0.6)",
        has_emoji=True,
        emoji=PIN_EMOJI,
        emoji_position=EmojiPosition.BEFORE,
        position="bottom",
        alignment="left",
    ),
    "title": TextStyle(
        font_family="Montserrat",
        font_size=28,
        font_weight="800",
        text_shadow="2px 2px 4px rgba(0,0,0,0.8)",
        position="center",
        alignment="center",
    ),
}


def get_style(name: str) -> TextStyle:
    """Get a copy of a text style by name.

    Args:
        name: Style name.

    Returns:
        TextStyle configuration.

    Raises:
        ValueError: If style not found.
    """
    if name not in STYLES:
        raise ValueError(f"Unknown style: {name}. Available: {list(STYLES.keys())}")
    return STYLES[name].model_copy(deep=True)


def register_style(name: str, style: TextStyle) -> None:
    """Register a custom text style.

    Args:
        name: Name for the style.
        style: TextStyle configuration.
    """
    STYLES[name] = style


def style_for_class(style_class: StyleClass, emoji: Optional[str] = None) -> TextStyle:
    """Resolve the preset for a segment style class.

    Args:
        style_class: hook, numbered or cta.
        emoji: Optional emoji replacing the preset's (hook and numbered only;
            the call-to-action keeps its pointing emoji).

    Returns:
        A fresh TextStyle.
    """
    style = get_style(StyleClass(style_class).value)
    if emoji and style_class != StyleClass.CTA:
        style.emoji = emoji
        style.has_emoji = True
    return style


def decorate_text(text: str, style: TextStyle) -> str:
    """Return ``text`` with the style's emoji placed around it."""
    if not style.has_emoji or not style.emoji:
        return text
    position = style.emoji_position or EmojiPosition.BEFORE
    if position == EmojiPosition.BEFORE:
        return f"{style.emoji} {text}"
    if position == EmojiPosition.AFTER:
        return f"{text} {style.emoji}"
    return f"{style.emoji} {text} {style.emoji}"
