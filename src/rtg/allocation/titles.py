"""Heuristics for reading item lists out of titles and captions."""

import re
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_ITEM_COUNT = 5
MAX_BARE_COUNT = 10
MAX_HOOK_LENGTH = 100
MAX_DISPLAY_NAME = 40

NUMBERED_ITEM_PATTERN = re.compile(r"(\d+)\.\s*([^0-9]+?)(?=\d+\.|#|$)")
COUNT_HINT_PATTERN = re.compile(
    r"(\d+)\s*(must|best|top|places|things|spots|cafe|restaurant|food|unique)",
    re.IGNORECASE,
)
BARE_NUMBER_PATTERN = re.compile(r"(\d+)")
LEADING_NUMBER_PATTERN = re.compile(r"^\d+[.)]\s*")
EMOJI_PATTERN = re.compile("[\U0001F300-\U0001F9FF☀-⛿✀-➿]")


@dataclass
class TitleHints:
    """Item information recovered from a title."""

    items: List[str] = field(default_factory=list)
    item_count: int = DEFAULT_ITEM_COUNT
    hook_text: Optional[str] = None
    emoji: Optional[str] = None
    outro_text: Optional[str] = None


def strip_number(label: str) -> str:
    """Remove a leading ``"3."`` or ``"3)"`` from a label."""
    return LEADING_NUMBER_PATTERN.sub("", label).strip()


def display_name(label: str, limit: int = MAX_DISPLAY_NAME) -> str:
    """Shorten a label for display."""
    label = " ".join(label.split())
    if len(label) > limit:
        return label[:limit] + "..."
    return label


def extract_numbered_items(text: str) -> List[str]:
    """Return items written as ``1. Foo 2. Bar`` in ``text``."""
    items: List[str] = []
    for match in NUMBERED_ITEM_PATTERN.finditer(text):
        name = " ".join(match.group(2).split())
        if 2 < len(name) < 100:
            items.append(name)
    return items


def detect_emoji(text: str) -> Optional[str]:
    """Return the first emoji in ``text``, if any."""
    match = EMOJI_PATTERN.search(text)
    return match.group(0) if match else None


def parse_title(title: str, default_count: int = DEFAULT_ITEM_COUNT) -> TitleHints:
    """Recover item labels and counts from a video title.

    Numbered items win; otherwise a count hint such as "5 best cafes" is
    used; otherwise any bare number (capped); otherwise ``default_count``.
    """
    title = title or ""
    items = extract_numbered_items(title)

    if items:
        count = len(items)
    else:
        hint = COUNT_HINT_PATTERN.search(title)
        bare = BARE_NUMBER_PATTERN.search(title)
        if hint:
            count = int(hint.group(1))
        elif bare:
            count = min(int(bare.group(1)), MAX_BARE_COUNT)
        else:
            count = default_count

    hook = re.split(r"\d+\.", title)[0].strip()[:MAX_HOOK_LENGTH]
    if not hook:
        hook = title.strip()[:50]

    return TitleHints(
        items=items,
        item_count=count,
        hook_text=hook or None,
        emoji=detect_emoji(title),
    )


def parse_item_list(text: str) -> List[str]:
    """Parse a textual item list, one item per line or ``1. Foo 2. Bar``."""
    lines = [strip_number(line) for line in text.splitlines()]
    lines = [line for line in lines if line]
    if len(lines) > 1:
        return lines
    return extract_numbered_items(text) or lines
