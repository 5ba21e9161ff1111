"""Label extraction agent: recovers list items from a video caption."""

from dataclasses import dataclass
from typing import Any, List, Optional

from ..allocation.titles import TitleHints, detect_emoji, display_name, strip_number
from .base import JsonAgent

MAX_ITEMS = 30


@dataclass
class LabelInput:
    """What the agent knows about a video."""

    title: str
    description: Optional[str] = None
    expected_items: Optional[int] = None


def _text_or_none(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class LabelAgent(JsonAgent[LabelInput, TitleHints]):
    """Turns a title or caption into item labels.

    Only the labels come back from Claude; slot timing stays with the
    allocator. An instance is also a label source for the pipeline: call it
    with a title.
    """

    name = "labels"
    prompt_file = "labels.txt"
    fallback_prompt = (
        "You read captions of short list videos and recover the items they describe.\n"
        'Output valid JSON only: {"hookText": string|null, "items": [string], '
        '"outroText": string|null}. Do not invent items.'
    )

    def __call__(self, title: str) -> TitleHints:
        hints = self.run(LabelInput(title=title))
        self._logger.info(f"Claude found {len(hints.items)} label(s) in '{title[:60]}'")
        return hints

    def build_prompt(self, input_data: LabelInput) -> str:
        lines = [
            "Recover the list of items from this short video.",
            "",
            f"TITLE: {input_data.title}",
        ]
        if input_data.description:
            lines.append(f"CAPTION: {input_data.description}")
        if input_data.expected_items:
            lines.append(f"EXPECTED ITEMS: about {input_data.expected_items}")
        return "\n".join(lines)

    def parse(self, data: Any, input_data: LabelInput) -> TitleHints:
        # A bare array is read as the item list
        if isinstance(data, list):
            data = {"items": data}
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

        raw_items = data.get("items") or []
        if not isinstance(raw_items, list):
            raise ValueError("'items' must be a list")

        labels: List[str] = []
        for raw in raw_items[:MAX_ITEMS]:
            text = raw.get("text") if isinstance(raw, dict) else raw
            if isinstance(text, str) and strip_number(text):
                labels.append(display_name(strip_number(text)))

        return TitleHints(
            items=labels,
            item_count=len(labels),
            hook_text=_text_or_none(data.get("hookText")),
            emoji=detect_emoji(input_data.title),
            outro_text=_text_or_none(data.get("outroText")),
        )
