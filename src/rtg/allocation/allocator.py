"""Count-based timeline allocation.

Splits a total duration into an intro, one slot per item and an outro:

    intro   = max(1, round(min(2, 0.1 * T)))
    outro   = min(2, 0.1 * T)
    perItem = (T - intro - outro) / max(N, 1)
    item_i  = max(1, round(perItem, 1))
    outro'  = max(1, T - cursor)

The final outro absorbs all rounding drift. For very short videos the one
second floors can push the sum past T; that drift is kept, not corrected.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Sequence

from ..errors import ComputationError
from ..models import Segment, SegmentKind, StyleClass
from ..timing import (
    round_duration,
    round_half_up,
    require_positive_duration,
    sum_durations,
    to_decimal,
)
from .titles import display_name, strip_number

logger = logging.getLogger(__name__)

MAX_INTRO_SECONDS = 2
MAX_OUTRO_SECONDS = 2
EDGE_FRACTION = Decimal("0.1")
DEFAULT_OUTRO_TEXT = "Follow for more!"


@dataclass
class Allocation:
    """Result of allocating a duration across slots."""

    segments: List[Segment]
    requested_duration: float
    items: List[str] = field(default_factory=list)

    @property
    def total_duration(self) -> float:
        """Return the exact sum of segment durations."""
        return sum_durations(segment.duration for segment in self.segments)

    @property
    def drift(self) -> float:
        """Return how far the slots over-run the requested duration."""
        return float(to_decimal(self.total_duration) - to_decimal(self.requested_duration))

    @property
    def content(self) -> List[Segment]:
        """Return the item slots."""
        return [s for s in self.segments if s.kind == SegmentKind.CONTENT]


def style_class_for(position: int, segment_count: int) -> StyleClass:
    """Return the style class for a slot by ordinal position alone.

    The first slot is the hook, the last is the call to action, and every
    slot between them is a numbered item.
    """
    if position < 0 or position >= segment_count:
        raise ComputationError(f"Position {position} outside 0..{segment_count - 1}")
    if position == 0:
        return StyleClass.HOOK
    if position == segment_count - 1:
        return StyleClass.CTA
    return StyleClass.NUMBERED


def intro_seconds(duration: float) -> int:
    """Return the intro length for a total duration."""
    return max(1, round_half_up(min(Decimal(MAX_INTRO_SECONDS), EDGE_FRACTION * to_decimal(duration))))


def outro_seconds(duration: float) -> Decimal:
    """Return the nominal outro length used to size item slots."""
    return min(Decimal(MAX_OUTRO_SECONDS), EDGE_FRACTION * to_decimal(duration))


def allocate(
    duration: float,
    item_count: Optional[int] = None,
    labels: Optional[Sequence[str]] = None,
    hook_text: Optional[str] = None,
    outro_text: Optional[str] = None,
) -> Allocation:
    """Partition ``duration`` into intro, item and outro segments.

    Args:
        duration: Total duration T in seconds.
        item_count: Number of items N. Defaults to ``len(labels)``.
        labels: Item labels; missing ones become ``"Location i"``.
        hook_text: Intro overlay text.
        outro_text: Outro overlay text. Defaults to a follow prompt.

    Returns:
        Allocation with N + 2 ordered, contiguous segments.

    Raises:
        ComputationError: If duration <= 0 or item_count < 0.
    """
    total = require_positive_duration(duration)
    labels = [strip_number(label) for label in (labels or [])]
    count = len(labels) if item_count is None else item_count
    if count < 0:
        raise ComputationError(f"Item count must be non-negative, got {count}")

    intro = intro_seconds(total)
    content_time = to_decimal(total) - intro - outro_seconds(total)
    per_item = content_time / max(count, 1)
    segment_count = count + 2

    segments: List[Segment] = []
    cursor = Decimal(intro)
    segments.append(Segment(
        position=0,
        kind=SegmentKind.INTRO,
        label="Intro",
        start_time=0.0,
        end_time=float(cursor),
        duration=float(intro),
        text=hook_text,
        style_class=style_class_for(0, segment_count),
    ))

    names: List[str] = []
    for i in range(1, count + 1):
        label = labels[i - 1] if i - 1 < len(labels) and labels[i - 1] else f"Location {i}"
        name = display_name(label)
        names.append(name)
        slot = to_decimal(round_duration(per_item))
        segments.append(Segment(
            position=i,
            kind=SegmentKind.CONTENT,
            label=name,
            start_time=float(cursor),
            end_time=float(cursor + slot),
            duration=float(slot),
            text=f"{i}. {name}",
            style_class=style_class_for(i, segment_count),
        ))
        cursor += slot

    # The outro takes the true remainder, not a per-item share
    outro = max(Decimal(1), to_decimal(total) - cursor)
    segments.append(Segment(
        position=count + 1,
        kind=SegmentKind.OUTRO,
        label="Outro",
        start_time=float(cursor),
        end_time=float(cursor + outro),
        duration=float(outro),
        text=outro_text or DEFAULT_OUTRO_TEXT,
        style_class=style_class_for(count + 1, segment_count),
    ))

    allocation = Allocation(segments=segments, requested_duration=total, items=names)
    if allocation.drift > 0:
        logger.debug(
            f"Allocation over-runs {total}s by {allocation.drift:.1f}s "
            f"(one-second floors on {segment_count} slots)"
        )
    logger.debug(f"Allocated {count} item(s) over {total}s: {per_item:.2f}s per item")
    return allocation
