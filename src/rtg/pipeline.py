"""Template building: scene detection with count-based fallback."""

import asyncio
import logging
from typing import Callable, Mapping, Optional, Sequence

from .allocation import TitleHints, allocate, parse_title, strip_number
from .detection import DetectionSettings, FrameDecoder, detect_scenes
from .editor import assemble, group_scenes, group_segments
from .errors import DETECTION_FAILURES, EmptyResult
from .models import ExtractionMethod, Template
from .progress import ProgressObserver

logger = logging.getLogger(__name__)

LabelSource = Callable[[str], TitleHints]


def resolve_hints(
    title: str = "",
    items: Optional[Sequence[str]] = None,
    label_source: Optional[LabelSource] = None,
) -> TitleHints:
    """Work out item labels for a template.

    Explicit items win, then the external label source, then title parsing.
    A failing or empty label source falls back to title parsing.
    """
    parsed = parse_title(title)

    if items:
        labels = [strip_number(item) for item in items if item and item.strip()]
        return TitleHints(
            items=labels,
            item_count=len(labels),
            hook_text=parsed.hook_text,
            emoji=parsed.emoji,
        )

    if label_source is not None:
        try:
            hints = label_source(title)
            if not hints.items:
                raise EmptyResult("Label source returned no items")
        except Exception as e:
            logger.warning(f"Label extraction failed ({e}); using title heuristics")
        else:
            hints.hook_text = hints.hook_text or parsed.hook_text
            hints.emoji = hints.emoji or parsed.emoji
            return hints

    return parsed


def build_from_items(
    duration: float,
    title: str = "",
    items: Optional[Sequence[str]] = None,
    item_count: Optional[int] = None,
    label_source: Optional[LabelSource] = None,
    media: Optional[Mapping[int, str]] = None,
    hints: Optional[TitleHints] = None,
) -> Template:
    """Build a template from a duration and an item list, without video.

    Args:
        duration: Total duration in seconds.
        title: Title or caption used for labels and hook text.
        items: Explicit item labels.
        item_count: Explicit item count, overriding the detected one.
        label_source: Optional external label extractor.
        media: Optional media references keyed by scene id.
        hints: Pre-resolved hints; skips label resolution.

    Raises:
        ComputationError: If duration <= 0 or item_count < 0.
    """
    hints = hints or resolve_hints(title, items, label_source)
    if item_count is None:
        item_count = len(hints.items) if hints.items else hints.item_count

    allocation = allocate(
        duration,
        item_count=item_count,
        labels=hints.items,
        hook_text=hints.hook_text,
        outro_text=hints.outro_text,
    )
    groups = group_segments(allocation.segments, emoji=hints.emoji)
    timeline = assemble(groups, media)

    logger.info(
        f"Allocated {item_count} item(s) over {allocation.requested_duration}s "
        f"(timeline {allocation.total_duration}s)"
    )
    return Template(
        title=title,
        total_duration=allocation.requested_duration,
        extraction_method=ExtractionMethod.ALLOCATION,
        locations=groups,
        timeline=timeline,
    )


async def build_template(
    decoder: FrameDecoder,
    duration: Optional[float] = None,
    title: str = "",
    items: Optional[Sequence[str]] = None,
    settings: Optional[DetectionSettings] = None,
    on_progress: Optional[ProgressObserver] = None,
    budget: Optional[float] = None,
    label_source: Optional[LabelSource] = None,
    media: Optional[Mapping[int, str]] = None,
) -> Template:
    """Build a template from a video.

    Scene detection runs first. If it fails, or finds no visual boundary,
    the count-based allocator lays the labels out instead, so a usable
    template is always produced for a valid duration.

    Raises:
        ComputationError: If the duration is not positive.
    """
    total = duration if duration is not None else decoder.duration
    hints = await asyncio.to_thread(resolve_hints, title, items, label_source)

    try:
        result = await detect_scenes(
            decoder,
            duration=total,
            settings=settings,
            on_progress=on_progress,
            budget=budget,
        )
    except DETECTION_FAILURES as e:
        logger.warning(f"Scene detection failed ({type(e).__name__}: {e}); falling back to allocation")
        return build_from_items(total, title=title, hints=hints, media=media)

    if len(result.scenes) < 2:
        logger.info(f"{len(result.scenes)} scene(s) detected; falling back to allocation")
        return build_from_items(total, title=title, hints=hints, media=media)

    groups = group_scenes(
        result.scenes,
        labels=hints.items or None,
        hook_text=hints.hook_text,
        emoji=hints.emoji,
    )
    timeline = assemble(groups, media)
    return Template(
        title=title,
        total_duration=result.total_duration,
        extraction_method=ExtractionMethod.SCENE_DETECTION,
        locations=groups,
        timeline=timeline,
    )
