"""Location grouping and clip/overlay track assembly."""

import logging
from decimal import Decimal
from typing import List, Mapping, Optional, Sequence

from ..allocation import display_name, style_class_for
from ..errors import ComputationError, EmptyResult
from ..models import (
    Clip,
    LocationGroup,
    Scene,
    SceneInfo,
    Segment,
    SegmentKind,
    StyleClass,
    TextOverlay,
    Timeline,
)
from ..timing import sum_durations, to_decimal
from .styles import get_style, style_for_class

logger = logging.getLogger(__name__)

INTRO_LOCATION_ID = 0

SEGMENT_DESCRIPTIONS = {
    SegmentKind.INTRO: "Hook shot",
    SegmentKind.CONTENT: "Shot of {label}",
    SegmentKind.OUTRO: "Call to action",
}


def _location(location_id: int, name: str, scenes: List[SceneInfo]) -> LocationGroup:
    return LocationGroup(
        location_id=location_id,
        location_name=name,
        scenes=scenes,
        total_duration=sum_durations(scene.duration for scene in scenes),
    )


def group_segments(
    segments: Sequence[Segment],
    emoji: Optional[str] = None,
) -> List[LocationGroup]:
    """Turn allocated segments into one location group each.

    The intro becomes location 0; item and outro groups keep their ordinal
    position as id.
    """
    groups: List[LocationGroup] = []
    for segment in segments:
        description = SEGMENT_DESCRIPTIONS[segment.kind].format(label=segment.label)
        scene = SceneInfo(
            id=segment.position + 1,
            start_time=segment.start_time,
            end_time=segment.end_time,
            duration=segment.duration,
            description=description,
            text_overlay=segment.text,
            text_style=style_for_class(segment.style_class, emoji),
        )
        location_id = INTRO_LOCATION_ID if segment.kind == SegmentKind.INTRO else segment.position
        groups.append(_location(location_id, segment.label, [scene]))
    return groups


def _scene_fields(scene: Scene) -> dict:
    return scene.model_dump(include=set(Scene.model_fields))


def _split_runs(count: int, runs: int) -> List[int]:
    """Sizes of ``runs`` contiguous runs covering ``count`` items, earliest largest."""
    base, extra = divmod(count, runs)
    return [base + 1 if i < extra else base for i in range(runs)]


def group_scenes(
    scenes: Sequence[Scene],
    labels: Optional[Sequence[str]] = None,
    hook_text: Optional[str] = None,
    emoji: Optional[str] = None,
) -> List[LocationGroup]:
    """Group detected scenes into locations.

    The first scene is the intro. Without labels every later scene is its
    own location ("Shot 2", "Shot 3"...). With labels the later scenes are
    split into contiguous runs, one per label, each run sharing one overlay.

    Raises:
        EmptyResult: If there are no scenes.
    """
    if not scenes:
        raise EmptyResult("No scenes to group")

    intro, rest = scenes[0], list(scenes[1:])
    groups = [_location(INTRO_LOCATION_ID, "Intro", [SceneInfo(
        **_scene_fields(intro),
        text_overlay=hook_text,
        text_style=style_for_class(StyleClass.HOOK, emoji),
    )])]

    if not labels:
        for position, scene in enumerate(rest, start=1):
            style_class = style_class_for(position, len(scenes))
            groups.append(_location(position, f"Shot {position + 1}", [SceneInfo(
                **_scene_fields(scene),
                text_style=style_for_class(style_class, emoji),
            )]))
        return groups

    if not rest:
        return groups

    runs = _split_runs(len(rest), min(len(labels), len(rest)))
    if len(labels) > len(rest):
        logger.warning(
            f"{len(labels)} labels for {len(rest)} scene(s); "
            f"dropping {len(labels) - len(rest)} label(s)"
        )

    index = 0
    for location_id, size in enumerate(runs, start=1):
        name = display_name(labels[location_id - 1])
        style_class = style_class_for(location_id, len(runs) + 1)
        members: List[SceneInfo] = []
        for offset, scene in enumerate(rest[index:index + size]):
            members.append(SceneInfo(
                **_scene_fields(scene),
                text_overlay=f"{location_id}. {name}" if offset == 0 else None,
                text_style=style_for_class(style_class, emoji),
            ))
        groups.append(_location(location_id, name, members))
        index += size
    return groups


def assemble(
    groups: Sequence[LocationGroup],
    media: Optional[Mapping[int, str]] = None,
) -> Timeline:
    """Build the clip track and one text overlay per location group.

    Each clip sits on its scene's own bounds, which are already contiguous
    from 0 for both detected scenes and allocated segments. The track
    therefore ends where the last scene ends. Each overlay spans its
    group's clips.

    Args:
        groups: Location groups in timeline order.
        media: Optional media references keyed by scene id.

    Raises:
        ComputationError: If a group has no scenes, or a scene is empty or
            does not start where the previous one ended.
    """
    media = media or {}
    clips: List[Clip] = []
    overlays: List[TextOverlay] = []
    cursor = Decimal("0")

    for group in groups:
        if not group.scenes:
            raise ComputationError(f"Location {group.location_id} has no scenes")

        group_start = cursor
        for scene in group.scenes:
            start, end = to_decimal(scene.start_time), to_decimal(scene.end_time)
            if start != cursor:
                raise ComputationError(
                    f"Scene {scene.id} starts at {start}s, expected {cursor}s"
                )
            if end <= start:
                raise ComputationError(f"Scene {scene.id} is empty: [{start}, {end})")
            clips.append(Clip(
                id=f"clip-{group.location_id}-{scene.id}",
                scene_id=scene.id,
                location_id=group.location_id,
                location_name=group.location_name,
                start_time=float(start),
                end_time=float(end),
                duration=float(end - start),
                media=media.get(scene.id, scene.media),
                thumbnail=scene.thumbnail,
            ))
            cursor = end

        lead = next((s for s in group.scenes if s.text_overlay), None)
        fallback = "title" if group.location_id == INTRO_LOCATION_ID else "location_label"
        overlays.append(TextOverlay(
            id=f"text-{group.location_id}",
            location_id=group.location_id,
            text=lead.text_overlay if lead else group.location_name,
            style=(lead.text_style if lead and lead.text_style else get_style(fallback)),
            start_time=float(group_start),
            end_time=float(cursor),
        ))

    logger.debug(f"Assembled {len(clips)} clip(s) and {len(overlays)} overlay(s) over {cursor}s")
    return Timeline(clips=clips, overlays=overlays, total_duration=float(cursor))
