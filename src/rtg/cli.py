"""CLI entry point for the reel template generator."""

import asyncio
import json
import logging
import typer
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import config
from .errors import TemplateError

app = typer.Typer(
    name="reel-template",
    help="Turn short vertical videos into fill-in-the-blanks edit templates",
    no_args_is_help=True
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"reel-template version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """Reel Template Generator - scene detection and timeline allocation."""
    pass


def _settings(
    threshold: Optional[float],
    min_scene: Optional[float],
    interval: Optional[float],
    samples: Optional[int],
):
    """Merge command-line overrides into the configured detection settings."""
    from dataclasses import replace

    settings = config.detection_settings()
    overrides = {}
    if threshold is not None:
        overrides["threshold"] = threshold
    if min_scene is not None:
        overrides["min_scene_duration"] = min_scene
    if interval is not None:
        overrides["sample_interval"] = interval
    if samples is not None:
        overrides["sample_count"] = samples
    return replace(settings, **overrides)


def _open_decoder(video: Path):
    from .detection import MoviePyDecoder

    try:
        return MoviePyDecoder(video)
    except TemplateError as e:
        typer.echo(f"❌ Could not open video: {e}")
        raise typer.Exit(1)


@app.command()
def detect(
    video: Path = typer.Argument(
        ...,
        help="Video file to analyse",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    threshold: Optional[float] = typer.Option(
        None,
        "--threshold",
        "-t",
        help="Frame difference threshold in (0, 1)",
        min=0.0,
        max=1.0
    ),
    min_scene: Optional[float] = typer.Option(
        None,
        "--min-scene",
        "-m",
        help="Minimum scene duration in seconds",
        min=0.0
    ),
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        "-i",
        help="Seconds between samples"
    ),
    samples: Optional[int] = typer.Option(
        None,
        "--samples",
        "-n",
        help="Explicit number of samples (overrides --interval)",
        min=1
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print scenes as JSON"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Detect visual scene boundaries in a video."""
    from .detection import detect_scenes

    setup_logging(verbose)
    settings = _settings(threshold, min_scene, interval, samples)

    with _open_decoder(video) as decoder:
        if not as_json:
            typer.echo(f"🎬 Detecting scenes: {video}")
            typer.echo(f"   Duration: {decoder.duration:.1f}s")

        try:
            with typer.progressbar(length=100, label="   Sampling", hidden=as_json) as bar:
                shown = [0]

                def on_progress(fraction: float) -> None:
                    target = int(fraction * 100)
                    bar.update(target - shown[0])
                    shown[0] = target

                result = asyncio.run(detect_scenes(decoder, settings=settings, on_progress=on_progress))
        except (TemplateError, ValueError) as e:
            typer.echo(f"❌ Scene detection failed: {e}")
            raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(
            [scene.model_dump(mode="json", by_alias=True, exclude={"thumbnail"}) for scene in result.scenes],
            indent=2,
        ))
        return

    typer.echo(f"\n📽️  Scenes: {len(result.scenes)}")
    for scene in result.scenes:
        typer.echo(f"   {scene.id}: {scene.start_time:.1f}s → {scene.end_time:.1f}s ({scene.duration}s)")
    if result.skipped:
        typer.echo(f"⚠️  Skipped {len(result.skipped)} unreadable frame(s)")


def _read_items(item: Optional[List[str]], items_file: Optional[Path]) -> Optional[List[str]]:
    """Combine --item values with labels read from --items-file."""
    from .allocation import parse_item_list

    labels = list(item or [])
    if items_file is not None:
        try:
            labels.extend(parse_item_list(items_file.read_text()))
        except OSError as e:
            typer.echo(f"❌ Could not read items file: {e}")
            raise typer.Exit(1)
    return labels or None


@app.command()
def allocate(
    duration: Optional[float] = typer.Option(
        None,
        "--duration",
        "-d",
        help="Total duration in seconds"
    ),
    video: Optional[Path] = typer.Option(
        None,
        "--video",
        help="Read the duration from a video file",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    item: Optional[List[str]] = typer.Option(
        None,
        "--item",
        "-i",
        help="Item label (repeat for each item)"
    ),
    items_file: Optional[Path] = typer.Option(
        None,
        "--items-file",
        help="Text file with one item per line",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    count: Optional[int] = typer.Option(
        None,
        "--count",
        "-c",
        help="Number of items (when no labels are given)",
        min=0
    ),
    title: str = typer.Option(
        "",
        "--title",
        help="Title or caption to read items from"
    ),
) -> None:
    """Split a duration into intro, item and outro slots."""
    from .allocation import allocate as allocate_segments
    from .detection import probe_duration
    from .pipeline import resolve_hints

    if duration is None:
        if video is None:
            typer.echo("❌ Provide --duration or --video")
            raise typer.Exit(1)
        try:
            duration = probe_duration(video)
        except TemplateError as e:
            typer.echo(f"❌ Could not open video: {e}")
            raise typer.Exit(1)

    hints = resolve_hints(title, _read_items(item, items_file))
    item_count = count if count is not None else (len(hints.items) if hints.items else hints.item_count)

    try:
        allocation = allocate_segments(
            duration,
            item_count=item_count,
            labels=hints.items,
            hook_text=hints.hook_text,
        )
    except TemplateError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)

    typer.echo(f"⏱️  {len(allocation.segments)} slots over {allocation.requested_duration}s")
    for segment in allocation.segments:
        text = f"  \"{segment.text}\"" if segment.text else ""
        typer.echo(
            f"   [{segment.start_time:5.1f} → {segment.end_time:5.1f}] "
            f"{segment.kind.value:<7} {segment.style_class.value:<8} {segment.duration}s{text}"
        )
    typer.echo(f"   Total: {allocation.total_duration}s")
    if allocation.drift > 0:
        typer.echo(f"⚠️  Slots over-run the duration by {allocation.drift:.1f}s")


@app.command()
def build(
    video: Path = typer.Argument(
        ...,
        help="Video file to turn into a template",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    title: str = typer.Option(
        "",
        "--title",
        help="Video title or caption"
    ),
    item: Optional[List[str]] = typer.Option(
        None,
        "--item",
        "-i",
        help="Item label (repeat for each item)"
    ),
    items_file: Optional[Path] = typer.Option(
        None,
        "--items-file",
        help="Text file with one item per line",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    ai_labels: bool = typer.Option(
        False,
        "--ai-labels",
        help="Ask Claude to read item labels from the title"
    ),
    budget: Optional[float] = typer.Option(
        None,
        "--budget",
        "-b",
        help="Wall-clock limit for scene detection in seconds",
        min=0.1
    ),
    threshold: Optional[float] = typer.Option(
        None,
        "--threshold",
        "-t",
        help="Frame difference threshold in (0, 1)",
        min=0.0,
        max=1.0
    ),
    min_scene: Optional[float] = typer.Option(
        None,
        "--min-scene",
        "-m",
        help="Minimum scene duration in seconds",
        min=0.0
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output template file (.yaml or .json); defaults to <workspace>/<id>.yaml"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Build a reel template from a video, falling back to allocation."""
    from .pipeline import build_template

    setup_logging(verbose)
    typer.echo(f"🎬 Building template from {video}")

    label_source = None
    if ai_labels:
        try:
            config.validate_required()
            from .agents import LabelAgent
            label_source = LabelAgent()
            typer.echo(f"   Label extraction: {label_source.model}")
        except ValueError as e:
            typer.echo(f"⚠️  AI labels disabled: {e}")

    settings = _settings(threshold, min_scene, None, None)
    with _open_decoder(video) as decoder:
        try:
            template = asyncio.run(build_template(
                decoder,
                title=title,
                items=_read_items(item, items_file),
                settings=settings,
                budget=budget,
                label_source=label_source,
            ))
        except TemplateError as e:
            typer.echo(f"❌ Error building template: {e}")
            raise typer.Exit(1)

    output = output or (config.workspace / f"{template.id}.yaml")
    try:
        template.save(output)
    except OSError as e:
        typer.echo(f"❌ Error saving template: {e}")
        raise typer.Exit(1)

    typer.echo(f"✅ Template saved: {output}")
    _print_summary(template)


@app.command()
def status(
    template_path: Path = typer.Option(
        ...,
        "--template",
        "-s",
        help="Path to a saved template (.yaml or .json)",
        exists=False,
        file_okay=True,
        dir_okay=False
    )
) -> None:
    """Show a saved template."""
    from .models import Template

    if not template_path.exists():
        typer.echo(f"❌ No template found at {template_path}")
        typer.echo("   Run 'reel-template build' to create one")
        raise typer.Exit(1)

    try:
        template = Template.load(template_path)
    except Exception as e:
        typer.echo(f"❌ Error loading template: {e}")
        raise typer.Exit(1)

    _print_summary(template)


def _print_summary(template) -> None:
    from .editor import decorate_text

    typer.echo(f"📁 Template: {template.id}")
    if template.title:
        typer.echo(f"   Title: {template.title}")
    typer.echo(f"   Method: {template.extraction_method.value}")
    typer.echo(f"   Duration: {template.total_duration:.1f}s")
    typer.echo(f"   Locations: {len(template.locations)}, scenes: {template.scene_count}")

    typer.echo("\n📍 Locations:")
    for location in template.locations:
        filled = sum(1 for scene in location.scenes if scene.media)
        status_icon = "✅" if filled == len(location.scenes) else "⏳"
        typer.echo(
            f"   {status_icon} {location.location_id}: {location.location_name} "
            f"({len(location.scenes)} scene(s), {location.total_duration}s)"
        )
        for scene in location.scenes:
            if scene.text_overlay:
                text = decorate_text(scene.text_overlay, scene.text_style) if scene.text_style else scene.text_overlay
                typer.echo(f"      → {text}")


if __name__ == "__main__":
    app()
