"""Tests for template models and persistence."""

import json
import re

import pytest
import yaml
from pydantic import ValidationError

from rtg.allocation import allocate
from rtg.editor import assemble, group_segments
from rtg.models import ExtractionMethod, Segment, Template, TextStyle, generate_template_id


@pytest.fixture
def template() -> Template:
    allocation = allocate(20.0, labels=["Cafe A", "Park B"], hook_text="Lisbon ☕")
    groups = group_segments(allocation.segments)
    return Template(
        title="Lisbon ☕ 1. Cafe A 2. Park B",
        total_duration=20.0,
        extraction_method=ExtractionMethod.ALLOCATION,
        locations=groups,
        timeline=assemble(groups),
    )


def test_template_id_format() -> None:
    assert re.fullmatch(r"tmpl_\d{13}_[a-z0-9]{9}", generate_template_id())
    assert generate_template_id() != generate_template_id()


def test_wire_names_are_camel_case(template) -> None:
    data = template.to_dict()

    assert data["extractionMethod"] == "allocation"
    assert data["totalDuration"] == 20.0
    location = data["locations"][1]
    assert location["locationId"] == 1
    assert location["locationName"] == "Cafe A"
    assert location["scenes"][0]["textStyle"]["fontFamily"] == "Inter"
    assert "startTime" in data["timeline"]["clips"][0]


def test_yaml_round_trip(template, tmp_path) -> None:
    path = template.save(tmp_path / "out" / "template.yaml")

    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert raw["title"] == template.title
    assert Template.load(path) == template


def test_json_round_trip(template, tmp_path) -> None:
    path = template.save(tmp_path / "template.json")

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["id"] == template.id
    assert Template.load(path) == template


def test_snake_case_names_are_accepted() -> None:
    style = TextStyle(font_family="Inter", font_size=30)
    assert style.font_size == 30
    assert TextStyle.model_validate({"fontFamily": "Inter"}).font_family == "Inter"


def test_scene_count(template) -> None:
    assert template.scene_count == 4


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ValidationError):
        Template(total_duration=0, extraction_method=ExtractionMethod.ALLOCATION)
    with pytest.raises(ValidationError):
        Segment(position=0, kind="intro", label="x", start_time=0, end_time=0, duration=0, style_class="hook")
