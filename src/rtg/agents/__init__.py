"""Claude-backed extraction agents."""

from .base import JsonAgent, extract_json
from .labels import LabelAgent, LabelInput

__all__ = ["JsonAgent", "extract_json", "LabelAgent", "LabelInput"]
