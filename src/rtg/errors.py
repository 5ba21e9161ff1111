"""Error types raised by the segmentation and allocation engine."""

from typing import Optional


class TemplateError(Exception):
    """Base class for engine failures."""


class DecodeError(TemplateError):
    """The video could not be read (missing, corrupt or inaccessible)."""


class SeekTimeout(TemplateError):
    """A single frame seek did not complete in time."""

    def __init__(self, timestamp: float, timeout: float) -> None:
        self.timestamp = timestamp
        self.timeout = timeout
        super().__init__(f"Seek to {timestamp:.3f}s timed out after {timeout:.1f}s")


class ExtractionTimeout(TemplateError):
    """A whole extraction run exceeded its wall-clock budget."""

    def __init__(self, budget: float, frames_processed: Optional[int] = None) -> None:
        self.budget = budget
        self.frames_processed = frames_processed
        message = f"Extraction exceeded its {budget:.1f}s budget"
        if frames_processed is not None:
            message += f" after {frames_processed} frame(s)"
        super().__init__(message)


class EmptyResult(TemplateError):
    """A run produced zero usable frames or zero items."""


class ComputationError(TemplateError, ValueError):
    """Invalid numeric input, e.g. a non-positive duration."""


# Failures after which callers should switch to count-based allocation
DETECTION_FAILURES = (DecodeError, SeekTimeout, ExtractionTimeout, EmptyResult)
