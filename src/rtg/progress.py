"""Progress reporting for extraction runs."""

import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

ProgressObserver = Callable[[float], None]


class ProgressReporter:
    """Reports the fraction of scheduled work completed for one run.

    Observers receive a float in [0, 1] that never decreases. They are
    notified after each unit of work and cannot affect the run: an observer
    that raises is logged and skipped.
    """

    def __init__(
        self,
        total: int,
        observers: Optional[List[ProgressObserver]] = None,
    ) -> None:
        """Initialize the reporter.

        Args:
            total: Number of work units scheduled for the run.
            observers: Callables notified with the completed fraction.
        """
        self._total = max(total, 0)
        self._done = 0
        self._fraction = 0.0
        self._observers: List[ProgressObserver] = list(observers or [])

    @property
    def fraction(self) -> float:
        """Return the last reported fraction."""
        return self._fraction

    @property
    def completed(self) -> int:
        """Return the number of completed work units."""
        return self._done

    def advance(self, steps: int = 1) -> float:
        """Mark work units complete and notify observers.

        Returns:
            The fraction reported to observers.
        """
        self._done = min(self._done + max(steps, 0), self._total)
        fraction = 1.0 if self._total == 0 else self._done / self._total
        self._fraction = max(self._fraction, min(fraction, 1.0))
        self._notify()
        return self._fraction

    def complete(self) -> None:
        """Report the run as finished."""
        if self._fraction < 1.0:
            self._done = self._total
            self._fraction = 1.0
            self._notify()

    def _notify(self) -> None:
        for observer in self._observers:
            try:
                observer(self._fraction)
            except Exception as e:
                logger.warning(f"Progress observer failed: {e}")
