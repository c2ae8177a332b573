"""Step timing utilities for axsnap."""

from __future__ import annotations

import time
from datetime import timedelta
from typing import Dict, List, Tuple

from ..core.logger import log


class StepTimer:
    """Times consecutive steps of an operation and logs each one."""

    def __init__(self, operation: str = "operation", log_steps: bool = True) -> None:
        """Initialize the timer; the clock starts immediately.

        Args:
            operation: Name used in the summary log line.
            log_steps: Whether :meth:`lap` logs every finished step.
        """
        self.operation = operation
        self.log_steps = log_steps
        self.start_time = time.perf_counter()
        self._step_start = self.start_time
        self.steps: List[Tuple[str, float]] = []

    def lap(self, step: str) -> float:
        """Close the current step and start the next one.

        Args:
            step: Description of the step that just finished.

        Returns:
            Duration of the finished step in seconds.
        """
        now = time.perf_counter()
        duration = now - self._step_start
        self._step_start = now
        self.steps.append((step, duration))
        if self.log_steps:
            log.log_step(step, duration)
        return duration

    def elapsed(self) -> timedelta:
        """Total time since the timer was created."""
        return timedelta(seconds=time.perf_counter() - self.start_time)

    def get_summary(self) -> Dict[str, float]:
        """Step durations keyed by step description."""
        summary: Dict[str, float] = {}
        for step, duration in self.steps:
            summary[step] = summary.get(step, 0.0) + duration
        summary["total"] = self.elapsed().total_seconds()
        return summary
