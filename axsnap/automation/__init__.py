"""Orchestration of UI actions bracketed by element tree snapshots."""

from .action_coordinator import ActionCoordinator, ActionOptions, ActionResult

__all__ = [
    "ActionCoordinator",
    "ActionOptions",
    "ActionResult",
]
