"""Action orchestration: snapshot, act, let the UI settle, snapshot, diff."""

from __future__ import annotations

import asyncio
import inspect
import time
from typing import Any, Awaitable, Callable, Hashable, Optional, Tuple, Union

from pydantic import BaseModel, Field

from ..accessibility.models import Diff, Snapshot
from ..accessibility.node_provider import NodeProvider
from ..core.config import config
from ..core.diff_engine import DiffMode, compute_diff
from ..core.element_classifier import FilterPolicy
from ..core.logger import log
from ..core.snapshot import traverse

ActionCallable = Callable[[], Union[Any, Awaitable[Any]]]
RootResolver = Callable[[], Hashable]


class ActionOptions(BaseModel):
    """Configuration for one orchestrated action."""

    traverse_before: bool = False
    traverse_after: bool = False
    # Implies both traversals
    show_diff: bool = False
    diff_mode: DiffMode = DiffMode.FINE
    position_tolerance: float = Field(default_factory=lambda: config.position_tolerance, ge=0)
    only_visible_elements: bool = Field(default_factory=lambda: config.only_visible_elements)
    delay_after_action: float = Field(default_factory=lambda: config.delay_after_action, ge=0)

    def validated(self) -> "ActionOptions":
        """Options with ``show_diff`` consequences applied."""
        if self.show_diff:
            return self.model_copy(update={"traverse_before": True, "traverse_after": True})
        return self


class ActionResult(BaseModel):
    """What happened during one orchestrated action."""

    traversal_before: Optional[Snapshot] = None
    traversal_after: Optional[Snapshot] = None
    traversal_diff: Optional[Diff] = None
    primary_action_error: Optional[str] = None
    traversal_before_error: Optional[str] = None
    traversal_after_error: Optional[str] = None


class ActionCoordinator:
    """Brackets an action with element tree traversals and diffs them."""

    def __init__(
        self,
        provider: NodeProvider,
        root_resolver: RootResolver,
        policy: Optional[FilterPolicy] = None,
    ):
        """Initialize the action coordinator.

        Args:
            provider: Node Provider used for both traversals.
            root_resolver: Returns a fresh root handle; called once per
                traversal because handles are only valid within one.
            policy: Filtering policy for the traversals.
        """
        self.provider = provider
        self.root_resolver = root_resolver
        self.policy = policy

    def _traverse(self, stage: str, options: ActionOptions) -> Tuple[Optional[Snapshot], Optional[str]]:
        log.info(f"[Coordinator] Performing {stage}-action traversal...")
        try:
            root = self.root_resolver()
            snapshot = traverse(
                self.provider,
                root,
                options.only_visible_elements,
                policy=self.policy,
            )
        except Exception as e:
            log.error(f"[Coordinator] {stage.capitalize()}-action traversal failed: {e}")
            return None, str(e)

        log.info(f"[Coordinator] {stage.capitalize()}-action traversal complete. Elements: {len(snapshot.elements)}")
        return snapshot, None

    async def perform(
        self,
        action: Optional[ActionCallable] = None,
        options: Optional[ActionOptions] = None,
    ) -> ActionResult:
        """Run ``action`` between the traversals requested in ``options``.

        Args:
            action: Sync or async callable performing the UI action. ``None``
                means traverse only.
            options: Orchestration options.

        Returns:
            ActionResult with snapshots, diff and per-stage error messages.
        """
        options = (options or ActionOptions()).validated()
        result = ActionResult()
        start_time = time.time()
        action_executed = False

        log.info(f"[Coordinator] Starting action with options: {options.model_dump()}")

        if options.traverse_before:
            result.traversal_before, result.traversal_before_error = self._traverse("pre", options)

        if action is not None:
            log.info("[Coordinator] Executing primary action...")
            try:
                outcome = action()
                if inspect.isawaitable(outcome):
                    await outcome
                action_executed = True
            except Exception as e:
                log.error(f"[Coordinator] Failed to execute primary action: {e}")
                result.primary_action_error = str(e)
        else:
            log.info("[Coordinator] No primary action, skipping action execution")

        if action_executed and options.delay_after_action > 0:
            log.info(f"[Coordinator] Primary action finished. Applying delay: {options.delay_after_action}s")
            await asyncio.sleep(options.delay_after_action)

        if options.traverse_after:
            result.traversal_after, result.traversal_after_error = self._traverse("post", options)

        if options.show_diff:
            if result.traversal_before is not None and result.traversal_after is not None:
                result.traversal_diff = compute_diff(
                    result.traversal_before,
                    result.traversal_after,
                    mode=options.diff_mode,
                    tolerance=options.position_tolerance,
                )
                diff = result.traversal_diff
                log.info(
                    f"[Coordinator] Diff calculated: Added={len(diff.added)}, "
                    f"Removed={len(diff.removed)}, Modified={len(diff.modified)}"
                )
            else:
                log.warning("[Coordinator] Cannot calculate diff because one or both traversals failed")

        log.success(f"[Coordinator] Action sequence finished in {time.time() - start_time:.2f}s")
        return result
