"""Snapshot assembly: one walk plus classification, sorted and frozen."""

from __future__ import annotations

import math
from typing import Hashable, Iterable, List, Optional

from ..accessibility.models import Element, Snapshot
from ..accessibility.node_provider import NodeProvider
from ..utils.performance import StepTimer
from .config import config
from .element_classifier import ElementCollector, FilterPolicy
from .logger import log
from .tree_walker import TreeWalker

__all__ = ["element_sort_key", "sort_elements", "traverse"]


def _or_inf(value: Optional[float]) -> float:
    return math.inf if value is None else value


def element_sort_key(element: Element) -> tuple:
    """Top-to-bottom, left-to-right; missing coordinates sort last."""
    return (
        _or_inf(element.y),
        _or_inf(element.x),
        element.role,
        element.text or "",
        _or_inf(element.width),
        _or_inf(element.height),
    )


def sort_elements(elements: Iterable[Element]) -> List[Element]:
    return sorted(elements, key=element_sort_key)


def traverse(
    provider: NodeProvider,
    root: Hashable,
    only_visible: Optional[bool] = None,
    *,
    policy: Optional[FilterPolicy] = None,
    max_depth: Optional[int] = None,
    label: Optional[str] = None,
) -> Snapshot:
    """Walk the graph under ``root`` and return its :class:`Snapshot`.

    Args:
        provider: Node Provider giving access to the graph.
        root: Root node handle. ``None`` raises :class:`InvalidRootError`.
        only_visible: Keep only geometrically visible elements. Overrides
            ``policy.only_visible``; defaults to ``config.only_visible_elements``
            when neither is given.
        policy: Filtering policy; the default policy when omitted.
        max_depth: Depth ceiling, ``config.max_depth`` when omitted.
        label: Snapshot label, ``provider.describe(root)`` when omitted.

    Returns:
        An immutable snapshot; an empty one when nothing passed the filter.
    """
    if policy is None:
        policy = FilterPolicy(only_visible=config.only_visible_elements if only_visible is None else only_visible)
    elif only_visible is not None and only_visible != policy.only_visible:
        policy = FilterPolicy(
            non_interactable_roles=policy.non_interactable_roles,
            text_attributes=policy.text_attributes,
            only_visible=only_visible,
        )

    walker = TreeWalker(
        provider,
        max_depth=config.max_depth if max_depth is None else max_depth,
        text_attributes=policy.text_attributes,
    )
    records = walker.walk(root)

    snapshot_label = label if label is not None else provider.describe(root)
    log.info(f"Starting traversal of '{snapshot_label}' (visible only: {policy.only_visible})")
    timer = StepTimer(f"traversal of '{snapshot_label}'")

    collector = ElementCollector(policy)
    collector.extend(records)
    timer.lap(f"traversing element tree ({len(collector.elements)} elements collected)")

    elements = sort_elements(collector.elements)
    timer.lap("sorting elements")
    stats = collector.stats
    log.debug(f"Step timings for {timer.operation}: {timer.get_summary()}")

    duration = timer.elapsed()
    log.log_traversal(snapshot_label, stats.count, stats.excluded_count, duration.total_seconds())

    return Snapshot(
        label=snapshot_label,
        elements=tuple(elements),
        stats=stats,
        capture_duration=duration,
    )
