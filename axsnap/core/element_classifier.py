"""Element classification: decides which visited nodes are worth reporting.

This module turns raw node records into :class:`Element` values, applies the
filtering policy, and keeps the per-traversal statistics.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from ..accessibility.models import Element, Statistics
from ..accessibility.node_provider import DEFAULT_TEXT_ATTRIBUTES, Point, Size
from .logger import log
from .tree_walker import RawNodeRecord

# Roles considered non-interactable by default
DEFAULT_NON_INTERACTABLE_ROLES: FrozenSet[str] = frozenset(
    {
        "AXGroup",
        "AXStaticText",
        "AXUnknown",
        "AXSeparator",
        "AXHeading",
        "AXLayoutArea",
        "AXHelpTag",
        "AXGrowArea",
        "AXOutline",
        "AXScrollArea",
        "AXSplitGroup",
        "AXSplitter",
        "AXToolbar",
        "AXDisclosureTriangle",
    }
)


@dataclass(frozen=True)
class FilterPolicy:
    """What a traversal reports.

    ``non_interactable_roles`` are dropped unless they carry text;
    ``only_visible`` additionally drops nodes without usable geometry.
    """

    non_interactable_roles: FrozenSet[str] = DEFAULT_NON_INTERACTABLE_ROLES
    text_attributes: Tuple[str, ...] = DEFAULT_TEXT_ATTRIBUTES
    only_visible: bool = False


@dataclass(frozen=True)
class Geometry:
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    visible: bool = False


@dataclass(frozen=True)
class ClassifiedOutcome:
    """Classification of one raw record."""

    element: Element
    raw_role: str
    accepted: bool
    has_text: bool
    non_interactable: bool
    geometrically_visible: bool


def resolve_geometry(position: Optional[Point], size: Optional[Size]) -> Geometry:
    """Geometry of a node, or an empty geometry when it has no visible extent.

    Zero-sized dimensions are reported as absent.
    """
    if position is None or size is None:
        return Geometry()
    width, height = size
    if width <= 0 and height <= 0:
        return Geometry()
    x, y = position
    return Geometry(
        x=float(x),
        y=float(y),
        width=float(width) if width > 0 else None,
        height=float(height) if height > 0 else None,
        visible=True,
    )


def resolve_text(candidates: Iterable[Optional[str]]) -> Optional[str]:
    """Join every non-blank candidate with spaces; blank result is no text."""
    parts = [candidate for candidate in candidates if candidate and candidate.strip()]
    text = " ".join(parts).strip()
    return text or None


def display_role(role: str, role_description: Optional[str]) -> str:
    """Annotate ``role`` with its description when that adds information."""
    bare_role = role[2:] if role.startswith("AX") else role
    if role_description and role_description != bare_role:
        return f"{role} ({role_description})"
    return role


def classify(record: RawNodeRecord, policy: FilterPolicy) -> ClassifiedOutcome:
    """Build the element for ``record`` and decide whether it is accepted."""
    attributes = record.attributes
    text = resolve_text(attributes.text_candidates)
    geometry = resolve_geometry(attributes.position, attributes.size)
    has_text = text is not None
    non_interactable = attributes.role in policy.non_interactable_roles

    passes_role_filter = not non_interactable or has_text
    accepted = passes_role_filter and (not policy.only_visible or geometry.visible)

    element = Element(
        role=display_role(attributes.role, attributes.role_description),
        text=text,
        x=geometry.x,
        y=geometry.y,
        width=geometry.width,
        height=geometry.height,
    )
    return ClassifiedOutcome(
        element=element,
        raw_role=attributes.role,
        accepted=accepted,
        has_text=has_text,
        non_interactable=non_interactable,
        geometrically_visible=geometry.visible,
    )


@dataclass
class _RunningCounters:
    """Mutable tallies kept while a traversal is in progress."""

    excluded_count: int = 0
    excluded_non_interactable: int = 0
    excluded_no_text: int = 0
    with_text_count: int = 0
    without_text_count: int = 0
    visible_elements_count: int = 0
    role_counts: Counter = field(default_factory=Counter)


class ElementCollector:
    """Accumulates accepted elements and statistics for one traversal."""

    def __init__(self, policy: Optional[FilterPolicy] = None) -> None:
        self.policy = policy or FilterPolicy()
        self._counters = _RunningCounters()
        # dict keeps first-insertion order and gives set semantics
        self._elements: Dict[Element, None] = {}

    def add(self, record: RawNodeRecord) -> ClassifiedOutcome:
        """Classify ``record`` and update elements and counters."""
        outcome = classify(record, self.policy)
        counters = self._counters

        counters.role_counts[outcome.raw_role] += 1

        if outcome.geometrically_visible:
            counters.visible_elements_count += 1

        if outcome.accepted:
            if outcome.element in self._elements:
                log.debug(f"= skip duplicate | r: {outcome.element.role} | t: '{outcome.element.text}'")
                return outcome
            self._elements[outcome.element] = None
            if outcome.has_text:
                counters.with_text_count += 1
            else:
                counters.without_text_count += 1
            return outcome

        # Reasons are counted independently; one node may increment both.
        counters.excluded_count += 1
        if outcome.non_interactable:
            counters.excluded_non_interactable += 1
        if not outcome.has_text:
            counters.excluded_no_text += 1
        return outcome

    def extend(self, records: Iterable[RawNodeRecord]) -> None:
        for record in records:
            self.add(record)

    @property
    def elements(self) -> List[Element]:
        """Accepted elements in first-seen order."""
        return list(self._elements)

    @property
    def stats(self) -> Statistics:
        """Frozen statistics for what has been collected so far."""
        counters = self._counters
        return Statistics(
            count=len(self._elements),
            excluded_count=counters.excluded_count,
            excluded_non_interactable=counters.excluded_non_interactable,
            excluded_no_text=counters.excluded_no_text,
            with_text_count=counters.with_text_count,
            without_text_count=counters.without_text_count,
            visible_elements_count=counters.visible_elements_count,
            role_counts=dict(counters.role_counts),
        )
