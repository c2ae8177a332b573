"""Differences between two snapshots.

Elements carry no identity that survives between traversals, so two
strategies exist:

* **coarse**: set difference under full-attribute equality. Any change to an
  element shows up as one removal plus one addition.
* **fine**: greedy matching on role plus position (within a tolerance), with
  an exact-text fallback for elements without coordinates. Matched pairs are
  compared field by field and reported as modifications.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence, Set

from ..accessibility.models import Diff, Element, ModifiedElement, NumericChange, Snapshot, TextChange
from .config import config
from .logger import log
from .snapshot import sort_elements

DEFAULT_POSITION_TOLERANCE = 5.0
DEFAULT_ATTRIBUTE_TOLERANCE = 0.01

_NUMERIC_ATTRIBUTES = ("x", "y", "width", "height")


class DiffMode(str, Enum):
    """Available diff strategies."""

    COARSE = "coarse"
    FINE = "fine"


def numbers_equal(a: Optional[float], b: Optional[float], tolerance: float = DEFAULT_ATTRIBUTE_TOLERANCE) -> bool:
    """Two optional numbers are equal when both are absent or closer than ``tolerance``."""
    if a is None or b is None:
        return a is None and b is None
    return abs(a - b) < tolerance


def attribute_changes(
    before: Element,
    after: Element,
    tolerance: float = DEFAULT_ATTRIBUTE_TOLERANCE,
) -> List[TextChange | NumericChange]:
    """Per-attribute changes between two matched elements."""
    changes: List[TextChange | NumericChange] = []
    if before.text != after.text:
        changes.append(TextChange.between(before.text, after.text))
    for attribute in _NUMERIC_ATTRIBUTES:
        old = getattr(before, attribute)
        new = getattr(after, attribute)
        if not numbers_equal(old, new, tolerance):
            changes.append(NumericChange(attribute=attribute, before=old, after=new))
    return changes


# ----------------------------------------------------------------------
# Coarse diff
# ----------------------------------------------------------------------


def diff_elements_coarse(before: Sequence[Element], after: Sequence[Element]) -> Diff:
    """Set difference of two element sequences."""
    before_set = set(before)
    after_set = set(after)
    added = sort_elements(after_set - before_set)
    removed = sort_elements(before_set - after_set)
    log.log_diff(DiffMode.COARSE.value, len(added), len(removed), 0)
    return Diff(added=tuple(added), removed=tuple(removed))


def diff_coarse(before: Snapshot, after: Snapshot) -> Diff:
    """Added/removed elements between two snapshots; never reports modifications."""
    return diff_elements_coarse(before.elements, after.elements)


# ----------------------------------------------------------------------
# Fine diff
# ----------------------------------------------------------------------


def _find_match(
    element: Element,
    candidates: Sequence[Element],
    claimed: Set[int],
    tolerance_sq: float,
) -> Optional[int]:
    best_index: Optional[int] = None
    best_distance_sq = float("inf")

    for index, candidate in enumerate(candidates):
        if index in claimed or candidate.role != element.role:
            continue

        if element.has_position() and candidate.has_position():
            dx = element.x - candidate.x  # type: ignore[operator]
            dy = element.y - candidate.y  # type: ignore[operator]
            distance_sq = dx * dx + dy * dy
            # strict '<' keeps the first candidate on exact ties
            if distance_sq <= tolerance_sq and distance_sq < best_distance_sq:
                best_distance_sq = distance_sq
                best_index = index
        elif best_index is None and element.text and element.text == candidate.text:
            best_index = index

    return best_index


def diff_elements_fine(
    before: Sequence[Element],
    after: Sequence[Element],
    tolerance: float = DEFAULT_POSITION_TOLERANCE,
    attribute_tolerance: float = DEFAULT_ATTRIBUTE_TOLERANCE,
) -> Diff:
    """Match ``before`` against ``after`` and report added/removed/modified.

    Each ``before`` element claims at most one ``after`` element with the same
    role: the nearest one within ``tolerance`` points, or, when either side
    has no position, the first one with identical non-empty text. Unclaimed
    ``after`` elements are additions. Matches with no attribute change are
    not reported.
    """
    tolerance_sq = tolerance * tolerance
    claimed: Set[int] = set()
    removed: List[Element] = []
    modified: List[ModifiedElement] = []

    for element in before:
        match_index = _find_match(element, after, claimed, tolerance_sq)
        if match_index is None:
            removed.append(element)
            continue

        claimed.add(match_index)
        counterpart = after[match_index]
        changes = attribute_changes(element, counterpart, attribute_tolerance)
        if changes:
            modified.append(ModifiedElement(before=element, after=counterpart, changes=tuple(changes)))

    added = [element for index, element in enumerate(after) if index not in claimed]

    log.log_diff(DiffMode.FINE.value, len(added), len(removed), len(modified))
    return Diff(added=tuple(added), removed=tuple(removed), modified=tuple(modified))


def diff_fine(
    before: Snapshot,
    after: Snapshot,
    tolerance: float = DEFAULT_POSITION_TOLERANCE,
    attribute_tolerance: float = DEFAULT_ATTRIBUTE_TOLERANCE,
) -> Diff:
    """Positional-tolerance diff of two snapshots."""
    return diff_elements_fine(before.elements, after.elements, tolerance, attribute_tolerance)


def compute_diff(
    before: Snapshot,
    after: Snapshot,
    mode: DiffMode = DiffMode.FINE,
    tolerance: Optional[float] = None,
) -> Diff:
    """Dispatch to :func:`diff_coarse` or :func:`diff_fine`.

    Tolerances default to ``config.position_tolerance`` and
    ``config.attribute_tolerance``.
    """
    if DiffMode(mode) is DiffMode.COARSE:
        return diff_coarse(before, after)
    return diff_fine(
        before,
        after,
        tolerance=config.position_tolerance if tolerance is None else tolerance,
        attribute_tolerance=config.attribute_tolerance,
    )
