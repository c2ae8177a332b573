"""Node Provider interface: raw attribute access over an element graph.

A provider knows how to read attributes from opaque node handles. It does not
walk the graph; :mod:`axsnap.core.tree_walker` does that. Concrete providers
only have to implement :meth:`NodeProvider.copy_attribute`; everything else is
derived from it through ordered extractor tables and can be overridden when an
environment offers a faster path.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, List, Optional, Sequence, Tuple

ROLE_ATTRIBUTE = "AXRole"
ROLE_DESCRIPTION_ATTRIBUTE = "AXRoleDescription"
POSITION_ATTRIBUTE = "AXPosition"
SIZE_ATTRIBUTE = "AXSize"
WINDOWS_ATTRIBUTE = "AXWindows"
MAIN_WINDOW_ATTRIBUTE = "AXMainWindow"
CHILDREN_ATTRIBUTE = "AXChildren"

UNKNOWN_ROLE = "AXUnknown"

# Text-bearing attributes in priority order
DEFAULT_TEXT_ATTRIBUTES: Tuple[str, ...] = (
    "AXValue",
    "AXTitle",
    "AXDescription",
    "AXLabel",
    "AXHelp",
)

Point = Tuple[float, float]
Size = Tuple[float, float]


@dataclass(slots=True)
class NodeAttributes:
    """Raw attributes read from a single node handle."""

    role: str = UNKNOWN_ROLE
    role_description: Optional[str] = None
    text_candidates: List[Optional[str]] = field(default_factory=list)
    position: Optional[Point] = None
    size: Optional[Size] = None


class NodeProvider(ABC):
    """Read access to an externally owned element graph.

    Handles must be hashable and compare by node identity for at least the
    lifetime of one traversal.
    """

    # (attribute, converter name) pairs per category; first non-empty wins.
    role_extractors: Sequence[Tuple[str, str]] = ((ROLE_ATTRIBUTE, "as_string"),)
    role_description_extractors: Sequence[Tuple[str, str]] = ((ROLE_DESCRIPTION_ATTRIBUTE, "as_string"),)
    position_extractors: Sequence[Tuple[str, str]] = ((POSITION_ATTRIBUTE, "as_point"),)
    size_extractors: Sequence[Tuple[str, str]] = ((SIZE_ATTRIBUTE, "as_size"),)

    @abstractmethod
    def copy_attribute(self, handle: Hashable, attribute: str) -> Any:
        """Return the raw value of ``attribute`` on ``handle``, or None when unsupported."""

    # ------------------------------------------------------------------
    # Value conversion
    # ------------------------------------------------------------------

    def as_string(self, value: Any) -> Optional[str]:
        if isinstance(value, str):
            return value
        return None

    def as_point(self, value: Any) -> Optional[Point]:
        return _pair(value, ("x", "y"))

    def as_size(self, value: Any) -> Optional[Size]:
        return _pair(value, ("width", "height"))

    def wrap_handle(self, raw: Any) -> Hashable:
        """Turn a raw relation value into a handle; identity by default."""
        return raw

    # ------------------------------------------------------------------
    # Attribute extraction
    # ------------------------------------------------------------------

    def _first(self, handle: Hashable, extractors: Sequence[Tuple[str, str]]) -> Any:
        for attribute, converter_name in extractors:
            converter: Callable[[Any], Any] = getattr(self, converter_name)
            value = converter(self.copy_attribute(handle, attribute))
            if value is not None and value != "":
                return value
        return None

    def get_attributes(
        self,
        handle: Hashable,
        text_attributes: Sequence[str] = DEFAULT_TEXT_ATTRIBUTES,
    ) -> NodeAttributes:
        """Read role, text candidates and geometry of ``handle``."""
        return NodeAttributes(
            role=self._first(handle, self.role_extractors) or UNKNOWN_ROLE,
            role_description=self._first(handle, self.role_description_extractors),
            text_candidates=[
                self.as_string(self.copy_attribute(handle, attribute)) for attribute in text_attributes
            ],
            position=self._first(handle, self.position_extractors),
            size=self._first(handle, self.size_extractors),
        )

    # ------------------------------------------------------------------
    # Relations
    # ------------------------------------------------------------------

    def _handles(self, value: Any) -> List[Hashable]:
        if value is None or isinstance(value, (str, bytes)):
            return []
        try:
            return [self.wrap_handle(item) for item in value if item is not None]
        except TypeError:
            return []

    def get_windows(self, handle: Hashable) -> List[Hashable]:
        return self._handles(self.copy_attribute(handle, WINDOWS_ATTRIBUTE))

    def get_main_window(self, handle: Hashable) -> Optional[Hashable]:
        value = self.copy_attribute(handle, MAIN_WINDOW_ATTRIBUTE)
        if value is None:
            return None
        return self.wrap_handle(value)

    def get_children(self, handle: Hashable) -> List[Hashable]:
        return self._handles(self.copy_attribute(handle, CHILDREN_ATTRIBUTE))

    def describe(self, handle: Hashable) -> str:
        """Human readable label for a snapshot rooted at ``handle``."""
        title = self.as_string(self.copy_attribute(handle, "AXTitle"))
        if title:
            return title
        return self._first(handle, self.role_extractors) or UNKNOWN_ROLE


def _pair(value: Any, names: Tuple[str, str]) -> Optional[Tuple[float, float]]:
    """Coerce a 2-sequence, mapping or struct with named fields to a float pair."""
    if value is None or isinstance(value, (str, bytes)):
        return None
    first, second = names
    try:
        if isinstance(value, dict):
            return float(value[first]), float(value[second])
        if hasattr(value, first) and hasattr(value, second):
            return float(getattr(value, first)), float(getattr(value, second))
        a, b = value
        return float(a), float(b)
    except (KeyError, TypeError, ValueError):
        return None
