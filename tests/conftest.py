"""Shared fixtures: small in-memory element graphs."""

from typing import Iterable, Optional, Tuple

import pytest

from axsnap.accessibility.memory_provider import InMemoryNode, InMemoryNodeProvider
from axsnap.accessibility.models import Element, Snapshot


def make_node(
    role: str,
    title: Optional[str] = None,
    position: Optional[Tuple[float, float]] = None,
    size: Optional[Tuple[float, float]] = None,
    **attributes,
) -> InMemoryNode:
    """Build a node; ``title`` lands in AXTitle, other kwargs are raw attributes."""
    attrs = dict(attributes)
    if title is not None:
        attrs["AXTitle"] = title
    if position is not None:
        attrs["AXPosition"] = position
    if size is not None:
        attrs["AXSize"] = size
    return InMemoryNode(role=role, attributes=attrs)


def make_snapshot(elements: Iterable[Element], label: str = "test") -> Snapshot:
    return Snapshot(label=label, elements=tuple(elements))


@pytest.fixture
def provider() -> InMemoryNodeProvider:
    return InMemoryNodeProvider()


@pytest.fixture
def calculator_tree() -> InMemoryNode:
    """Calculator-like graph.

    app
    ├── windows: [window]
    ├── main window: window (already visited through windows)
    └── children: [menubar]
    window
    ├── group (AXGroup, no text)
    │   ├── button "7" at (10, 100)
    │   └── button "8" at (60, 100)
    ├── display (AXStaticText "0") at (10, 20)
    └── button "=" at (60, 150)
    menubar (AXMenuBar) at (0, 0), no text
    """
    app = make_node("AXApplication", title="Calculator")
    window = make_node("AXWindow", title="Calculator", position=(0, 0), size=(230, 400))
    group = make_node("AXGroup", position=(0, 80), size=(230, 300))
    group.add_child(make_node("AXButton", title="7", position=(10, 100), size=(40, 40)))
    group.add_child(make_node("AXButton", title="8", position=(60, 100), size=(40, 40)))
    window.add_child(group)
    window.add_child(make_node("AXStaticText", position=(10, 20), size=(200, 40), AXValue="0"))
    window.add_child(make_node("AXButton", title="=", position=(60, 150), size=(40, 40)))
    app.add_window(window)
    app.main_window = window
    app.add_child(make_node("AXMenuBar", position=(0, 0), size=(1440, 24)))
    return app
