"""Element graph access for axsnap.

This sub-package provides the data models reported by traversals and the
Node Provider interface through which element graphs are read. The macOS
provider lives in :mod:`axsnap.accessibility.macos` and is not imported here.
"""

from .memory_provider import InMemoryNode, InMemoryNodeProvider, build_tree
from .models import (
    AttributeChange,
    Diff,
    Element,
    ModifiedElement,
    NumericChange,
    Snapshot,
    Statistics,
    TextChange,
)
from .node_provider import DEFAULT_TEXT_ATTRIBUTES, NodeAttributes, NodeProvider

__all__ = [
    "AttributeChange",
    "DEFAULT_TEXT_ATTRIBUTES",
    "Diff",
    "Element",
    "InMemoryNode",
    "InMemoryNodeProvider",
    "ModifiedElement",
    "NodeAttributes",
    "NodeProvider",
    "NumericChange",
    "Snapshot",
    "Statistics",
    "TextChange",
    "build_tree",
]
