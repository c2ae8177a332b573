"""In-memory element graph and its Node Provider.

Used for fixtures and for snapshots of trees described in JSON. Nodes compare
by identity, like live accessibility handles, so the same node may be shared
between several parents or form a cycle.

A JSON tree description looks like::

    {
        "id": "app",
        "role": "AXApplication",
        "title": "Calculator",
        "windows": [{"id": "main", "role": "AXWindow", "children": [...]}],
        "main_window": {"ref": "main"}
    }

``{"ref": "<id>"}`` points back at a node declared elsewhere in the document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Mapping, Optional, Union

from .node_provider import (
    CHILDREN_ATTRIBUTE,
    MAIN_WINDOW_ATTRIBUTE,
    ROLE_ATTRIBUTE,
    UNKNOWN_ROLE,
    WINDOWS_ATTRIBUTE,
    NodeProvider,
)

# Friendly JSON keys and the attributes they stand for
ATTRIBUTE_ALIASES: Dict[str, str] = {
    "role_description": "AXRoleDescription",
    "value": "AXValue",
    "title": "AXTitle",
    "description": "AXDescription",
    "label": "AXLabel",
    "help": "AXHelp",
    "position": "AXPosition",
    "size": "AXSize",
}


@dataclass(eq=False)
class InMemoryNode:
    """A node of an in-memory element graph."""

    role: str = UNKNOWN_ROLE
    attributes: Dict[str, Any] = field(default_factory=dict)
    children: List["InMemoryNode"] = field(default_factory=list, repr=False)
    windows: List["InMemoryNode"] = field(default_factory=list, repr=False)
    main_window: Optional["InMemoryNode"] = field(default=None, repr=False)

    def add_child(self, child: "InMemoryNode") -> "InMemoryNode":
        self.children.append(child)
        return child

    def add_window(self, window: "InMemoryNode") -> "InMemoryNode":
        self.windows.append(window)
        return window


class InMemoryNodeProvider(NodeProvider):
    """Node Provider over :class:`InMemoryNode` graphs."""

    def copy_attribute(self, handle: Hashable, attribute: str) -> Any:
        node: InMemoryNode = handle  # type: ignore[assignment]
        if attribute == ROLE_ATTRIBUTE:
            return node.role
        if attribute == CHILDREN_ATTRIBUTE:
            return node.children
        if attribute == WINDOWS_ATTRIBUTE:
            return node.windows
        if attribute == MAIN_WINDOW_ATTRIBUTE:
            return node.main_window
        return node.attributes.get(attribute)


@dataclass(frozen=True)
class _Ref:
    target: str


def build_tree(description: Mapping[str, Any]) -> InMemoryNode:
    """Build an :class:`InMemoryNode` graph from a JSON-style mapping."""
    by_id: Dict[str, InMemoryNode] = {}
    built: List[InMemoryNode] = []

    def build(item: Mapping[str, Any]) -> Union[InMemoryNode, _Ref]:
        if "ref" in item:
            return _Ref(str(item["ref"]))

        attributes = dict(item.get("attributes", {}))
        for alias, attribute in ATTRIBUTE_ALIASES.items():
            if alias in item:
                attributes[attribute] = item[alias]

        node = InMemoryNode(role=item.get("role", UNKNOWN_ROLE), attributes=attributes)
        if "id" in item:
            node_id = str(item["id"])
            if node_id in by_id:
                raise ValueError(f"Duplicate node id '{node_id}'")
            by_id[node_id] = node
        built.append(node)

        node.windows = [build(child) for child in item.get("windows", [])]  # type: ignore[misc]
        if item.get("main_window") is not None:
            node.main_window = build(item["main_window"])  # type: ignore[assignment]
        node.children = [build(child) for child in item.get("children", [])]  # type: ignore[misc]
        return node

    def resolve(value: Union[InMemoryNode, _Ref]) -> InMemoryNode:
        if isinstance(value, _Ref):
            if value.target not in by_id:
                raise ValueError(f"Unknown node reference '{value.target}'")
            return by_id[value.target]
        return value

    root = build(description)
    if isinstance(root, _Ref):
        raise ValueError("The root of a tree description cannot be a reference")

    for node in built:
        node.windows = [resolve(window) for window in node.windows]
        node.children = [resolve(child) for child in node.children]
        if node.main_window is not None:
            node.main_window = resolve(node.main_window)

    return root
