"""Depth-first walk over an element graph exposed by a Node Provider.

The graph is not guaranteed to be a tree: the same handle can be reachable as
a window, as the main window and as an ordinary child, and relations can loop
back to an ancestor. Each walk keeps its own visited set keyed by handle
identity and discards it when the walk ends.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Iterator, Sequence, Set

from ..accessibility.node_provider import DEFAULT_TEXT_ATTRIBUTES, NodeAttributes, NodeProvider
from .errors import InvalidRootError
from .logger import log

DEFAULT_MAX_DEPTH = 100


@dataclass(slots=True)
class RawNodeRecord:
    """One visited node with its raw attributes and depth below the root."""

    handle: Hashable
    depth: int
    attributes: NodeAttributes


@dataclass(slots=True)
class _WalkState:
    visited: Set[Hashable] = field(default_factory=set)
    depth_pruned: int = 0


class TreeWalker:
    """Pre-order traversal: node, then windows, main window, children.

    Branches deeper than ``max_depth`` are dropped silently; the root sits at
    depth 0, so at most ``max_depth + 1`` levels are emitted.
    """

    def __init__(
        self,
        provider: NodeProvider,
        max_depth: int = DEFAULT_MAX_DEPTH,
        text_attributes: Sequence[str] = DEFAULT_TEXT_ATTRIBUTES,
    ) -> None:
        self.provider = provider
        self.max_depth = max_depth
        self.text_attributes = tuple(text_attributes)

    def walk(self, root: Hashable) -> Iterator[RawNodeRecord]:
        """Yield a record for every reachable node, each handle once."""
        if root is None:
            raise InvalidRootError()
        return self._run(root)

    def _run(self, root: Hashable) -> Iterator[RawNodeRecord]:
        state = _WalkState()
        yield from self._visit(root, 0, state)
        log.debug(
            f"Walk finished: {len(state.visited)} nodes visited, "
            f"{state.depth_pruned} branches pruned at depth {self.max_depth}"
        )

    def _visit(self, handle: Hashable, depth: int, state: _WalkState) -> Iterator[RawNodeRecord]:
        if handle in state.visited:
            return
        if depth > self.max_depth:
            state.depth_pruned += 1
            return
        state.visited.add(handle)

        yield RawNodeRecord(
            handle=handle,
            depth=depth,
            attributes=self.provider.get_attributes(handle, self.text_attributes),
        )

        for window in self.provider.get_windows(handle):
            yield from self._visit(window, depth + 1, state)

        main_window = self.provider.get_main_window(handle)
        if main_window is not None:
            yield from self._visit(main_window, depth + 1, state)

        for child in self.provider.get_children(handle):
            yield from self._visit(child, depth + 1, state)
