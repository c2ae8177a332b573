"""Serialize snapshots and diffs to JSON and to a compact human readable form."""

from __future__ import annotations

import json
from typing import Any, List, Optional

from ..accessibility.models import Diff, Element, Snapshot

__all__ = [
    "diff_from_json",
    "diff_to_json",
    "format_diff_summary",
    "format_element",
    "snapshot_from_json",
    "snapshot_to_json",
]


def _dumps(data: Any, indent: Optional[int]) -> str:
    return json.dumps(data, indent=indent, sort_keys=True, ensure_ascii=False)


def snapshot_to_json(snapshot: Snapshot, indent: Optional[int] = 2) -> str:
    """Snapshot as JSON with sorted keys, suitable for golden files."""
    return _dumps(snapshot.model_dump(mode="json"), indent)


def diff_to_json(diff: Diff, indent: Optional[int] = 2) -> str:
    """Diff as JSON with sorted keys."""
    return _dumps(diff.model_dump(mode="json"), indent)


def snapshot_from_json(data: str | bytes) -> Snapshot:
    return Snapshot.model_validate_json(data)


def diff_from_json(data: str | bytes) -> Diff:
    return Diff.model_validate_json(data)


def _number(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"{value:g}"


def format_element(element: Element) -> str:
    """One-line description of an element."""
    text = element.text if element.text is not None else "nil"
    return (
        f"Role: {element.role}, Text: {text}, "
        f"Pos: ({_number(element.x)}, {_number(element.y)}), "
        f"Size: ({_number(element.width)} x {_number(element.height)})"
    )


def format_diff_summary(diff: Diff) -> str:
    """Readable listing of a diff: ``+`` added, ``-`` removed, ``~`` modified."""
    lines: List[str] = [f"Added Elements ({len(diff.added)}):"]
    lines.extend(f"  + {format_element(element)}" for element in diff.added)
    if not diff.added:
        lines.append("  (None)")

    lines.append(f"Removed Elements ({len(diff.removed)}):")
    lines.extend(f"  - {format_element(element)}" for element in diff.removed)
    if not diff.removed:
        lines.append("  (None)")

    lines.append(f"Modified Elements ({len(diff.modified)}):")
    if not diff.modified:
        lines.append("  (None)")
    for item in diff.modified:
        lines.append(f"  ~ {format_element(item.before)}")
        for change in item.changes:
            if change.kind == "text":
                line = f"      text: {change.before!r} -> {change.after!r}"
                if change.added_text is not None:
                    line += f" (+{change.added_text!r})"
                if change.removed_text is not None:
                    line += f" (-{change.removed_text!r})"
                lines.append(line)
            else:
                lines.append(f"      {change.attribute}: {_number(change.before)} -> {_number(change.after)}")

    return "\n".join(lines)
