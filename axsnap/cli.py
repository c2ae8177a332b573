#!/usr/bin/env python3
"""axsnap command line interface.

Examples::

    # Visible elements of a running macOS application
    axsnap traverse --pid 4242 --visible-only --output calc.json

    # Snapshot of a tree described in JSON
    axsnap traverse --tree fixtures/window.json

    # Fine-grained diff of two snapshots, as a readable listing
    axsnap diff before.json after.json --mode fine --summary
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .accessibility.memory_provider import InMemoryNodeProvider, build_tree
from .accessibility.models import Snapshot
from .core.config import config
from .core.diff_engine import DiffMode, compute_diff
from .core.errors import AxSnapError
from .core.logger import log
from .core.snapshot import traverse
from .core.state_serializer import diff_to_json, format_diff_summary, snapshot_from_json, snapshot_to_json
from .utils.file_utils import load_json, read_text, save_text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="axsnap",
        description="Snapshot UI element trees and diff the snapshots",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    traverse_parser = subparsers.add_parser("traverse", help="Capture a snapshot of an element tree")
    source = traverse_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--pid", type=int, help="PID of a running macOS application")
    source.add_argument("--tree", help="JSON file describing an element tree")
    traverse_parser.add_argument(
        "--visible-only",
        action="store_true",
        default=config.only_visible_elements,
        help="Only collect elements with a position and a non-zero size",
    )
    traverse_parser.add_argument("--max-depth", type=int, default=config.max_depth, help="Depth ceiling")
    traverse_parser.add_argument("--label", help="Snapshot label (defaults to the root's name)")
    traverse_parser.add_argument("--output", "-o", help="Write JSON here instead of stdout")

    diff_parser = subparsers.add_parser("diff", help="Diff two snapshot JSON files")
    diff_parser.add_argument("before", help="Snapshot taken first")
    diff_parser.add_argument("after", help="Snapshot taken second")
    diff_parser.add_argument(
        "--mode",
        choices=[mode.value for mode in DiffMode],
        default=DiffMode.FINE.value,
        help="coarse: set difference; fine: positional matching with modifications",
    )
    diff_parser.add_argument(
        "--tolerance",
        type=float,
        default=config.position_tolerance,
        help="Max point distance for fine matching",
    )
    diff_parser.add_argument("--summary", action="store_true", help="Print a readable listing instead of JSON")
    diff_parser.add_argument("--output", "-o", help="Write output here instead of stdout")

    return parser


def _emit(text: str, output: Optional[str]) -> None:
    if output:
        save_text(text, output)
        log.info(f"Output written to {output}")
    else:
        print(text)


def _traverse_command(args: argparse.Namespace) -> Snapshot:
    if args.tree:
        provider = InMemoryNodeProvider()
        root = build_tree(load_json(args.tree))
        return traverse(provider, root, args.visible_only, max_depth=args.max_depth, label=args.label)

    # pyobjc is only available on macOS
    from .accessibility.macos import MacOSNodeProvider

    mac_provider = MacOSNodeProvider(args.pid)
    return traverse(
        mac_provider,
        mac_provider.root(),
        args.visible_only,
        max_depth=args.max_depth,
        label=args.label,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        if args.command == "traverse":
            snapshot = _traverse_command(args)
            _emit(snapshot_to_json(snapshot), args.output)
        else:
            before = snapshot_from_json(read_text(args.before))
            after = snapshot_from_json(read_text(args.after))
            diff = compute_diff(before, after, mode=DiffMode(args.mode), tolerance=args.tolerance)
            _emit(format_diff_summary(diff) if args.summary else diff_to_json(diff), args.output)
    except AxSnapError as e:
        log.error(str(e))
        return 1
    except (OSError, ValueError) as e:
        log.error(f"Failed to read input: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
