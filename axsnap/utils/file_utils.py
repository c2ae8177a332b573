"""Reading and writing the JSON documents axsnap works with."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

from ..core.logger import log

PathLike = Union[str, Path]


def ensure_directory(directory_path: PathLike) -> Path:
    """Create ``directory_path`` (and parents) if missing; return it resolved."""
    path = Path(directory_path).resolve()
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_text(text: str, filepath: PathLike) -> Path:
    """Write ``text`` to ``filepath`` with a trailing newline.

    Parent directories are created as needed.
    """
    path = Path(filepath)
    ensure_directory(path.parent)
    path.write_text(text if text.endswith("\n") else text + "\n", encoding="utf-8")
    log.debug(f"Wrote {len(text)} characters to {path}")
    return path


def read_text(filepath: PathLike) -> str:
    return Path(filepath).read_text(encoding="utf-8")


def load_json(filepath: PathLike) -> Any:
    """Parse the JSON document stored at ``filepath``."""
    data = json.loads(read_text(filepath))
    log.debug(f"Loaded JSON document from {filepath}")
    return data
