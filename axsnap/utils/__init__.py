"""Utility functions for axsnap.

This sub-package provides utility functions for:
- File and path operations
- Step timing
"""

from .file_utils import ensure_directory, load_json, read_text, save_text
from .performance import StepTimer

__all__ = [
    "ensure_directory",
    "load_json",
    "read_text",
    "save_text",
    "StepTimer",
]
