"""Core components of axsnap: walking, classifying, snapshotting and diffing."""

from .config import Config, config
from .errors import AccessibilityDeniedError, AppNotFoundError, AxSnapError, InvalidRootError
from .logger import Logger, log
from .tree_walker import DEFAULT_MAX_DEPTH, RawNodeRecord, TreeWalker
from .element_classifier import ClassifiedOutcome, ElementCollector, FilterPolicy, classify
from .snapshot import sort_elements, traverse
from .diff_engine import DiffMode, compute_diff, diff_coarse, diff_fine

__all__ = [
    "AccessibilityDeniedError",
    "AppNotFoundError",
    "AxSnapError",
    "ClassifiedOutcome",
    "Config",
    "DEFAULT_MAX_DEPTH",
    "DiffMode",
    "ElementCollector",
    "FilterPolicy",
    "InvalidRootError",
    "Logger",
    "RawNodeRecord",
    "TreeWalker",
    "classify",
    "compute_diff",
    "config",
    "diff_coarse",
    "diff_fine",
    "log",
    "sort_elements",
    "traverse",
]
