"""macOS Accessibility API provider (requires the ``macos`` extra, pyobjc).

Only import this module on macOS.
"""

from __future__ import annotations

from typing import Any, Hashable, Optional, Tuple

from AppKit import NSRunningApplication
from ApplicationServices import (
    AXIsProcessTrustedWithOptions,
    AXUIElementCopyAttributeValue,
    AXUIElementCreateApplication,
    AXUIElementGetTypeID,
    AXValueGetTypeID,
    AXValueGetValue,
    kAXValueCGPointType,
    kAXValueCGSizeType,
)
from CoreFoundation import CFEqual, CFGetTypeID, CFHash

from ..core.errors import AccessibilityDeniedError, AppNotFoundError
from ..core.logger import log
from .node_provider import NodeProvider

_AX_ERROR_SUCCESS = 0


class AXHandle:
    """Hashable wrapper around an ``AXUIElementRef``.

    Equality and hashing go through CoreFoundation so two references to the
    same accessibility element are one handle.
    """

    __slots__ = ("ref", "_hash")

    def __init__(self, ref: Any) -> None:
        self.ref = ref
        self._hash = CFHash(ref)

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AXHandle):
            return NotImplemented
        return bool(CFEqual(self.ref, other.ref))

    def __repr__(self) -> str:
        return f"AXHandle({self._hash:#x})"


def ensure_accessibility(prompt: bool = True) -> None:
    """Raise :class:`AccessibilityDeniedError` unless this process is trusted."""
    log.info("Checking accessibility permissions...")
    options = {"AXTrustedCheckOptionPrompt": prompt}
    if not AXIsProcessTrustedWithOptions(options):
        log.error("Accessibility access is denied")
        raise AccessibilityDeniedError()


def running_application(pid: int) -> Any:
    """Return the ``NSRunningApplication`` for ``pid``."""
    app = NSRunningApplication.runningApplicationWithProcessIdentifier_(pid)
    if app is None:
        raise AppNotFoundError(pid)
    return app


class MacOSNodeProvider(NodeProvider):
    """Reads the live accessibility tree of one macOS application."""

    def __init__(self, pid: int, check_permissions: bool = True) -> None:
        if check_permissions:
            ensure_accessibility()
        self.pid = pid
        self.app = running_application(pid)
        self.app_name = str(self.app.localizedName() or f"App (PID: {pid})")

    def root(self) -> AXHandle:
        """A fresh handle on the application element."""
        return AXHandle(AXUIElementCreateApplication(self.pid))

    def copy_attribute(self, handle: Hashable, attribute: str) -> Any:
        ref = handle.ref if isinstance(handle, AXHandle) else handle
        err, value = AXUIElementCopyAttributeValue(ref, attribute, None)
        if err != _AX_ERROR_SUCCESS:
            return None
        return value

    def wrap_handle(self, raw: Any) -> Hashable:
        if isinstance(raw, AXHandle):
            return raw
        return AXHandle(raw)

    def get_main_window(self, handle: Hashable) -> Optional[Hashable]:
        value = self.copy_attribute(handle, "AXMainWindow")
        if value is None or CFGetTypeID(value) != AXUIElementGetTypeID():
            return None
        return self.wrap_handle(value)

    def _ax_value(self, value: Any, value_type: int) -> Optional[Tuple[float, float]]:
        if value is None or CFGetTypeID(value) != AXValueGetTypeID():
            return None
        ok, struct = AXValueGetValue(value, value_type, None)
        if not ok:
            return None
        return float(struct[0]), float(struct[1])

    def as_point(self, value: Any) -> Optional[Tuple[float, float]]:
        return self._ax_value(value, kAXValueCGPointType)

    def as_size(self, value: Any) -> Optional[Tuple[float, float]]:
        return self._ax_value(value, kAXValueCGSizeType)

    def describe(self, handle: Hashable) -> str:
        return self.app_name
