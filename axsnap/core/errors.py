"""Exception types raised by axsnap and its environment providers."""

from __future__ import annotations

from typing import Optional


class AxSnapError(Exception):
    """Base class for every error axsnap raises on purpose."""


class InvalidRootError(AxSnapError, ValueError):
    """Traversal was started without a usable root handle."""

    def __init__(self, message: str = "Traversal requires a root node handle, got None") -> None:
        super().__init__(message)


class AccessibilityDeniedError(AxSnapError, PermissionError):
    """The process is not trusted to read the accessibility tree."""

    def __init__(self) -> None:
        super().__init__(
            "Accessibility access is denied. Please grant permissions in "
            "System Settings > Privacy & Security > Accessibility."
        )


class AppNotFoundError(AxSnapError, LookupError):
    """No running application matches the requested PID."""

    def __init__(self, pid: int, message: Optional[str] = None) -> None:
        self.pid = pid
        super().__init__(message or f"No running application found with PID {pid}.")
