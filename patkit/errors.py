"""Fatal-condition checks used throughout the package."""

from __future__ import annotations


class AbortError(RuntimeError):
    """Raised when a condition that must never hold is detected."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def abort_if(condition: object, message: str) -> None:
    """Raise AbortError carrying *message* when *condition* is truthy."""
    if condition:
        raise AbortError(message)