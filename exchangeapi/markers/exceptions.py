# This file defines the error types raised when markers are declared or attached incorrectly.
# Both errors surface while a module is being imported, never while a request or test is running.

from __future__ import annotations


class MarkerError(Exception):
    """Base class for marker misuse."""


class MarkerDeclarationError(MarkerError):
    """Raised when a marker definition is malformed or collides with an existing name."""


class MarkerAttachmentError(MarkerError):
    """Raised when a marker is placed on an element kind it does not allow."""

    def __init__(self, *, marker_name: str, element: object, message: str) -> None:
        self.marker_name = marker_name
        self.element = element
        super().__init__(message)
