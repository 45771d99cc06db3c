"""Declarative metadata markers and the lookups runtime scanners use to find them."""

from exchangeapi.markers.core import (
    MARKERS_ATTRIBUTE,
    MarkerDefinition,
    MarkerRegistry,
    Retention,
    Target,
    attach,
    element_kind,
    find_marker,
    has_marker,
    markers_with_meta,
    misplaced_markers,
    query,
    query_parameter,
)
from exchangeapi.markers.exceptions import (
    MarkerAttachmentError,
    MarkerDeclarationError,
    MarkerError,
)

__all__ = [
    "MARKERS_ATTRIBUTE",
    "MarkerAttachmentError",
    "MarkerDeclarationError",
    "MarkerDefinition",
    "MarkerError",
    "MarkerRegistry",
    "Retention",
    "Target",
    "attach",
    "element_kind",
    "find_marker",
    "has_marker",
    "markers_with_meta",
    "misplaced_markers",
    "query",
    "query_parameter",
]
