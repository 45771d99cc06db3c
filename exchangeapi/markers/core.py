# This file implements declarative metadata markers: named, immutable tags placed on classes and functions.
# A marker carries no behavior; scanners such as the route table and the pytest plugin discover it later.
# Attachment-point checks run when the decorator is applied, so misuse fails at import time.
# Only runtime-retained markers are written onto the element and can be recovered by `query`.

from __future__ import annotations

import functools
import logging
import types
import typing
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from exchangeapi.markers.exceptions import MarkerAttachmentError, MarkerDeclarationError

logger = logging.getLogger(__name__)

MARKERS_ATTRIBUTE = "_exchangeapi_markers"

ElementT = TypeVar("ElementT")


class Target(str, Enum):
    """Kinds of program element a marker may be placed on."""

    METHOD = "method"
    TYPE = "type"
    FIELD = "field"
    PARAMETER = "parameter"


class Retention(str, Enum):
    """How long a marker stays discoverable after it is attached."""

    SOURCE = "source"
    CLASS = "class"
    RUNTIME = "runtime"


@dataclass(frozen=True)
class MarkerDefinition:
    """
    A declared marker.

    Calling the definition on a class or function attaches it and returns the element unchanged,
    so a definition is used as a plain decorator: `@PATCH` or `@AdminStatusTest`.
    """

    name: str
    targets: frozenset[Target]
    retention: Retention = Retention.RUNTIME
    value: str | None = None
    meta: frozenset[str] = field(default_factory=frozenset)
    namespace: str = "default"

    @property
    def is_runtime(self) -> bool:
        return self.retention is Retention.RUNTIME

    def allows(self, kind: Target) -> bool:
        return kind in self.targets

    def __call__(self, element: ElementT) -> ElementT:
        return attach(self, element)

    def __repr__(self) -> str:
        value = f"({self.value!r})" if self.value is not None else ""
        return f"@{self.name}{value}"


def _describe(element: object) -> str:
    qualname = getattr(element, "__qualname__", None)
    if qualname is None:
        inner = getattr(element, "__func__", None) or getattr(element, "fget", None)
        qualname = getattr(inner, "__qualname__", None)
    return qualname or repr(element)


def element_kind(element: object) -> Target | None:
    """Classify an element; `None` means it cannot carry markers."""

    if isinstance(element, type):
        return Target.TYPE
    if isinstance(element, (types.FunctionType, types.MethodType, staticmethod, classmethod)):
        return Target.METHOD
    if isinstance(element, (property, functools.cached_property)):
        return Target.FIELD
    return None


def _storage(element: object) -> Any:
    """Return the object whose attributes hold the markers of `element`."""

    if isinstance(element, (types.MethodType, staticmethod, classmethod)):
        return element.__func__
    if isinstance(element, property):
        return element.fget
    if isinstance(element, functools.cached_property):
        return element.func
    return element


def _own_markers(holder: Any) -> tuple[MarkerDefinition, ...]:
    if isinstance(holder, type):
        return tuple(vars(holder).get(MARKERS_ATTRIBUTE, ()))
    return tuple(getattr(holder, MARKERS_ATTRIBUTE, ()))


def attach(marker: MarkerDefinition, element: ElementT) -> ElementT:
    """Place `marker` on `element` and return the element."""

    kind = element_kind(element)
    if kind is None:
        raise MarkerAttachmentError(
            marker_name=marker.name,
            element=element,
            message=f"@{marker.name} cannot be attached to {_describe(element)}: unsupported element kind",
        )
    if not marker.allows(kind):
        allowed = ", ".join(sorted(target.value for target in marker.targets))
        raise MarkerAttachmentError(
            marker_name=marker.name,
            element=element,
            message=(
                f"@{marker.name} is not allowed on {kind.value} {_describe(element)}; "
                f"allowed attachment points: {allowed}"
            ),
        )
    if not marker.is_runtime:
        return element

    holder = _storage(element)
    if holder is None:
        raise MarkerAttachmentError(
            marker_name=marker.name,
            element=element,
            message=f"@{marker.name} cannot be attached to {_describe(element)}: field has no getter",
        )
    existing = _own_markers(holder)
    if marker not in existing:
        setattr(holder, MARKERS_ATTRIBUTE, existing + (marker,))
    return element


def query(element: object, *, inherited: bool = False) -> frozenset[MarkerDefinition]:
    """
    Return the runtime markers attached to `element`.

    With `inherited=True`, markers on every base class in the MRO of a class are included.
    Functions wrapped with `functools.wraps` keep the markers of the function they wrap.
    """

    if element_kind(element) is None:
        return frozenset()

    holder = _storage(element)
    if holder is None:
        return frozenset()
    if inherited and isinstance(holder, type):
        collected: list[MarkerDefinition] = []
        for klass in holder.__mro__:
            collected.extend(_own_markers(klass))
        return frozenset(collected)
    return frozenset(_own_markers(holder))


def has_marker(element: object, marker: MarkerDefinition, *, inherited: bool = False) -> bool:
    return marker in query(element, inherited=inherited)


def find_marker(element: object, name: str, *, inherited: bool = False) -> MarkerDefinition | None:
    """Look a marker up by name on a single element."""

    for marker in query(element, inherited=inherited):
        if marker.name == name:
            return marker
    return None


def markers_with_meta(
    element: object, role: str, *, inherited: bool = False
) -> frozenset[MarkerDefinition]:
    """Return the markers on `element` whose definition carries the meta role `role`."""

    return frozenset(
        marker for marker in query(element, inherited=inherited) if role in marker.meta
    )


def misplaced_markers(element: object) -> frozenset[MarkerDefinition]:
    """
    Return the markers `query` finds on `element` that do not allow its kind.

    Wrapping a marked function after decoration, e.g. stacking `@property` on `@PATCH`,
    hands the function's markers to a field without running the attachment check again.
    """

    kind = element_kind(element)
    if kind is None:
        return frozenset()
    return frozenset(marker for marker in query(element) if not marker.allows(kind))


def query_parameter(func: Any, parameter: str) -> frozenset[MarkerDefinition]:
    """
    Return the runtime markers placed on a parameter through `typing.Annotated` metadata.

    Python resolves `Annotated` hints lazily, so a marker that does not allow
    `Target.PARAMETER` is rejected here, at scan time.
    """

    hints = typing.get_type_hints(func, include_extras=True)
    if parameter not in hints:
        return frozenset()

    annotation = hints[parameter]
    if typing.get_origin(annotation) is not typing.Annotated:
        return frozenset()

    found: set[MarkerDefinition] = set()
    for item in annotation.__metadata__:
        if not isinstance(item, MarkerDefinition):
            continue
        if not item.allows(Target.PARAMETER):
            raise MarkerAttachmentError(
                marker_name=item.name,
                element=func,
                message=f"@{item.name} is not allowed on parameter {parameter!r} of {_describe(func)}",
            )
        if item.is_runtime:
            found.add(item)
    return frozenset(found)


class MarkerRegistry:
    """
    A namespace of declared markers.

    Names are unique per registry. Once `freeze` is called no further declarations
    are accepted and the registry is a read-only lookup table.
    """

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace
        self._markers: dict[str, MarkerDefinition] = {}
        self._frozen = False

    def declare(
        self,
        name: str,
        *,
        targets: Iterable[Target],
        retention: Retention = Retention.RUNTIME,
        value: str | None = None,
        meta: Iterable[str] = (),
    ) -> MarkerDefinition:
        """Declare a marker in this namespace and return its definition."""

        if not isinstance(name, str) or not name.isidentifier():
            raise MarkerDeclarationError(f"Marker name must be an identifier, got {name!r}")
        if self._frozen:
            raise MarkerDeclarationError(
                f"Cannot declare marker {name!r}: namespace {self.namespace!r} is frozen"
            )
        if name in self._markers:
            raise MarkerDeclarationError(
                f"Marker {name!r} is already declared in namespace {self.namespace!r}"
            )

        resolved_targets = frozenset(Target(target) for target in targets)
        if not resolved_targets:
            raise MarkerDeclarationError(f"Marker {name!r} must allow at least one attachment point")

        marker = MarkerDefinition(
            name=name,
            targets=resolved_targets,
            retention=Retention(retention),
            value=value,
            meta=frozenset(meta),
            namespace=self.namespace,
        )
        self._markers[name] = marker

        if not marker.is_runtime:
            logger.warning(
                "Marker %s in namespace %s has %s retention and will not be visible to runtime scanners",
                name,
                self.namespace,
                marker.retention.value,
            )
        logger.debug("Declared marker %r in namespace %s", marker, self.namespace)
        return marker

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def markers(self) -> Mapping[str, MarkerDefinition]:
        return types.MappingProxyType(self._markers)

    def get(self, name: str) -> MarkerDefinition | None:
        return self._markers.get(name)

    def names(self) -> list[str]:
        return sorted(self._markers)

    def with_meta(self, role: str) -> list[MarkerDefinition]:
        return [marker for marker in self._markers.values() if role in marker.meta]

    def __contains__(self, name: object) -> bool:
        return name in self._markers

    def __iter__(self) -> Iterator[MarkerDefinition]:
        return iter(self._markers.values())

    def __len__(self) -> int:
        return len(self._markers)
