# This file builds the routing table by scanning resource objects for verb markers.
# It exists so handlers declare their verb with a marker and never register themselves by hand.
# Any marker with the `http_method` meta role is routed the same way, so PATCH needs no special case.
# The table can resolve requests in-process and can install its routes into a FastAPI router.

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from fastapi import APIRouter

from exchangeapi.markers import (
    MarkerAttachmentError,
    Target,
    element_kind,
    markers_with_meta,
    misplaced_markers,
)
from exchangeapi.routing.exceptions import (
    MethodNotAllowedError,
    RouteConflictError,
    RouteNotFoundError,
)
from exchangeapi.routing.verbs import HTTP_METHOD_ROLE

logger = logging.getLogger(__name__)

_PARAM_RE = re.compile(r"\{([a-zA-Z_][a-zA-Z0-9_]*)\}")


def compile_path(path: str) -> re.Pattern[str]:
    """Turn a `/orgs/{orgid}/nodes/{nodeid}` template into an anchored regex."""

    if not path.startswith("/"):
        raise ValueError(f"Route path must start with '/', got {path!r}")

    pattern = ""
    position = 0
    for match in _PARAM_RE.finditer(path):
        pattern += re.escape(path[position : match.start()])
        pattern += f"(?P<{match.group(1)}>[^/]+)"
        position = match.end()
    pattern += re.escape(path[position:])
    return re.compile(f"^{pattern}$")


@dataclass(frozen=True)
class Route:
    path: str
    verb: str
    endpoint: Callable[..., Any]
    name: str
    pattern: re.Pattern[str] = field(compare=False, repr=False)

    def match(self, path: str) -> dict[str, str] | None:
        found = self.pattern.match(path)
        return found.groupdict() if found else None


def scan_handlers(resource: object) -> dict[str, Callable[..., Any]]:
    """Return a verb -> bound handler mapping for every verb-marked method of `resource`."""

    handlers: dict[str, Callable[..., Any]] = {}
    for attr_name, attr in inspect.getmembers(type(resource)):
        if attr_name.startswith("__"):
            continue
        verb_markers = markers_with_meta(attr, HTTP_METHOD_ROLE)
        if not verb_markers:
            continue
        misplaced = verb_markers & misplaced_markers(attr)
        if misplaced:
            marker = min(misplaced, key=lambda item: item.name)
            kind = element_kind(attr) or Target.FIELD
            raise MarkerAttachmentError(
                marker_name=marker.name,
                element=attr,
                message=(
                    f"@{marker.name} is not allowed on {kind.value} "
                    f"{type(resource).__name__}.{attr_name}; verb handlers must be methods"
                ),
            )
        verbs = sorted(marker.value or marker.name for marker in verb_markers)

        bound = getattr(resource, attr_name)
        for verb in verbs:
            if verb in handlers:
                raise RouteConflictError(
                    f"{type(resource).__name__} has more than one {verb} handler: "
                    f"{handlers[verb].__name__} and {attr_name}"
                )
            handlers[verb] = bound
    return handlers


class RouteTable:
    """Ordered collection of (path, verb) routes discovered from verb markers."""

    def __init__(self) -> None:
        self._routes: list[Route] = []

    @property
    def routes(self) -> tuple[Route, ...]:
        return tuple(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def add_route(
        self,
        path: str,
        verb: str,
        endpoint: Callable[..., Any],
        *,
        name: str | None = None,
    ) -> Route:
        verb = verb.upper()
        for existing in self._routes:
            if existing.path == path and existing.verb == verb:
                raise RouteConflictError(f"Route {verb} {path} is already handled by {existing.name}")

        route = Route(
            path=path,
            verb=verb,
            endpoint=endpoint,
            name=name or getattr(endpoint, "__qualname__", repr(endpoint)),
            pattern=compile_path(path),
        )
        self._routes.append(route)
        logger.debug("Added route %s %s -> %s", verb, path, route.name)
        return route

    def add_resource(self, path: str, resource: object) -> list[Route]:
        """Insert one route per verb-marked method of `resource` at `path`."""

        handlers = scan_handlers(resource)
        if not handlers:
            logger.info(
                "Resource %s has no verb-marked methods; nothing routed at %s",
                type(resource).__name__,
                path,
            )
        return [self.add_route(path, verb, handler) for verb, handler in handlers.items()]

    def allowed_verbs(self, path: str) -> list[str]:
        return sorted({route.verb for route in self._routes if route.match(path) is not None})

    def resolve(self, verb: str, path: str) -> tuple[Route, dict[str, str]]:
        """Find the route for a request, returning it with the extracted path parameters."""

        verb = verb.upper()
        matched = False
        for route in self._routes:
            params = route.match(path)
            if params is None:
                continue
            matched = True
            if route.verb == verb:
                return route, params

        if not matched:
            raise RouteNotFoundError(path)
        raise MethodNotAllowedError(verb=verb, path=path, allowed=self.allowed_verbs(path))

    def dispatch(self, verb: str, path: str, **kwargs: Any) -> Any:
        route, params = self.resolve(verb, path)
        return route.endpoint(**params, **kwargs)

    def install(
        self,
        router: APIRouter,
        *,
        responses: dict[int | str, dict[str, Any]] | None = None,
    ) -> None:
        """Register every route with a FastAPI router; `responses` documents extra status codes."""

        for route in self._routes:
            router.add_api_route(
                route.path,
                route.endpoint,
                methods=[route.verb],
                name=route.name,
                responses=responses,
            )
            logger.info("Installed route %s %s -> %s", route.verb, route.path, route.name)
