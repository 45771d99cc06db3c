from __future__ import annotations


class RoutingError(Exception):
    """Base class for route table failures."""


class RouteConflictError(RoutingError):
    """Raised when two handlers claim the same path and verb."""


class RouteNotFoundError(RoutingError):
    """Raised when no route matches a request path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No route matches path {path!r}")


class MethodNotAllowedError(RoutingError):
    """Raised when a path is routed but not for the requested verb."""

    def __init__(self, *, verb: str, path: str, allowed: list[str]) -> None:
        self.verb = verb
        self.path = path
        self.allowed = allowed
        super().__init__(
            f"Method {verb} is not allowed for {path!r}; allowed methods: {', '.join(allowed)}"
        )
