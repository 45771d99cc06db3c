# This file exposes the verb markers and the route table used by API resources.
# Importing the package declares every verb, after which the verb namespace is frozen.

from exchangeapi.routing.dispatcher import Route, RouteTable, compile_path, scan_handlers
from exchangeapi.routing.exceptions import (
    MethodNotAllowedError,
    RouteConflictError,
    RouteNotFoundError,
    RoutingError,
)
from exchangeapi.routing.patch import PATCH
from exchangeapi.routing.verbs import DELETE, GET, HTTP_METHOD_ROLE, HTTP_METHODS, POST, PUT

HTTP_METHODS.freeze()

__all__ = [
    "DELETE",
    "GET",
    "HTTP_METHODS",
    "HTTP_METHOD_ROLE",
    "MethodNotAllowedError",
    "PATCH",
    "POST",
    "PUT",
    "Route",
    "RouteConflictError",
    "RouteNotFoundError",
    "RouteTable",
    "RoutingError",
    "compile_path",
    "scan_handlers",
]
