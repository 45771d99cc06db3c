# This file declares the built-in HTTP verb markers shipped with the routing layer.
# Each verb marker carries its protocol verb as the marker value and the `http_method` meta role,
# which is what the route scanner looks for instead of knowing every verb by name.

from __future__ import annotations

from exchangeapi.markers import MarkerDefinition, MarkerRegistry, Retention, Target

HTTP_METHOD_ROLE = "http_method"

HTTP_METHODS = MarkerRegistry("http")


def declare_http_method(verb: str) -> MarkerDefinition:
    """Declare a method-only, runtime-retained verb marker named after `verb`."""

    return HTTP_METHODS.declare(
        verb,
        targets={Target.METHOD},
        retention=Retention.RUNTIME,
        value=verb,
        meta={HTTP_METHOD_ROLE},
    )


GET = declare_http_method("GET")
POST = declare_http_method("POST")
PUT = declare_http_method("PUT")
DELETE = declare_http_method("DELETE")
