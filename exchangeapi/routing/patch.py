# This file declares the PATCH verb marker.
# It lives beside the built-in GET/POST/PUT/DELETE markers so the route scanner treats all five alike.

from __future__ import annotations

from exchangeapi.routing.verbs import declare_http_method

PATCH = declare_http_method("PATCH")
