# This file marks the routers package for function-style API route modules.
# Resource classes routed through verb markers live in `exchangeapi.api.resources`.
