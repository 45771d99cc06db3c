# This file marks the api package: app factory, config, error handlers, routers, and resources.
