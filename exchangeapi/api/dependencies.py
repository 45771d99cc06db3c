# This file provides dependency factories for FastAPI routes.
# The config is built once by `create_app` and read back from application state.

from __future__ import annotations

from fastapi import Request

from exchangeapi.api.api_config import ApiConfig


def get_config(request: Request) -> ApiConfig:
    return request.app.state.config
