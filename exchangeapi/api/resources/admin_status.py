# This file defines the admin status resource served under the versioned API path.
# Its handlers are plain methods tagged with verb markers; the route table discovers and mounts them.
# GET reports the current status and PATCH changes only the fields present in the request body.
# State is held in memory and guarded by a lock because FastAPI runs sync handlers in a thread pool.

from __future__ import annotations

import logging
import threading
from datetime import UTC, datetime

from fastapi import Request

from exchangeapi.api.api_config import ApiConfig
from exchangeapi.api.error_handlers import APIError
from exchangeapi.api.schemas.admin_schemas import AdminStatusPatch, AdminStatusResponse
from exchangeapi.api.schemas.common import build_version_fields
from exchangeapi.routing import GET, HTTP_METHODS, PATCH, RouteTable

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class AdminStatusResource:
    def __init__(self, *, config: ApiConfig, route_table: RouteTable) -> None:
        self._config = config
        self._route_table = route_table
        self._lock = threading.Lock()
        self._message = config.admin_status_message
        self._maintenance = False
        self._updated_at = _utc_now()

    def _snapshot(self, request: Request) -> AdminStatusResponse:
        with self._lock:
            message, maintenance, updated_at = self._message, self._maintenance, self._updated_at
        return AdminStatusResponse(
            **build_version_fields(
                api_version_path=self._config.api_version_path,
                schema_version=self._config.schema_version,
            ),
            request_id=str(request.state.request_id),
            message=message,
            maintenance=maintenance,
            route_count=len(self._route_table),
            http_verbs=HTTP_METHODS.names(),
            updated_at=updated_at,
        )

    @GET
    def get_status(self, request: Request) -> AdminStatusResponse:
        return self._snapshot(request)

    @PATCH
    def patch_status(self, request: Request, changes: AdminStatusPatch) -> AdminStatusResponse:
        if changes.is_empty():
            raise APIError(
                status_code=400,
                error_code="EMPTY_PATCH",
                message="PATCH body must set at least one of: message, maintenance.",
            )

        with self._lock:
            if changes.message is not None:
                self._message = changes.message
            if changes.maintenance is not None:
                self._maintenance = changes.maintenance
            self._updated_at = _utc_now()

        logger.info(
            "Admin status updated (fields=%s, request_id=%s)",
            sorted(changes.model_dump(exclude_none=True)),
            request.state.request_id,
        )
        return self._snapshot(request)
