from __future__ import annotations

from datetime import datetime

from exchangeapi.api.schemas.common import EnvelopeFields


class HealthResponse(EnvelopeFields):
    status: str
    environment: str
    service_name: str
    timestamp: datetime


class VersionResponse(EnvelopeFields):
    api_version_path: str
    app_version: str
    project: str
    version: str
    timestamp: datetime
