# This file defines request and response models for the admin status resource.
# The patch model only carries the fields a client wants to change; everything else stays as it is.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from exchangeapi.api.schemas.common import EnvelopeFields


class AdminStatusPatch(BaseModel):
    model_config = ConfigDict(extra="forbid")

    message: str | None = Field(default=None, min_length=1, max_length=256)
    maintenance: bool | None = None

    def is_empty(self) -> bool:
        return self.message is None and self.maintenance is None


class AdminStatusResponse(EnvelopeFields):
    message: str
    maintenance: bool
    route_count: int = Field(ge=0)
    http_verbs: list[str]
    updated_at: datetime
