"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for GET /health."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: Literal["dev", "prod"] = Field(description="APP_ENV of the running instance")
    database: Literal["connected", "disconnected"] = Field(
        description="Whether the users/properties database answered a trivial query",
    )
