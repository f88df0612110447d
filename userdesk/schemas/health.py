"""Pydantic schema for the health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    environment: Literal["dev", "prod"] = Field(description="APP_ENV of this deployment")
    database: Literal["connected", "disconnected"] = Field(
        description="Result of a SELECT 1 against the users database"
    )
