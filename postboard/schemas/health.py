"""Pydantic schema for the health check payload."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    """data of GET /health."""

    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Whether a trivial query against the database succeeded",
    )
