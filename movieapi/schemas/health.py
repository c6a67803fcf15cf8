"""Pydantic models for health endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class HealthCheckResponse(BaseModel):
    """Response model for service health checks."""

    success: bool = True
    message: str
    timestamp: datetime
    environment: Optional[str] = None
    features: List[str] = []
    database: str = "unknown"
