from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness probe body."""

    status: str = "healthy"
    timestamp: str
    version: str
