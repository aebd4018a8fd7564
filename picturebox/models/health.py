from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    status: str = "ok"
    timestamp: str = Field(min_length=1)
