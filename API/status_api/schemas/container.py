from pydantic import BaseModel, Field


class ContainerStatus(BaseModel):
    id: str = Field(..., description="First 12 characters of the engine container id")
    name: str = Field(..., description="Container name without the leading '/', or 'unknown'")
    image: str
    state: str = Field(..., description="Engine lifecycle label, e.g. running, exited, paused")
    status: str = Field(..., description="Human readable status, e.g. 'Up 2 hours'")
    health: str = Field("unknown", description="healthy, unhealthy, starting or unknown")

    class Config:
        json_schema_extra = {
            "example": {
                "id": "abcdef012345",
                "name": "web",
                "image": "nginx:latest",
                "state": "running",
                "status": "Up 2 hours (healthy)",
                "health": "healthy",
            }
        }


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    error: str

    class Config:
        json_schema_extra = {
            "example": {"error": "Container not found"}
        }
