from fastapi import APIRouter

from status_api.schemas.container import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health():
    """Liveness of this service only; the Docker engine is not contacted."""
    return HealthResponse(status="ok")
