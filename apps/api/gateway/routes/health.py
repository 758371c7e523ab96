"""Health route."""

from fastapi import APIRouter

from authcore.schemas.health import HealthResponse

SERVICE_NAME = "api"

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(service=SERVICE_NAME)
