"""API routes implementation."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request, HTTPException, status

from .schemas import ShortLinkResponse, HealthResponse, ErrorResponse
from linkshort.errors import NotFoundError
from ..params import require_short_code

router = APIRouter()


@router.get(
    "/links/{short_code}",
    response_model=ShortLinkResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid short code format"},
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Get link details",
    description="Get a short link's summary, including its click count, without redirecting.",
)
async def get_link_details(request: Request, short_code: str):
    """Get information about a short link."""
    service = request.app.state.service
    require_short_code(short_code)

    try:
        summary = await service.get_short_link_details(short_code)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    return ShortLinkResponse(**summary)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service and its store are healthy.",
)
async def health_check(request: Request):
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
