"""Public link routes: creation and redirection."""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import RedirectResponse

from linkshort.errors import ConflictError, NotFoundError, ValidationError
from ..api.schemas import ShortenRequest, ShortLinkResponse, ErrorResponse
from ..params import require_short_code

router = APIRouter()


@router.post(
    "/shorten",
    response_model=ShortLinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        409: {"model": ErrorResponse, "description": "Short code already in use"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short link",
    description="Shorten a URL. Optionally provide a custom alias to use as the short code.",
)
async def shorten(request: Request, body: ShortenRequest):
    """Create a short link."""
    service = request.app.state.service

    try:
        summary = await service.create_short_link(
            long_url=body.long_url,
            custom_alias=body.custom_alias,
            creator_ip=getattr(request.state, "client_ip", None),
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except ConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except Exception as e:
        request.app.state.logger.exception(f"Failed to create short link: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal error: {str(e)}",
        )

    return ShortLinkResponse(**summary)


@router.get(
    "/{short_code}",
    status_code=status.HTTP_302_FOUND,
    responses={
        302: {"description": "Redirect to the long URL"},
        400: {"model": ErrorResponse, "description": "Invalid short code format"},
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Follow short link",
)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the long URL; the click is counted in the background."""
    service = request.app.state.service
    require_short_code(short_code)

    try:
        long_url = await service.get_long_url(short_code)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    # 302 keeps clients coming back through the counter
    return RedirectResponse(url=long_url, status_code=status.HTTP_302_FOUND)
