"""Path parameter checks shared by the routers."""

from fastapi import HTTPException, status

from linkshort.common.validators import is_valid_short_code


def require_short_code(short_code: str) -> None:
    """Reject path segments that can never be a short code with a 400."""
    is_valid, _ = is_valid_short_code(short_code)
    if not is_valid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid short code format",
        )
