"""Exception handlers installed on the FastAPI app."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


def first_error_message(exc: RequestValidationError) -> str:
    """Describe the first failing field constraint of a request."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    error = errors[0]
    if error.get("type") == "json_invalid":
        return "Request body is not valid JSON"

    ctx_error = (error.get("ctx") or {}).get("error")
    if isinstance(ctx_error, Exception):
        # Raised by our own field validators; the message is already user-facing
        return str(ctx_error)

    # Integer parts are list indexes or JSON offsets, not field names
    loc = [
        str(part) for part in error.get("loc", ())
        if not isinstance(part, int) and part not in ("body", "query", "path")
    ]
    field = ".".join(loc)
    message = error.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation failures as 400 instead of FastAPI's 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": first_error_message(exc)},
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
