"""Forwarded headers middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from linkshort.common.headers import resolve_client_ip


class ForwardedHeadersMiddleware(BaseHTTPMiddleware):
    """Resolve the client address once per request and store it in request state."""

    def __init__(self, app, trust_forwarded_for: bool = False):
        super().__init__(app)
        self.trust_forwarded_for = trust_forwarded_for

    async def dispatch(self, request: Request, call_next: Callable):
        request.state.client_ip = resolve_client_ip(
            request.headers,
            peer_host=request.client.host if request.client else None,
            trust_forwarded_for=self.trust_forwarded_for,
        )

        return await call_next(request)
