"""JWT Bearer authentication middleware."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from jobly.services.tokens import decode_token

logger = logging.getLogger(__name__)

ANONYMOUS = {"sub": "anonymous", "is_admin": False}


class AuthMiddleware(BaseHTTPMiddleware):
    """Attach the token's user to request.state.user.

    A missing or invalid token is not an error here; the route dependencies
    decide whether a user is required.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        auth_header = request.headers.get("authorization", "")
        if auth_header[:7].lower() == "bearer ":
            request.state.user = self._validate_jwt(auth_header[7:].strip())
        else:
            request.state.user = dict(ANONYMOUS)
        return await call_next(request)

    def _validate_jwt(self, token: str) -> dict:
        try:
            payload = decode_token(token)
        except ValueError as exc:
            logger.debug("JWT rejected: %s", exc)
            return {**ANONYMOUS, "_auth_error": "invalid_token"}

        return {
            "sub": payload.get("sub", ""),
            "is_admin": bool(payload.get("isAdmin", False)),
        }
