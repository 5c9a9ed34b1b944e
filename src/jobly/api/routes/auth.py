"""Token issuing for local development and tests."""

from fastapi import APIRouter

from jobly.config import settings
from jobly.errors.exceptions import AuthorizationError
from jobly.models.user import TokenRequest, TokenResponse
from jobly.services.tokens import create_token

router = APIRouter(tags=["Auth"])


@router.post("/auth/token", status_code=201, response_model=TokenResponse)
async def issue_token(body: TokenRequest) -> TokenResponse:
    """Sign a token for any username. Disabled unless JOBLY_ALLOW_TOKEN_ISSUE is set."""
    if not settings.allow_token_issue:
        raise AuthorizationError("Token issuing is disabled")
    return TokenResponse(token=create_token(body.username, body.is_admin))
