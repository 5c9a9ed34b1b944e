"""FastAPI dependency injection providers."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Request

from jobly.errors.exceptions import AuthenticationError, AuthorizationError


async def get_db(request: Request) -> AsyncGenerator:
    """Yield a database session from the app's session factory."""
    session_factory = request.app.state.db_session_factory
    async with session_factory() as session:
        yield session


async def get_current_user(request: Request) -> dict:
    """Return the authenticated user dict or raise 401."""
    user = getattr(request.state, "user", {})
    if "_auth_error" in (user or {}):
        raise AuthenticationError(user["_auth_error"])
    if not user or user.get("sub") in ("anonymous", ""):
        raise AuthenticationError("Authentication required")
    return user


async def require_admin(user: dict = Depends(get_current_user)) -> dict:
    """Raise 403 unless the token carries the admin flag."""
    if not user.get("is_admin"):
        raise AuthorizationError("User is not admin")
    return user


# Route-level dependencies
EnsureLoggedIn = Depends(get_current_user)
RequireAdmin = Depends(require_admin)
