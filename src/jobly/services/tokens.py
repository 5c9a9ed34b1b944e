"""JWT issuing and decoding."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from jobly.config import settings


def create_token(username: str, is_admin: bool = False) -> str:
    """Sign an access token carrying the username and admin flag."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": username,
        "isAdmin": is_admin,
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_access_token_expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Verify a token and return its payload.

    Raises:
        ValueError: If the signature, expiry or format is invalid.
    """
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValueError(f"Invalid token: {exc}") from exc
