"""Bearer token encoding and decoding (python-jose)."""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from staffboard.config import settings

logger = logging.getLogger(__name__)


def create_access_token(user_id: str, role: str, expires_minutes: int | None = None) -> str:
    """Mint an access token carrying the user id and raw role title."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "role": role,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes or settings.jwt_access_token_expire_minutes),
        "type": "access",
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    """Return the verified claims.

    Raises:
        ValueError: signature, expiry, audience or issuer check failed.
    """
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except JWTError as exc:
        logger.debug("JWT decode failed: %s", exc)
        raise ValueError(f"Invalid token: {exc}") from exc
