"""Bearer token helpers shared with the identity service."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from forum_admin.config import get_settings

ALGORITHM = "HS256"
DEFAULT_TOKEN_LIFETIME = timedelta(minutes=30)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Sign ``data`` the way the identity service does.

    Production tokens are issued by the identity service; this is used by
    the seeding script and the test-suite.
    """

    settings = get_settings()
    expire = datetime.now(timezone.utc) + (expires_delta or DEFAULT_TOKEN_LIFETIME)
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


__all__ = ["create_access_token", "decode_access_token"]
