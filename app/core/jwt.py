from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from app.core.config import settings


def session_max_age() -> timedelta:
    return timedelta(days=settings.SESSION_EXPIRE_DAYS)


def create_session_token(data: dict, expires_delta: timedelta | None = None):
    to_encode = data.copy()

    expire = datetime.now(timezone.utc) + (expires_delta or session_max_age())
    to_encode.update({"exp": expire, "type": "session"})

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def decode_session_token(token: str):
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )

        # Ensure the token type is "session"
        if payload.get("type") != "session":
            return None

        return payload

    except JWTError:
        return None
