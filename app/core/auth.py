# app/core/auth.py

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.users import User
from app.core.config import settings
from app.core.errors import AuthenticationError
from app.core.jwt import decode_session_token


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
):
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)

    if not token:
        raise AuthenticationError()

    payload = decode_session_token(token)

    if payload is None:
        raise AuthenticationError("Session expired or invalid. Please log in.")

    user_id = payload.get("sub")

    if user_id is None:
        raise AuthenticationError()

    user = db.query(User).filter(User.id == int(user_id)).first()

    if user is None:
        raise AuthenticationError()

    return user
