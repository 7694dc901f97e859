"""Shared FastAPI dependencies."""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from kanban.config import Settings
from kanban.database import get_db
from kanban.errors import AuthenticationError
from kanban.models import User
from kanban.security import decode_access_token

bearer = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> User:
    """Resolve the bearer token to a live user."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication token is required")

    payload = decode_access_token(credentials.credentials, settings)
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Invalid authentication token") from exc

    user = db.query(User).filter(User.id == user_id, User.deleted_at.is_(None)).first()
    if user is None:
        raise AuthenticationError("User no longer exists")
    return user
