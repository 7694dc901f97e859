"""Registration, login and profile updates."""
from typing import Tuple

from loguru import logger
from sqlalchemy.orm import Session

from kanban.config import Settings
from kanban.database import transaction
from kanban.errors import AuthenticationError, ConflictError
from kanban.models import User
from kanban.schemas import ProfileUpdate, UserCreate, UserLogin
from kanban.security import create_access_token, get_password_hash, verify_password


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _email_taken(db: Session, email: str) -> bool:
    # Soft-deleted users keep their address reserved
    return db.query(User.id).filter(User.email == email).first() is not None


def register(db: Session, settings: Settings, user_in: UserCreate) -> Tuple[User, str]:
    email = _normalize_email(user_in.email)
    if _email_taken(db, email):
        raise ConflictError("Email already registered")

    with transaction(db):
        user = User(email=email, password_hash=get_password_hash(user_in.password))
        db.add(user)
        db.flush()

    logger.info("Registered user {}", user.id)
    return user, create_access_token(user.id, user.email, settings)


def login(db: Session, settings: Settings, credentials: UserLogin) -> Tuple[User, str]:
    email = _normalize_email(credentials.email)
    user = db.query(User).filter(User.email == email, User.deleted_at.is_(None)).first()
    if user is None or not verify_password(credentials.password, user.password_hash):
        raise AuthenticationError("Invalid email or password")
    return user, create_access_token(user.id, user.email, settings)


def update_profile(db: Session, user: User, update: ProfileUpdate) -> User:
    with transaction(db):
        if update.email is not None:
            email = _normalize_email(update.email)
            if email != user.email:
                if _email_taken(db, email):
                    raise ConflictError("Email already registered")
                user.email = email
        if update.password is not None:
            user.password_hash = get_password_hash(update.password)
    return user
