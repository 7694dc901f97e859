"""Registration, login and profile endpoints"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kanban.config import Settings
from kanban.database import get_db
from kanban.dependencies import get_app_settings, get_current_user
from kanban.models import User
from kanban.schemas import AuthResponse, ProfileUpdate, UserCreate, UserLogin, UserResponse
from kanban.services import users

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    user, token = users.register(db, settings, user_in)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    user, token = users.login(db, settings, credentials)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.get("/profile", response_model=UserResponse)
def read_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserResponse)
def update_profile(
    update: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return users.update_profile(db, current_user, update)
