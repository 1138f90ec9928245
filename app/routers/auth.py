from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from app.database import get_db
from app.crud import user as user_crud
from app.schemas.user import UserCreate, UserLogin, UserResponse, TokenResponse
from app.services.auth import (
    authenticate_user,
    create_user_token,
    get_password_hash,
    get_current_user,
)
from app.models.user import User
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def _token_response(db: Session, user: User) -> TokenResponse:
    user.last_login = datetime.utcnow()
    db.commit()
    db.refresh(user)
    return TokenResponse(
        token=create_user_token(user), user=UserResponse.model_validate(user)
    )


@router.post(
    "/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED
)
def register(user: UserCreate, db: Session = Depends(get_db)):
    if user_crud.get_user_by_email(db, user.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    db_user = user_crud.create_user(
        db, user=user, hashed_password=get_password_hash(user.password)
    )
    logger.info(f"User registered: {db_user.id}")
    return _token_response(db, db_user)


@router.post("/login", response_model=TokenResponse)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    user = authenticate_user(db, credentials.email, credentials.password)
    if not user:
        raise HTTPException(status_code=400, detail="Invalid email or password")
    return _token_response(db, user)


@router.post("/token")
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)
):
    """OAuth2 password flow used by the interactive API docs."""
    user = authenticate_user(db, form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return {"access_token": create_user_token(user), "token_type": "bearer"}


@router.get("/profile", response_model=UserResponse)
def read_profile(current_user: User = Depends(get_current_user)):
    return current_user
