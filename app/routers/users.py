from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.crud import item as item_crud
from app.crud import user as user_crud
from app.models.user import User
from app.schemas.item import UserItemsResponse
from app.schemas.user import UserChangePassword, UserProfileUpdate, UserResponse
from app.services.auth import get_current_user, get_password_hash, verify_password
from app.utils.errors import UserNotFoundError, to_http_exception

router = APIRouter()


@router.get("/{user_id}/items", response_model=UserItemsResponse)
def read_user_items(
    user_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Objetos activos de un usuario (público)."""
    user = user_crud.get_user(db, user_id)
    if not user:
        raise to_http_exception(UserNotFoundError(user_id))

    items, pagination = item_crud.get_active_items_by_owner(
        db, owner_id=user_id, page=page, limit=limit
    )
    return {"items": items, "user": user, "pagination": pagination}


@router.put("/profile", response_model=UserResponse)
def update_profile(
    profile: UserProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return user_crud.update_profile(db, current_user, profile)


@router.put("/change-password", response_model=dict)
def change_password(
    password_data: UserChangePassword,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Change user password. Requires authentication.
    The user must provide the current password for security verification.
    """
    if not verify_password(password_data.current_password, current_user.hashed_password):
        raise HTTPException(status_code=400, detail="Current password is incorrect")

    user_crud.set_password(
        db, current_user, get_password_hash(password_data.new_password)
    )
    return {"message": "Password updated successfully"}
