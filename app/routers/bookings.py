from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.schemas.booking import (
    BookingCreate,
    BookingDetailResponse,
    BookingReason,
    BookingResponse,
)
from app.services.auth import get_current_user
from app.models.user import User
from app.utils import booking_lifecycle
from app.utils.errors import MarketplaceError, to_http_exception

router = APIRouter()


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    booking: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return booking_lifecycle.create_booking(
            db,
            item_id=booking.item_id,
            renter_id=current_user.id,
            start_date=booking.start_date,
            end_date=booking.end_date,
            message=booking.message,
        )
    except MarketplaceError as exc:
        raise to_http_exception(exc)


@router.get("/my-bookings", response_model=List[BookingResponse])
def read_my_bookings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return booking_lifecycle.list_user_bookings(db, current_user.id)


@router.get("/{booking_id}", response_model=BookingDetailResponse)
def read_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return booking_lifecycle.get_booking_for_party(db, booking_id, current_user.id)
    except MarketplaceError as exc:
        raise to_http_exception(exc)


@router.put("/{booking_id}/accept", response_model=BookingResponse)
def accept_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return booking_lifecycle.accept_booking(db, booking_id, current_user.id)
    except MarketplaceError as exc:
        raise to_http_exception(exc)


@router.put("/{booking_id}/reject", response_model=BookingResponse)
def reject_booking(
    booking_id: int,
    body: Optional[BookingReason] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return booking_lifecycle.reject_booking(
            db, booking_id, current_user.id, reason=body.reason if body else None
        )
    except MarketplaceError as exc:
        raise to_http_exception(exc)


@router.put("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
    booking_id: int,
    body: Optional[BookingReason] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return booking_lifecycle.cancel_booking(
            db, booking_id, current_user.id, reason=body.reason if body else None
        )
    except MarketplaceError as exc:
        raise to_http_exception(exc)
