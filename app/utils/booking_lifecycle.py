"""
Ciclo de vida de las reservas.

Estados: pending -> confirmed (accept), pending -> rejected (reject),
pending/confirmed -> cancelled (cancel). completed, cancelled y rejected
son terminales. Las transiciones confirmed -> active -> completed existen en
el modelo pero ninguna operación las ejecuta todavía.
"""

from datetime import datetime
from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from app.crud import booking as booking_crud
from app.crud import item as item_crud
from app.enums.booking_status import BookingStatus, CANCELLABLE_STATUSES
from app.enums.item import ItemStatus
from app.models.booking import Booking
from app.utils.booking_overlap import compute_total_days, validate_date_range
from app.utils.booking_pricing import compute_pricing
from app.utils.errors import (
    BookingNotFoundError,
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    ItemNotFoundError,
)

logger = logging.getLogger(__name__)


def _get_booking_or_raise(db: Session, booking_id: int) -> Booking:
    booking = booking_crud.get_booking(db, booking_id)
    if not booking:
        raise BookingNotFoundError(booking_id)
    return booking


def _commit(db: Session, booking: Booking) -> Booking:
    db.commit()
    db.refresh(booking)
    return booking


def create_booking(
    db: Session,
    item_id: int,
    renter_id: int,
    start_date: datetime,
    end_date: datetime,
    message: Optional[str] = None,
) -> Booking:
    """
    Crea una solicitud de reserva en estado pending.

    La fila del objeto queda bloqueada desde la verificación de
    disponibilidad hasta el commit, de modo que dos solicitudes simultáneas
    para el mismo objeto se ejecutan una detrás de otra.

    Raises:
        ItemNotFoundError: el objeto no existe
        ForbiddenError: el locatario es el propietario del objeto
        ConflictError: el objeto no está activo o las fechas se solapan
        InvalidInputError: fechas inválidas o invertidas
    """
    try:
        item = item_crud.get_item_for_update(db, item_id)
        if not item:
            raise ItemNotFoundError(item_id)

        if item.owner_id == renter_id:
            raise ForbiddenError("You cannot rent your own item")

        if item.status != ItemStatus.ACTIVE:
            raise ConflictError("This item is not available for rent")

        total_days = compute_total_days(start_date, end_date)

        conflicting = booking_crud.find_conflicting_booking(
            db, item_id, start_date, end_date
        )
        if conflicting:
            logger.warning(
                f"Booking request for item {item_id} conflicts with booking "
                f"{conflicting.id} ({conflicting.start_date} - {conflicting.end_date})"
            )
            raise ConflictError("The item is not available for these dates")

        pricing = compute_pricing(item.price_per_day, total_days, item.deposit)
        booking = booking_crud.add_booking(
            db,
            item_id=item.id,
            renter_id=renter_id,
            owner_id=item.owner_id,
            start_date=start_date,
            end_date=end_date,
            pricing=pricing,
            message=message,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        f"Booking {booking.id} created: item={item_id} renter={renter_id} "
        f"days={pricing.total_days} total_amount={pricing.total_amount}"
    )
    return booking_crud.get_booking(db, booking.id)


def accept_booking(db: Session, booking_id: int, actor_id: int) -> Booking:
    booking = _get_booking_or_raise(db, booking_id)

    if booking.owner_id != actor_id:
        raise ForbiddenError("Only the owner can accept this booking")

    if booking.status != BookingStatus.PENDING:
        raise InvalidStateError("This booking cannot be accepted")

    booking.status = BookingStatus.CONFIRMED
    _commit(db, booking)
    logger.info(f"Booking {booking.id} accepted by owner {actor_id}")
    return booking


def reject_booking(
    db: Session, booking_id: int, actor_id: int, reason: Optional[str] = None
) -> Booking:
    booking = _get_booking_or_raise(db, booking_id)

    if booking.owner_id != actor_id:
        raise ForbiddenError("Only the owner can reject this booking")

    if booking.status != BookingStatus.PENDING:
        raise InvalidStateError("This booking cannot be rejected")

    booking.status = BookingStatus.REJECTED
    if reason:
        booking.cancellation_reason = reason
    _commit(db, booking)
    logger.info(f"Booking {booking.id} rejected by owner {actor_id}")
    return booking


def cancel_booking(
    db: Session, booking_id: int, actor_id: int, reason: Optional[str] = None
) -> Booking:
    booking = _get_booking_or_raise(db, booking_id)

    if actor_id not in (booking.owner_id, booking.renter_id):
        raise ForbiddenError("Only the renter or the owner can cancel this booking")

    if booking.status not in CANCELLABLE_STATUSES:
        raise InvalidStateError("This booking cannot be cancelled")

    booking.status = BookingStatus.CANCELLED
    if reason:
        booking.cancellation_reason = reason
    _commit(db, booking)
    logger.info(f"Booking {booking.id} cancelled by user {actor_id}")
    return booking


def get_booking_for_party(db: Session, booking_id: int, actor_id: int) -> Booking:
    booking = _get_booking_or_raise(db, booking_id)
    if actor_id not in (booking.owner_id, booking.renter_id):
        raise ForbiddenError("You are not a party to this booking")
    return booking


def list_user_bookings(db: Session, user_id: int) -> List[Booking]:
    bookings = booking_crud.get_bookings_for_user(db, user_id)
    logger.info(f"{len(bookings)} bookings found for user {user_id}")
    return bookings


def check_availability(
    db: Session, item_id: int, start_date: datetime, end_date: datetime
) -> Optional[Booking]:
    """
    Aplica la misma regla de solapamiento que create_booking sin escribir.

    Returns:
        La primera reserva en conflicto, o None si el objeto está libre.
    """
    validate_date_range(start_date, end_date)
    if not item_crud.get_item(db, item_id):
        raise ItemNotFoundError(item_id)
    return booking_crud.find_conflicting_booking(db, item_id, start_date, end_date)
