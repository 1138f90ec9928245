from sqlalchemy.orm import Session, joinedload, selectinload
from sqlalchemy import or_
from datetime import datetime
from typing import List, Optional

from app.enums.booking_status import BLOCKING_STATUSES
from app.models.booking import Booking, BookingMessage
from app.utils.booking_pricing import PricingSnapshot, DEFAULT_CURRENCY


def get_booking(db: Session, booking_id: int) -> Optional[Booking]:
    return (
        db.query(Booking)
        .options(
            joinedload(Booking.item),
            joinedload(Booking.renter),
            joinedload(Booking.owner),
            selectinload(Booking.messages),
        )
        .filter(Booking.id == booking_id)
        .first()
    )


def get_bookings_for_user(db: Session, user_id: int) -> List[Booking]:
    """Reservas donde el usuario es locatario o propietario, más recientes primero."""
    return (
        db.query(Booking)
        .options(
            joinedload(Booking.item),
            joinedload(Booking.renter),
            joinedload(Booking.owner),
            selectinload(Booking.messages),
        )
        .filter(or_(Booking.renter_id == user_id, Booking.owner_id == user_id))
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .all()
    )


def find_conflicting_booking(
    db: Session, item_id: int, start_date: datetime, end_date: datetime
) -> Optional[Booking]:
    """
    Devuelve la primera reserva activa del objeto cuyo rango [start, end]
    se solapa con el pedido. Los extremos cuentan como solapamiento.
    """
    return (
        db.query(Booking)
        .filter(Booking.item_id == item_id)
        .filter(Booking.status.in_(BLOCKING_STATUSES))
        .filter(Booking.start_date <= end_date)
        .filter(Booking.end_date >= start_date)
        .order_by(Booking.start_date)
        .first()
    )


def count_bookings_for_item(db: Session, item_id: int) -> int:
    return db.query(Booking).filter(Booking.item_id == item_id).count()


def add_booking(
    db: Session,
    item_id: int,
    renter_id: int,
    owner_id: int,
    start_date: datetime,
    end_date: datetime,
    pricing: PricingSnapshot,
    message: Optional[str] = None,
) -> Booking:
    """Agrega la reserva a la sesión sin hacer commit."""
    db_booking = Booking(
        item_id=item_id,
        renter_id=renter_id,
        owner_id=owner_id,
        start_date=start_date,
        end_date=end_date,
        total_days=pricing.total_days,
        price_per_day=pricing.price_per_day,
        total_price=pricing.total_price,
        deposit=pricing.deposit,
        service_fee=pricing.service_fee,
        total_amount=pricing.total_amount,
        currency=DEFAULT_CURRENCY,
    )
    if message:
        db_booking.messages.append(BookingMessage(sender_id=renter_id, message=message))
    db.add(db_booking)
    return db_booking
