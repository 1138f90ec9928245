from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    DateTime,
    ForeignKey,
    Enum,
    Index,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from datetime import datetime

from app.database import Base
from app.enums.booking_status import BookingStatus, PaymentStatus


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("end_date > start_date", name="ck_bookings_dates_ordered"),
        CheckConstraint("total_days >= 1", name="ck_bookings_total_days"),
        Index("ix_bookings_item_status", "item_id", "status"),
        {"extend_existing": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)
    renter_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Dates
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    total_days = Column(Integer, nullable=False)

    # Pricing snapshot, fixed at creation
    price_per_day = Column(Float, nullable=False)
    total_price = Column(Float, nullable=False)
    deposit = Column(Float, nullable=False, default=0.0)
    service_fee = Column(Float, nullable=False)
    total_amount = Column(Float, nullable=False)

    status = Column(
        Enum(BookingStatus, native_enum=False, values_callable=_enum_values),
        default=BookingStatus.PENDING,
        nullable=False,
    )

    # Payment (not populated yet)
    payment_intent_id = Column(String, nullable=True)
    payment_status = Column(
        Enum(PaymentStatus, native_enum=False, values_callable=_enum_values),
        default=PaymentStatus.PENDING,
    )
    payment_amount = Column(Float, nullable=True)
    currency = Column(String(3), default="MAD")

    # Review
    review_rating = Column(Integer, nullable=True)
    review_comment = Column(String, nullable=True)
    review_created_at = Column(DateTime, nullable=True)

    cancellation_reason = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    item = relationship("Item", back_populates="bookings")
    renter = relationship(
        "User", foreign_keys=[renter_id], back_populates="bookings_as_renter"
    )
    owner = relationship(
        "User", foreign_keys=[owner_id], back_populates="bookings_as_owner"
    )
    messages = relationship(
        "BookingMessage",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingMessage.timestamp",
    )


class BookingMessage(Base):
    __tablename__ = "booking_messages"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False, index=True)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    message = Column(String, nullable=False)
    timestamp = Column(DateTime, default=datetime.utcnow)

    # Relationships
    booking = relationship("Booking", back_populates="messages")
    sender = relationship("User")
