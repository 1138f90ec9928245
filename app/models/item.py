from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    Boolean,
    DateTime,
    ForeignKey,
    Enum,
    JSON,
    Index,
)
from sqlalchemy.orm import relationship
from datetime import datetime

from app.database import Base
from app.enums.item import ItemCategory, ItemCondition, ItemStatus


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Item(Base):
    __tablename__ = "items"
    __table_args__ = (
        Index("ix_items_category_status", "category", "status"),
        {"extend_existing": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False)
    description = Column(String(1000), nullable=False)
    category = Column(
        Enum(ItemCategory, native_enum=False, values_callable=_enum_values),
        nullable=False,
    )
    price_per_day = Column(Float, nullable=False)
    deposit = Column(Float, nullable=False)
    images = Column(JSON, default=list)  # [{"url": ..., "public_id": ...}]
    features = Column(JSON, default=list)

    # Location
    address = Column(String, nullable=False)
    city = Column(String, nullable=False, index=True)
    postal_code = Column(String, nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)

    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Availability window declared by the owner
    available_from = Column(DateTime, nullable=True)
    available_until = Column(DateTime, nullable=True)
    is_available = Column(Boolean, default=True)

    condition = Column(
        Enum(ItemCondition, native_enum=False, values_callable=_enum_values),
        default=ItemCondition.BON_ETAT,
    )
    status = Column(
        Enum(ItemStatus, native_enum=False, values_callable=_enum_values),
        default=ItemStatus.ACTIVE,
        nullable=False,
    )

    # Specifications
    brand = Column(String, nullable=True)
    model = Column(String, nullable=True)
    dimensions = Column(String, nullable=True)
    weight = Column(Float, nullable=True)
    material = Column(String, nullable=True)

    rental_count = Column(Integer, default=0)
    views = Column(Integer, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner = relationship("User", back_populates="items")
    bookings = relationship("Booking", back_populates="item")
