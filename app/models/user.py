from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    Boolean,
    DateTime,
)
from sqlalchemy.orm import relationship
from app.database import Base
from datetime import datetime


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone = Column(String, nullable=False)
    hashed_password = Column(String, nullable=False)

    # Address
    street = Column(String, nullable=True)
    city = Column(String, nullable=True)
    postal_code = Column(String, nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)

    identity_verified = Column(Boolean, default=False)
    trust_score = Column(Integer, default=50)
    avatar = Column(String, nullable=True)
    is_active = Column(Boolean, default=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    items = relationship("Item", back_populates="owner", cascade="all, delete-orphan")
    bookings_as_renter = relationship(
        "Booking", foreign_keys="Booking.renter_id", back_populates="renter"
    )
    bookings_as_owner = relationship(
        "Booking", foreign_keys="Booking.owner_id", back_populates="owner"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
