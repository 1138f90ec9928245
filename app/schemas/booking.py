from pydantic import Field, field_validator
from datetime import datetime
from typing import List, Optional

from app.enums.booking_status import BookingStatus, PaymentStatus
from app.schemas.base import CamelModel, to_naive_utc
from app.schemas.item import ItemImage
from app.schemas.user import UserSummary, UserContact


class BookingCreate(CamelModel):
    item_id: int
    start_date: datetime
    end_date: datetime
    message: Optional[str] = Field(None, max_length=1000)

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class BookingReason(CamelModel):
    reason: Optional[str] = Field(None, max_length=500)


class BookingItemSummary(CamelModel):
    id: int
    title: str
    images: List[ItemImage] = []
    price_per_day: float
    deposit: float
    address: str
    city: str


class BookingMessageResponse(CamelModel):
    sender_id: int
    message: str
    timestamp: datetime


class BookingInDB(CamelModel):
    id: int
    item_id: int
    renter_id: int
    owner_id: int
    start_date: datetime
    end_date: datetime
    total_days: int
    price_per_day: float
    total_price: float
    deposit: float
    service_fee: float
    total_amount: float
    status: BookingStatus
    payment_status: Optional[PaymentStatus] = PaymentStatus.PENDING
    currency: Optional[str] = "MAD"
    review_rating: Optional[int] = None
    review_comment: Optional[str] = None
    cancellation_reason: Optional[str] = None
    messages: List[BookingMessageResponse] = []
    created_at: datetime
    updated_at: Optional[datetime] = None


class BookingResponse(BookingInDB):
    item: BookingItemSummary
    renter: UserSummary
    owner: UserSummary


class BookingDetailResponse(BookingInDB):
    item: BookingItemSummary
    renter: UserContact
    owner: UserContact
