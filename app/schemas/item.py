from pydantic import Field, field_validator
from typing import List, Optional
from datetime import datetime

from app.enums.item import ItemCategory, ItemCondition, ItemStatus
from app.schemas.base import CamelModel, to_naive_utc
from app.schemas.user import UserSummary, PublicUser


class ItemImage(CamelModel):
    url: str
    public_id: Optional[str] = None


class ItemBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=1000)
    category: ItemCategory
    price_per_day: float = Field(..., ge=0)
    deposit: float = Field(..., ge=0)
    images: List[ItemImage] = []
    features: List[str] = []

    # Location
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    postal_code: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    available_from: Optional[datetime] = None
    available_until: Optional[datetime] = None
    is_available: bool = True
    condition: ItemCondition = ItemCondition.BON_ETAT

    # Specifications
    brand: Optional[str] = None
    model: Optional[str] = None
    dimensions: Optional[str] = None
    weight: Optional[float] = None
    material: Optional[str] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return v.strip()

    @field_validator("available_from", "available_until")
    @classmethod
    def normalize_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class ItemCreate(ItemBase):
    pass


class ItemUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    category: Optional[ItemCategory] = None
    price_per_day: Optional[float] = Field(None, ge=0)
    deposit: Optional[float] = Field(None, ge=0)
    images: Optional[List[ItemImage]] = None
    features: Optional[List[str]] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    available_from: Optional[datetime] = None
    available_until: Optional[datetime] = None
    is_available: Optional[bool] = None
    condition: Optional[ItemCondition] = None
    status: Optional[ItemStatus] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    dimensions: Optional[str] = None
    weight: Optional[float] = None
    material: Optional[str] = None

    @field_validator("available_from", "available_until")
    @classmethod
    def normalize_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class ItemResponse(ItemBase):
    id: int
    owner: UserSummary
    status: ItemStatus
    views: int = 0
    rental_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None


class Pagination(CamelModel):
    current: int
    pages: int
    total: int


class ItemListResponse(CamelModel):
    items: List[ItemResponse]
    pagination: Pagination


class UserItemsResponse(ItemListResponse):
    user: PublicUser


class ConflictingRange(CamelModel):
    start_date: datetime
    end_date: datetime


class AvailabilityResponse(CamelModel):
    available: bool
    conflicting_booking: Optional[ConflictingRange] = None
