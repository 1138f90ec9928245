from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime
import logging

from app.database import get_db
from app.crud import booking as booking_crud
from app.crud import item as crud
from app.enums.item import ItemCondition, ItemSort
from app.models.item import Item
from app.models.user import User
from app.schemas.base import to_naive_utc
from app.schemas.item import (
    AvailabilityResponse,
    ItemCreate,
    ItemListResponse,
    ItemResponse,
    ItemUpdate,
)
from app.services.auth import get_current_user
from app.utils import booking_lifecycle
from app.utils.errors import (
    ConflictError,
    ForbiddenError,
    ItemNotFoundError,
    MarketplaceError,
    to_http_exception,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_owned_item(db: Session, item_id: int, current_user: User) -> Item:
    db_item = crud.get_item(db, item_id)
    if db_item is None:
        raise ItemNotFoundError(item_id)
    if db_item.owner_id != current_user.id:
        raise ForbiddenError("You are not the owner of this item")
    return db_item


@router.get("/", response_model=ItemListResponse)
def read_items(
    category: Optional[str] = None,
    city: Optional[str] = None,
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    sort: ItemSort = ItemSort.NEWEST,
    db: Session = Depends(get_db),
):
    try:
        items, pagination = crud.list_items(
            db,
            category=category,
            city=city,
            max_price=max_price,
            search=search,
            page=page,
            limit=limit,
            sort=sort,
        )
    except MarketplaceError as exc:
        raise to_http_exception(exc)

    logger.info(f"{len(items)} items found out of {pagination['total']}")
    return {"items": items, "pagination": pagination}


@router.get("/popular", response_model=List[ItemResponse])
def read_popular_items(
    limit: int = Query(8, ge=1, le=50), db: Session = Depends(get_db)
):
    return crud.get_popular_items(db, limit=limit)


@router.get("/search/advanced", response_model=ItemListResponse)
def advanced_search(
    query: Optional[str] = None,
    category: Optional[str] = None,
    city: Optional[str] = None,
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    condition: Optional[ItemCondition] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
):
    try:
        items, pagination = crud.advanced_search(
            db,
            query_text=query,
            category=category,
            city=city,
            min_price=min_price,
            max_price=max_price,
            condition=condition,
            page=page,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order,
        )
    except MarketplaceError as exc:
        raise to_http_exception(exc)
    return {"items": items, "pagination": pagination}


@router.get("/user/my-items", response_model=List[ItemResponse])
def read_my_items(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    items = crud.get_items_by_owner(db, owner_id=current_user.id)
    logger.info(f"{len(items)} items found for user {current_user.id}")
    return items


@router.get("/{item_id}/availability", response_model=AvailabilityResponse)
def read_item_availability(
    item_id: int,
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    try:
        conflicting = booking_lifecycle.check_availability(
            db, item_id, to_naive_utc(start_date), to_naive_utc(end_date)
        )
    except MarketplaceError as exc:
        raise to_http_exception(exc)

    return {
        "available": conflicting is None,
        "conflicting_booking": conflicting,
    }


@router.get("/{item_id}", response_model=ItemResponse)
def read_item(item_id: int, db: Session = Depends(get_db)):
    db_item = crud.get_item(db, item_id)
    if db_item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    return crud.increment_views(db, db_item)


@router.post("/", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    item: ItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    db_item = crud.create_item(db, item=item, owner_id=current_user.id)
    logger.info(f"Item {db_item.id} created by user {current_user.id}")
    return db_item


@router.put("/{item_id}", response_model=ItemResponse)
def update_item(
    item_id: int,
    item: ItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        db_item = _get_owned_item(db, item_id, current_user)
    except MarketplaceError as exc:
        raise to_http_exception(exc)
    return crud.update_item(db, db_item, item)


@router.delete("/{item_id}")
def delete_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        db_item = _get_owned_item(db, item_id, current_user)
        # Las reservas nunca se borran: un objeto con historial solo se desactiva
        if booking_crud.count_bookings_for_item(db, item_id) > 0:
            raise ConflictError(
                "This item has bookings and cannot be deleted; set it inactive instead"
            )
    except MarketplaceError as exc:
        raise to_http_exception(exc)

    crud.delete_item(db, db_item)
    logger.info(f"Item {item_id} deleted by user {current_user.id}")
    return {"message": "Item deleted successfully"}
