from sqlalchemy.orm import Session, joinedload
from sqlalchemy import func, or_
from typing import List, Optional, Tuple
import logging
import math

from app.enums.item import ItemCategory, ItemCondition, ItemSort, ItemStatus
from app.models.item import Item
from app.schemas.item import ItemCreate, ItemUpdate
from app.utils.errors import InvalidInputError

logger = logging.getLogger(__name__)

ADVANCED_SORT_FIELDS = {
    "createdAt": Item.created_at,
    "pricePerDay": Item.price_per_day,
    "views": Item.views,
    "rentalCount": Item.rental_count,
    "title": Item.title,
}


def _contains(column, term: str):
    return func.lower(column).contains(term.lower(), autoescape=True)


def _parse_category(category: str) -> ItemCategory:
    try:
        return ItemCategory(category)
    except ValueError:
        raise InvalidInputError(f"Invalid category: {category}")


def get_item(db: Session, item_id: int) -> Optional[Item]:
    return (
        db.query(Item)
        .options(joinedload(Item.owner))
        .filter(Item.id == item_id)
        .first()
    )


def get_item_for_update(db: Session, item_id: int) -> Optional[Item]:
    """
    Obtiene el objeto bloqueando su fila (SELECT ... FOR UPDATE) hasta el
    commit o rollback de la sesión. Serializa la creación de reservas por
    objeto en PostgreSQL; SQLite ignora el bloqueo.
    """
    return db.query(Item).filter(Item.id == item_id).with_for_update().first()


def paginate(query, page: int, limit: int) -> Tuple[List[Item], dict]:
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    pagination = {
        "current": page,
        "pages": math.ceil(total / limit) if limit else 0,
        "total": total,
    }
    return items, pagination


def list_items(
    db: Session,
    category: Optional[str] = None,
    city: Optional[str] = None,
    max_price: Optional[float] = None,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = 12,
    sort: ItemSort = ItemSort.NEWEST,
) -> Tuple[List[Item], dict]:
    query = (
        db.query(Item)
        .options(joinedload(Item.owner))
        .filter(Item.status == ItemStatus.ACTIVE)
    )

    if category and category != "all":
        query = query.filter(Item.category == _parse_category(category))
    if city:
        query = query.filter(_contains(Item.city, city))
    if max_price is not None:
        query = query.filter(Item.price_per_day <= max_price)
    if search:
        query = query.filter(
            or_(_contains(Item.title, search), _contains(Item.description, search))
        )

    if sort == ItemSort.PRICE_LOW:
        query = query.order_by(Item.price_per_day.asc(), Item.id.asc())
    elif sort == ItemSort.PRICE_HIGH:
        query = query.order_by(Item.price_per_day.desc(), Item.id.asc())
    elif sort == ItemSort.POPULAR:
        query = query.order_by(Item.views.desc(), Item.id.desc())
    else:
        query = query.order_by(Item.created_at.desc(), Item.id.desc())

    logger.info(
        f"Listing items category={category} city={city} max_price={max_price} "
        f"search={search} sort={sort}"
    )
    return paginate(query, page, limit)


def advanced_search(
    db: Session,
    query_text: Optional[str] = None,
    category: Optional[str] = None,
    city: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    condition: Optional[ItemCondition] = None,
    page: int = 1,
    limit: int = 12,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
) -> Tuple[List[Item], dict]:
    query = (
        db.query(Item)
        .options(joinedload(Item.owner))
        .filter(Item.status == ItemStatus.ACTIVE)
    )

    if query_text:
        query = query.filter(
            or_(
                _contains(Item.title, query_text),
                _contains(Item.description, query_text),
                _contains(Item.brand, query_text),
                _contains(Item.model, query_text),
            )
        )
    if category and category != "tous":
        query = query.filter(Item.category == _parse_category(category))
    if city:
        query = query.filter(_contains(Item.city, city))
    if min_price is not None:
        query = query.filter(Item.price_per_day >= min_price)
    if max_price is not None:
        query = query.filter(Item.price_per_day <= max_price)
    if condition:
        query = query.filter(Item.condition == condition)

    column = ADVANCED_SORT_FIELDS.get(sort_by, Item.created_at)
    query = query.order_by(column.desc() if sort_order == "desc" else column.asc())
    return paginate(query, page, limit)


def get_popular_items(db: Session, limit: int = 8) -> List[Item]:
    return (
        db.query(Item)
        .options(joinedload(Item.owner))
        .filter(Item.status == ItemStatus.ACTIVE)
        .order_by(Item.views.desc(), Item.rental_count.desc())
        .limit(limit)
        .all()
    )


def get_items_by_owner(db: Session, owner_id: int) -> List[Item]:
    return (
        db.query(Item)
        .options(joinedload(Item.owner))
        .filter(Item.owner_id == owner_id)
        .order_by(Item.created_at.desc(), Item.id.desc())
        .all()
    )


def get_active_items_by_owner(
    db: Session, owner_id: int, page: int = 1, limit: int = 12
) -> Tuple[List[Item], dict]:
    query = (
        db.query(Item)
        .options(joinedload(Item.owner))
        .filter(Item.owner_id == owner_id)
        .filter(Item.status == ItemStatus.ACTIVE)
        .order_by(Item.created_at.desc(), Item.id.desc())
    )
    return paginate(query, page, limit)


def create_item(db: Session, item: ItemCreate, owner_id: int) -> Item:
    db_item = Item(**item.model_dump(), owner_id=owner_id)
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return db_item


def update_item(db: Session, db_item: Item, item: ItemUpdate) -> Item:
    update_data = item.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(db_item, field, value)

    db.commit()
    db.refresh(db_item)
    return db_item


def increment_views(db: Session, db_item: Item) -> Item:
    db_item.views = (db_item.views or 0) + 1
    db.commit()
    db.refresh(db_item)
    return db_item


def delete_item(db: Session, db_item: Item) -> None:
    db.delete(db_item)
    db.commit()
