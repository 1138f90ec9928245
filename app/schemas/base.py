from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names to the web client."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # The database stores naive UTC datetimes
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
