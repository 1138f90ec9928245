"""
Errores de dominio del marketplace.

Cada error lleva un código estable y un mensaje apto para mostrarse
directamente al usuario. Los routers los traducen a HTTPException con
to_http_exception().
"""

from fastapi import HTTPException, status


class MarketplaceError(Exception):
    code = "error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(MarketplaceError):
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class BookingNotFoundError(NotFoundError):
    def __init__(self, booking_id: int):
        super().__init__("Booking not found")
        self.booking_id = booking_id


class ItemNotFoundError(NotFoundError):
    def __init__(self, item_id: int):
        super().__init__("Item not found")
        self.item_id = item_id


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: int):
        super().__init__("User not found")
        self.user_id = user_id


class ForbiddenError(MarketplaceError):
    code = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(MarketplaceError):
    code = "conflict"


class InvalidStateError(MarketplaceError):
    code = "invalid_state"


class InvalidInputError(MarketplaceError):
    code = "invalid_input"


def to_http_exception(exc: MarketplaceError) -> HTTPException:
    return HTTPException(
        status_code=exc.status_code,
        detail={"code": exc.code, "message": exc.message},
    )
