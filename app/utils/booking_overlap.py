"""
Utilidades para detectar solapamientos de reservas.

Dos reservas se solapan si comparten al menos un día bajo comparación
inclusiva: una reserva que termina el 5 y otra que empieza el 5 chocan.
"""

import math
from datetime import datetime
from typing import Optional

from app.utils.errors import InvalidInputError

SECONDS_PER_DAY = 24 * 60 * 60


def compute_total_days(start_date: datetime, end_date: datetime) -> int:
    """
    Calcula la cantidad de días facturables de una reserva.

    Las fracciones de día se redondean hacia arriba: 1 día y 2 horas son 2 días.

    Raises:
        InvalidInputError: si end_date no es posterior a start_date
    """
    if start_date is None or end_date is None:
        raise InvalidInputError("Start date and end date are required")

    if end_date <= start_date:
        raise InvalidInputError("End date must be after start date")

    total_days = math.ceil((end_date - start_date).total_seconds() / SECONDS_PER_DAY)
    if total_days < 1:
        raise InvalidInputError("Rental must last at least 1 day")
    return total_days


def ranges_overlap(
    existing_start: datetime,
    existing_end: datetime,
    requested_start: datetime,
    requested_end: datetime,
) -> bool:
    return existing_start <= requested_end and existing_end >= requested_start


def validate_date_range(
    start_date: Optional[datetime], end_date: Optional[datetime]
) -> None:
    """Valida un rango de fechas para consultas de disponibilidad."""
    if start_date is None or end_date is None:
        raise InvalidInputError("Start date and end date are required")
    if end_date < start_date:
        raise InvalidInputError("End date must not be before start date")
