import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

# Comisión de servicio del 10% por defecto
SERVICE_FEE_RATE = float(os.getenv("SERVICE_FEE_RATE", "0.10"))
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "MAD")


@dataclass(frozen=True)
class PricingSnapshot:
    price_per_day: float
    total_days: int
    total_price: float
    service_fee: float
    total_amount: float
    deposit: float


def compute_pricing(
    price_per_day: float,
    total_days: int,
    deposit: float = 0.0,
    fee_rate: float = SERVICE_FEE_RATE,
) -> PricingSnapshot:
    """
    Congela el precio de una reserva a partir del precio por día del objeto.

    total_price = price_per_day * total_days
    service_fee = total_price * fee_rate
    total_amount = total_price + service_fee
    """
    total_price = round(price_per_day * total_days, 2)
    service_fee = round(total_price * fee_rate, 2)
    return PricingSnapshot(
        price_per_day=price_per_day,
        total_days=total_days,
        total_price=total_price,
        service_fee=service_fee,
        total_amount=round(total_price + service_fee, 2),
        deposit=deposit or 0.0,
    )
