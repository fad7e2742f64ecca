"""Trip price calculation."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from src.config import settings

CENTS = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def _to_decimal(value: Number) -> Decimal:
    # str() keeps floats like 2.75 exact
    return value if isinstance(value, Decimal) else Decimal(str(value))


def quote_price(
    distance: Number, rate_per_km: Number, fixed_fee: Optional[Decimal] = None
) -> Decimal:
    """Return ``distance * rate_per_km + fixed_fee`` rounded to cents.

    Raises:
        ValueError: If distance is negative or the rate is not positive.
    """
    distance = _to_decimal(distance)
    rate = _to_decimal(rate_per_km)
    if not distance.is_finite() or distance < 0:
        raise ValueError(f"Distance must be >= 0, got {distance}")
    if not rate.is_finite() or rate <= 0:
        raise ValueError(f"Rate per km must be > 0, got {rate}")

    fee = settings.pricing.fixed_fee if fixed_fee is None else fixed_fee
    return (distance * rate + fee).quantize(CENTS, rounding=ROUND_HALF_UP)
