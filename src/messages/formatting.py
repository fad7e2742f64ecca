"""Display formatting for dates, prices and distances."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from src.config import settings

CENTS = Decimal("0.01")


def format_date(value: date) -> str:
    """Day/month/year with zero-padded day and month, e.g. ``21/10/2026``."""
    return value.strftime("%d/%m/%Y")


def format_price(amount: Decimal) -> str:
    """Two decimals with a comma separator, e.g. ``R$ 120,50``."""
    rounded = Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
    return f"{settings.pricing.currency_prefix}{rounded:.2f}".replace(".", ",")


def format_distance(distance: Decimal) -> str:
    """One decimal place, e.g. ``23.0 km``."""
    return f"{Decimal(distance):.1f} km"
