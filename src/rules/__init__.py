from src.rules.contact_formatter import format_cpf, format_phone
from src.rules.id_checksum import is_valid_cpf
from src.rules.pricing import quote_price
from src.rules.scheduler import enumerate_slots, is_bookable_date

__all__ = [
    "is_valid_cpf",
    "format_cpf",
    "format_phone",
    "enumerate_slots",
    "is_bookable_date",
    "quote_price",
]
