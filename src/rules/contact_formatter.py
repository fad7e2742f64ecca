"""
Input masks for the CPF and phone fields.

Both masks strip everything but digits and re-apply the punctuation
template, so they can run on every keystroke: partial input gets partial
punctuation and an already formatted value comes back unchanged.
"""

import re
from typing import Callable

from src.utils import digits_only

MAX_CPF_DIGITS = 11
MAX_PHONE_DIGITS = 11
# "(DD) DDDD-DDDD", the shorter of the two canonical phone forms
MIN_PHONE_DISPLAY_LENGTH = 14


def format_cpf(value: str) -> str:
    """Apply the ``DDD.DDD.DDD-DD`` template."""
    digits = digits_only(value)[:MAX_CPF_DIGITS]
    digits = re.sub(r"(\d{3})(\d)", r"\1.\2", digits, count=1)
    digits = re.sub(r"(\d{3})(\d)", r"\1.\2", digits, count=1)
    return re.sub(r"(\d{3})(\d{1,2})$", r"\1-\2", digits)


def format_phone(value: str) -> str:
    """Apply the ``(DD) DDDDD-DDDD`` template (``(DD) DDDD-DDDD`` for landlines)."""
    digits = digits_only(value)[:MAX_PHONE_DIGITS]
    digits = re.sub(r"^(\d{2})(\d)", r"(\1) \2", digits)
    return re.sub(r"(\d)(\d{4})$", r"\1-\2", digits)


def apply_mask(current: str, typed: str, formatter: Callable[[str], str]) -> str:
    """Format the accumulated field value after ``typed`` is appended."""
    return formatter(f"{current or ''}{typed or ''}")


def is_complete_phone(value: str) -> bool:
    """True once the formatted phone reaches a canonical length."""
    return len(format_phone(value)) >= MIN_PHONE_DISPLAY_LENGTH
