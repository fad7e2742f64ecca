"""National ID (CPF) check-digit validation."""

from src.utils import digits_only

CPF_LENGTH = 11


def _check_digit(digits: str, first_weight: int) -> int:
    """Weighted sum with weights descending from ``first_weight`` to 2."""
    total = sum(int(d) * w for d, w in zip(digits, range(first_weight, 1, -1)))
    remainder = (total * 10) % 11
    return 0 if remainder in (10, 11) else remainder


def is_valid_cpf(raw: str) -> bool:
    """Return True if ``raw`` holds a checksum-valid 11-digit CPF.

    Punctuation is ignored. Numbers made of one repeated digit are rejected
    even though they satisfy the checksum.
    """
    cpf = digits_only(raw)
    if len(cpf) != CPF_LENGTH or len(set(cpf)) == 1:
        return False
    if _check_digit(cpf[:9], 10) != int(cpf[9]):
        return False
    return _check_digit(cpf[:10], 11) == int(cpf[10])
