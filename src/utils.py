"""Shared utilities used across the booking widget."""

import re

# ASCII only: str patterns treat \d as any Unicode decimal digit
_NON_DIGITS = re.compile(r"[^0-9]")


def digits_only(value: str) -> str:
    """Strip everything except the ASCII digits 0-9.

    Examples:
        >>> digits_only("529.982.247-25")
        '52998224725'
        >>> digits_only("(11) 91234-5678")
        '11912345678'
    """
    return _NON_DIGITS.sub("", value or "")
