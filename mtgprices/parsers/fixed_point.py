"""
Fixed-point price conversion.

Prices are stored as integers scaled by 1000 ("23.45" -> 23450).
"""

import re
from decimal import ROUND_HALF_UP, Decimal

from mtgprices.parsers.errors import PriceFormatError

PRICE_SCALE = 1000

PRICE_PATTERN = re.compile(r"(\d+)(?:\.(\d+))?", re.ASCII)


def to_fixed(text: str, legacy_truncation: bool = True) -> int:
    """
    Convert a decimal price string to a fixed-point integer.

    Args:
        text: Digits, optionally followed by "." and more digits
        legacy_truncation: Reproduce the stored-data behaviour for
            fractions longer than 3 digits: the divisor reaches 0 and the
            whole fraction is dropped ("1.2345" -> 1000). When False the
            price is rounded half-up to 3 decimals ("1.2345" -> 1235).

    Returns:
        Price scaled by PRICE_SCALE.

    Raises:
        PriceFormatError: If text is not a decimal number
    """
    match = PRICE_PATTERN.fullmatch(text)
    if match is None:
        raise PriceFormatError(text)

    whole, fraction = match.groups()

    if not legacy_truncation:
        scaled = Decimal(text) * PRICE_SCALE
        return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))

    value = int(whole) * PRICE_SCALE
    if fraction is not None:
        divisor = PRICE_SCALE
        for _ in fraction:
            divisor //= 10
        value += divisor * int(fraction)

    return value


def parse_count(text: str) -> int:
    """Parse a bot stock count."""
    if not text.isascii() or not text.isdigit():
        raise PriceFormatError(text, "not a stock count")
    return int(text)
