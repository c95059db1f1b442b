import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

import inflect

from billora.settings import settings

_inflect = inflect.engine()


def _round_whole(amount: float) -> int:
    """Round half away from zero to a whole currency unit: 2.5 -> 3, -2.5 -> -3."""
    return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_currency(amount: float) -> str:
    """Format a whole-unit amount with the configured currency: 1250 -> 'BDT 1,250'

    Code and figure are joined by a non-breaking space (U+00A0).
    """
    whole = _round_whole(amount)
    sign = "-" if whole < 0 else ""
    return f"{sign}{settings.currency_code}\u00a0{abs(whole):,}"


def number_to_words(n: int) -> str:
    """Spell out an integer without 'and': 1234 -> 'one thousand, two hundred thirty-four'"""
    if n < 0:
        return f"minus {number_to_words(-n)}"
    return _inflect.number_to_words(n, andword="")


def amount_to_words(amount: float) -> str:
    """Spell out an amount for invoices: 250 -> 'Two hundred fifty Taka Only'"""
    suffix = f"{settings.currency_name} Only"
    if not amount or math.isnan(amount):
        return f"Zero {suffix}"
    words = number_to_words(_round_whole(amount))
    return f"{words[0].upper()}{words[1:]} {suffix}"


def parse_amount(value: str) -> int | None:
    """Parse a whole-unit amount typed by the user: '1,250' -> 1250, '250.00' -> 250"""
    value = value.strip().replace(",", "")
    if not value:
        return None
    try:
        parsed = Decimal(value)
    except InvalidOperation:
        return None
    if not parsed.is_finite() or parsed != parsed.to_integral_value():
        return None
    return int(parsed)
