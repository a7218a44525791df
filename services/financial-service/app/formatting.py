"""Currency formatting helpers."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from app.config import settings

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "BRL": "R$",
    "JPY": "¥",
    "CNY": "CN¥",
    "INR": "₹",
    "CAD": "CA$",
    "AUD": "A$",
    "MXN": "MX$",
}


def format_currency(
    amount: Union[int, float, Decimal], currency: Optional[str] = None
) -> str:
    """
    Format an amount for display.

    Args:
        amount: Amount to format
        currency: ISO 4217 code, defaults to the configured currency

    Returns:
        Amount with thousands separators and two decimals, e.g. "$1,234.56",
        "-€10.00" or "CHF 99.90" for codes without a known symbol

    Example:
        >>> format_currency(1234.5, "USD")
        "$1,234.50"
    """
    code = (currency or settings.DEFAULT_CURRENCY).upper()
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    sign = "-" if value < 0 else ""
    digits = f"{abs(value):,.2f}"

    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol:
        return f"{sign}{symbol}{digits}"
    return f"{sign}{code} {digits}"
