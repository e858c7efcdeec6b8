"""
Amount parsing and formatting.

Amounts arrive from the wallet backend as either JSON numbers or decimal
strings (arbitrary precision). Display code must never fail on a bad amount,
so parsing is permissive and falls back to zero.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field

from txsummary.constants import CAT_DECIMALS, DEFAULT_LOCALE, XCH_DECIMALS, XCH_TICKER

# (group separator, decimal separator) by language
LOCALE_SEPARATORS: dict[str, tuple[str, str]] = {
    "en": (",", "."),
    "de": (".", ","),
    "es": (".", ","),
    "fr": (" ", ","),
    "ja": (",", "."),
    "zh": (",", "."),
}


class FormattingContext(BaseModel):
    """Unit and locale parameters used to render amounts."""

    ticker: str = XCH_TICKER
    decimals: int = Field(default=XCH_DECIMALS, ge=0, le=18)
    cat_decimals: int = Field(default=CAT_DECIMALS, ge=0, le=18)
    locale: str = DEFAULT_LOCALE

    model_config = {"frozen": True}


def parse_amount(value: Any) -> int:
    """
    Parse a backend amount into a non-negative integer of smallest units.

    Anything that is not a non-negative whole number is treated as zero.

    Args:
        value: int, integer string, integral float/Decimal, or None

    Returns:
        Amount in mojos (or CAT base units)
    """
    if value is None:
        return 0

    # bool is an int subclass but never a valid amount
    if isinstance(value, bool):
        logger.warning(f"Treating boolean amount {value!r} as zero")
        return 0

    if isinstance(value, int):
        parsed: int | None = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            parsed = int(text) if text.isascii() and text.isdigit() else None
        except ValueError:
            # over the interpreter's int string conversion limit
            parsed = None
    elif isinstance(value, (float, Decimal)):
        try:
            parsed = int(value) if value == int(value) else None
        except (ValueError, OverflowError, InvalidOperation):
            parsed = None
    else:
        parsed = None

    if parsed is None or parsed < 0:
        logger.warning(f"Unparseable amount {value!r}, treating as zero")
        return 0

    return parsed


def from_mojos(amount: int, decimals: int) -> Decimal:
    """Convert an integer amount of base units to a Decimal of whole units."""
    # Shift the exponent directly; scaleb would round to the context precision
    sign, digits, exponent = Decimal(amount).as_tuple()
    return Decimal((sign, digits, exponent - decimals))


def format_number(value: Decimal, locale: str = DEFAULT_LOCALE) -> str:
    """
    Format a decimal with digit grouping and without trailing zeros.

    Separators are chosen by the language part of the locale; unknown
    languages use English separators.
    """
    text = f"{value:,f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")

    language = locale.replace("_", "-").split("-")[0].lower()
    group, decimal = LOCALE_SEPARATORS.get(language, LOCALE_SEPARATORS["en"])
    return text.translate(str.maketrans({",": group, ".": decimal}))


def format_amount(amount: int, decimals: int, locale: str = DEFAULT_LOCALE) -> str:
    """Render an integer amount of base units as a human readable number."""
    return format_number(from_mojos(amount, decimals), locale)
