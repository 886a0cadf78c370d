"""Quantity parsing.

parse_amount(value) turns the loosely typed `amount` field of a recipe
ingredient ("2 1/2 cups", 3, "1/2", "to taste", None, ...) into a
ParsedAmount(amount, unit). It never raises: anything it cannot read
becomes amount 0.
"""
from __future__ import annotations
import logging
import re
from typing import Any, NamedTuple

logger = logging.getLogger(__name__)

__all__ = ["ParsedAmount", "parse_amount", "format_amount", "leading_number"]

_UNICODE_FRACTIONS = {
    '½': '1/2', '⅓': '1/3', '⅔': '2/3', '¼': '1/4', '¾': '3/4',
    '⅕': '1/5', '⅖': '2/5', '⅗': '3/5', '⅘': '4/5', '⅙': '1/6',
    '⅚': '5/6', '⅛': '1/8', '⅜': '3/8', '⅝': '5/8', '⅞': '7/8',
}

# mixed number | fraction | decimal
_AMOUNT_RE = re.compile(
    r'^(?:(?P<whole>\d+)\s+(?P<mnum>\d+)\s*/\s*(?P<mden>\d+)'
    r'|(?P<num>\d+(?:\.\d+)?)\s*/\s*(?P<den>\d+(?:\.\d+)?)'
    r'|(?P<dec>\d+(?:\.\d+)?|\.\d+))'
)
_NUMBER_RE = re.compile(r'(\d+(?:\.\d+)?)')


class ParsedAmount(NamedTuple):
    amount: float
    unit: str


EMPTY = ParsedAmount(0.0, '')


def _replace_unicode_fractions(text: str) -> str:
    for symbol, ascii_frac in _UNICODE_FRACTIONS.items():
        if symbol in text:
            # "1½" -> "1 1/2"
            text = re.sub(rf'(\d){symbol}', rf'\1 {ascii_frac}', text)
            text = text.replace(symbol, ascii_frac)
    return text


def _divide(num: str, den: str) -> float:
    try:
        denominator = float(den)
        if denominator == 0:
            return 0.0
        return float(num) / denominator
    except ValueError:
        return 0.0


def parse_amount(value: Any) -> ParsedAmount:
    """Parse a quantity into ParsedAmount(amount >= 0, unit)."""
    if value is None:
        return EMPTY
    try:
        # bools are not quantities
        text = '' if isinstance(value, bool) else str(value)
        text = _replace_unicode_fractions(text.strip())
        if not text:
            return EMPTY

        match = _AMOUNT_RE.match(text)
        if not match:
            return ParsedAmount(0.0, text)

        if match.group('whole') is not None:
            if float(match.group('mden')) == 0:
                amount = 0.0
            else:
                amount = float(match.group('whole')) + _divide(match.group('mnum'), match.group('mden'))
        elif match.group('num') is not None:
            amount = _divide(match.group('num'), match.group('den'))
        else:
            amount = float(match.group('dec'))

        unit = text[match.end():].strip()
        return ParsedAmount(max(amount, 0.0), unit)
    except Exception as e:
        logger.warning(f"Could not parse amount {value!r}: {e}")
        return EMPTY


def leading_number(value: Any) -> float | None:
    """First decimal number found anywhere in a string, or None.

    Not anchored: "about 4.5 cups" gives 4.5.
    """
    if not isinstance(value, str):
        return None
    match = _NUMBER_RE.search(value)
    return float(match.group(1)) if match else None


def format_amount(amount: float) -> str:
    """Round to 2 decimals and drop trailing zeros: 2.5 -> '2.5', 3.0 -> '3'."""
    rounded = round(float(amount or 0) + 0.0, 2)
    text = f"{rounded:.2f}".rstrip('0').rstrip('.')
    return text if text not in ('', '-0') else '0'
