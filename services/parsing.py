"""
Parsing Service

Functions for parsing Dutch ingredient lines and fractions from recipe data.
"""

import math
import re

from constants import UNIT_MAPPINGS, DEFAULT_COUNT_UNIT, UNICODE_FRACTIONS, COMMON_FRACTIONS
from models.records import Ingredient


def float_to_fraction(value):
    """Convert float to fraction string for display."""
    if value is None or value == 0:
        return '0'
    # Check if it's a whole number
    if value == int(value):
        return str(int(value))
    # Split into whole and decimal parts
    whole = int(value)
    decimal = value - whole
    # Check common fractions (with tolerance)
    for dec, frac in COMMON_FRACTIONS.items():
        if abs(decimal - dec) < 0.02:
            if whole > 0:
                return f"{whole} {frac}"
            return frac
    # Fall back to decimal, Dutch style
    return f"{value:.2f}".rstrip('0').rstrip('.').replace('.', ',')


def normalize_fractions(text):
    """Replace Unicode fraction characters with decimal equivalents."""
    # First, normalize all whitespace (including non-breaking spaces) to regular spaces
    text = re.sub(r'[\s\u00a0\u2000-\u200b]+', ' ', text)

    for char, value in UNICODE_FRACTIONS.items():
        if char in text:
            # Mixed fraction like "1½" or "1 ½"
            pattern = r'(\d+)\s*' + re.escape(char)
            match = re.search(pattern, text)
            if match:
                whole = float(match.group(1))
                text = re.sub(pattern, str(whole + value), text)
            else:
                text = text.replace(char, str(value))
    return text


def parse_amount(s):
    """
    Convert an amount string to float. Handles: 2, 1,5, 1.5, 1/2, 1 1/2, ½, 1½.

    Returns None when the string is not a positive amount.
    """
    if s is None:
        return None
    s = normalize_fractions(str(s)).strip().replace(',', '.')
    if not s:
        return None

    mixed_match = re.match(r'^(\d+)\s+(\d+)\s*/\s*(\d+)$', s)
    frac_match = re.match(r'^(\d+)\s*/\s*(\d+)$', s)
    try:
        if mixed_match:
            whole, num, denom = (float(g) for g in mixed_match.groups())
            amount = whole + num / denom
        elif frac_match:
            num, denom = (float(g) for g in frac_match.groups())
            amount = num / denom
        else:
            amount = float(s)
    except (ValueError, ZeroDivisionError):
        return None

    if not math.isfinite(amount) or amount <= 0:
        return None
    return amount


# Mixed fractions first, then simple fractions, then (comma) decimals
_AMOUNT_PATTERN = re.compile(r'^(\d+\s+\d+\s*/\s*\d+|\d+\s*/\s*\d+|\d+(?:[.,]\d+)?)\s*')


def parse_ingredient(text):
    """
    Parse an ingredient line like '750 g spinazie' into an Ingredient.

    - amount + unit + name: '2 el olijfolie' -> 2, 'el', 'olijfolie'
    - amount + name: '2 uien' -> 2, 'stuk', 'uien'
    - name only: 'peper naar smaak' -> no amount, not scalable
    """
    text = normalize_fractions((text or '').strip())
    if not text:
        return None

    # Drop bracketed notes: "200 g feta (verkruimeld)"
    text = re.sub(r'\s*\([^)]*\)', '', text).strip() or text

    match = _AMOUNT_PATTERN.match(text)
    if not match:
        return Ingredient(name=text, amount=None, unit=None, scalable=False)

    amount = parse_amount(match.group(1))
    rest = text[match.end():].strip()
    if not rest or amount is None:
        return Ingredient(name=text, amount=None, unit=None, scalable=False)

    words = rest.split()
    unit_word = words[0].lower().rstrip('.')
    if unit_word in UNIT_MAPPINGS and len(words) > 1:
        return Ingredient(name=' '.join(words[1:]), amount=amount,
                          unit=UNIT_MAPPINGS[unit_word], scalable=True)

    return Ingredient(name=rest, amount=amount, unit=DEFAULT_COUNT_UNIT, scalable=True)
