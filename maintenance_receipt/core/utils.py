"""
Utility functions and constants for receipt formatting.
"""

import calendar
import datetime as dt
import math
import random
import re
from typing import Optional
from urllib.parse import quote

# Currency constants
CURRENCY_PREFIX = "Rs."
CURRENCY_MAX_FRACTION_DIGITS = 3

# Characters kept before parsing a currency string
NON_NUMERIC_RE = re.compile(r"[^\d.-]")
# Leading float prefix, mirroring parseFloat on the stripped text
FLOAT_PREFIX_RE = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)")
WHITESPACE_RE = re.compile(r"\s+")
# Path separators and characters reserved in Windows filenames
UNSAFE_FILENAME_RE = re.compile(r'[\\/:*?"<>|\x00-\x1f]')

DATE_PATTERNS = [
    r"^\s*(\d{4})[-/](\d{1,2})[-/](\d{1,2})\s*$",            # YYYY-MM-DD or YYYY/MM/DD
    r"^\s*(\d{1,2})[-/](\d{1,2})[-/](\d{2,4})\s*$",          # DD/MM/YYYY (swapped if needed)
    r"^\s*([A-Za-z]{3,9})\s+(\d{1,2}),?\s*(\d{4})\s*$",      # Month DD, YYYY
]

PLACEHOLDER = "N/A"
SHARE_TITLE = "Maintenance Receipt"
WHATSAPP_URL = "https://wa.me/?text="


def format_currency(raw: Optional[str]) -> str:
    """Format free-text amount as Pakistani rupees, degrading to 'Rs. 0'."""
    cleaned = NON_NUMERIC_RE.sub("", raw or "")
    m = FLOAT_PREFIX_RE.match(cleaned)
    if not m:
        return f"{CURRENCY_PREFIX} 0"
    try:
        value = float(m.group(0))
    except ValueError:
        return f"{CURRENCY_PREFIX} 0"
    if not math.isfinite(value):
        return f"{CURRENCY_PREFIX} 0"

    text = f"{value:,.{CURRENCY_MAX_FRACTION_DIGITS}f}"
    text = text.rstrip("0").rstrip(".")
    return f"{CURRENCY_PREFIX} {text}"


def format_date(value: Optional[dt.date]) -> str:
    """Render a date as '5 March 2025', or 'N/A' when unset."""
    if value is None:
        return PLACEHOLDER
    return f"{value.day} {calendar.month_name[value.month]} {value.year:04d}"


def receipt_filename(unit_number: str, billing_period: str) -> str:
    """Derive the PDF filename for a receipt."""
    name = f"receipt_{unit_number}_{billing_period}.pdf"
    return WHITESPACE_RE.sub("_", name).lower()


def safe_filename(name: str) -> str:
    """Replace path separators and reserved characters so the name stays one path component."""
    return UNSAFE_FILENAME_RE.sub("_", name)


def share_caption(unit_number: str, billing_period: str) -> str:
    """Text that accompanies a shared receipt."""
    return f"Maintenance Receipt for Flat {unit_number} - {billing_period}"


def whatsapp_share_url(text: str) -> str:
    """Prefilled WhatsApp link carrying only the caption."""
    return WHATSAPP_URL + quote(text, safe="!~*'()")


def generate_receipt_number(rng: Optional[random.Random] = None) -> str:
    """Cosmetic 4-digit receipt number; new on every call."""
    rng = rng or random
    return f"{rng.randint(0, 9999):04d}"
