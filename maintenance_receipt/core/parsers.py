"""
Parsers for turning typed form input into field values.
"""

import re
import datetime as dt
from typing import Optional

from .utils import DATE_PATTERNS


def parse_date(text: str) -> Optional[dt.date]:
    """
    Parse a date typed into the form.

    Accepts YYYY-MM-DD, DD/MM/YYYY (day first, swapped when the first
    number cannot be a month) and "Month DD, YYYY". Returns None when the
    text cannot be read as a calendar date.
    """
    if not text:
        return None

    for pat in DATE_PATTERNS:
        m = re.match(pat, text, flags=re.IGNORECASE)
        if not m:
            continue
        g = m.groups()
        try:
            if pat == DATE_PATTERNS[0]:
                y, mo, d = int(g[0]), int(g[1]), int(g[2])
            elif pat == DATE_PATTERNS[1]:
                d, mo, y = int(g[0]), int(g[1]), int(g[2])
                if y < 100:  # YY -> 20YY
                    y += 2000
                # If looks like MM/DD, swap
                if mo > 12 and d <= 12:
                    mo, d = d, mo
            else:
                # Month name
                mn, d, y = g[0], int(g[1]), int(g[2])
                mo = dt.datetime.strptime(mn[:3], "%b").month
            return dt.date(y, mo, d)
        except ValueError:
            continue
    return None
