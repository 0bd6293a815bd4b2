"""
Data models for maintenance receipt generation.
"""

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


# Field order as presented in the form
FIELD_NAMES = (
    "date",
    "resident_name",
    "unit_number",
    "billing_period",
    "previous_balance",
    "amount_paid",
)

FIELD_LABELS = {
    "date": "Date",
    "resident_name": "Name",
    "unit_number": "Flat No.",
    "billing_period": "Month",
    "previous_balance": "Previous Balance",
    "amount_paid": "Amount Paid",
}


class ViewMode(str, Enum):
    """The two screens of a receipt session."""
    FORM = "form"
    PREVIEW = "preview"


@dataclass(frozen=True)
class ReceiptInput:
    """Field values for one maintenance receipt."""
    date: Optional[dt.date] = None
    resident_name: str = ""
    unit_number: str = ""
    billing_period: str = ""
    previous_balance: str = ""
    amount_paid: str = ""


@dataclass
class ValidationResult:
    """Outcome of running the validation gate over a receipt."""
    valid: bool
    errors: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Notification:
    """A transient user-facing message."""
    title: str
    description: str
    variant: str = "default"

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"
