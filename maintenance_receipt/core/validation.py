"""
Validation gate for receipt input.
"""

from typing import Any, Dict, Optional

from .models import FIELD_NAMES, ReceiptInput, ValidationResult


# Minimum raw lengths for text fields; numeric fields stay free text
MIN_LENGTHS = {
    "resident_name": 2,
    "unit_number": 1,
    "billing_period": 1,
    "previous_balance": 1,
    "amount_paid": 1,
}

MESSAGES = {
    "date": "Please select a date.",
    "resident_name": "Name must be at least 2 characters.",
    "unit_number": "Flat number is required.",
    "billing_period": "Month is required.",
    "previous_balance": "Balance is required.",
    "amount_paid": "Amount is required.",
}


class ValidationError(Exception):
    """Raised when a receipt does not pass the validation gate."""

    def __init__(self, result: ValidationResult):
        self.result = result
        details = "; ".join(f"{k}: {v}" for k, v in result.errors.items())
        super().__init__(f"Invalid receipt input ({details})")


def validate_field(name: str, value: Any) -> Optional[str]:
    """Return the error message for one field, or None if it passes."""
    if name not in MESSAGES:
        raise KeyError(f"Unknown receipt field: {name}")
    if name == "date":
        return None if value is not None else MESSAGES[name]
    if len(value or "") < MIN_LENGTHS[name]:
        return MESSAGES[name]
    return None


def validate_receipt(receipt: ReceiptInput) -> ValidationResult:
    """Run every field predicate and collect all failures."""
    errors: Dict[str, str] = {}
    for name in FIELD_NAMES:
        msg = validate_field(name, getattr(receipt, name))
        if msg:
            errors[name] = msg
    return ValidationResult(valid=not errors, errors=errors)
