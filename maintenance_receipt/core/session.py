"""
Form/preview session state for a single receipt.
"""

import dataclasses
import datetime as dt
from typing import Dict, Optional, Set

from .models import FIELD_NAMES, ReceiptInput, ValidationResult, ViewMode
from .validation import validate_field, validate_receipt


class ReceiptSession:
    """
    Two-state machine holding the receipt being edited.

    Transitions:
        submit: FORM -> PREVIEW, guarded by the validation gate
        edit:   PREVIEW -> FORM, unconditional
    """

    def __init__(self, today: Optional[dt.date] = None):
        self.today = today
        self.reset()

    def reset(self):
        """Discard the current receipt and start an empty one dated today."""
        self.values = ReceiptInput(date=self.today or dt.date.today())
        self.mode = ViewMode.FORM
        self.record: Optional[ReceiptInput] = None
        self.errors: Dict[str, str] = {}
        self.touched: Set[str] = set()
        self.submitted = False
        self.last_result: Optional[ValidationResult] = None

    def update(self, name: str, value) -> Optional[str]:
        """
        Set one field on the working copy.

        Re-validates the field once it has been touched before or a submit
        has been attempted, and returns its current error (if any).
        """
        if name not in FIELD_NAMES:
            raise KeyError(f"Unknown receipt field: {name}")

        revalidate = name in self.touched or self.submitted
        self.touched.add(name)
        self.values = dataclasses.replace(self.values, **{name: value})

        if revalidate:
            msg = validate_field(name, value)
            if msg:
                self.errors[name] = msg
            else:
                self.errors.pop(name, None)
        return self.errors.get(name)

    def submit(self) -> ValidationResult:
        """
        Validate all fields; freeze the record and show the preview on success.

        Only valid from the form: in preview it returns the result that
        opened the preview and changes nothing.
        """
        if self.mode is ViewMode.PREVIEW:
            return self.last_result
        self.submitted = True
        self.touched.update(FIELD_NAMES)
        result = validate_receipt(self.values)
        self.last_result = result
        self.errors = dict(result.errors)
        if result.valid:
            self.record = self.values
            self.mode = ViewMode.PREVIEW
        return result

    def edit(self):
        """Return to the form."""
        self.mode = ViewMode.FORM
