"""
Shared pytest fixtures for receipt tests.
"""
import datetime as dt

import pytest

from maintenance_receipt.core.exporter import Notifier
from maintenance_receipt.core.models import ReceiptInput
from maintenance_receipt.core.rendering import render_preview


@pytest.fixture()
def receipt():
    return ReceiptInput(
        date=dt.date(2025, 3, 5),
        resident_name="John Doe",
        unit_number="A-101",
        billing_period="January 2025",
        previous_balance="5000",
        amount_paid="2500",
    )


@pytest.fixture()
def preview(receipt):
    return render_preview(receipt)


@pytest.fixture()
def notifier():
    return Notifier()
