"""
Maintenance Receipt Generator

Fill in a maintenance payment, preview the formatted receipt and export it
as an A4 PDF or a shareable image.
"""

__version__ = "1.0.0"
__author__ = "Maintenance Receipt Generator Contributors"

from maintenance_receipt.core.models import ReceiptInput

__all__ = ["ReceiptInput"]
