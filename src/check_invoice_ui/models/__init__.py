"""
Data models for the Check Invoice UI.

This package provides:
- Order lookup and invoice generation models (Order, CustomerInput, ...)
- Admin listing rows (InvoiceRow, CustomerRow) and pages (AdminPage)
- Notices reported back to the user

All models use Python dataclasses; the Reflex-facing copies live in
models.reflex_models so the rest of the package does not import Reflex.
"""

from check_invoice_ui.models.common import AdminPage, Notice, NoticeLevel
from check_invoice_ui.models.customer import CustomerRow
from check_invoice_ui.models.invoice import InvoiceRow
from check_invoice_ui.models.order import (
    DEFAULT_CFDI_USE,
    DEFAULT_PAYMENT_FORM,
    Address,
    CustomerInput,
    InvoiceRequest,
    InvoiceResult,
    Order,
)

__all__ = [
    "DEFAULT_CFDI_USE",
    "DEFAULT_PAYMENT_FORM",
    "Address",
    "AdminPage",
    "CustomerInput",
    "CustomerRow",
    "InvoiceRequest",
    "InvoiceResult",
    "InvoiceRow",
    "Notice",
    "NoticeLevel",
    "Order",
]
