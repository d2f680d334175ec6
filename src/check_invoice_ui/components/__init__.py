"""
Reusable Reflex UI components for the Check Invoice application.

This package provides modular, composable components:
- search_panel: Date and numcheque lookup form
- results: Radio list of matching orders
- fiscal_form: Fiscal data form that triggers invoice generation
- invoice_review: Dialog with PDF preview, downloads and email delivery
- admin_panel: Admin token, filter and result tables

All components are pure functions that return Reflex components bound to
the page states.
"""

from check_invoice_ui.components.admin_panel import admin_controls, admin_tables
from check_invoice_ui.components.fiscal_form import fiscal_form
from check_invoice_ui.components.invoice_review import invoice_review
from check_invoice_ui.components.results import order_results
from check_invoice_ui.components.search_panel import search_panel

__all__ = [
    "admin_controls",
    "admin_tables",
    "fiscal_form",
    "invoice_review",
    "order_results",
    "search_panel",
]
