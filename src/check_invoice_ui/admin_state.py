"""
Reflex state for the admin page.

The AdminQueryPanel lives in a backend-only var, so its result slots and
request tickets persist across events of one browser session. The admin
token is saved in the visitor's browser local storage under "adminToken";
the server never holds it beyond the session state.
"""

from typing import Generator

import reflex as rx

from check_invoice_ui.admin import AdminQueryPanel
from check_invoice_ui.lib import logs
from check_invoice_ui.models.common import Notice
from check_invoice_ui.models.reflex_models import (
    CustomerRowModel,
    InvoiceRowModel,
    customer_row_to_model,
    invoice_row_to_model,
)
from check_invoice_ui.services import get_invoicing_service
from check_invoice_ui.state import UNEXPECTED_ERROR_MESSAGE, notice_toast

LOG = logs.logger(__file__)

ADMIN_TOKEN_STORAGE_KEY = "adminToken"


class AdminState(rx.State):
    """State of the admin page: token, filter and the two result tables."""

    # Persisted in the browser; written only by save_token
    saved_token: str = rx.LocalStorage(name=ADMIN_TOKEN_STORAGE_KEY)

    token: str = ""
    query: str = ""
    active_tab: str = "invoices"

    invoices: list[InvoiceRowModel] = []
    customers: list[CustomerRowModel] = []
    loading_invoices: bool = False
    loading_customers: bool = False

    _panel: AdminQueryPanel | None = None

    @rx.var
    def invoice_summary(self) -> str:
        noun = "factura" if len(self.invoices) == 1 else "facturas"
        return f"{len(self.invoices)} {noun}"

    @rx.var
    def customer_summary(self) -> str:
        noun = "cliente" if len(self.customers) == 1 else "clientes"
        return f"{len(self.customers)} {noun}"

    @rx.event
    def on_load(self):
        """Adopt the browser's saved token; list invoices when one exists."""
        panel = self._admin()
        panel.saved_token = self.saved_token
        notice = self._run(panel.start)
        self.token = panel.token
        return notice

    @rx.event
    def set_token(self, value: str):
        self.token = value or ""

    @rx.event
    def set_query(self, value: str):
        self.query = value or ""

    @rx.event
    def set_active_tab(self, value: str):
        self.active_tab = value

    @rx.event
    def save_token(self):
        """Persist the typed token in the browser."""
        panel = self._admin()
        notice = panel.save_token(self.token)
        self.token = panel.token
        self.saved_token = panel.saved_token
        return notice_toast(notice)

    @rx.event
    def fetch_invoices(self) -> Generator:
        """List generated invoices matching the filter."""
        self.loading_invoices = True
        self.active_tab = "invoices"
        yield
        yield self._run(self._admin().list_invoices)

    @rx.event
    def fetch_customers(self) -> Generator:
        """List registered customers matching the filter."""
        self.loading_customers = True
        self.active_tab = "customers"
        yield
        yield self._run(self._admin().list_customers)

    def _admin(self) -> AdminQueryPanel:
        """Return the session's panel with the typed token and filter applied."""
        if self._panel is None:
            self._panel = AdminQueryPanel()
        self._panel.token = self.token
        self._panel.query = self.query
        return self._panel

    def _run(self, operation):
        """Run a panel operation and copy both slots into the frontend vars."""
        panel = self._admin()
        service = get_invoicing_service()
        try:
            notice = operation(service)
        except Exception as e:
            LOG.error("Admin query failed: %s", e, exc_info=True)
            notice = Notice.error(UNEXPECTED_ERROR_MESSAGE)
            panel.invoices.loading = False
            panel.customers.loading = False

        # Failed queries leave the slot rows untouched
        self.invoices = [
            invoice_row_to_model(row, service.base_url) for row in panel.invoices.rows
        ]
        self.customers = [customer_row_to_model(row) for row in panel.customers.rows]
        self.loading_invoices = panel.invoices.loading
        self.loading_customers = panel.customers.loading
        return notice_toast(notice)
