"""
Admin query panel: authenticated listings of invoices and customers.

The panel keeps two independent result slots. Each query sends the admin
token in the x-admin-token header and carries its own request ticket, so a
slow invoices response never clobbers a newer one and never touches the
customers slot.

The saved token belongs to the visitor: the Reflex page keeps it in browser
local storage and hands it to the panel as `saved_token`. start() reads it
once and save_token() is the only place that changes it. The panel keeps no
service reference, so it can live in per-session backend state; every query
takes the service as an argument.
"""

from dataclasses import dataclass, field
from typing import Callable, Generic, TypeVar

from check_invoice_ui.errors import RemoteError
from check_invoice_ui.lib import logs
from check_invoice_ui.models.common import AdminPage, Notice
from check_invoice_ui.models.customer import CustomerRow
from check_invoice_ui.models.invoice import InvoiceRow
from check_invoice_ui.services.invoicing_service import (
    ADMIN_PAGE_SIZE,
    InvoicingService,
)

LOG = logs.logger(__file__)

T = TypeVar("T")

MSG_TOKEN_SAVED = "Token guardado"
MSG_TOKEN_CLEARED = "Token eliminado"


@dataclass
class QuerySlot(Generic[T]):
    """
    Result slot for one admin listing.

    Attributes:
        rows: Rows of the latest applied response.
        loading: True while the latest request is in flight.
        limit: Page size of the latest request.
        offset: Offset of the latest request.
    """

    rows: list[T] = field(default_factory=list)
    loading: bool = False
    limit: int = ADMIN_PAGE_SIZE
    offset: int = 0
    _ticket: int = 0

    def begin(self) -> int:
        """Mark the slot busy and return the new request ticket."""
        self._ticket += 1
        self.loading = True
        return self._ticket

    def finish(self, ticket: int, page: AdminPage[T]) -> bool:
        """Apply a page unless a newer request superseded it."""
        if ticket != self._ticket:
            return False
        self.rows = list(page.rows)
        self.limit = page.limit
        self.offset = page.offset
        self.loading = False
        return True

    def fail(self, ticket: int) -> bool:
        """Clear the busy flag, keeping the previous rows."""
        if ticket != self._ticket:
            return False
        self.loading = False
        return True


@dataclass
class AdminQueryPanel:
    """
    State and operations of the admin page for one visitor.

    Attributes:
        saved_token: Token persisted in the visitor's browser.
        token: Token as currently typed, sent with every query.
        query: Free-text filter (ticket number, tax id or legal name).
    """

    saved_token: str = ""
    token: str = ""
    query: str = ""
    invoices: QuerySlot[InvoiceRow] = field(default_factory=QuerySlot)
    customers: QuerySlot[CustomerRow] = field(default_factory=QuerySlot)

    def start(self, service: InvoicingService) -> Notice | None:
        """
        Adopt the saved token; list invoices when one is present.

        Returns:
            The notice of the initial query, or None when no token is saved.
        """
        self.token = (self.saved_token or "").strip()
        if not self.token:
            LOG.info("No saved admin token; skipping initial query")
            return None
        return self.list_invoices(service)

    def save_token(self, token: str | None = None) -> Notice:
        """Save the typed token (or the given one); blank clears it."""
        if token is not None:
            self.token = token
        self.token = (self.token or "").strip()
        self.saved_token = self.token
        if self.token:
            LOG.info("Admin token saved (%d chars)", len(self.token))
            return Notice.success(MSG_TOKEN_SAVED)
        LOG.info("Admin token cleared")
        return Notice.success(MSG_TOKEN_CLEARED)

    def list_invoices(
        self,
        service: InvoicingService,
        query: str | None = None,
        limit: int = ADMIN_PAGE_SIZE,
        offset: int = 0,
    ) -> Notice | None:
        """Query generated invoices into the invoices slot."""
        return self._run(
            self.invoices, service.list_admin_invoices, query, limit, offset
        )

    def list_customers(
        self,
        service: InvoicingService,
        query: str | None = None,
        limit: int = ADMIN_PAGE_SIZE,
        offset: int = 0,
    ) -> Notice | None:
        """Query registered customers into the customers slot."""
        return self._run(
            self.customers, service.list_admin_customers, query, limit, offset
        )

    def _run(
        self,
        slot: QuerySlot[T],
        fetch: Callable[..., AdminPage[T]],
        query: str | None,
        limit: int,
        offset: int,
    ) -> Notice | None:
        if query is not None:
            self.query = query
        ticket = slot.begin()
        try:
            page = fetch(self.token, self.query.strip(), limit, offset)
        except RemoteError as exc:
            if slot.fail(ticket):
                return Notice.error(exc.message)
            return None
        slot.finish(ticket, page)
        LOG.info("Admin query %r returned %d rows", self.query, len(page.rows))
        return None
