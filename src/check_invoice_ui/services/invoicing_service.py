"""
Abstract base class defining the invoicing backend contract.

All service implementations must extend InvoicingService. Every method
either returns parsed models or raises RemoteError; local validation is the
caller's job and happens before any method here is invoked.

Implementations:
- DemoInvoicingService: In-memory orders and invoices for development/testing
- InvoicingServiceImpl: HTTP client for the real invoicing backend
"""

from abc import ABC, abstractmethod
from datetime import date

from check_invoice_ui.models.common import AdminPage
from check_invoice_ui.models.customer import CustomerRow
from check_invoice_ui.models.invoice import InvoiceRow
from check_invoice_ui.models.order import InvoiceRequest, InvoiceResult, Order
from check_invoice_ui.utils import resolve_url

ADMIN_PAGE_SIZE = 100


class InvoicingService(ABC):
    """
    Abstract base class for the invoicing backend.

    Attributes:
        base_url: Backend base URL used to resolve document links.
    """

    base_url: str = ""

    @abstractmethod
    def lookup_orders(self, day: date, numcheque: str) -> list[Order]:
        """
        Return the orders matching a ticket number on a UTC calendar day.

        Args:
            day: Calendar day of the check.
            numcheque: Ticket number, already trimmed.
        """

    @abstractmethod
    def create_invoice(self, request: InvoiceRequest) -> InvoiceResult:
        """
        Generate an invoice for an order.

        Returns:
            InvoiceResult with resolved document links and the email
            captured in the request.
        """

    @abstractmethod
    def send_invoice_email(self, invoice_id: int) -> None:
        """Ask the backend to email a generated invoice to its customer."""

    @abstractmethod
    def list_admin_invoices(
        self,
        token: str,
        query: str = "",
        limit: int = ADMIN_PAGE_SIZE,
        offset: int = 0,
    ) -> AdminPage[InvoiceRow]:
        """
        Return generated invoices matching a free-text filter.

        Args:
            token: Admin credential sent in the x-admin-token header.
            query: Matches ticket number, tax id or legal name.
            limit: Page size.
            offset: Rows to skip.
        """

    @abstractmethod
    def list_admin_customers(
        self,
        token: str,
        query: str = "",
        limit: int = ADMIN_PAGE_SIZE,
        offset: int = 0,
    ) -> AdminPage[CustomerRow]:
        """Return registered customers matching a free-text filter."""

    def resolve_url(self, path: str | None) -> str:
        """Resolve a backend-relative document path against base_url."""
        return resolve_url(self.base_url, path)
