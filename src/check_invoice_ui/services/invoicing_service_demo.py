"""
Demo implementation of InvoicingService using in-memory data.

This service is useful for:
- Local development without the invoicing backend
- Testing UI flows with realistic orders (single, duplicate, missing)
- Demonstrating the application without tax authority credentials

Generated invoices and customers live only as long as the process.
"""

import os
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Sequence

from check_invoice_ui.data.demo_orders import DEMO_CUSTOMERS, DEMO_ORDERS
from check_invoice_ui.errors import RemoteError
from check_invoice_ui.lib import logs
from check_invoice_ui.models.common import AdminPage
from check_invoice_ui.models.customer import CustomerRow
from check_invoice_ui.models.invoice import InvoiceRow
from check_invoice_ui.models.order import InvoiceRequest, InvoiceResult, Order
from check_invoice_ui.services.invoicing_service import (
    ADMIN_PAGE_SIZE,
    InvoicingService,
)

LOG = logs.logger(__file__)

DEFAULT_DEMO_ADMIN_TOKEN = "demo"


@dataclass
class _DemoInvoice:
    invoice_id: int
    order: Order
    request: InvoiceRequest
    customer_id: int
    created_at: str
    emailed_at: str | None = None


@dataclass
class _DemoStore:
    invoices: list[_DemoInvoice] = field(default_factory=list)
    customers: list[dict] = field(default_factory=list)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _matches(query: str, *values: str | None) -> bool:
    normalized = (query or "").strip().lower()
    if not normalized:
        return True
    return any(normalized in (value or "").lower() for value in values)


class DemoInvoicingService(InvoicingService):
    """
    In-memory invoicing service backed by static demo orders.

    Mirrors the backend rules the UI depends on: lookups match the UTC day
    of `fecha`, an order can be invoiced once, email delivery needs a
    captured address, and admin listings require the configured token.

    Attributes:
        admin_token: Token accepted by the admin endpoints.
    """

    _FIRST_INVOICE_ID = 99

    def __init__(
        self,
        orders: Sequence[dict] | None = None,
        base_url: str = "http://demo.local",
        admin_token: str | None = None,
    ) -> None:
        """
        Initialize with order payloads.

        Args:
            orders: Custom order payloads, or None to use DEMO_ORDERS.
            base_url: Base URL used to resolve demo document links.
            admin_token: Accepted admin token; defaults to
                CHECK_INVOICE_DEMO_ADMIN_TOKEN or "demo".
        """
        self.base_url = base_url.rstrip("/")
        self.admin_token = admin_token or os.getenv(
            "CHECK_INVOICE_DEMO_ADMIN_TOKEN", DEFAULT_DEMO_ADMIN_TOKEN
        )
        self._orders = [Order.from_payload(item) for item in (orders or DEMO_ORDERS)]
        self._store = _DemoStore(customers=[dict(c) for c in DEMO_CUSTOMERS])

    def lookup_orders(self, day: date, numcheque: str) -> list[Order]:
        return [
            order
            for order in self._orders
            if order.numcheque == numcheque.strip()
            and order.fecha is not None
            and order.fecha.astimezone(timezone.utc).date() == day
        ]

    def create_invoice(self, request: InvoiceRequest) -> InvoiceResult:
        order = next((o for o in self._orders if o.id == request.order_id), None)
        if order is None:
            raise RemoteError("Orden no encontrada.", status_code=404)
        if any(inv.order.id == order.id for inv in self._store.invoices):
            raise RemoteError("Esta orden ya fue facturada.", status_code=409)
        if len(request.customer.tax_id) not in (12, 13):
            raise RemoteError("El RFC no es válido.", status_code=422)

        invoice_id = self._FIRST_INVOICE_ID + len(self._store.invoices)
        invoice = _DemoInvoice(
            invoice_id=invoice_id,
            order=order,
            request=request,
            customer_id=self._upsert_customer(request),
            created_at=_now(),
        )
        self._store.invoices.append(invoice)
        LOG.info("Demo invoice %s created for order %s", invoice_id, order.id)
        return InvoiceResult(
            invoice_id=invoice_id,
            pdf_url=self.resolve_url(f"/files/{invoice_id}.pdf"),
            zip_url=self.resolve_url(f"/files/{invoice_id}.zip"),
            customer_email=request.customer.email or "",
        )

    def send_invoice_email(self, invoice_id: int) -> None:
        invoice = self._find_invoice(invoice_id)
        if not invoice.request.customer.email:
            raise RemoteError("La factura no tiene email de cliente.", status_code=400)
        invoice.emailed_at = _now()
        LOG.info(
            "Demo invoice %s emailed to %s", invoice_id, invoice.request.customer.email
        )

    def list_admin_invoices(
        self,
        token: str,
        query: str = "",
        limit: int = ADMIN_PAGE_SIZE,
        offset: int = 0,
    ) -> AdminPage[InvoiceRow]:
        self._check_token(token)
        rows = [
            self._invoice_row(inv)
            for inv in reversed(self._store.invoices)
            if _matches(
                query,
                inv.order.numcheque,
                inv.request.customer.tax_id,
                inv.request.customer.legal_name,
            )
        ]
        return AdminPage(rows=rows[offset : offset + limit], limit=limit, offset=offset)

    def list_admin_customers(
        self,
        token: str,
        query: str = "",
        limit: int = ADMIN_PAGE_SIZE,
        offset: int = 0,
    ) -> AdminPage[CustomerRow]:
        self._check_token(token)
        rows = [
            CustomerRow.from_payload(c)
            for c in self._store.customers
            if _matches(query, c.get("taxId"), c.get("legalName"))
        ]
        return AdminPage(rows=rows[offset : offset + limit], limit=limit, offset=offset)

    def _check_token(self, token: str) -> None:
        if not token or token != self.admin_token:
            raise RemoteError("Token de administrador inválido.", status_code=401)

    def _find_invoice(self, invoice_id: int) -> _DemoInvoice:
        for invoice in self._store.invoices:
            if invoice.invoice_id == invoice_id:
                return invoice
        raise RemoteError("Factura no encontrada.", status_code=404)

    def _upsert_customer(self, request: InvoiceRequest) -> int:
        customer = request.customer
        now = _now()
        for existing in self._store.customers:
            if existing["taxId"] == customer.tax_id:
                existing.update(
                    legalName=customer.legal_name,
                    taxSystem=customer.tax_system,
                    email=customer.email or existing["email"],
                    zip=customer.address.zip or existing.get("zip"),
                    updatedAt=now,
                )
                return existing["id"]
        customer_id = max((c["id"] for c in self._store.customers), default=0) + 1
        self._store.customers.append(
            {
                "id": customer_id,
                "taxId": customer.tax_id,
                "legalName": customer.legal_name,
                "taxSystem": customer.tax_system,
                "email": customer.email or "",
                "zip": customer.address.zip,
                "facturapiCustomerId": f"cus_demo_{customer_id:04d}",
                "createdAt": now,
                "updatedAt": now,
            }
        )
        return customer_id

    def _invoice_row(self, invoice: _DemoInvoice) -> InvoiceRow:
        order = invoice.order
        customer = invoice.request.customer
        return InvoiceRow(
            invoice_id=invoice.invoice_id,
            order_id=order.id,
            facturapi_invoice_id=f"inv_demo_{invoice.invoice_id:04d}",
            created_at=invoice.created_at,
            folio=order.folio,
            numcheque=order.numcheque,
            fecha=order.fecha.isoformat() if order.fecha else "",
            total=f"{order.total:.2f}" if order.total is not None else "",
            emailed_at=invoice.emailed_at,
            media_pdf_url=self.resolve_url(f"/files/{invoice.invoice_id}.pdf"),
            media_zip_url=self.resolve_url(f"/files/{invoice.invoice_id}.zip"),
            customer_id=invoice.customer_id,
            tax_id=customer.tax_id,
            legal_name=customer.legal_name,
            email=customer.email,
        )
