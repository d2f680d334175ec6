"""
HTTP implementation of InvoicingService backed by the invoicing API.

This module provides the production service that:
- Looks up orders by UTC day and ticket number
- Posts fiscal data to generate invoices and asks for email delivery
- Queries the admin listing endpoints with the x-admin-token header

Any non-success status becomes a RemoteError carrying the body's `error`
message when present, otherwise a per-operation fallback. Transport
failures become a RemoteError without status code. There is no retry.

Optional Environment Variables:
    CHECK_INVOICE_API_BASE: Backend base URL (default http://localhost:3000)
    CHECK_INVOICE_HTTP_TIMEOUT: Request timeout in seconds (default none)
"""

import os
from datetime import date
from typing import Any, Callable, TypeVar

import requests

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

T = TypeVar("T")

DEFAULT_API_BASE = "http://localhost:3000"
ADMIN_TOKEN_HEADER = "x-admin-token"
NETWORK_ERROR_MESSAGE = "Error de red."


def _timeout_from_env() -> float | None:
    raw = os.getenv("CHECK_INVOICE_HTTP_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        LOG.warning("Ignoring invalid CHECK_INVOICE_HTTP_TIMEOUT: %s", raw)
        return None


class InvoicingServiceImpl(InvoicingService):
    """
    Production invoicing service speaking JSON over HTTP.

    Attributes:
        base_url: Backend base URL without trailing slash.
        timeout: Per-request timeout in seconds, or None for the
            transport default.
    """

    def __init__(
        self,
        base_url: str | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            base_url: Backend base URL; read from CHECK_INVOICE_API_BASE
                when omitted.
            session: requests session to reuse (tests pass a fake).
            timeout: Request timeout; read from CHECK_INVOICE_HTTP_TIMEOUT
                when omitted.
        """
        base_url = base_url or os.getenv("CHECK_INVOICE_API_BASE") or DEFAULT_API_BASE
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else _timeout_from_env()
        self._session = session or requests.Session()

    def lookup_orders(self, day: date, numcheque: str) -> list[Order]:
        data = self._request(
            "GET",
            "/api/orders/lookup",
            "Error buscando la orden.",
            params={"date": day.isoformat(), "numcheque": numcheque},
        )
        orders = [Order.from_payload(item) for item in data.get("orders") or []]
        LOG.info("Lookup %s/%s returned %d orders", day, numcheque, len(orders))
        return orders

    def create_invoice(self, request: InvoiceRequest) -> InvoiceResult:
        data = self._request(
            "POST",
            "/api/invoices",
            "Error al generar la factura.",
            json=request.to_payload(),
        )
        result = InvoiceResult.from_payload(data, self.base_url, request.customer.email)
        LOG.info(
            "Invoice %s generated for order %s", result.invoice_id, request.order_id
        )
        return result

    def send_invoice_email(self, invoice_id: int) -> None:
        self._request(
            "POST",
            f"/api/invoices/{invoice_id}/send-email",
            "Error enviando email.",
            headers={"Content-Type": "application/json"},
        )
        LOG.info("Invoice %s sent by email", invoice_id)

    def list_admin_invoices(
        self,
        token: str,
        query: str = "",
        limit: int = ADMIN_PAGE_SIZE,
        offset: int = 0,
    ) -> AdminPage[InvoiceRow]:
        return self._admin_page(
            "/api/admin/invoices",
            "Error cargando facturas",
            InvoiceRow.from_payload,
            token,
            query,
            limit,
            offset,
        )

    def list_admin_customers(
        self,
        token: str,
        query: str = "",
        limit: int = ADMIN_PAGE_SIZE,
        offset: int = 0,
    ) -> AdminPage[CustomerRow]:
        return self._admin_page(
            "/api/admin/customers",
            "Error cargando clientes",
            CustomerRow.from_payload,
            token,
            query,
            limit,
            offset,
        )

    def _admin_page(
        self,
        path: str,
        fallback: str,
        parse: Callable[[dict], T],
        token: str,
        query: str,
        limit: int,
        offset: int,
    ) -> AdminPage[T]:
        limit, offset = max(limit, 1), max(offset, 0)
        data = self._request(
            "GET",
            path,
            fallback,
            params={"q": query or "", "limit": str(limit), "offset": str(offset)},
            headers={ADMIN_TOKEN_HEADER: token or ""},
        )
        rows = [parse(item) for item in data.get("rows") or []]
        return AdminPage(rows=rows, limit=limit, offset=offset)

    def _request(
        self, method: str, path: str, fallback: str, **kwargs: Any
    ) -> dict:
        """
        Send a request and return the decoded JSON body.

        Args:
            method: HTTP method.
            path: Path below base_url.
            fallback: Message used when the backend gives no `error`.
            **kwargs: Passed through to requests (params, json, headers).

        Raises:
            RemoteError: On transport failure or non-success status.
        """
        url = f"{self.base_url}{path}"
        try:
            response = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            LOG.warning("%s %s failed: %s", method, path, exc)
            raise RemoteError(str(exc) or NETWORK_ERROR_MESSAGE) from exc

        data = _json_body(response)
        LOG.info("%s %s -> %s", method, path, response.status_code)
        if not response.ok:
            message = data.get("error") if isinstance(data.get("error"), str) else None
            LOG.warning(
                "%s %s rejected with %s: %s",
                method,
                path,
                response.status_code,
                message,
            )
            raise RemoteError(message or fallback, status_code=response.status_code)
        return data


def _json_body(response: requests.Response) -> dict:
    """Decode a JSON object body, treating anything else as empty."""
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
