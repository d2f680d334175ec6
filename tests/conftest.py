"""Shared fixtures: a fake requests session and a recording service."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any

import pytest
import requests

from check_invoice_ui.errors import RemoteError
from check_invoice_ui.models.common import AdminPage
from check_invoice_ui.models.order import InvoiceRequest, InvoiceResult, Order
from check_invoice_ui.services.invoicing_service import InvoicingService
from check_invoice_ui.services.invoicing_service_impl import InvoicingServiceImpl

BASE_URL = "http://api.test"


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: str | None = None):
        self.status_code = status_code
        self._body = body
        self._text = text

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._text is not None:
            raise ValueError("not json")
        return self._body


@dataclass
class FakeSession:
    """Stands in for requests.Session; replies from a queue."""

    responses: list[Any] = field(default_factory=list)
    calls: list[dict] = field(default_factory=list)

    def reply(self, status_code: int = 200, body: Any = None, text: str | None = None):
        self.responses.append(FakeResponse(status_code, body, text))
        return self

    def fail(self, exc: Exception):
        self.responses.append(exc)
        return self

    def request(self, method: str, url: str, timeout=None, **kwargs):
        self.calls.append({"method": method, "url": url, "timeout": timeout, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_order(order_id: int, numcheque: str = "12345", total: float = 116.0) -> Order:
    return Order(
        id=order_id,
        folio=f"F-{order_id}",
        numcheque=numcheque,
        fecha=datetime(2024, 5, 1, 20, 0, tzinfo=timezone.utc),
        total=total,
    )


class RecordingService(InvoicingService):
    """Scriptable service that records every call."""

    def __init__(self) -> None:
        self.base_url = BASE_URL
        self.orders: list[Order] = []
        self.result: InvoiceResult | None = None
        self.error: RemoteError | None = None
        self.calls: list[tuple] = []

    def lookup_orders(self, day: date, numcheque: str) -> list[Order]:
        self.calls.append(("lookup_orders", day, numcheque))
        self._maybe_fail()
        return list(self.orders)

    def create_invoice(self, request: InvoiceRequest) -> InvoiceResult:
        self.calls.append(("create_invoice", request))
        self._maybe_fail()
        return self.result or InvoiceResult(
            invoice_id=99,
            pdf_url=f"{BASE_URL}/files/99.pdf",
            customer_email=request.customer.email or "",
        )

    def send_invoice_email(self, invoice_id: int) -> None:
        self.calls.append(("send_invoice_email", invoice_id))
        self._maybe_fail()

    def list_admin_invoices(self, token, query="", limit=100, offset=0):
        self.calls.append(("list_admin_invoices", token, query, limit, offset))
        self._maybe_fail()
        return AdminPage(rows=[], limit=limit, offset=offset)

    def list_admin_customers(self, token, query="", limit=100, offset=0):
        self.calls.append(("list_admin_customers", token, query, limit, offset))
        self._maybe_fail()
        return AdminPage(rows=[], limit=limit, offset=offset)

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def _maybe_fail(self) -> None:
        if self.error is not None:
            raise self.error


@pytest.fixture
def service() -> RecordingService:
    return RecordingService()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def http_service(session: FakeSession) -> InvoicingServiceImpl:
    return InvoicingServiceImpl(base_url=BASE_URL, session=session)


@pytest.fixture
def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("Connection refused")


VALID_FORM = {
    "legalName": "Juan Pérez",
    "taxId": "XAXX010101000",
    "taxSystem": "601",
    "email": "juan@example.com",
    "zip": "03100",
}
