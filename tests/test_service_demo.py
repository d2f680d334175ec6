from datetime import date

import pytest

from check_invoice_ui.errors import RemoteError
from check_invoice_ui.models.order import CustomerInput, InvoiceRequest
from check_invoice_ui.services import (
    DemoInvoicingService,
    InvoicingServiceImpl,
    get_invoicing_service,
)

from conftest import VALID_FORM


@pytest.fixture
def demo():
    return DemoInvoicingService(admin_token="demo")


def _request(order_id=7, **overrides):
    return InvoiceRequest(order_id=order_id, customer=CustomerInput.from_form({**VALID_FORM, **overrides}))


@pytest.mark.parametrize(
    "day, numcheque, expected",
    [
        (date(2024, 5, 1), "12345", [7]),
        (date(2024, 5, 2), "12345", [10]),
        (date(2024, 5, 1), "12388", [8, 9]),
        (date(2024, 5, 1), "00000", []),
    ],
)
def test_lookup_matches_utc_day(demo, day, numcheque, expected):
    assert [o.id for o in demo.lookup_orders(day, numcheque)] == expected


def test_first_invoice_links(demo):
    result = demo.create_invoice(_request())

    assert result.invoice_id == 99
    assert result.pdf_url == "http://demo.local/files/99.pdf"
    assert result.zip_url == "http://demo.local/files/99.zip"


def test_order_is_invoiced_once(demo):
    demo.create_invoice(_request())
    with pytest.raises(RemoteError) as info:
        demo.create_invoice(_request())
    assert info.value.status_code == 409


def test_unknown_order_and_bad_rfc(demo):
    with pytest.raises(RemoteError) as info:
        demo.create_invoice(_request(order_id=404))
    assert info.value.status_code == 404

    with pytest.raises(RemoteError) as info:
        demo.create_invoice(_request(taxId="ABC"))
    assert info.value.status_code == 422


def test_email_requires_address(demo):
    invoice = demo.create_invoice(_request(email=""))
    with pytest.raises(RemoteError):
        demo.send_invoice_email(invoice.invoice_id)


def test_admin_listings_require_token(demo):
    with pytest.raises(RemoteError) as info:
        demo.list_admin_invoices("")
    assert info.value.status_code == 401
    with pytest.raises(RemoteError):
        demo.list_admin_customers("nope")


def test_admin_listings_reflect_new_invoices(demo):
    demo.create_invoice(_request(legalName="Ana López", taxId="LOAA800101AB1"))
    demo.create_invoice(_request(order_id=8))

    invoices = demo.list_admin_invoices("demo")
    assert [row.order_id for row in invoices.rows] == [8, 7]

    filtered = demo.list_admin_invoices("demo", query="lópez")
    assert [row.order_id for row in filtered.rows] == [7]

    customers = demo.list_admin_customers("demo", query="LOAA")
    assert [c.legal_name for c in customers.rows] == ["Ana López"]

    all_customers = demo.list_admin_customers("demo")
    assert len(all_customers.rows) == 2


def test_admin_paging(demo):
    demo.create_invoice(_request())
    demo.create_invoice(_request(order_id=8))
    page = demo.list_admin_invoices("demo", limit=1, offset=1)
    assert [row.order_id for row in page.rows] == [7]


def test_registry_resolves_kinds(monkeypatch):
    get_invoicing_service.cache_clear()
    monkeypatch.setenv("CHECK_INVOICE_SERVICE", "demo")
    try:
        assert isinstance(get_invoicing_service(), DemoInvoicingService)
        assert isinstance(get_invoicing_service("impl"), InvoicingServiceImpl)
        with pytest.raises(ValueError):
            get_invoicing_service("bogus")
    finally:
        get_invoicing_service.cache_clear()
