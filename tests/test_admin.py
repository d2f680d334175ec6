from check_invoice_ui.admin import AdminQueryPanel, QuerySlot
from check_invoice_ui.errors import RemoteError
from check_invoice_ui.models.common import AdminPage, NoticeLevel
from check_invoice_ui.services.invoicing_service_impl import ADMIN_TOKEN_HEADER

from conftest import BASE_URL


def _invoice_rows(*ids):
    return {"rows": [{"invoiceId": i, "orderId": i - 92, "numcheque": "12345"} for i in ids]}


def test_start_without_token_issues_no_query(service):
    panel = AdminQueryPanel()

    assert panel.start(service) is None
    assert panel.token == ""
    assert service.calls == []


def test_start_with_saved_token_lists_invoices(service):
    panel = AdminQueryPanel(saved_token="s3cret")

    panel.start(service)

    assert panel.token == "s3cret"
    assert service.calls == [("list_admin_invoices", "s3cret", "", 100, 0)]


def test_saved_token_stays_with_its_visitor(service):
    first = AdminQueryPanel(token="admin-secret")
    first.save_token()
    other = AdminQueryPanel()

    assert other.start(service) is None
    assert other.token == ""
    assert first.saved_token == "admin-secret"
    assert service.calls == []


def test_saved_token_is_sent_in_header(session, http_service):
    panel = AdminQueryPanel(token=" s3cret ")
    panel.save_token()
    session.reply(body=_invoice_rows(99))

    panel.list_invoices(http_service)

    call = session.calls[0]
    assert call["url"] == f"{BASE_URL}/api/admin/invoices"
    assert call["headers"][ADMIN_TOKEN_HEADER] == "s3cret"
    assert panel.saved_token == "s3cret"
    assert [row.invoice_id for row in panel.invoices.rows] == [99]


def test_save_blank_token_clears_slot():
    panel = AdminQueryPanel(saved_token="s3cret", token="s3cret")

    notice = panel.save_token("   ")

    assert notice.message == "Token eliminado"
    assert panel.saved_token == ""
    assert panel.token == ""


def test_query_is_trimmed_and_kept(service):
    panel = AdminQueryPanel(token="t")
    panel.list_customers(service, query="  XAXX ")

    assert panel.query == "  XAXX "
    assert service.calls[-1] == ("list_admin_customers", "t", "XAXX", 100, 0)


def test_failure_keeps_previous_rows(session, http_service):
    panel = AdminQueryPanel(token="s3cret")
    session.reply(body=_invoice_rows(99, 100))
    panel.list_invoices(http_service)

    session.reply(401, body={"error": "Unauthorized"})
    notice = panel.list_invoices(http_service)

    assert notice.level == NoticeLevel.ERROR
    assert notice.message == "Unauthorized"
    assert [row.invoice_id for row in panel.invoices.rows] == [99, 100]
    assert not panel.invoices.loading


def test_slots_are_independent(session, http_service):
    panel = AdminQueryPanel(token="s3cret")
    session.reply(body=_invoice_rows(99))
    panel.list_invoices(http_service)

    session.reply(body={"rows": [{"id": 1, "taxId": "XAXX010101000", "legalName": "PUBLICO"}]})
    panel.list_customers(http_service)

    assert [row.invoice_id for row in panel.invoices.rows] == [99]
    assert [row.tax_id for row in panel.customers.rows] == ["XAXX010101000"]


def test_tickets_carry_over_between_queries(service):
    panel = AdminQueryPanel(token="t")
    panel.list_invoices(service)
    panel.list_invoices(service)
    panel.list_customers(service)

    assert panel.invoices.begin() == 3
    assert panel.customers.begin() == 2


def test_empty_result_replaces_rows(service):
    panel = AdminQueryPanel(token="t")
    panel.invoices.rows = ["old"]

    assert panel.list_invoices(service, query="nothing") is None
    assert panel.invoices.rows == []


def test_error_in_service_surfaces_message(service):
    service.error = RemoteError("Error cargando clientes")
    panel = AdminQueryPanel(token="t")
    assert panel.list_customers(service).message == "Error cargando clientes"


def test_slot_ignores_stale_response():
    slot = QuerySlot()
    first = slot.begin()
    second = slot.begin()

    assert not slot.finish(first, AdminPage(rows=["stale"]))
    assert slot.rows == []
    assert slot.loading

    assert not slot.fail(first)
    assert slot.finish(second, AdminPage(rows=["fresh"], limit=10, offset=20))
    assert slot.rows == ["fresh"]
    assert (slot.limit, slot.offset, slot.loading) == (10, 20, False)
