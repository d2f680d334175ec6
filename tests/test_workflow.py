from datetime import date

import pytest

from check_invoice_ui.errors import RemoteError, ValidationError
from check_invoice_ui.models.common import NoticeLevel
from check_invoice_ui.models.order import InvoiceResult
from check_invoice_ui.workflow import (
    MSG_MANY_ORDERS,
    MSG_MISSING_LOOKUP,
    MSG_NO_EMAIL,
    MSG_NO_ORDERS,
    LookupWorkflow,
    Phase,
)

from conftest import BASE_URL, VALID_FORM, make_order


def _selected(service, *orders):
    service.orders = list(orders)
    wf = LookupWorkflow()
    wf.search(service, "2024-05-01", "12345")
    return wf


def test_single_result_is_auto_selected(service):
    wf = _selected(service, make_order(7))

    assert wf.phase == Phase.SELECTED
    assert wf.selected_order_id == 7
    assert wf.can_generate
    assert service.calls == [("lookup_orders", date(2024, 5, 1), "12345")]


def test_zero_results_is_informational(service):
    wf = LookupWorkflow()
    notice = wf.search(service, "2024-05-01", "00000")

    assert notice.level == NoticeLevel.INFO
    assert notice.message == MSG_NO_ORDERS
    assert wf.phase == Phase.NO_RESULTS
    assert wf.selected_order_id is None
    assert not wf.can_generate


def test_multiple_results_need_an_explicit_choice(service):
    wf = _selected(service, make_order(8), make_order(9))

    assert wf.phase == Phase.MULTIPLE_RESULTS
    assert not wf.can_generate

    wf.select_order(9)
    assert wf.selected_order.id == 9
    assert wf.can_generate


def test_multiple_results_notice(service):
    service.orders = [make_order(8), make_order(9)]
    notice = LookupWorkflow().search(service, "2024-05-01", "12388")
    assert notice.message == MSG_MANY_ORDERS


def test_select_order_rejects_ids_outside_results(service):
    wf = _selected(service, make_order(8), make_order(9))
    with pytest.raises(ValidationError):
        wf.select_order(42)
    assert wf.selected_order_id is None


def test_missing_lookup_fields_are_rejected_before_network(service):
    wf = _selected(service, make_order(7))
    service.calls.clear()

    notice = wf.search(service, "", "12345")

    assert notice.level == NoticeLevel.WARNING
    assert notice.message == MSG_MISSING_LOOKUP
    assert service.calls == []
    assert wf.selected_order_id == 7


def test_malformed_date_is_rejected(service):
    notice = LookupWorkflow().search(service, "01/05/2024", "12345")
    assert notice.level == NoticeLevel.WARNING
    assert service.calls == []


@pytest.mark.parametrize("tax_system", ["60", "6011"])
def test_tax_system_must_have_three_characters(service, tax_system):
    wf = _selected(service, make_order(7))

    notice = wf.generate_invoice(service, {**VALID_FORM, "taxSystem": tax_system})

    assert notice.level == NoticeLevel.WARNING
    assert "create_invoice" not in service.call_names()
    assert wf.phase == Phase.SELECTED


def test_required_fields_are_reported(service):
    wf = _selected(service, make_order(7))
    notice = wf.generate_invoice(service, {**VALID_FORM, "legalName": " ", "taxId": ""})

    assert notice.message.startswith("Campos obligatorios:")
    assert "RFC" in notice.message
    assert "create_invoice" not in service.call_names()


def test_generate_without_selection_is_rejected(service):
    wf = _selected(service, make_order(8), make_order(9))
    notice = wf.generate_invoice(service, VALID_FORM)
    assert notice.level == NoticeLevel.WARNING
    assert "create_invoice" not in service.call_names()


def test_generate_sends_default_codes(service):
    wf = _selected(service, make_order(7))

    notice = wf.generate_invoice(service, VALID_FORM, cfdi_use="", payment_form=None)

    assert notice.level == NoticeLevel.SUCCESS
    request = service.calls[-1][1]
    assert request.order_id == 7
    assert request.cfdi_use == "G03"
    assert request.payment_form == "03"
    assert request.customer.tax_id == "XAXX010101000"
    assert wf.phase == Phase.INVOICE_READY
    assert wf.review_open
    assert wf.invoice.invoice_id == 99


def test_new_search_clears_invoice_and_selection(service):
    wf = _selected(service, make_order(7))
    wf.generate_invoice(service, VALID_FORM)
    assert wf.invoice is not None

    service.orders = [make_order(8), make_order(9)]
    wf.search(service, "2024-05-01", "12388")

    assert wf.invoice is None
    assert wf.selected_order_id is None
    assert not wf.review_open
    assert not wf.can_send_email


def test_email_enabled_only_with_invoice_and_address(service):
    wf = _selected(service, make_order(7))
    assert not wf.can_send_email

    wf.generate_invoice(service, {**VALID_FORM, "email": ""})
    assert wf.invoice is not None
    assert not wf.can_send_email

    notice = wf.send_invoice_email(service)
    assert notice.message == MSG_NO_EMAIL
    assert "send_invoice_email" not in service.call_names()


def test_send_email_keeps_invoice(service):
    wf = _selected(service, make_order(7))
    wf.generate_invoice(service, VALID_FORM)

    notice = wf.send_invoice_email(service)

    assert notice.level == NoticeLevel.SUCCESS
    assert notice.message == "Enviado a juan@example.com"
    assert service.calls[-1] == ("send_invoice_email", 99)
    assert wf.phase == Phase.INVOICE_READY
    assert wf.invoice.invoice_id == 99


def test_failed_generation_keeps_previous_state(service):
    wf = _selected(service, make_order(7))
    service.error = RemoteError("El RFC no es válido.", status_code=422)

    notice = wf.generate_invoice(service, VALID_FORM)

    assert notice.level == NoticeLevel.ERROR
    assert notice.message == "El RFC no es válido."
    assert wf.phase == Phase.SELECTED
    assert wf.invoice is None
    assert wf.can_generate


def test_failed_email_keeps_invoice(service):
    wf = _selected(service, make_order(7))
    wf.generate_invoice(service, VALID_FORM)
    service.error = RemoteError("Error enviando email.")

    notice = wf.send_invoice_email(service)

    assert notice.level == NoticeLevel.ERROR
    assert wf.phase == Phase.INVOICE_READY
    assert wf.invoice.invoice_id == 99
    assert wf.can_send_email


def test_failed_search_leaves_no_results(service):
    service.error = RemoteError("Error buscando la orden.")
    wf = LookupWorkflow()

    notice = wf.search(service, "2024-05-01", "12345")

    assert notice.level == NoticeLevel.ERROR
    assert wf.phase == Phase.IDLE
    assert wf.orders == []
    assert not wf.busy


def test_stale_search_response_is_discarded():
    wf = LookupWorkflow()
    first = wf.begin_search("2024-05-01", "12345")
    second = wf.begin_search("2024-05-01", "12388")

    assert wf.finish_search(first.ticket, [make_order(7)]) is None
    assert wf.phase == Phase.SEARCHING
    assert wf.orders == []

    wf.finish_search(second.ticket, [make_order(8), make_order(9)])
    assert [o.id for o in wf.orders] == [8, 9]


def test_stale_generation_cannot_attach_invoice_to_new_search():
    wf = LookupWorkflow()
    call = wf.begin_search("2024-05-01", "12345")
    wf.finish_search(call.ticket, [make_order(7)])
    generate = wf.begin_generate(VALID_FORM)

    wf.begin_search("2024-05-02", "12345")
    wf.finish_generate(generate.ticket, InvoiceResult(99, f"{BASE_URL}/files/99.pdf"))

    assert wf.invoice is None
    assert wf.phase == Phase.SEARCHING


def test_busy_blocks_new_operations():
    wf = LookupWorkflow()
    call = wf.begin_search("2024-05-01", "12345")
    wf.finish_search(call.ticket, [make_order(7)])
    wf.begin_generate(VALID_FORM)

    assert wf.busy
    assert not wf.can_generate
    with pytest.raises(ValidationError):
        wf.begin_generate(VALID_FORM)
    with pytest.raises(ValidationError):
        wf.select_order(7)


def test_abort_releases_busy_phase():
    wf = LookupWorkflow()
    call = wf.begin_search("2024-05-01", "12345")
    wf.finish_search(call.ticket, [make_order(7)])
    wf.begin_generate(VALID_FORM)

    notice = wf.abort(RemoteError("boom"))

    assert notice.level == NoticeLevel.ERROR
    assert wf.phase == Phase.SELECTED
    assert wf.abort(RemoteError("again")) is None


def test_review_dialog_reopens_only_with_invoice(service):
    wf = LookupWorkflow()
    wf.open_review()
    assert not wf.review_open

    wf = _selected(service, make_order(7))
    wf.generate_invoice(service, VALID_FORM)
    wf.close_review()
    assert not wf.review_open
    wf.open_review()
    assert wf.review_open


def test_end_to_end_against_http_backend(session, http_service):
    session.reply(body={"orders": [{"id": 7, "folio": "A-1007", "numcheque": "12345",
                                    "fecha": "2024-05-01T20:14:00Z", "total": "1160.00"}]})
    session.reply(body={"invoiceId": 99, "pdfUrl": "/files/99.pdf"})
    wf = LookupWorkflow()

    assert wf.search(http_service, "2024-05-01", "12345") is None
    assert wf.selected_order_id == 7

    wf.generate_invoice(http_service, VALID_FORM)

    assert wf.invoice.invoice_id == 99
    assert wf.invoice.pdf_url == f"{BASE_URL}/files/99.pdf"
    assert wf.invoice.zip_url is None
    assert wf.review_open
    assert session.calls[1]["json"]["orderId"] == 7
