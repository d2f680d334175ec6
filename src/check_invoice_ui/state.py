"""
Reflex state management for the customer invoice page.

This module wraps LookupWorkflow in a Reflex state class: every event
handler runs one workflow step, copies the workflow into frontend vars and
turns the resulting Notice into a toast. Handlers that hit the network
yield once first so the busy indicator reaches the browser.
"""

import os
from typing import Generator

import reflex as rx

from check_invoice_ui.errors import RemoteError, ValidationError
from check_invoice_ui.lib import logs
from check_invoice_ui.models.common import Notice, NoticeLevel
from check_invoice_ui.models.reflex_models import OrderModel, order_to_model
from check_invoice_ui.services import get_invoicing_service
from check_invoice_ui.utils import today_utc
from check_invoice_ui.workflow import MSG_SELECT_ORDER, LookupWorkflow, Phase

LOG = logs.logger(__file__)

# Branding configuration
RESTAURANT_NAME = os.getenv("CHECK_INVOICE_RESTAURANT", "Cantina La Llorona")
APP_TITLE = "Solicitar factura"
APP_SUBTITLE = (
    "Busca tu consumo por fecha y numcheque. Si hay duplicados, elige el correcto."
)
UNEXPECTED_ERROR_MESSAGE = "Ocurrió un error inesperado. Intenta de nuevo."

_TOASTS = {
    NoticeLevel.INFO: rx.toast.info,
    NoticeLevel.SUCCESS: rx.toast.success,
    NoticeLevel.WARNING: rx.toast.warning,
    NoticeLevel.ERROR: rx.toast.error,
}


def notice_toast(notice: Notice | None):
    """Return the toast event for a notice, or None when there is nothing to say."""
    if notice is None:
        return None
    return _TOASTS[notice.level](notice.message)


def _get_service():
    """Get the configured invoicing service (lazy loaded)."""
    return get_invoicing_service()


class InvoiceRequestState(rx.State):
    """
    State of the customer page.

    Frontend vars mirror the backend-only LookupWorkflow after every event.
    """

    # Lookup form
    date: str = ""
    numcheque: str = ""

    # Results and selection
    orders: list[OrderModel] = []
    selected_order_key: str = ""
    phase: str = Phase.IDLE.value

    # Generated invoice
    invoice_id: int = 0
    pdf_url: str = ""
    zip_url: str = ""
    customer_email: str = ""
    review_open: bool = False

    # Derived flags
    can_generate: bool = False
    can_send_email: bool = False
    searching: bool = False
    generating: bool = False
    sending_email: bool = False

    _workflow: LookupWorkflow | None = None

    @rx.var
    def selected_summary(self) -> str:
        """Describe the selected order for the fiscal form header."""
        for order in self.orders:
            if order.key == self.selected_order_key:
                return f"Orden: ID {order.id} · Total: {order.total}"
        return "Selecciona una orden para continuar"

    @rx.var
    def email_target(self) -> str:
        if self.customer_email:
            return f"Enviar a: {self.customer_email}"
        return "Sin email capturado"

    @rx.event
    def on_load(self):
        """Default the lookup date to today's UTC day."""
        if not self.date:
            self.date = today_utc()
        self._sync()

    @rx.event
    def set_date(self, value: str):
        self.date = value or ""

    @rx.event
    def set_numcheque(self, value: str):
        self.numcheque = value or ""

    @rx.event
    def search(self) -> Generator:
        """Look up orders by date and numcheque."""
        self.searching = True
        yield

        wf = self._wf()
        try:
            notice = wf.search(_get_service(), self.date, self.numcheque)
        except Exception as e:
            LOG.error("Lookup failed: %s", e, exc_info=True)
            notice = wf.abort(RemoteError(UNEXPECTED_ERROR_MESSAGE))
        finally:
            self._sync()
        yield notice_toast(notice)

    @rx.event
    def select_order(self, key: str):
        """Select one of the lookup results."""
        try:
            self._wf().select_order(int(key))
        except (TypeError, ValueError):
            return notice_toast(Notice.warning(MSG_SELECT_ORDER))
        except ValidationError as e:
            return notice_toast(Notice.warning(e.message))
        finally:
            self._sync()

    @rx.event
    def generate_invoice(self, form_data: dict) -> Generator:
        """
        Submit the fiscal form.

        Args:
            form_data: Fields of the submitted form keyed by input name.
        """
        self.generating = True
        yield

        wf = self._wf()
        try:
            notice = wf.generate_invoice(
                _get_service(),
                form_data,
                cfdi_use=form_data.get("cfdiUse"),
                payment_form=form_data.get("paymentForm"),
            )
        except Exception as e:
            LOG.error("Invoice generation failed: %s", e, exc_info=True)
            notice = wf.abort(RemoteError(UNEXPECTED_ERROR_MESSAGE))
        finally:
            self._sync()
        yield notice_toast(notice)

    @rx.event
    def send_invoice_email(self) -> Generator:
        """Ask the backend to email the generated invoice."""
        self.sending_email = True
        yield

        wf = self._wf()
        try:
            notice = wf.send_invoice_email(_get_service())
        except Exception as e:
            LOG.error("Sending invoice email failed: %s", e, exc_info=True)
            notice = wf.abort(RemoteError(UNEXPECTED_ERROR_MESSAGE))
        finally:
            self._sync()
        yield notice_toast(notice)

    @rx.event
    def set_review_open(self, open: bool):
        """Show or hide the invoice review dialog."""
        wf = self._wf()
        if open:
            wf.open_review()
        else:
            wf.close_review()
        self._sync()

    def _wf(self) -> LookupWorkflow:
        if self._workflow is None:
            self._workflow = LookupWorkflow()
        return self._workflow

    def _sync(self) -> None:
        """Copy the workflow into the frontend vars."""
        wf = self._wf()
        self.orders = [order_to_model(order) for order in wf.orders]
        self.selected_order_key = (
            str(wf.selected_order_id) if wf.selected_order_id is not None else ""
        )
        self.phase = wf.phase.value
        invoice = wf.invoice
        self.invoice_id = invoice.invoice_id if invoice else 0
        self.pdf_url = invoice.pdf_url if invoice else ""
        self.zip_url = (invoice.zip_url or "") if invoice else ""
        self.customer_email = wf.customer_email
        self.review_open = wf.review_open
        self.can_generate = wf.can_generate
        self.can_send_email = wf.can_send_email
        self.searching = wf.phase == Phase.SEARCHING
        self.generating = wf.phase == Phase.GENERATING_INVOICE
        self.sending_email = wf.phase == Phase.SENDING_EMAIL
