"""
Order lookup / invoice generation / delivery workflow.

The customer page walks through a small state machine:

    IDLE -> SEARCHING -> NO_RESULTS
                      -> SELECTED          (exactly one order, auto-selected)
                      -> MULTIPLE_RESULTS  -> SELECTED (explicit choice)
    SELECTED -> GENERATING_INVOICE -> INVOICE_READY
    INVOICE_READY -> SENDING_EMAIL -> INVOICE_READY

A new search resets everything. Each network step is split into
begin_* (validate, move to the busy phase, hand out a request ticket) and
finish_* / fail (apply the response). Only the most recent ticket may touch
state, so a slow response cannot overwrite the outcome of a newer request.
The search(), generate_invoice() and send_invoice_email() drivers run a
whole step synchronously against an InvoicingService.

This module has no UI dependency; state.py wraps it for Reflex.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Mapping

from check_invoice_ui.errors import RemoteError, ValidationError
from check_invoice_ui.lib import logs
from check_invoice_ui.models.common import Notice
from check_invoice_ui.models.order import (
    CustomerInput,
    InvoiceRequest,
    InvoiceResult,
    Order,
)
from check_invoice_ui.services.invoicing_service import InvoicingService
from check_invoice_ui.utils import parse_calendar_date

LOG = logs.logger(__file__)


class Phase(str, Enum):
    """Workflow phases shown by the customer page."""

    IDLE = "idle"
    SEARCHING = "searching"
    NO_RESULTS = "no_results"
    MULTIPLE_RESULTS = "multiple_results"
    SELECTED = "selected"
    GENERATING_INVOICE = "generating_invoice"
    INVOICE_READY = "invoice_ready"
    SENDING_EMAIL = "sending_email"


BUSY_PHASES = frozenset(
    {Phase.SEARCHING, Phase.GENERATING_INVOICE, Phase.SENDING_EMAIL}
)

MSG_MISSING_LOOKUP = "Ingresa fecha y numcheque."
MSG_BAD_DATE = "La fecha debe tener el formato YYYY-MM-DD."
MSG_NO_ORDERS = "No se encontró ninguna orden con esos datos."
MSG_MANY_ORDERS = "Se encontraron varias. Selecciona la correcta."
MSG_SELECT_ORDER = "Selecciona una orden."
MSG_UNKNOWN_ORDER = "La orden seleccionada no está en los resultados."
MSG_BUSY = "Espera a que termine la operación en curso."
MSG_INVOICE_READY = "Factura generada."
MSG_NO_INVOICE = "No hay factura para enviar."
MSG_NO_EMAIL = "No capturaste email del cliente."


@dataclass(frozen=True)
class SearchCall:
    """A lookup that passed validation and is waiting for the backend."""

    ticket: int
    day: date
    numcheque: str


@dataclass(frozen=True)
class GenerateCall:
    """An invoice request that passed validation."""

    ticket: int
    request: InvoiceRequest


@dataclass(frozen=True)
class EmailCall:
    """An email delivery waiting for the backend."""

    ticket: int
    invoice_id: int
    email: str


@dataclass
class LookupWorkflow:
    """
    Client-side state of the lookup and invoicing flow.

    Attributes:
        phase: Current phase.
        orders: Results of the latest lookup.
        selected_order_id: Id of the active order, always one of `orders`.
        invoice: Result of the latest successful generation.
        review_open: Whether the invoice review dialog is shown.
    """

    phase: Phase = Phase.IDLE
    orders: list[Order] = field(default_factory=list)
    selected_order_id: int | None = None
    invoice: InvoiceResult | None = None
    review_open: bool = False
    _ticket: int = 0
    _resume_phase: Phase = Phase.IDLE

    @property
    def busy(self) -> bool:
        """True while a request is in flight."""
        return self.phase in BUSY_PHASES

    @property
    def selected_order(self) -> Order | None:
        """Return the selected order, if any."""
        if self.selected_order_id is None:
            return None
        return next((o for o in self.orders if o.id == self.selected_order_id), None)

    @property
    def can_generate(self) -> bool:
        """The fiscal form is enabled only for a selected order."""
        return self.selected_order is not None and not self.busy

    @property
    def customer_email(self) -> str:
        return self.invoice.customer_email if self.invoice else ""

    @property
    def can_send_email(self) -> bool:
        """Email delivery needs an invoice and a captured address."""
        return self.invoice is not None and bool(self.customer_email) and not self.busy

    def is_current(self, ticket: int) -> bool:
        """Return True when ticket belongs to the most recent request."""
        return ticket == self._ticket

    def begin_search(self, day: str | None, numcheque: str | None) -> SearchCall:
        """
        Validate lookup input and reset the workflow for a new search.

        Raises:
            ValidationError: If either field is empty or the date is not
                YYYY-MM-DD. State is left untouched.
        """
        numcheque = (numcheque or "").strip()
        if not (day or "").strip() or not numcheque:
            raise ValidationError(MSG_MISSING_LOOKUP)
        parsed = parse_calendar_date(day)
        if parsed is None:
            raise ValidationError(MSG_BAD_DATE)

        self._reset()
        self.phase = Phase.SEARCHING
        return SearchCall(ticket=self._next_ticket(), day=parsed, numcheque=numcheque)

    def finish_search(self, ticket: int, orders: list[Order]) -> Notice | None:
        """Apply lookup results; stale tickets are ignored."""
        if not self._accept(ticket, "search"):
            return None
        self.orders = list(orders)
        if not self.orders:
            self.phase = Phase.NO_RESULTS
            return Notice.info(MSG_NO_ORDERS)
        if len(self.orders) == 1:
            self.selected_order_id = self.orders[0].id
            self.phase = Phase.SELECTED
            return None
        self.phase = Phase.MULTIPLE_RESULTS
        return Notice.info(MSG_MANY_ORDERS)

    def select_order(self, order_id: int) -> None:
        """
        Make one of the current results the active order.

        Raises:
            ValidationError: If a request is in flight or the id is not
                among the current results.
        """
        if self.busy:
            raise ValidationError(MSG_BUSY)
        if not any(o.id == order_id for o in self.orders):
            raise ValidationError(MSG_UNKNOWN_ORDER)
        self.selected_order_id = order_id
        self.phase = Phase.SELECTED

    def begin_generate(
        self,
        customer: CustomerInput | Mapping[str, Any],
        cfdi_use: str | None = None,
        payment_form: str | None = None,
    ) -> GenerateCall:
        """
        Validate the fiscal form and build the invoice request.

        Args:
            customer: Typed fiscal profile or the raw submitted form fields.
            cfdi_use: CFDI use code, "G03" when blank.
            payment_form: Payment form code, "03" when blank.

        Raises:
            ValidationError: If busy, no order is selected, or the fiscal
                profile is incomplete. State is left untouched.
        """
        if self.busy:
            raise ValidationError(MSG_BUSY)
        order = self.selected_order
        if order is None:
            raise ValidationError(MSG_SELECT_ORDER)
        if not isinstance(customer, CustomerInput):
            customer = CustomerInput.from_form(customer)
        customer.validate()

        request = InvoiceRequest(
            order_id=order.id,
            customer=customer,
            cfdi_use=cfdi_use or "",
            payment_form=payment_form or "",
        )
        self._resume_phase = self.phase
        self.phase = Phase.GENERATING_INVOICE
        return GenerateCall(ticket=self._next_ticket(), request=request)

    def finish_generate(self, ticket: int, result: InvoiceResult) -> Notice | None:
        """Record a generated invoice and open the review dialog."""
        if not self._accept(ticket, "generate"):
            return None
        self.invoice = result
        self.review_open = True
        self.phase = Phase.INVOICE_READY
        return Notice.success(MSG_INVOICE_READY)

    def begin_send_email(self) -> EmailCall:
        """
        Check that the current invoice can be emailed.

        Raises:
            ValidationError: If busy, there is no invoice, or no email was
                captured when it was generated.
        """
        if self.busy:
            raise ValidationError(MSG_BUSY)
        if self.invoice is None:
            raise ValidationError(MSG_NO_INVOICE)
        if not self.customer_email:
            raise ValidationError(MSG_NO_EMAIL)
        self._resume_phase = self.phase
        self.phase = Phase.SENDING_EMAIL
        return EmailCall(
            ticket=self._next_ticket(),
            invoice_id=self.invoice.invoice_id,
            email=self.customer_email,
        )

    def finish_send_email(self, ticket: int) -> Notice | None:
        """Report delivery; invoice state is not modified."""
        if not self._accept(ticket, "send_email"):
            return None
        self.phase = self._resume_phase
        return Notice.success(f"Enviado a {self.customer_email}")

    def fail(self, ticket: int, error: RemoteError) -> Notice | None:
        """
        Roll back the in-flight step after a remote failure.

        A failed search leaves no results and no selection; a failed
        generation or delivery returns to the phase it started from.
        """
        if not self._accept(ticket, "fail"):
            return None
        if self.phase == Phase.SEARCHING:
            self._reset()
        else:
            self.phase = self._resume_phase
        return Notice.error(error.message)

    def abort(self, error: RemoteError) -> Notice | None:
        """Fail whatever request is in flight, if any."""
        if not self.busy:
            return None
        return self.fail(self._ticket, error)

    def open_review(self) -> None:
        """Show the review dialog again for the current invoice."""
        self.review_open = self.invoice is not None

    def close_review(self) -> None:
        self.review_open = False

    def search(
        self, service: InvoicingService, day: str | None, numcheque: str | None
    ) -> Notice | None:
        """Run a complete lookup against service."""
        try:
            call = self.begin_search(day, numcheque)
        except ValidationError as exc:
            return Notice.warning(exc.message)
        try:
            orders = service.lookup_orders(call.day, call.numcheque)
        except RemoteError as exc:
            return self.fail(call.ticket, exc)
        return self.finish_search(call.ticket, orders)

    def generate_invoice(
        self,
        service: InvoicingService,
        customer: CustomerInput | Mapping[str, Any],
        cfdi_use: str | None = None,
        payment_form: str | None = None,
    ) -> Notice | None:
        """Run a complete invoice generation against service."""
        try:
            call = self.begin_generate(customer, cfdi_use, payment_form)
        except ValidationError as exc:
            return Notice.warning(exc.message)
        try:
            result = service.create_invoice(call.request)
        except RemoteError as exc:
            return self.fail(call.ticket, exc)
        return self.finish_generate(call.ticket, result)

    def send_invoice_email(self, service: InvoicingService) -> Notice | None:
        """Run a complete email delivery against service."""
        try:
            call = self.begin_send_email()
        except ValidationError as exc:
            return Notice.warning(exc.message)
        try:
            service.send_invoice_email(call.invoice_id)
        except RemoteError as exc:
            return self.fail(call.ticket, exc)
        return self.finish_send_email(call.ticket)

    def _next_ticket(self) -> int:
        self._ticket += 1
        return self._ticket

    def _accept(self, ticket: int, step: str) -> bool:
        if self.is_current(ticket):
            return True
        LOG.info("Discarding stale %s response (ticket %s < %s)", step, ticket, self._ticket)
        return False

    def _reset(self) -> None:
        self.phase = Phase.IDLE
        self.orders = []
        self.selected_order_id = None
        self.invoice = None
        self.review_open = False
