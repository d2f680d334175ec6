"""
Order lookup and invoice generation models.

These dataclasses mirror the JSON exchanged with the invoicing backend:

    Order            one dining check returned by the lookup endpoint
    CustomerInput    fiscal profile typed in by the customer
    └── Address
    InvoiceRequest   body of the invoice generation request
    InvoiceResult    what the backend returns for a generated invoice

Parsing uses benedict for safe key access so missing or null values in a
response fall back to defaults instead of raising KeyError.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

from benedict import benedict

from check_invoice_ui.errors import RemoteError, ValidationError
from check_invoice_ui.utils import parse_amount, parse_datetime, resolve_url

DEFAULT_CFDI_USE = "G03"
DEFAULT_PAYMENT_FORM = "03"
TAX_SYSTEM_LENGTH = 3

_FIELD_LABELS = {
    "legal_name": "Razón social / Nombre",
    "tax_id": "RFC",
    "tax_system": "Régimen fiscal",
}


@dataclass(slots=True)
class Order:
    """A dining check (orden) identified by its integer id."""

    id: int
    folio: str
    numcheque: str
    fecha: datetime | None
    mesa: str | None = None
    cierre: datetime | None = None
    total: float | None = None
    subtotal: float | None = None
    totalimpuesto1: float | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Order":
        """Build an Order from one element of the lookup response."""
        b = benedict(dict(payload), keyattr_dynamic=True)
        raw_id = b.get("id")
        try:
            order_id = int(raw_id)
        except (TypeError, ValueError) as exc:
            raise RemoteError(f"Orden con id inválido: {raw_id!r}") from exc
        mesa = b.get("mesa")
        return cls(
            id=order_id,
            folio=str(b.get("folio") or ""),
            numcheque=str(b.get("numcheque") or ""),
            fecha=parse_datetime(b.get("fecha")),
            mesa=str(mesa) if mesa not in (None, "") else None,
            cierre=parse_datetime(b.get("cierre")),
            total=parse_amount(b.get("total")),
            subtotal=parse_amount(b.get("subtotal")),
            totalimpuesto1=parse_amount(b.get("totalimpuesto1")),
        )


@dataclass(slots=True)
class Address:
    """Fiscal address; only the postal code is captured."""

    zip: str | None = None


@dataclass(slots=True)
class CustomerInput:
    """Fiscal profile submitted with an invoice request."""

    legal_name: str
    tax_id: str
    tax_system: str
    email: str | None = None
    address: Address = field(default_factory=Address)

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "CustomerInput":
        """
        Build a CustomerInput from the submitted form fields.

        Blank optional fields become None. The result is not validated;
        call validate() before sending it.
        """

        def text(key: str) -> str:
            return str(form.get(key) or "").strip()

        return cls(
            legal_name=text("legalName"),
            tax_id=text("taxId").upper(),
            tax_system=text("taxSystem"),
            email=text("email") or None,
            address=Address(zip=text("zip") or None),
        )

    def validate(self) -> None:
        """
        Check required fields and the tax system length.

        Raises:
            ValidationError: If a required field is empty or taxSystem is
                not exactly three characters long.
        """
        missing = [
            label for name, label in _FIELD_LABELS.items() if not getattr(self, name)
        ]
        if missing:
            raise ValidationError(f"Campos obligatorios: {', '.join(missing)}.")
        if len(self.tax_system) != TAX_SYSTEM_LENGTH:
            raise ValidationError(
                f"El régimen fiscal debe ser de {TAX_SYSTEM_LENGTH} caracteres (ej: 601)."
            )

    def to_payload(self) -> dict:
        """Serialize to the backend's camelCase customer object."""
        return {
            "legalName": self.legal_name,
            "taxId": self.tax_id,
            "taxSystem": self.tax_system,
            "email": self.email,
            "address": {"zip": self.address.zip},
        }


@dataclass(slots=True)
class InvoiceRequest:
    """Body of POST /api/invoices."""

    order_id: int
    customer: CustomerInput
    cfdi_use: str = DEFAULT_CFDI_USE
    payment_form: str = DEFAULT_PAYMENT_FORM

    def __post_init__(self) -> None:
        self.cfdi_use = (self.cfdi_use or "").strip() or DEFAULT_CFDI_USE
        self.payment_form = (self.payment_form or "").strip() or DEFAULT_PAYMENT_FORM

    def to_payload(self) -> dict:
        """Serialize to the JSON body expected by the backend."""
        return {
            "orderId": self.order_id,
            "customer": self.customer.to_payload(),
            "cfdiUse": self.cfdi_use,
            "paymentForm": self.payment_form,
        }


@dataclass(slots=True)
class InvoiceResult:
    """A generated invoice with its document links already resolved."""

    invoice_id: int
    pdf_url: str
    zip_url: str | None = None
    customer_email: str = ""

    @classmethod
    def from_payload(
        cls, payload: Mapping[str, Any], base_url: str, customer_email: str | None
    ) -> "InvoiceResult":
        """
        Build an InvoiceResult from the generation response.

        Args:
            payload: Response body with invoiceId, pdfUrl and optional zipUrl.
            base_url: Backend base URL used to resolve relative links.
            customer_email: Email captured in the fiscal form, if any.

        Raises:
            RemoteError: If the response carries no invoiceId.
        """
        b = benedict(dict(payload), keyattr_dynamic=True)
        raw_id = b.get("invoiceId")
        try:
            invoice_id = int(raw_id)
        except (TypeError, ValueError) as exc:
            raise RemoteError("La respuesta no incluye invoiceId.") from exc
        return cls(
            invoice_id=invoice_id,
            pdf_url=resolve_url(base_url, b.get("pdfUrl")),
            zip_url=resolve_url(base_url, b.get("zipUrl")) or None,
            customer_email=customer_email or "",
        )
