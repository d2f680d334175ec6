"""
Invoice rows shown on the admin page.

An InvoiceRow is a read-only projection joining the generated invoice, the
order it was issued for and the customer it was issued to. Media links
point at copies uploaded by the backend; when a copy is missing the
backend's own download endpoints are used instead.
"""

from dataclasses import dataclass
from typing import Any, Mapping

from benedict import benedict

from check_invoice_ui.utils import resolve_url

FILE_KINDS = ("pdf", "xml", "zip")


def _optional_str(value: Any) -> str | None:
    return None if value in (None, "") else str(value)


def _optional_int(value: Any) -> int | None:
    try:
        return None if value in (None, "") else int(value)
    except (TypeError, ValueError):
        return None


@dataclass(slots=True)
class InvoiceRow:
    """A generated invoice as listed by GET /api/admin/invoices."""

    invoice_id: int
    order_id: int | None
    facturapi_invoice_id: str
    created_at: str
    folio: str
    numcheque: str
    fecha: str
    total: str
    emailed_at: str | None = None
    uploaded_at: str | None = None
    media_pdf_url: str | None = None
    media_xml_url: str | None = None
    media_zip_url: str | None = None
    customer_id: int | None = None
    tax_id: str | None = None
    legal_name: str | None = None
    email: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "InvoiceRow":
        """Build a row from one element of the `rows` array."""
        b = benedict(dict(payload), keyattr_dynamic=True)
        return cls(
            invoice_id=_optional_int(b.get("invoiceId")) or 0,
            order_id=_optional_int(b.get("orderId")),
            facturapi_invoice_id=str(b.get("facturapiInvoiceId") or ""),
            created_at=str(b.get("createdAt") or ""),
            folio=str(b.get("folio") or ""),
            numcheque=str(b.get("numcheque") or ""),
            fecha=str(b.get("fecha") or ""),
            total=str(b.get("total") or ""),
            emailed_at=_optional_str(b.get("emailedAt")),
            uploaded_at=_optional_str(b.get("uploadedAt")),
            media_pdf_url=_optional_str(b.get("mediaPdfUrl")),
            media_xml_url=_optional_str(b.get("mediaXmlUrl")),
            media_zip_url=_optional_str(b.get("mediaZipUrl")),
            customer_id=_optional_int(b.get("customerId")),
            tax_id=_optional_str(b.get("taxId")),
            legal_name=_optional_str(b.get("legalName")),
            email=_optional_str(b.get("email")),
        )

    def file_links(self, base_url: str) -> dict[str, str]:
        """
        Return the PDF, XML and ZIP links for this invoice.

        Args:
            base_url: Backend base URL for fallback download endpoints.

        Returns:
            Mapping of file kind to absolute URL.
        """
        stored = {
            "pdf": self.media_pdf_url,
            "xml": self.media_xml_url,
            "zip": self.media_zip_url,
        }
        return {
            kind: resolve_url(
                base_url, stored[kind] or f"/api/invoices/{self.invoice_id}/{kind}"
            )
            for kind in FILE_KINDS
        }

