"""
Reflex-compatible view models for the Check Invoice UI.

These flat dataclasses carry display-ready strings so they can be rendered
with rx.foreach without formatting Vars on the frontend.
"""

from dataclasses import dataclass

from check_invoice_ui.models.customer import CustomerRow
from check_invoice_ui.models.invoice import InvoiceRow
from check_invoice_ui.models.order import Order
from check_invoice_ui.utils import format_currency


@dataclass
class OrderModel:
    """One lookup result."""

    id: int = 0
    key: str = ""
    folio: str = ""
    numcheque: str = ""
    mesa: str = ""
    fecha: str = ""
    total: str = ""


@dataclass
class InvoiceRowModel:
    """One generated invoice on the admin page."""

    invoice_id: int = 0
    numcheque: str = ""
    folio: str = ""
    fecha: str = ""
    total: str = ""
    legal_name: str = ""
    email: str = ""
    pdf_link: str = ""
    xml_link: str = ""
    zip_link: str = ""


@dataclass
class CustomerRowModel:
    """One registered customer on the admin page."""

    id: int = 0
    tax_id: str = ""
    legal_name: str = ""
    tax_system: str = ""
    email: str = ""


def order_to_model(order: Order) -> OrderModel:
    """
    Convert an Order into its display model.

    Args:
        order: Parsed lookup result.

    Returns:
        OrderModel with formatted date and total.
    """
    return OrderModel(
        id=order.id,
        key=str(order.id),
        folio=order.folio,
        numcheque=order.numcheque,
        mesa=order.mesa or "",
        fecha=order.fecha.strftime("%Y-%m-%d %H:%M") if order.fecha else "",
        total=format_currency(order.total),
    )


def invoice_row_to_model(row: InvoiceRow, base_url: str) -> InvoiceRowModel:
    """Convert an InvoiceRow, resolving its file links against base_url."""
    links = row.file_links(base_url)
    return InvoiceRowModel(
        invoice_id=row.invoice_id,
        numcheque=row.numcheque,
        folio=row.folio,
        fecha=row.fecha,
        total=row.total,
        legal_name=row.legal_name or "",
        email=row.email or "",
        pdf_link=links["pdf"],
        xml_link=links["xml"],
        zip_link=links["zip"],
    )


def customer_row_to_model(row: CustomerRow) -> CustomerRowModel:
    """Convert a CustomerRow into its display model."""
    return CustomerRowModel(
        id=row.id,
        tax_id=row.tax_id,
        legal_name=row.legal_name,
        tax_system=row.tax_system,
        email=row.email,
    )
