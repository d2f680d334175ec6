"""
Admin page components.

Provides the token/filter card and the tabbed invoice and customer tables.
"""

import reflex as rx

from check_invoice_ui.admin_state import AdminState
from check_invoice_ui.models.reflex_models import CustomerRowModel, InvoiceRowModel

_INVOICE_COLUMNS = (
    "InvoiceID",
    "Numcheque",
    "Folio",
    "Fecha",
    "Total",
    "Cliente",
    "Email",
    "Archivos",
)
_CUSTOMER_COLUMNS = ("ID", "RFC", "Nombre/Razón", "Régimen", "Email")


def admin_controls() -> rx.Component:
    """
    Build the card with the token field and the search filter.

    Returns:
        The controls card component.
    """
    return rx.box(
        rx.box(
            rx.text("Admin token", class_name="label"),
            rx.input(
                type="password",
                value=AdminState.token,
                on_change=AdminState.set_token,
            ),
            rx.button("Guardar token", on_click=AdminState.save_token, variant="soft"),
            class_name="field",
        ),
        rx.box(
            rx.text("Filtro (numcheque / RFC / nombre)", class_name="label"),
            rx.input(
                value=AdminState.query,
                on_change=AdminState.set_query,
                placeholder="Ej: 12388",
            ),
            rx.box(
                rx.button(
                    "Buscar facturas",
                    on_click=AdminState.fetch_invoices,
                    loading=AdminState.loading_invoices,
                ),
                rx.button(
                    "Buscar clientes",
                    on_click=AdminState.fetch_customers,
                    loading=AdminState.loading_customers,
                    variant="outline",
                ),
                class_name="button-row",
            ),
            class_name="field wide",
        ),
        class_name="card admin-controls",
    )


def admin_tables() -> rx.Component:
    """Build the Facturas / Clientes tabs."""
    return rx.tabs.root(
        rx.tabs.list(
            rx.tabs.trigger("Facturas", value="invoices"),
            rx.tabs.trigger("Clientes", value="customers"),
        ),
        rx.tabs.content(
            rx.text(AdminState.invoice_summary, class_name="muted"),
            _table(_INVOICE_COLUMNS, rx.foreach(AdminState.invoices, _invoice_row)),
            value="invoices",
        ),
        rx.tabs.content(
            rx.text(AdminState.customer_summary, class_name="muted"),
            _table(_CUSTOMER_COLUMNS, rx.foreach(AdminState.customers, _customer_row)),
            value="customers",
        ),
        value=AdminState.active_tab,
        on_change=AdminState.set_active_tab,
    )


def _table(columns: tuple[str, ...], rows: rx.Component) -> rx.Component:
    return rx.box(
        rx.table.root(
            rx.table.header(
                rx.table.row(
                    *[rx.table.column_header_cell(title) for title in columns]
                ),
            ),
            rx.table.body(rows),
            variant="surface",
        ),
        class_name="table-scroll",
    )


def _invoice_row(row: InvoiceRowModel) -> rx.Component:
    """Build one row of the invoices table."""
    return rx.table.row(
        rx.table.cell(row.invoice_id),
        rx.table.cell(row.numcheque),
        rx.table.cell(row.folio),
        rx.table.cell(row.fecha),
        rx.table.cell(row.total),
        rx.table.cell(row.legal_name),
        rx.table.cell(row.email),
        rx.table.cell(
            rx.box(
                rx.link("PDF", href=row.pdf_link, is_external=True),
                rx.link("XML", href=row.xml_link, is_external=True),
                rx.link("ZIP", href=row.zip_link, is_external=True),
                class_name="button-row",
            )
        ),
    )


def _customer_row(row: CustomerRowModel) -> rx.Component:
    """Build one row of the customers table."""
    return rx.table.row(
        rx.table.cell(row.id),
        rx.table.cell(row.tax_id),
        rx.table.cell(row.legal_name),
        rx.table.cell(row.tax_system),
        rx.table.cell(row.email),
    )
