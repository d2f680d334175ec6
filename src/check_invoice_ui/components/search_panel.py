"""
Lookup panel component for the customer page.

Provides the date and numcheque inputs and the search button.
"""

import reflex as rx

from check_invoice_ui.state import InvoiceRequestState


def search_panel() -> rx.Component:
    """
    Build the "1) Buscar tu consumo" card.

    Returns:
        The search panel component.
    """
    return rx.box(
        rx.heading("1) Buscar tu consumo", size="4", as_="h2"),
        rx.box(
            _field(
                "Fecha (YYYY-MM-DD)",
                rx.input(
                    type="date",
                    value=InvoiceRequestState.date,
                    on_change=InvoiceRequestState.set_date,
                    placeholder="YYYY-MM-DD",
                ),
            ),
            _field(
                "Numcheque",
                rx.input(
                    value=InvoiceRequestState.numcheque,
                    on_change=InvoiceRequestState.set_numcheque,
                    placeholder="Ej: 12345",
                ),
            ),
            class_name="form-grid",
        ),
        rx.text("Tip: la búsqueda usa el rango UTC del día.", class_name="muted hint"),
        rx.button(
            rx.cond(InvoiceRequestState.searching, "Buscando...", "Buscar"),
            on_click=InvoiceRequestState.search,
            loading=InvoiceRequestState.searching,
            disabled=InvoiceRequestState.searching,
        ),
        class_name="card search-card",
    )


def _field(label: str, control: rx.Component) -> rx.Component:
    """Label a form control."""
    return rx.box(
        rx.text(label, class_name="label"),
        control,
        class_name="field",
    )
