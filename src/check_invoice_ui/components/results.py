"""
Lookup results component for Reflex.

Lists the orders returned by a lookup as a radio group. Shown only when
there is at least one result.
"""

import reflex as rx

from check_invoice_ui.models.reflex_models import OrderModel
from check_invoice_ui.state import InvoiceRequestState


def order_results() -> rx.Component:
    """
    Build the results list below the lookup form.

    Returns:
        The results container component.
    """
    return rx.cond(
        InvoiceRequestState.orders.length() > 0,
        rx.box(
            rx.text("Resultados", weight="bold"),
            rx.radio_group.root(
                rx.box(
                    rx.foreach(InvoiceRequestState.orders, _order_item),
                    class_name="order-list",
                ),
                value=InvoiceRequestState.selected_order_key,
                on_change=InvoiceRequestState.select_order,
                disabled=InvoiceRequestState.generating,
            ),
            class_name="results",
        ),
    )


def _order_item(order: OrderModel) -> rx.Component:
    """Build one selectable order row."""
    return rx.box(
        rx.radio_group.item(value=order.key, id=f"order-{order.key}"),
        rx.el.label(
            rx.text(
                f"Folio: {order.folio} · Numcheque: {order.numcheque} · ID: {order.id}",
                weight="bold",
            ),
            rx.text(
                "Fecha: ",
                order.fecha,
                rx.cond(order.mesa != "", f" · Mesa: {order.mesa}", ""),
                " · Total: ",
                order.total,
                class_name="muted",
            ),
            html_for=f"order-{order.key}",
        ),
        class_name="order-item",
    )
