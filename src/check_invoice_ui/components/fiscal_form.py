"""
Fiscal data form for the customer page.

The whole fieldset is disabled until an order is selected. Submitting
sends every field to InvoiceRequestState.generate_invoice, which validates
them before any request is made.
"""

import reflex as rx

from check_invoice_ui.models.order import DEFAULT_CFDI_USE, DEFAULT_PAYMENT_FORM
from check_invoice_ui.state import InvoiceRequestState


def fiscal_form() -> rx.Component:
    """
    Build the "2) Datos fiscales" card.

    Returns:
        The fiscal form component.
    """
    return rx.box(
        rx.box(
            rx.heading("2) Datos fiscales", size="4", as_="h2"),
            rx.text(InvoiceRequestState.selected_summary, class_name="muted"),
            class_name="card-header",
        ),
        rx.form(
            rx.el.fieldset(
                rx.box(
                    _input(
                        "Razón social / Nombre",
                        "legalName",
                        "Ej: Juan Pérez SA de CV",
                        required=True,
                    ),
                    _input(
                        "Régimen fiscal (taxSystem)",
                        "taxSystem",
                        "601",
                        required=True,
                        default_value="601",
                        max_length=3,
                    ),
                    _input("RFC", "taxId", "Ej: XAXX010101000", required=True),
                    _input("Email", "email", "correo@ejemplo.com", type="email"),
                    _input("Código Postal (CP)", "zip", "Ej: 03100"),
                    _input(
                        "Uso CFDI",
                        "cfdiUse",
                        DEFAULT_CFDI_USE,
                        default_value=DEFAULT_CFDI_USE,
                    ),
                    _input(
                        "Forma de pago",
                        "paymentForm",
                        DEFAULT_PAYMENT_FORM,
                        default_value=DEFAULT_PAYMENT_FORM,
                    ),
                    class_name="form-grid",
                ),
                rx.button(
                    "Generar factura",
                    type="submit",
                    loading=InvoiceRequestState.generating,
                ),
                disabled=~InvoiceRequestState.can_generate,
                class_name="fieldset",
            ),
            on_submit=InvoiceRequestState.generate_invoice,
            reset_on_submit=False,
        ),
        class_name="card",
    )


def _input(label: str, name: str, placeholder: str, **props) -> rx.Component:
    """Build a labelled form input."""
    return rx.box(
        rx.text(label, class_name="label"),
        rx.input(name=name, placeholder=placeholder, **props),
        class_name="field",
    )
