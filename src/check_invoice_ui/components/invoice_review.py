"""
Invoice review dialog.

Opens after a successful generation with the PDF preview, download links
and the email delivery button.
"""

import reflex as rx

from check_invoice_ui.state import InvoiceRequestState


def invoice_review() -> rx.Component:
    """
    Build the review dialog bound to InvoiceRequestState.review_open.

    Returns:
        The dialog component.
    """
    return rx.dialog.root(
        rx.dialog.content(
            rx.dialog.title("Factura (PDF)"),
            rx.box(
                _link_button(
                    "Abrir / Descargar PDF", "file-text", InvoiceRequestState.pdf_url
                ),
                _link_button(
                    "Descargar ZIP (PDF+XML)", "archive", InvoiceRequestState.zip_url
                ),
                rx.button(
                    rx.icon("mail", size=16),
                    "Enviar a email",
                    on_click=InvoiceRequestState.send_invoice_email,
                    loading=InvoiceRequestState.sending_email,
                    disabled=~InvoiceRequestState.can_send_email,
                ),
                rx.text(InvoiceRequestState.email_target, class_name="muted truncate"),
                class_name="review-actions",
            ),
            rx.el.iframe(src=InvoiceRequestState.pdf_url, class_name="pdf-frame"),
            rx.dialog.close(
                rx.button("Cerrar", variant="soft", color_scheme="gray"),
            ),
            max_width="980px",
        ),
        open=InvoiceRequestState.review_open,
        on_open_change=InvoiceRequestState.set_review_open,
    )


def _link_button(label: str, icon: str, href) -> rx.Component:
    """Build a download button that is disabled when href is empty."""
    return rx.cond(
        href != "",
        rx.link(
            rx.button(rx.icon(icon, size=16), label, variant="outline"),
            href=href,
            is_external=True,
        ),
        rx.button(rx.icon(icon, size=16), label, variant="outline", disabled=True),
    )
