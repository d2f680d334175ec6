"""
Reflex application entry point for the Check Invoice UI.

This module initializes the Reflex app and defines the two pages:
- "/": customer invoice request (lookup, fiscal data, review)
- "/admin": admin listings of invoices and customers
"""

import os

import reflex as rx

from check_invoice_ui.admin_state import AdminState
from check_invoice_ui.components import (
    admin_controls,
    admin_tables,
    fiscal_form,
    invoice_review,
    order_results,
    search_panel,
)
from check_invoice_ui.lib import logs
from check_invoice_ui.services import get_invoicing_service
from check_invoice_ui.state import (
    APP_SUBTITLE,
    APP_TITLE,
    RESTAURANT_NAME,
    InvoiceRequestState,
)

LOG = logs.logger(__file__)

# Configuration from environment
APP_PORT = int(os.getenv("CHECK_INVOICE_PORT", "3000"))
ADMIN_TITLE = f"Admin · Facturación {RESTAURANT_NAME}"

LOG.info("Invoicing backend: %s", get_invoicing_service().base_url)

_FONT_URL = "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap"


def page_header(title: str, subtitle: str | None = None) -> rx.Component:
    """Build the hero text area at the top of a page."""
    return rx.box(
        rx.heading(title, size="6", as_="h1"),
        rx.text(subtitle, class_name="muted") if subtitle else rx.fragment(),
        class_name="page-header",
    )


def index() -> rx.Component:
    """
    Build the customer page.

    Returns:
        Header, lookup card with results, fiscal form and review dialog.
    """
    return rx.box(
        rx.box(
            page_header(APP_TITLE, APP_SUBTITLE),
            rx.box(search_panel(), order_results(), class_name="stack"),
            fiscal_form(),
            invoice_review(),
            class_name="app-container",
        ),
        class_name="app-shell",
    )


def admin() -> rx.Component:
    """Build the admin page."""
    return rx.box(
        rx.box(
            page_header(ADMIN_TITLE),
            admin_controls(),
            admin_tables(),
            class_name="app-container wide",
        ),
        class_name="app-shell",
    )


# Create the Reflex app
app = rx.App(
    theme=rx.theme(
        appearance="light",
        has_background=True,
        radius="large",
    ),
    stylesheets=[
        _FONT_URL,
        "/styles.css",
    ],
)

app.add_page(index, route="/", title=APP_TITLE, on_load=InvoiceRequestState.on_load)
app.add_page(admin, route="/admin", title=ADMIN_TITLE, on_load=AdminState.on_load)


def main() -> None:
    """Run the app on CHECK_INVOICE_PORT through the reflex CLI."""
    import subprocess
    import sys

    command = [sys.executable, "-m", "reflex", "run", "--frontend-port", str(APP_PORT)]
    LOG.info("Starting: %s", " ".join(command))
    raise SystemExit(subprocess.call(command))


if __name__ == "__main__":
    main()
