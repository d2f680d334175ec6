"""Reflex configuration for the Check Invoice UI application."""

import reflex as rx

config = rx.Config(
    app_name="check_invoice_ui",
    # Use the src directory structure
    app_module_import="check_invoice_ui.app",
)
