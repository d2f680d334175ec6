"""
Local support modules for the Check Invoice UI.

Modules:
    logs: Logging utilities
"""

from check_invoice_ui.lib import logs

__all__ = ["logs"]
