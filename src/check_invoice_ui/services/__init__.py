"""
Service factory for the Check Invoice UI.

This module provides the get_invoicing_service() factory function that
returns the appropriate InvoicingService implementation based on
configuration.

Available Implementations:
- demo: In-memory service with static orders (no backend required)
- impl: HTTP client for the invoicing backend

The service is cached per kind, so the same instance is reused across all
requests. Configure via the CHECK_INVOICE_SERVICE environment variable.
"""

import os
from functools import cache
from typing import Callable, Dict

from check_invoice_ui.lib import logs
from check_invoice_ui.services.invoicing_service import (
    ADMIN_PAGE_SIZE,
    InvoicingService,
)
from check_invoice_ui.services.invoicing_service_demo import DemoInvoicingService
from check_invoice_ui.services.invoicing_service_impl import InvoicingServiceImpl

LOG = logs.logger(__file__)

_SERVICE_REGISTRY: Dict[str, Callable[[], InvoicingService]] = {
    "demo": lambda: DemoInvoicingService(),
    "impl": lambda: InvoicingServiceImpl(),
}


@cache
def get_invoicing_service(kind: str | None = None) -> InvoicingService:
    """Return the configured invoicing service implementation."""
    resolved_kind = (kind or os.getenv("CHECK_INVOICE_SERVICE", "impl")).lower()
    LOG.info("get_invoicing_service - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _SERVICE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown invoicing service kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()


__all__ = [
    "ADMIN_PAGE_SIZE",
    "DemoInvoicingService",
    "InvoicingService",
    "InvoicingServiceImpl",
    "get_invoicing_service",
]
