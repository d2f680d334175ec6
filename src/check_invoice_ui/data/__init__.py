"""
Static demo data for the Check Invoice UI.

This package contains fixture data used by DemoInvoicingService for
development, testing, and demonstrations without a running backend.

Modules:
- demo_orders: Order and customer payloads shaped like the backend's JSON
"""
