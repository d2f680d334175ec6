"""
Check Invoice UI: A Reflex application for invoicing restaurant checks.

Customers look up their check by date and ticket number, submit their
fiscal data, and download or email the generated invoice. Administrators
list generated invoices and registered customers.

Subpackages:
- components: Reusable Reflex UI components
- models: Data models and serialization
- services: Invoicing backend access (HTTP and demo implementations)
- data: Static demo fixtures
- lib: Logging and persisted settings

Main entry points:
- app.main(): Start the development server
- app.app: The Reflex application instance
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
