"""
Exception types shared by the workflow, the admin panel and the services.

- ValidationError: missing or malformed local input, raised before any
  network call is made.
- RemoteError: non-success HTTP status or transport failure reported by
  the invoicing backend.
"""


class InvoicingError(Exception):
    """Base class for every error surfaced to the user as a notice."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(InvoicingError):
    """Local input is missing or invalid; nothing was sent to the backend."""


class RemoteError(InvoicingError):
    """
    The backend rejected a request or could not be reached.

    Attributes:
        message: Server supplied error text, or a fallback notice.
        status_code: HTTP status, None for transport failures.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"RemoteError({self.message!r}, status_code={self.status_code})"
