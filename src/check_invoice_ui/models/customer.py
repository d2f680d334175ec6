"""Registered customers shown on the admin page."""

from dataclasses import dataclass
from typing import Any, Mapping

from benedict import benedict


@dataclass(slots=True)
class CustomerRow:
    """A customer as listed by GET /api/admin/customers."""

    id: int
    tax_id: str
    legal_name: str
    tax_system: str
    email: str
    created_at: str
    updated_at: str
    zip: str | None = None
    facturapi_customer_id: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "CustomerRow":
        """Build a row from one element of the `rows` array."""
        b = benedict(dict(payload), keyattr_dynamic=True)
        try:
            customer_id = int(b.get("id"))
        except (TypeError, ValueError):
            customer_id = 0
        return cls(
            id=customer_id,
            tax_id=str(b.get("taxId") or ""),
            legal_name=str(b.get("legalName") or ""),
            tax_system=str(b.get("taxSystem") or ""),
            email=str(b.get("email") or ""),
            created_at=str(b.get("createdAt") or ""),
            updated_at=str(b.get("updatedAt") or ""),
            zip=b.get("zip") or None,
            facturapi_customer_id=b.get("facturapiCustomerId") or None,
        )
