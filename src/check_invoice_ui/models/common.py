"""
Common state models for the Check Invoice UI.

This module defines objects shared by the customer workflow and the admin
panel:

- Notice: the user-facing outcome of an operation, rendered as a toast
- AdminPage: one page of rows returned by an admin listing endpoint
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


class NoticeLevel(str, Enum):
    """Severity of a notice, matching the toast variants of the UI."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """
    Message shown to the user after an operation.

    Attributes:
        level: Toast variant.
        message: Localized text.
    """

    level: NoticeLevel
    message: str

    @classmethod
    def info(cls, message: str) -> "Notice":
        return cls(NoticeLevel.INFO, message)

    @classmethod
    def success(cls, message: str) -> "Notice":
        return cls(NoticeLevel.SUCCESS, message)

    @classmethod
    def warning(cls, message: str) -> "Notice":
        return cls(NoticeLevel.WARNING, message)

    @classmethod
    def error(cls, message: str) -> "Notice":
        return cls(NoticeLevel.ERROR, message)


@dataclass
class AdminPage(Generic[T]):
    """
    One page of admin rows.

    Attributes:
        rows: Rows in backend order.
        limit: Page size that was requested.
        offset: Offset that was requested.
    """

    rows: Sequence[T] = field(default_factory=list)
    limit: int = 100
    offset: int = 0

