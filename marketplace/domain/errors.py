# marketplace/domain/errors.py
"""
Domain errors.

Every error carries an ErrorKind so the request layer can map it to a
status code without looking at the message text.
"""
from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    CONFLICT = "CONFLICT"
    VALIDATION = "VALIDATION"
    INFRASTRUCTURE = "INFRASTRUCTURE"


class MarketplaceError(Exception):
    kind: ErrorKind = ErrorKind.INFRASTRUCTURE

    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class NotFoundError(MarketplaceError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, identifier=None):
        detail = None
        if identifier is not None:
            detail = f"No {resource.lower()} with identifier '{identifier}' exists"
        super().__init__(f"{resource} not found", detail)


class ForbiddenError(MarketplaceError):
    kind = ErrorKind.FORBIDDEN


class AuthenticationError(MarketplaceError):
    kind = ErrorKind.UNAUTHENTICATED

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class ConflictError(MarketplaceError):
    kind = ErrorKind.CONFLICT


class EmptyCartError(ConflictError):
    def __init__(self):
        super().__init__("Cart is empty")


class InvalidStatusTransitionError(ConflictError):
    def __init__(self, current: str, new: str):
        super().__init__(
            "Invalid order status transition",
            f"Cannot move an order from '{current}' to '{new}'",
        )


class InvalidValueError(MarketplaceError):
    kind = ErrorKind.VALIDATION
