"""Booking and catalog exceptions.

Raised by the service layer when a request cannot be honoured. ``main`` installs
a handler that renders any ``ShopError`` as ``{"error": ..., "message": ...}``
with the exception's HTTP status.
"""

from __future__ import annotations

from typing import Optional


class ShopError(Exception):
    status_code = 500
    error = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, error: Optional[str] = None):
        super().__init__(message or error or self.error)
        self.message = message
        if error is not None:
            self.error = error

    def to_dict(self) -> dict:
        body = {"error": self.error}
        if self.message and self.message != self.error:
            body["message"] = self.message
        return body


class ValidationError(ShopError):
    """Missing or malformed input."""

    status_code = 400
    error = "Missing required fields"


class InvalidStatus(ShopError):
    """The requested booking status is not one of the recognized values."""

    status_code = 400
    error = "Invalid status"


class InsufficientStock(ShopError):
    """The product does not have enough stock left for the requested quantity."""

    status_code = 400
    error = "Insufficient stock"


class ProductNotFound(ShopError):
    status_code = 404
    error = "Product not found"


class BookingNotFound(ShopError):
    status_code = 404
    error = "Booking not found"


class MethodNotAllowed(ShopError):
    status_code = 405
    error = "Method not allowed"


class PersistenceError(ShopError):
    """Unexpected store failure. Never retried."""

    status_code = 500
    error = "Persistence error"
