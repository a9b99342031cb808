"""Poster configurator exceptions.

Validation errors never reach the network. Exchange errors are produced by
the HTTP client and classified by the request controller; they all share the
same user-facing message but stay distinct types for diagnostics.
"""

from typing import Optional


class PosterError(Exception):
    """Base class for every error raised by qrposter."""


class UnknownFieldError(PosterError, KeyError):
    """Raised when a field name is not part of the configuration record."""

    def __init__(self, field_name: str):
        super().__init__(field_name)
        self.field_name = field_name

    def __str__(self) -> str:
        return f"Unknown configuration field: {self.field_name!r}"


class PosterValidationError(PosterError):
    """Local validation failure; recoverable by correcting input."""

    title = "Invalid input"
    field_name = ""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingShopName(PosterValidationError):
    title = "Shop Name Missing"
    field_name = "shop_name"

    def __init__(self, message: str = "Please enter a name for your shop."):
        super().__init__(message)


class InvalidPaymentIdentifier(PosterValidationError):
    title = "Invalid UPI ID"
    field_name = "upi_id"

    def __init__(self, message: str = 'UPI ID must contain "@" (e.g., shopname@bank)'):
        super().__init__(message)


class ExchangeError(PosterError):
    """The exchange with the generation endpoint did not yield a document."""


class TransportUnreachable(ExchangeError):
    """Connectivity failure, timeout, or non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UnexpectedContentType(ExchangeError):
    """Success status, but the body is not the expected document type."""

    def __init__(self, content_type: str, expected: str):
        super().__init__(f"Received {content_type or 'untyped'} response, expected {expected}")
        self.content_type = content_type
        self.expected = expected


class ExchangeCancelled(PosterError):
    """The exchange was superseded or torn down. Never shown to the user."""
