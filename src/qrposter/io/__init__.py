"""
Network boundary and error taxonomy.

The HTTP client for the document-generation endpoint and the exceptions
every layer of the configurator raises or classifies.
"""

from .exceptions import (
    PosterError,
    UnknownFieldError,
    PosterValidationError,
    MissingShopName,
    InvalidPaymentIdentifier,
    ExchangeError,
    TransportUnreachable,
    UnexpectedContentType,
    ExchangeCancelled,
)
from .client import PosterClient, media_type

__all__ = [
    "PosterError",
    "UnknownFieldError",
    "PosterValidationError",
    "MissingShopName",
    "InvalidPaymentIdentifier",
    "ExchangeError",
    "TransportUnreachable",
    "UnexpectedContentType",
    "ExchangeCancelled",
    "PosterClient",
    "media_type",
]
