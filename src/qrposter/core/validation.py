"""Submit-time validation. Pure; never touches the network."""

from typing import Optional

from qrposter.core.models import PosterConfig
from qrposter.io.exceptions import (
    InvalidPaymentIdentifier,
    MissingShopName,
    PosterValidationError,
)

UPI_SEPARATOR = "@"


def is_valid_upi(upi_id: str) -> bool:
    return UPI_SEPARATOR in (upi_id or "").strip()


def validate(config: PosterConfig) -> Optional[PosterValidationError]:
    """Return the first violation, or None if the configuration can be submitted.

    Checks run in a fixed order so the reported error is deterministic:
    shop name first, then the UPI ID. Tagline, colors, auxiliary fields and
    the logo are always acceptable.
    """
    if not (config.shop_name or "").strip():
        return MissingShopName()
    if not is_valid_upi(config.upi_id):
        return InvalidPaymentIdentifier()
    return None
