"""Snapshot of a configuration in the shape the generation endpoint expects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from qrposter.core.models import PosterConfig
from qrposter.protocols.app_config import ConfiguratorConfig, get_configurator_config

TRIMMED_FIELDS = ("shop_name", "upi_id", "tagline")
VERBATIM_FIELDS = ("primary_color", "text_color")


@dataclass(frozen=True)
class PosterPayload:
    """
    Immutable multipart body captured at submit time.

    Later edits to the field store never reach an exchange that already
    captured its payload.
    """
    fields: Tuple[Tuple[str, str], ...]
    logo_field_name: str = "logo"
    logo: Optional[Tuple[str, bytes, str]] = None

    def data(self) -> Dict[str, str]:
        return dict(self.fields)

    def files(self) -> Optional[Dict[str, Tuple[str, bytes, str]]]:
        if self.logo is None:
            return None
        return {self.logo_field_name: self.logo}


def build_payload(config: PosterConfig, app_config: Optional[ConfiguratorConfig] = None) -> PosterPayload:
    """Translate a configuration snapshot into a transmittable payload.

    Free-text fields are trimmed, colors are passed verbatim, auxiliary fields
    go out under their wire names and the logo, if any, is attached as a file.
    """
    app_config = app_config or get_configurator_config()

    fields = [(name, (getattr(config, name) or "").strip()) for name in TRIMMED_FIELDS]
    fields.extend((name, getattr(config, name)) for name in VERBATIM_FIELDS)
    for name, value in config.extras.items():
        fields.append((app_config.wire_name(name), (value or "").strip()))

    logo = None
    if config.logo is not None:
        logo = (config.logo.filename, config.logo.content, config.logo.content_type)

    return PosterPayload(
        fields=tuple(fields),
        logo_field_name=app_config.logo_field_name,
        logo=logo,
    )
