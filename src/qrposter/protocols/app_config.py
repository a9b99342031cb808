"""Base configuration class for the poster configurator.

Provides hooks for applications to point the configurator at a different
generation endpoint or to change the set of auxiliary fields.
"""

from typing import Dict, Optional, Tuple
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_ENDPOINT_URL = "https://myqr-backend-2q84.onrender.com/generate-pdf"


@dataclass
class ConfiguratorConfig:
    """Configuration for the configurator session and its network exchange.

    Applications can subclass this to provide custom configuration.

    Attributes:
        endpoint_url: Remote document-generation endpoint (POST, multipart)
        request_timeout_s: Total timeout for one exchange; sized for host cold starts
        expected_content_type: Media type a successful response must declare
        logo_field_name: Multipart field name the logo file is attached under
        auxiliary_fields: Extra free-text fields carried in the configuration
        wire_aliases: Form field name -> multipart key, for fields renamed on the wire
        shop_name_max_length: Input limit applied by the shop name editor
        filename_suffix: Appended to the sanitized shop name for downloads
        download_dir: Where generated posters are written (None = ~/Downloads)
        preview_temp_dir: Where preview handles are materialized (None = system temp)
    """

    endpoint_url: str = DEFAULT_ENDPOINT_URL
    request_timeout_s: float = 90.0
    expected_content_type: str = "application/pdf"
    logo_field_name: str = "logo"
    auxiliary_fields: Tuple[str, ...] = ("instagram", "website")
    wire_aliases: Dict[str, str] = field(default_factory=lambda: {"website": "website_url"})
    shop_name_max_length: int = 25
    filename_suffix: str = "_MYQR.pdf"
    download_dir: Optional[str] = None
    preview_temp_dir: Optional[str] = None

    def wire_name(self, field_name: str) -> str:
        """Return the multipart key a form field is transmitted under."""
        return self.wire_aliases.get(field_name, field_name)

    def resolve_download_dir(self) -> Path:
        if self.download_dir:
            return Path(self.download_dir)
        return Path.home() / "Downloads"


# Global config instance (set by application)
_configurator_config: Optional[ConfiguratorConfig] = None


def set_configurator_config(config: ConfiguratorConfig) -> None:
    """Set the global configurator configuration.

    Args:
        config: ConfiguratorConfig instance
    """
    global _configurator_config
    _configurator_config = config


def get_configurator_config() -> ConfiguratorConfig:
    """Get the current configurator configuration.

    Returns:
        Current ConfiguratorConfig or default if not set
    """
    if _configurator_config is None:
        return ConfiguratorConfig()
    return _configurator_config
