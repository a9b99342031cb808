"""
Extension points for applications embedding the configurator.

Configuration, the preset catalog, and the preview handle backend contract.
"""

from .app_config import (
    ConfiguratorConfig,
    DEFAULT_ENDPOINT_URL,
    set_configurator_config,
    get_configurator_config,
)
from .presets import Preset, PresetRegistry, register_preset, register_default_presets
from .handle_factory import HandleFactory, PreviewHandle

__all__ = [
    "ConfiguratorConfig",
    "DEFAULT_ENDPOINT_URL",
    "set_configurator_config",
    "get_configurator_config",
    "Preset",
    "PresetRegistry",
    "register_preset",
    "register_default_presets",
    "HandleFactory",
    "PreviewHandle",
]
