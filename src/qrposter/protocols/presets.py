"""Preset registry for one-click branding.

Allows applications to register named partial configurations. Applying a
preset merges its values into the live configuration; fields the preset does
not name are left alone.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional


@dataclass(frozen=True)
class Preset:
    """Named, immutable partial configuration."""
    name: str
    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))


class PresetRegistry:
    """Registry for presets by name.

    Example:
        from qrposter.protocols import Preset, PresetRegistry

        PresetRegistry.register(Preset("Mithai", {
            "tagline": "Fresh every morning",
            "primary_color": "#e65100",
        }))
    """

    _presets: Dict[str, Preset] = {}

    @classmethod
    def register(cls, preset: Preset) -> None:
        """Register a preset, replacing any preset with the same name."""
        cls._presets[preset.name] = preset

    @classmethod
    def get(cls, name: str) -> Optional[Preset]:
        return cls._presets.get(name)

    @classmethod
    def names(cls) -> List[str]:
        """Registered preset names in registration order."""
        return list(cls._presets)

    @classmethod
    def clear(cls) -> None:
        cls._presets.clear()


# Convenience function for registration
def register_preset(name: str, values: Mapping[str, Any]) -> Preset:
    """Build and register a preset.

    Args:
        name: Display name
        values: Partial configuration (field name -> value)

    Returns:
        The registered Preset
    """
    preset = Preset(name, values)
    PresetRegistry.register(preset)
    return preset


def register_default_presets() -> None:
    """Register the starter catalog shown by the configurator window."""
    register_preset("Classic Indigo", {"primary_color": "#646cff", "text_color": "#000000"})
    register_preset("Sweet Shop", {
        "tagline": "Fresh sweets every day",
        "primary_color": "#e65100",
        "text_color": "#ffffff",
    })
    register_preset("Kirana Store", {
        "tagline": "Daily needs at fair prices",
        "primary_color": "#2e7d32",
        "text_color": "#ffffff",
    })
    register_preset("Cafe", {
        "tagline": "Brewed with love",
        "primary_color": "#4e342e",
        "text_color": "#fff8e1",
    })
