"""Immutable records shared by the configurator core."""

from __future__ import annotations

import dataclasses
import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from qrposter.io.exceptions import UnknownFieldError
from qrposter.protocols.app_config import get_configurator_config

logger = logging.getLogger(__name__)

CORE_FIELDS: Tuple[str, ...] = (
    "shop_name",
    "upi_id",
    "tagline",
    "primary_color",
    "text_color",
    "logo",
)
LOGO_FIELD = "logo"


def _text(value: Any) -> str:
    # Text slots never hold None
    return "" if value is None else str(value)


@dataclass(frozen=True)
class LogoFile:
    """Opaque reference to user-supplied logo bytes."""
    filename: str
    content: bytes = field(repr=False)
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "LogoFile":
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content=path.read_bytes(),
            content_type=content_type or "application/octet-stream",
        )

    @property
    def suffix(self) -> str:
        return Path(self.filename).suffix


@dataclass(frozen=True)
class PosterConfig:
    """
    The full branding record for one session.

    Always fully populated: optional text fields hold "" and the logo holds
    None when unset. Auxiliary fields live in ``extras``, one entry per
    configured auxiliary field name.
    """
    shop_name: str = ""
    upi_id: str = ""
    tagline: str = ""
    primary_color: str = "#000000"
    text_color: str = "#000000"
    logo: Optional[LogoFile] = None
    extras: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        # Freeze extras so snapshots cannot be mutated through the mapping
        if not isinstance(self.extras, MappingProxyType):
            object.__setattr__(self, "extras", MappingProxyType(dict(self.extras)))

    @property
    def field_names(self) -> Tuple[str, ...]:
        return CORE_FIELDS + tuple(self.extras)

    def get(self, name: str) -> Any:
        """Read any field, core or auxiliary, by name."""
        if name in CORE_FIELDS:
            return getattr(self, name)
        if name in self.extras:
            return self.extras[name]
        raise UnknownFieldError(name)

    def with_values(self, values: Mapping[str, Any]) -> "PosterConfig":
        """Return a copy with ``values`` applied. Rejects unknown names before applying any."""
        unknown = [name for name in values if name not in CORE_FIELDS and name not in self.extras]
        if unknown:
            raise UnknownFieldError(unknown[0])

        core = {}
        extras = dict(self.extras)
        for name, value in values.items():
            if name == LOGO_FIELD:
                core[name] = value
            elif name in CORE_FIELDS:
                core[name] = _text(value)
            else:
                extras[name] = _text(value)
        return dataclasses.replace(self, extras=MappingProxyType(extras), **core)

    def diff(self, other: "PosterConfig") -> frozenset:
        """Names of fields whose values differ between two records."""
        names = set(self.field_names) | set(other.field_names)
        changed = set()
        for name in names:
            mine = self.get(name) if name in self.field_names else None
            theirs = other.get(name) if name in other.field_names else None
            if mine != theirs:
                changed.add(name)
        return frozenset(changed)


def default_poster_config(auxiliary_fields: Optional[Iterable[str]] = None) -> PosterConfig:
    """Session-start defaults."""
    if auxiliary_fields is None:
        auxiliary_fields = get_configurator_config().auxiliary_fields
    return PosterConfig(
        shop_name="My Shop",
        upi_id="payment@bank",
        tagline="Quality you can trust",
        primary_color="#646cff",
        text_color="#000000",
        logo=None,
        extras={name: "" for name in auxiliary_fields},
    )


@dataclass(frozen=True)
class PosterArtifact:
    """A generated poster document ready to hand to the user."""
    content: bytes = field(repr=False)
    filename: str
    content_type: str = "application/pdf"

    def save(self, directory: Union[str, Path]) -> Path:
        """Write the document into ``directory`` without overwriting existing files."""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        target = directory / self.filename
        stem, suffix = target.stem, target.suffix
        counter = 1
        while target.exists():
            target = directory / f"{stem} ({counter}){suffix}"
            counter += 1
        target.write_bytes(self.content)
        logger.info(f"Saved poster to {target} ({len(self.content)} bytes)")
        return target


def field_values(config: PosterConfig) -> Dict[str, Any]:
    """Flatten a record into name -> value, auxiliary fields included."""
    return {name: config.get(name) for name in config.field_names}
