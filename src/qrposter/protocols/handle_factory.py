"""Protocols for preview handle backends."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from qrposter.core.models import LogoFile


class PreviewHandle(Protocol):
    """Locally resolvable reference to logo bytes."""

    @property
    def path(self) -> Path:
        ...


class HandleFactory(Protocol):
    """Creates and releases preview handles. Every create is paired with one release."""

    def create(self, logo: "LogoFile") -> PreviewHandle:
        ...

    def release(self, handle: PreviewHandle) -> None:
        ...
