"""
Configurator core.

Field store, logo preview handle lifecycle, validation and the request
lifecycle controller. Everything here runs on the GUI thread except the
blocking HTTP call, which BackgroundTask moves to a worker thread.
"""

from .models import (
    CORE_FIELDS,
    LogoFile,
    PosterArtifact,
    PosterConfig,
    default_poster_config,
    field_values,
)
from .field_store import FieldStore
from .preview_handles import LogoPreviewManager, TempFileHandle, TempFileHandleFactory
from .validation import validate, is_valid_upi
from .payload import PosterPayload, build_payload
from .background_task import BackgroundTask, BackgroundTaskManager
from .exchange import ExchangeState, PosterRequestController, suggested_filename
from .session import ConfiguratorSession

__all__ = [
    "CORE_FIELDS",
    "LogoFile",
    "PosterArtifact",
    "PosterConfig",
    "default_poster_config",
    "field_values",
    "FieldStore",
    "LogoPreviewManager",
    "TempFileHandle",
    "TempFileHandleFactory",
    "validate",
    "is_valid_upi",
    "PosterPayload",
    "build_payload",
    "BackgroundTask",
    "BackgroundTaskManager",
    "ExchangeState",
    "PosterRequestController",
    "suggested_filename",
    "ConfiguratorSession",
]
