"""
Shared UI services.
"""

from .signal_service import SignalService

__all__ = [
    "SignalService",
]
