"""
Top-level windows and user notices.
"""

from .configurator_window import ConfiguratorWindow
from .notifications import Notice, NoticeLevel, describe_error, describe_download, show_notice

__all__ = [
    "ConfiguratorWindow",
    "Notice",
    "NoticeLevel",
    "describe_error",
    "describe_download",
    "show_notice",
]
