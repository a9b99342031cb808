"""
User-facing notices for validation errors, failures and successful downloads.

Transport failures and content-type failures deliberately read the same to
the user; the distinction lives in the logs.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from PyQt6.QtWidgets import QMessageBox, QWidget

from qrposter.io.exceptions import (
    ExchangeError,
    InvalidPaymentIdentifier,
    MissingShopName,
    PosterValidationError,
)


class NoticeLevel(Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    level: NoticeLevel
    title: str
    text: str


SERVER_TIMEOUT_NOTICE = Notice(
    NoticeLevel.ERROR,
    "Server Timeout",
    "The server is still warming up. Please try again in 10 seconds.",
)


def describe_error(error: Exception) -> Notice:
    """Map a classified error to the notice the user sees."""
    if isinstance(error, MissingShopName):
        return Notice(NoticeLevel.ERROR, error.title, error.message)
    if isinstance(error, InvalidPaymentIdentifier):
        return Notice(NoticeLevel.WARNING, error.title, error.message)
    if isinstance(error, PosterValidationError):
        return Notice(NoticeLevel.WARNING, error.title, error.message)
    if isinstance(error, ExchangeError):
        return SERVER_TIMEOUT_NOTICE
    return Notice(NoticeLevel.ERROR, "Error", str(error))


def describe_download(path: Optional[Path]) -> Notice:
    text = "Your professional QR poster is ready to print."
    if path is not None:
        text = f"{text}\nSaved to {path}"
    return Notice(NoticeLevel.SUCCESS, "Downloaded!", text)


def show_notice(parent: Optional[QWidget], notice: Notice) -> None:
    """Display a notice as a message box."""
    if notice.level is NoticeLevel.SUCCESS:
        QMessageBox.information(parent, notice.title, notice.text)
    elif notice.level is NoticeLevel.WARNING:
        QMessageBox.warning(parent, notice.title, notice.text)
    else:
        QMessageBox.critical(parent, notice.title, notice.text)
