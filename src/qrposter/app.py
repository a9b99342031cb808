"""GUI launcher for the poster configurator."""

import logging
import os
import sys
from typing import Optional

from PyQt6.QtWidgets import QApplication

from qrposter.core.session import ConfiguratorSession
from qrposter.protocols import register_default_presets
from qrposter.windows import ConfiguratorWindow

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "QRPOSTER_LOG_LEVEL"


def configure_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_window(app: QApplication, session: Optional[ConfiguratorSession] = None) -> ConfiguratorWindow:
    """Build the main window and tie its session teardown to application quit."""
    window = ConfiguratorWindow(session)
    # closeEvent is not delivered on app.quit() or logout
    app.aboutToQuit.connect(window.session.cancel_session)
    window.resize(960, 640)
    return window


def main() -> int:
    configure_logging()
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("qrposter")

    register_default_presets()
    window = create_window(app)
    window.show()
    logger.info(f"Configurator started; endpoint {window.session.app_config.endpoint_url}")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
