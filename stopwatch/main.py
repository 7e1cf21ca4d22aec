from __future__ import annotations

"""Stopwatch application entry point.

Builds the Qt application, restores the saved stopwatch, hooks lifecycle
events to tray notifications and starts the main window.
"""

import logging
import sys

from PyQt6.QtWidgets import QApplication, QStyle

from stopwatch.config import StopwatchConfig
from stopwatch.core.session import StopwatchSession
from stopwatch.data.storage import PersistenceError, StateStore
from stopwatch.ui.lifecycle import QtLifecycleBridge
from stopwatch.ui.main_window import MainWindow
from stopwatch.ui.notifications import TrayNotificationScheduler


logger = logging.getLogger(__name__)


def main() -> int:
    config = StopwatchConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Stopwatch")

    store = StateStore(config.db_path)
    try:
        store.init_db()
    except PersistenceError as exc:
        logger.error("Persistence unavailable: %s", exc)

    icon = app.style().standardIcon(QStyle.StandardPixmap.SP_BrowserReload)
    notifier = TrayNotificationScheduler(icon)

    session = StopwatchSession(store, notifier=notifier, background_delay_ms=config.background_delay_ms)
    session.restore()

    bridge = QtLifecycleBridge(app)
    monitor = session.attach_lifecycle(bridge.state_changed)

    window = MainWindow(session=session, tick_interval_ms=config.tick_interval_ms)
    window.show()
    try:
        return app.exec()
    finally:
        monitor.close()
        bridge.close()
        session.close()


if __name__ == "__main__":
    raise SystemExit(main())
