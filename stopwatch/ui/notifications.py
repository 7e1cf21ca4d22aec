from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QTimer
from PyQt6.QtGui import QIcon
from PyQt6.QtWidgets import QSystemTrayIcon

from stopwatch.core.notifications import IMMEDIATE, NotificationMessage


logger = logging.getLogger(__name__)

MESSAGE_TIMEOUT_MS = 5000


class TrayNotificationScheduler(QObject):
    """Shows notifications as system tray balloons, optionally after a delay."""

    def __init__(self, icon: QIcon, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._tray = QSystemTrayIcon(icon, self)
        self._available = QSystemTrayIcon.isSystemTrayAvailable()
        if self._available:
            self._tray.show()
        else:
            logger.warning("System tray is not available; notifications are disabled")

    def schedule(self, message: NotificationMessage, delay_ms: int = IMMEDIATE) -> None:
        if delay_ms <= 0:
            self._show(message)
            return
        QTimer.singleShot(delay_ms, lambda: self._show(message))

    def _show(self, message: NotificationMessage) -> None:
        if not self._available:
            logger.debug("Dropped notification %r", message.title)
            return
        self._tray.showMessage(
            message.title,
            message.body,
            QSystemTrayIcon.MessageIcon.Information,
            MESSAGE_TIMEOUT_MS,
        )
