from __future__ import annotations

from PyQt6.QtCore import QObject, Qt, pyqtSignal
from PyQt6.QtGui import QGuiApplication

from stopwatch.core.lifecycle import LifecycleState


QT_STATES = {
    Qt.ApplicationState.ApplicationActive: LifecycleState.ACTIVE,
    Qt.ApplicationState.ApplicationInactive: LifecycleState.INACTIVE,
    Qt.ApplicationState.ApplicationHidden: LifecycleState.BACKGROUND,
    Qt.ApplicationState.ApplicationSuspended: LifecycleState.BACKGROUND,
}


def to_lifecycle_state(state: Qt.ApplicationState) -> LifecycleState | None:
    return QT_STATES.get(state)


class QtLifecycleBridge(QObject):
    """Re-emits Qt application state changes as lifecycle state values."""

    state_changed = pyqtSignal(str)

    def __init__(self, app: QGuiApplication, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._app = app
        app.applicationStateChanged.connect(self._on_application_state_changed)

    def _on_application_state_changed(self, state: Qt.ApplicationState) -> None:
        lifecycle_state = to_lifecycle_state(state)
        if lifecycle_state is not None:
            self.state_changed.emit(lifecycle_state.value)

    def close(self) -> None:
        self._app.applicationStateChanged.disconnect(self._on_application_state_changed)
