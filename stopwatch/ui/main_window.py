from __future__ import annotations

from PyQt6.QtCore import QTimer, Qt
from PyQt6.QtGui import QAction, QFont, QKeySequence
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from stopwatch.core.formatting import format_time
from stopwatch.core.session import StopwatchSession


class MainWindow(QMainWindow):
    def __init__(self, session: StopwatchSession, tick_interval_ms: int = 10) -> None:
        super().__init__()
        self.setWindowTitle("Stopwatch")
        self.resize(360, 520)

        self.session = session

        self._build_ui()
        self._connect_signals()

        self.frame_timer = QTimer(self)
        self.frame_timer.setInterval(tick_interval_ms)
        self.frame_timer.timeout.connect(self._on_frame)
        self.frame_timer.start()

        self.refresh_laps()
        self._on_frame()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)

        self.time_label = QLabel(format_time(0))
        self.time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        font = QFont("monospace")
        font.setStyleHint(QFont.StyleHint.Monospace)
        font.setPointSize(36)
        self.time_label.setFont(font)
        root_layout.addWidget(self.time_label)

        controls = QHBoxLayout()
        self.reset_btn = QPushButton("Reset")
        self.toggle_btn = QPushButton("Start")
        self.lap_btn = QPushButton("Lap")
        controls.addWidget(self.reset_btn)
        controls.addWidget(self.toggle_btn)
        controls.addWidget(self.lap_btn)
        root_layout.addLayout(controls)

        self.laps_list = QListWidget()
        root_layout.addWidget(self.laps_list, 1)

        space_action = QAction(self)
        space_action.setShortcut(QKeySequence(Qt.Key.Key_Space))
        space_action.triggered.connect(self.toggle)
        self.addAction(space_action)

    def _connect_signals(self) -> None:
        self.reset_btn.clicked.connect(self.reset)
        self.toggle_btn.clicked.connect(self.toggle)
        self.lap_btn.clicked.connect(self.record_lap)

    def toggle(self) -> None:
        self.session.toggle()
        self._update_buttons()

    def record_lap(self) -> None:
        if self.session.record_lap() is not None:
            self.refresh_laps()

    def reset(self) -> None:
        if self.session.reset():
            self.refresh_laps()
            self._on_frame()

    def refresh_laps(self) -> None:
        self.laps_list.clear()
        for lap in self.session.laps.laps:
            QListWidgetItem(f"Lap {lap.index}\t{format_time(lap.duration_ms)}", self.laps_list)

    def _on_frame(self) -> None:
        self.time_label.setText(format_time(self.session.elapsed_ms()))
        self._update_buttons()

    def _update_buttons(self) -> None:
        running = self.session.running
        self.toggle_btn.setText("Stop" if running else "Start")
        self.reset_btn.setEnabled(not running and self.session.elapsed_ms() > 0)
        self.lap_btn.setEnabled(running)

    def closeEvent(self, event) -> None:  # noqa: N802
        self.frame_timer.stop()
        self.session.save_now()
        event.accept()
