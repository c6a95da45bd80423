import re
from collections import deque

from PySide6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QFrame, QLabel
from PySide6.QtCore import Qt
from PySide6.QtGui import QKeySequence, QShortcut

from widgetdeck.core.catalog import CatalogStore
from widgetdeck.core.presentation import status_text
from widgetdeck.core.state import CatalogStatus
from widgetdeck.core.style import BG_MAIN, BG_BAR, FG_TEXT, FG_DIM, FG_ACCENT, FG_ERROR, FG_WARN
from widgetdeck.ui.pages.catalog import PageCatalog

TRACE_HISTORY = 200

STATUS_COLORS = {
    CatalogStatus.NOT_LOADED: FG_DIM,
    CatalogStatus.LOADING: FG_WARN,
    CatalogStatus.LOADED: FG_ACCENT,
    CatalogStatus.FAILED: FG_ERROR,
}

_TAG = re.compile(r"<[^>]+>")


class WidgetDeckUI(QMainWindow):
    def __init__(self, store: CatalogStore, page: PageCatalog, config: dict):
        super().__init__()
        self.store = store
        self.page = page
        self.trace_lines = deque(maxlen=TRACE_HISTORY)

        self.setWindowTitle("WidgetDeck")
        self.resize(int(config.get("window_width", 900)), int(config.get("window_height", 700)))

        main_widget = QWidget()
        main_widget.setObjectName("MainFrame")
        main_widget.setStyleSheet(f"QWidget#MainFrame {{ background: {BG_MAIN}; }}")
        self.setCentralWidget(main_widget)

        root_layout = QVBoxLayout(main_widget)
        root_layout.setContentsMargins(0, 0, 0, 0)
        root_layout.setSpacing(0)

        self.top_bar = self._build_top_bar()
        root_layout.addWidget(self.top_bar)
        root_layout.addWidget(page)

        # user-initiated retry; there is no automatic one
        self.reload_shortcut = QShortcut(QKeySequence(Qt.Key_F5), self)
        self.reload_shortcut.activated.connect(store.load)

        store.sig_status.connect(self.update_status)
        self.update_status(store.status, store.failure_reason or "")

    def _build_top_bar(self):
        bar = QFrame()
        bar.setFixedHeight(40)
        bar.setStyleSheet(f"background: {BG_BAR}; border-bottom: 1px solid #27272a;")
        layout = QHBoxLayout(bar)
        layout.setContentsMargins(12, 0, 12, 0)

        lbl_title = QLabel("WIDGETDECK")
        lbl_title.setStyleSheet(f"color: {FG_TEXT}; font-weight: bold; font-size: 12px; border: none;")
        self.lbl_status = QLabel("")

        layout.addWidget(lbl_title)
        layout.addStretch()
        layout.addWidget(self.lbl_status)
        return bar

    def update_status(self, status, reason):
        text = status_text(status, reason, len(self.store.current_widgets()))
        color = STATUS_COLORS.get(status, FG_DIM)
        self.lbl_status.setText(text)
        self.lbl_status.setStyleSheet(f"color: {color}; font-size: 10px; font-weight: bold; border: none;")

    def append_trace(self, line):
        self.trace_lines.append(_TAG.sub("", line))
        self.lbl_status.setToolTip("\n".join(list(self.trace_lines)[-20:]))
