from PySide6.QtWidgets import QLabel, QPushButton, QHBoxLayout, QWidget
from PySide6.QtCore import Qt

from widgetdeck.core.style import FG_TEXT, FG_DIM


# ======================
# HELPER
# ======================
def import_vbox(widget, l=12, t=12, r=12, b=12):
    from PySide6.QtWidgets import QVBoxLayout
    v = QVBoxLayout(widget)
    v.setContentsMargins(l, t, r, b)
    v.setSpacing(6)
    return v


# ======================
# BASIC UI PRIMITIVES
# ======================

class FieldLabel(QWidget):
    """Bold caption followed by its value, e.g. 'Author  zxbc'."""
    def __init__(self, caption, value, parent=None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)
        self.lbl_caption = QLabel(caption)
        self.lbl_caption.setStyleSheet(f"color: {FG_TEXT}; font-weight: bold; font-size: 11px; background: transparent;")
        self.lbl_value = QLabel(value)
        self.lbl_value.setStyleSheet(f"color: {FG_DIM}; font-size: 11px; background: transparent;")
        self.lbl_value.setTextInteractionFlags(Qt.TextSelectableByMouse)
        layout.addWidget(self.lbl_caption)
        layout.addWidget(self.lbl_value)


class LinkButton(QPushButton):
    def __init__(self, text, parent=None):
        super().__init__(text, parent)
        self.setCursor(Qt.PointingHandCursor)
        self.setFlat(True)
        self.setStyleSheet(f"""
            QPushButton {{ background: transparent; border: none; color: {FG_TEXT}; text-decoration: underline; font-size: 11px; padding: 0; text-align: left; }}
            QPushButton:hover {{ color: {FG_DIM}; }}
        """)