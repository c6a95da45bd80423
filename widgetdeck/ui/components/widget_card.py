from typing import Optional

from PySide6.QtWidgets import QFrame, QLabel, QHBoxLayout
from PySide6.QtCore import Signal, Qt

from widgetdeck.core.presentation import CardModel
from widgetdeck.core.style import BG_CARD, FG_TEXT, FG_DIM, FG_ACCENT
from widgetdeck.ui.components.atoms import import_vbox, FieldLabel, LinkButton
from widgetdeck.ui.components.code_view import CodeView


class WidgetCard(QFrame):
    sig_toggle = Signal(str)

    def __init__(self, model: CardModel, code_max_height=384, parent=None):
        super().__init__(parent)
        self.identifier = model.identifier
        self.code_max_height = code_max_height
        self.code_view: Optional[CodeView] = None

        self.setObjectName("WidgetCard")
        self.setStyleSheet(f"QFrame#WidgetCard {{ background: {BG_CARD}; border-radius: 6px; }}")
        self.layout_main = import_vbox(self)

        self.lbl_title = QLabel(model.title)
        self.lbl_title.setStyleSheet(f"color: {FG_TEXT}; font-size: 16px; font-weight: bold; background: transparent;")
        self.lbl_title.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self.layout_main.addWidget(self.lbl_title)

        self.detail_labels = []
        if model.details or model.installed is not None:
            row = QHBoxLayout()
            row.setSpacing(12)
            for caption, value in model.details:
                field = FieldLabel(caption, value)
                self.detail_labels.append(field)
                row.addWidget(field)
            if model.installed is not None:
                self.lbl_installed = QLabel("INSTALLED" if model.installed else "NOT INSTALLED")
                color = FG_ACCENT if model.installed else FG_DIM
                self.lbl_installed.setStyleSheet(f"color: {color}; font-size: 10px; font-weight: bold; background: transparent;")
                row.addWidget(self.lbl_installed)
            row.addStretch()
            self.layout_main.addLayout(row)

        self.lbl_description = None
        if model.description:
            self.lbl_description = QLabel(model.description)
            self.lbl_description.setWordWrap(True)
            self.lbl_description.setStyleSheet(f"color: {FG_TEXT}; font-size: 12px; background: transparent;")
            self.layout_main.addWidget(self.lbl_description)

        self.btn_toggle = LinkButton(model.toggle_label)
        self.btn_toggle.clicked.connect(lambda: self.sig_toggle.emit(self.identifier))
        self.layout_main.addWidget(self.btn_toggle, alignment=Qt.AlignLeft)

        self.apply(model)

    def apply(self, model: CardModel) -> None:
        """Sync toggle label and code block with a freshly described model."""
        self.btn_toggle.setText(model.toggle_label)
        if model.code is None:
            if self.code_view is not None:
                self.layout_main.removeWidget(self.code_view)
                self.code_view.deleteLater()
                self.code_view = None
            return
        if self.code_view is None:
            self.code_view = CodeView(model.code.text, model.code.language, self.code_max_height)
            self.layout_main.addWidget(self.code_view)

    @property
    def code_visible(self) -> bool:
        return self.code_view is not None
