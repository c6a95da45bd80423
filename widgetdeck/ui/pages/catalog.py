from PySide6.QtWidgets import QWidget, QVBoxLayout, QLabel, QScrollArea, QFrame
from PySide6.QtCore import Qt

from widgetdeck.core.catalog import CatalogStore
from widgetdeck.core.disclosure import DisclosureController
from widgetdeck.core.presentation import describe_card
from widgetdeck.core.state import CatalogStatus
from widgetdeck.core.style import BG_MAIN, FG_DIM, FG_ERROR, FG_WARN, SCROLLBAR_STYLE
from widgetdeck.ui.components.widget_card import WidgetCard


class PageCatalog(QWidget):
    """
    Card list bound to the catalog store and the disclosure controller.

    The page never writes to either: card toggles are forwarded to the
    disclosure controller, which then notifies the page. Toggling only
    touches the affected card.
    """

    def __init__(self, store: CatalogStore, disclosure: DisclosureController, config: dict):
        super().__init__()
        self.store = store
        self.disclosure = disclosure
        self.language = config.get("language", "lua")
        self.code_max_height = int(config.get("code_max_height", 384))
        self.widgets = {}
        self.cards = {}

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        self.lbl_banner = QLabel("")
        self.lbl_banner.setWordWrap(True)
        self.lbl_banner.hide()
        layout.addWidget(self.lbl_banner)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setFrameShape(QFrame.NoFrame)
        self.scroll_area.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.scroll_area.setVerticalScrollBarPolicy(Qt.ScrollBarAsNeeded)
        self.scroll_area.setStyleSheet(f"QScrollArea {{ background: {BG_MAIN}; }}" + SCROLLBAR_STYLE)

        self.scroll_content = QWidget()
        self.cards_layout = QVBoxLayout(self.scroll_content)
        self.cards_layout.setContentsMargins(0, 0, 0, 0)
        self.cards_layout.setSpacing(8)
        self.cards_layout.addStretch()
        self.scroll_area.setWidget(self.scroll_content)
        layout.addWidget(self.scroll_area)

        store.sig_catalog.connect(self.set_widgets)
        store.sig_status.connect(self.update_status)
        disclosure.sig_changed.connect(self.on_disclosure_changed)
        disclosure.sig_reset.connect(self.on_disclosure_reset)

        self.set_widgets(store.current_widgets())
        self.update_status(store.status, store.failure_reason or "")

    def set_widgets(self, widgets):
        for card in self.cards.values():
            self.cards_layout.removeWidget(card)
            card.deleteLater()
        self.cards.clear()
        self.widgets = {w.identifier: w for w in widgets}

        for widget in widgets:
            model = describe_card(widget, self.disclosure.is_visible(widget.identifier), self.language)
            card = WidgetCard(model, self.code_max_height)
            card.sig_toggle.connect(self.disclosure.toggle)
            # keep the trailing stretch last
            self.cards_layout.insertWidget(self.cards_layout.count() - 1, card)
            self.cards[widget.identifier] = card

    def on_disclosure_changed(self, identifier, visible):
        card = self.cards.get(identifier)
        widget = self.widgets.get(identifier)
        if card is None or widget is None:
            return
        card.apply(describe_card(widget, visible, self.language))

    def on_disclosure_reset(self):
        for identifier, card in self.cards.items():
            card.apply(describe_card(self.widgets[identifier], False, self.language))

    def update_status(self, status, reason):
        if status == CatalogStatus.LOADING and not self.cards:
            self._show_banner("Loading widgets...", FG_WARN)
        elif status == CatalogStatus.FAILED:
            self._show_banner(f"Refresh failed: {reason}", FG_ERROR)
        elif status == CatalogStatus.LOADED and not self.cards:
            self._show_banner("No widgets found.", FG_DIM)
        else:
            self.lbl_banner.hide()

    def _show_banner(self, text, color):
        self.lbl_banner.setText(text)
        self.lbl_banner.setStyleSheet(f"color: {color}; font-size: 12px; font-weight: bold;")
        self.lbl_banner.show()
