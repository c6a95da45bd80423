from PySide6.QtCore import QObject, Signal


class DisclosureController(QObject):
    """Per-widget code visibility. Unknown identifiers are hidden."""

    sig_changed = Signal(str, bool)
    sig_reset = Signal()

    def __init__(self):
        super().__init__()
        self._visible: dict[str, bool] = {}

    def toggle(self, identifier: str) -> bool:
        visible = not self._visible.get(identifier, False)
        self._visible[identifier] = visible
        self.sig_changed.emit(identifier, visible)
        return visible

    def is_visible(self, identifier: str) -> bool:
        return self._visible.get(identifier, False)

    def reset(self) -> None:
        self._visible.clear()
        self.sig_reset.emit()

    def entries(self) -> dict[str, bool]:
        return dict(self._visible)
