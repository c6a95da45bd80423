from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QObject, Signal

from widgetdeck.core.disclosure import DisclosureController
from widgetdeck.core.normalizer import count_unrecognized, normalize_all
from widgetdeck.core.state import CatalogStatus
from widgetdeck.core.widget import Widget
from widgetdeck.engine.base import WidgetSourcePort


class CatalogStore(QObject):
    """
    Ordered widget catalog for the current session.

    Only the most recently issued load() is authoritative. Each request gets
    a monotonically increasing id; responses carrying an older id are
    dropped on arrival. A failed load keeps the last good catalog.
    """

    sig_status = Signal(CatalogStatus, str)
    sig_catalog = Signal(object)
    sig_trace = Signal(str)

    def __init__(
        self,
        source: WidgetSourcePort,
        disclosure: Optional[DisclosureController] = None,
    ):
        super().__init__()
        self.source = source
        self.disclosure = disclosure
        self._request_id = 0
        self._settled_id = 0
        self._widgets: list[Widget] = []
        self._status: CatalogStatus = CatalogStatus.NOT_LOADED
        self._failure_reason: str | None = None

        source.sig_records.connect(self._on_records)
        source.sig_failed.connect(self._on_failed)

    @property
    def status(self) -> CatalogStatus:
        return self._status

    @property
    def failure_reason(self) -> str | None:
        return self._failure_reason

    @property
    def request_id(self) -> int:
        return self._request_id

    def current_widgets(self) -> list[Widget]:
        return list(self._widgets)

    def load(self) -> int:
        self._request_id += 1
        rid = self._request_id
        self._set_status(CatalogStatus.LOADING)
        self.sig_trace.emit(f"CATALOG: load requested id={rid}")
        try:
            self.source.fetch_all(rid)
        except Exception as e:
            self._on_failed(rid, str(e) or type(e).__name__)
        return rid

    def _is_current(self, rid: int) -> bool:
        if rid == self._request_id and rid != self._settled_id:
            return True
        self.sig_trace.emit(f"CATALOG: discarded stale response id={rid} (current={self._request_id})")
        return False

    def _on_records(self, rid: int, records: object) -> None:
        if not self._is_current(rid):
            return
        if not isinstance(records, (list, tuple)):
            self._on_failed(rid, f"Unexpected response: expected a list, got {type(records).__name__}")
            return

        self._settled_id = rid
        widgets = normalize_all(records)
        unrecognized = count_unrecognized(records)
        if unrecognized:
            self.sig_trace.emit(f"CATALOG: {unrecognized} record(s) matched no known shape")

        self._widgets = widgets
        self._failure_reason = None
        if self.disclosure is not None:
            self.disclosure.reset()
        self.sig_trace.emit(f"CATALOG: loaded {len(widgets)} widget(s) id={rid}")
        self.sig_catalog.emit(list(widgets))
        self._set_status(CatalogStatus.LOADED)

    def _on_failed(self, rid: int, reason: str) -> None:
        if not self._is_current(rid):
            return
        self._settled_id = rid
        self._failure_reason = reason
        self.sig_trace.emit(f"<span style='color:red'>CATALOG: load failed id={rid}: {reason}</span>")
        self._set_status(CatalogStatus.FAILED)

    def _set_status(self, status: CatalogStatus) -> None:
        self._status = status
        reason = self._failure_reason if status == CatalogStatus.FAILED else ""
        self.sig_status.emit(status, reason or "")
