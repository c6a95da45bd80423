from __future__ import annotations

from typing import Protocol, runtime_checkable

from PySide6.QtCore import Signal


@runtime_checkable
class WidgetSourcePort(Protocol):
    """
    WidgetSourcePort is the host collaborator the catalog talks to.

    Required signals:
        sig_records(request_id, records): success; records is whatever the
            host produced, ideally a list of raw widget records
        sig_failed(request_id, reason): the retrieval failed
        sig_trace: Debug/status messages

    Every response carries the request_id it answers so the caller can
    discard superseded responses. Sources do not cancel in-flight work.
    """
    sig_records: Signal
    sig_failed: Signal
    sig_trace: Signal

    def fetch_all(self, request_id: int) -> None:
        ...

    def shutdown(self) -> None:
        ...
