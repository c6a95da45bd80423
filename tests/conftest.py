import os
import tempfile

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("WIDGETDECK_ROOT", tempfile.mkdtemp(prefix="widgetdeck-tests-"))

import pytest
from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QApplication


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


class FakeSource(QObject):
    """Host stand-in: records requests, tests decide when and how they resolve."""

    sig_records = Signal(int, object)
    sig_failed = Signal(int, str)
    sig_trace = Signal(str)

    def __init__(self):
        super().__init__()
        self.requests = []
        self.shut_down = False

    def fetch_all(self, request_id):
        self.requests.append(request_id)

    def resolve(self, request_id, records):
        self.sig_records.emit(request_id, records)

    def reject(self, request_id, reason):
        self.sig_failed.emit(request_id, reason)

    def shutdown(self):
        self.shut_down = True


@pytest.fixture
def source():
    return FakeSource()
