from __future__ import annotations

import base64
import binascii
import json
import threading
from pathlib import Path, PurePosixPath
from typing import Callable, Optional

import requests
from PySide6.QtCore import QObject, QThread, Signal

from widgetdeck.core.viewer_config import DEFAULT_CONFIG
from widgetdeck.engine.errors import SourceCacheError, SourceResponseError
from widgetdeck.engine.lua_info import extract_widget_info

CACHE_FILENAME = "response_cache.json"
WIDGET_EXTENSION = ".lua"


def is_lua_filename(path: str) -> bool:
    return PurePosixPath(path).suffix == WIDGET_EXTENSION


def decode_base64(encoded: str) -> str:
    compact = "".join(encoded.split())
    try:
        raw = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise SourceResponseError(f"Error decoding base64: {exc}") from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SourceResponseError(f"Invalid UTF-8 in widget body: {exc}") from exc


def parse_tree(text: str) -> list[tuple[str, str]]:
    """Return (path, blob url) for every Lua file listed in a git tree response."""
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise SourceResponseError(f"Tree response is not JSON: {exc}") from exc
    if not isinstance(data, dict) or not isinstance(data.get("tree"), list):
        message = data.get("message") if isinstance(data, dict) else None
        raise SourceResponseError(message or "Tree response has no 'tree' list")

    entries = []
    for item in data["tree"]:
        if not isinstance(item, dict):
            continue
        path = item.get("path")
        url = item.get("url")
        if isinstance(path, str) and isinstance(url, str) and is_lua_filename(path):
            entries.append((path, url))
    return entries


def parse_blob(text: str) -> str:
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise SourceResponseError(f"Blob response is not JSON: {exc}") from exc
    if not isinstance(data, dict) or not isinstance(data.get("content"), str):
        raise SourceResponseError("Blob response has no 'content'")
    return decode_base64(data["content"])


class ResponseCache:
    """url -> response text, mirrored to a JSON file."""

    def __init__(self, path: Optional[Path]):
        self.path = path
        self._entries: dict[str, str] = {}
        self._loaded = False
        self._lock = threading.Lock()

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        if self.path is not None:
            if not self.path.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text("{}", encoding="utf-8")
            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise SourceCacheError(f"Error reading response cache {self.path}: {exc}") from exc
            if not isinstance(data, dict):
                raise SourceCacheError(f"Response cache {self.path} is not a JSON object")
            self._entries = {k: v for k, v in data.items() if isinstance(v, str)}
        self._loaded = True

    def get(self, url: str) -> Optional[str]:
        with self._lock:
            self._ensure_loaded()
            return self._entries.get(url)

    def put(self, url: str, text: str) -> None:
        with self._lock:
            self._ensure_loaded()
            self._entries[url] = text
            if self.path is not None:
                self.path.write_text(json.dumps(self._entries), encoding="utf-8")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class ResponseFetcher:
    def __init__(self, session: requests.Session, cache: Optional[ResponseCache], timeout: float):
        self.session = session
        self.cache = cache
        self.timeout = timeout

    def fetch(self, url: str, trace: Callable[[str], None]) -> str:
        if self.cache is not None:
            cached = self.cache.get(url)
            if cached is not None:
                trace(f"→ fetch (cached): {url}")
                return cached

        trace(f"→ fetch: {url}")
        r = self.session.get(url, timeout=self.timeout)
        r.raise_for_status()
        text = r.text
        if self.cache is not None:
            self.cache.put(url, text)
        return text


def collect_widget_records(
    fetcher: ResponseFetcher,
    source_url: str,
    trace: Callable[[str], None],
    interrupted: Callable[[], bool] = lambda: False,
) -> Optional[list[dict]]:
    entries = parse_tree(fetcher.fetch(source_url, trace))
    trace(f"→ tree listed {len(entries)} lua file(s)")

    records = []
    for path, url in entries:
        if interrupted():
            return None
        body = parse_blob(fetcher.fetch(url, trace))
        record = {"filename": path, "body": body}
        info = extract_widget_info(body)
        if info is not None:
            record["info"] = info
        records.append(record)
    return records


class WidgetFetchWorker(QThread):
    trace = Signal(str)
    done = Signal(int, object)
    error = Signal(int, str)

    def __init__(self, request_id: int, fetcher: ResponseFetcher, source_url: str):
        super().__init__()
        self.request_id = request_id
        self.fetcher = fetcher
        self.source_url = source_url

    def run(self):
        try:
            records = collect_widget_records(
                self.fetcher,
                self.source_url,
                self.trace.emit,
                self.isInterruptionRequested,
            )
            if records is None:
                self.trace.emit("→ fetch aborted")
                return
            self.done.emit(self.request_id, records)
        except Exception as e:
            self.error.emit(self.request_id, f"Load Failed: {e}")


class GithubWidgetSource(QObject):
    sig_records = Signal(int, object)
    sig_failed = Signal(int, str)
    sig_trace = Signal(str)

    def __init__(self, config: Optional[dict] = None, cache_dir: Optional[Path] = None, session: Optional[requests.Session] = None):
        super().__init__()
        config = config or DEFAULT_CONFIG
        self.source_url: str = config.get("source_url", DEFAULT_CONFIG["source_url"])

        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = config.get("user_agent", DEFAULT_CONFIG["user_agent"])

        cache = None
        if config.get("use_response_cache", True):
            cache = ResponseCache(cache_dir / CACHE_FILENAME if cache_dir is not None else None)

        self.fetcher = ResponseFetcher(session, cache, float(config.get("request_timeout", DEFAULT_CONFIG["request_timeout"])))
        # Keep references to running workers to prevent GC
        self._workers: dict[int, WidgetFetchWorker] = {}
        self._shutdown_requested = False

    def fetch_all(self, request_id: int) -> None:
        if self._shutdown_requested:
            return
        worker = WidgetFetchWorker(request_id, self.fetcher, self.source_url)
        worker.trace.connect(self.sig_trace)
        worker.done.connect(self._on_worker_done)
        worker.error.connect(self._on_worker_error)
        worker.finished.connect(self._reap_workers)
        self._workers[request_id] = worker
        worker.start()

    def _on_worker_done(self, request_id: int, records: object) -> None:
        if self._shutdown_requested:
            return
        self.sig_records.emit(request_id, records)

    def _on_worker_error(self, request_id: int, reason: str) -> None:
        if self._shutdown_requested:
            return
        self.sig_failed.emit(request_id, reason)

    def _reap_workers(self) -> None:
        for rid in [rid for rid, w in self._workers.items() if w.isFinished()]:
            self._workers.pop(rid).deleteLater()

    def shutdown(self) -> None:
        self._shutdown_requested = True
        for worker in list(self._workers.values()):
            worker.requestInterruption()
            worker.wait(1500)
        # a worker still blocked on the network must outlive this call
        self._workers = {rid: w for rid, w in self._workers.items() if not w.isFinished()}
