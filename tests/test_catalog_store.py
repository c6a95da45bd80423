from widgetdeck.core.catalog import CatalogStore
from widgetdeck.core.disclosure import DisclosureController
from widgetdeck.core.state import CatalogStatus
from widgetdeck.core.widget import Widget


def test_initial_state(source):
    store = CatalogStore(source)
    assert store.status is CatalogStatus.NOT_LOADED
    assert store.current_widgets() == []
    assert source.requests == []


def test_load_marks_loading_before_response(source):
    store = CatalogStore(source)
    statuses = []
    store.sig_status.connect(lambda status, reason: statuses.append(status))
    rid = store.load()
    assert store.status is CatalogStatus.LOADING
    assert statuses == [CatalogStatus.LOADING]
    assert source.requests == [rid]


def test_successful_load(source):
    store = CatalogStore(source)
    rid = store.load()
    source.resolve(rid, [{"filename": "a.lua", "body": "print(1)"}])
    assert store.status is CatalogStatus.LOADED
    assert store.current_widgets() == [Widget(identifier="a.lua", source_text="print(1)")]


def test_load_keeps_host_order(source):
    store = CatalogStore(source)
    rid = store.load()
    source.resolve(rid, [{"filename": name, "body": ""} for name in ("z.lua", "a.lua", "m.lua")])
    assert [w.identifier for w in store.current_widgets()] == ["z.lua", "a.lua", "m.lua"]


def test_catalog_signal_carries_widgets(source):
    store = CatalogStore(source)
    seen = []
    store.sig_catalog.connect(seen.append)
    rid = store.load()
    source.resolve(rid, [{}])
    assert seen == [[Widget(identifier="unknown-0", source_text="")]]


def test_host_failure_sets_failed_with_reason(source):
    store = CatalogStore(source)
    seen = []
    store.sig_status.connect(lambda status, reason: seen.append((status, reason)))
    rid = store.load()
    source.reject(rid, "rate limited")
    assert store.status is CatalogStatus.FAILED
    assert store.failure_reason == "rate limited"
    assert seen[-1] == (CatalogStatus.FAILED, "rate limited")


def test_non_list_response_fails(source):
    store = CatalogStore(source)
    rid = store.load()
    source.resolve(rid, {"filename": "a.lua"})
    assert store.status is CatalogStatus.FAILED
    assert "dict" in store.failure_reason


def test_failed_refresh_keeps_previous_catalog(source):
    store = CatalogStore(source)
    first = store.load()
    source.resolve(first, [{"filename": "a.lua", "body": "x"}])
    before = store.current_widgets()

    second = store.load()
    source.reject(second, "offline")
    assert store.status is CatalogStatus.FAILED
    assert store.current_widgets() == before


def test_non_list_refresh_keeps_previous_catalog(source):
    store = CatalogStore(source)
    first = store.load()
    source.resolve(first, [{"filename": "a.lua", "body": "x"}])
    second = store.load()
    source.resolve(second, "garbage")
    assert [w.identifier for w in store.current_widgets()] == ["a.lua"]


def test_stale_response_is_discarded(source):
    store = CatalogStore(source)
    first = store.load()
    second = store.load()
    source.resolve(second, [{"filename": "new.lua", "body": ""}])
    source.resolve(first, [{"filename": "old.lua", "body": ""}])
    assert [w.identifier for w in store.current_widgets()] == ["new.lua"]
    assert store.status is CatalogStatus.LOADED


def test_stale_response_before_current_does_not_apply(source):
    store = CatalogStore(source)
    first = store.load()
    second = store.load()
    source.resolve(first, [{"filename": "old.lua", "body": ""}])
    assert store.status is CatalogStatus.LOADING
    assert store.current_widgets() == []
    source.resolve(second, [{"filename": "new.lua", "body": ""}])
    assert [w.identifier for w in store.current_widgets()] == ["new.lua"]


def test_stale_failure_is_discarded(source):
    store = CatalogStore(source)
    first = store.load()
    second = store.load()
    source.resolve(second, [{"filename": "a.lua", "body": ""}])
    source.reject(first, "timeout")
    assert store.status is CatalogStatus.LOADED
    assert store.failure_reason is None


def test_second_answer_for_same_request_is_ignored(source):
    store = CatalogStore(source)
    rid = store.load()
    source.resolve(rid, [{"filename": "a.lua", "body": ""}])
    source.resolve(rid, [{"filename": "b.lua", "body": ""}])
    assert [w.identifier for w in store.current_widgets()] == ["a.lua"]


def test_successful_load_resets_disclosure(source):
    disclosure = DisclosureController()
    store = CatalogStore(source, disclosure)
    rid = store.load()
    source.resolve(rid, [{"filename": "a.lua", "body": ""}])
    disclosure.toggle("a.lua")
    assert disclosure.is_visible("a.lua") is True

    rid = store.load()
    source.resolve(rid, [{"filename": "a.lua", "body": ""}])
    assert disclosure.entries() == {}
    assert disclosure.is_visible("a.lua") is False


def test_failed_load_keeps_disclosure(source):
    disclosure = DisclosureController()
    store = CatalogStore(source, disclosure)
    rid = store.load()
    source.resolve(rid, [{"filename": "a.lua", "body": ""}])
    disclosure.toggle("a.lua")

    rid = store.load()
    source.reject(rid, "offline")
    assert disclosure.is_visible("a.lua") is True


def test_source_raising_synchronously_becomes_failure(source):
    def boom(request_id):
        raise ConnectionError("no route to host")

    source.fetch_all = boom
    store = CatalogStore(source)
    store.load()
    assert store.status is CatalogStatus.FAILED
    assert store.failure_reason == "no route to host"


def test_stale_discard_is_traced(source):
    store = CatalogStore(source)
    lines = []
    store.sig_trace.connect(lines.append)
    first = store.load()
    second = store.load()
    source.resolve(first, [])
    source.resolve(second, [{"filename": "a.lua", "body": ""}])

    assert any(f"discarded stale response id={first}" in line for line in lines)
    assert any(f"loaded 1 widget(s) id={second}" in line for line in lines)
