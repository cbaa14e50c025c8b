import threading

from linkharvest.services.crawl_registry import InMemoryCrawlRegistry


def test_start_creates_running_record():
    registry = InMemoryCrawlRegistry()
    handle = registry.start("http://a.test/", [".jpg"])

    rec = registry.get(handle.crawl_id)
    assert rec["status"] == "running"
    assert rec["seed"] == "http://a.test/"
    assert rec["extensions"] == [".jpg"]
    assert [r["id"] for r in registry.list_active()] == [handle.crawl_id]


def test_update_and_finish_store_result():
    registry = InMemoryCrawlRegistry()
    handle = registry.start("http://a.test/")

    assert registry.update(handle.crawl_id, pages_fetched=3, links_found=7, current_url="http://a.test/x")
    assert registry.finish(handle.crawl_id, result={"links": ["http://a.test/x.jpg"]})

    rec = registry.get(handle.crawl_id)
    assert rec["status"] == "finished"
    assert rec["pages_fetched"] == 3
    assert rec["links_found"] == 7
    assert rec["result"] == {"links": ["http://a.test/x.jpg"]}
    assert rec["finished_at"] is not None
    assert registry.list_active() == []
    # a finished crawl can no longer be cancelled
    assert not registry.cancel(handle.crawl_id)


def test_unknown_crawl_operations():
    registry = InMemoryCrawlRegistry()
    assert registry.get("missing") is None
    assert not registry.update("missing", pages_fetched=1)
    assert not registry.finish("missing")
    assert not registry.cancel("missing")


def test_registry_bounded_completed_retention():
    registry = InMemoryCrawlRegistry(max_completed_records=2)

    a = registry.start("http://a.test/")
    b = registry.start("http://b.test/")
    c = registry.start("http://c.test/")

    assert registry.finish(a.crawl_id)
    assert registry.finish(b.crawl_id)
    assert registry.finish(c.crawl_id)

    assert registry.get(a.crawl_id) is None
    assert registry.get(b.crawl_id) is not None
    assert registry.get(c.crawl_id) is not None


def test_cancel_sets_event_and_marks_cancelled():
    registry = InMemoryCrawlRegistry(max_completed_records=10)

    handle = registry.start("http://a.test/")
    assert isinstance(handle.stop_event, threading.Event)

    assert registry.cancel(handle.crawl_id)
    assert handle.stop_event.is_set()
    assert registry.get(handle.crawl_id)["status"] == "cancelled"

    # cannot cancel twice
    assert not registry.cancel(handle.crawl_id)


def test_finish_after_cancel_keeps_status_but_stores_partial_result():
    registry = InMemoryCrawlRegistry()
    handle = registry.start("http://a.test/")
    registry.cancel(handle.crawl_id)

    assert registry.finish(handle.crawl_id, status="finished", result={"links": []})

    rec = registry.get(handle.crawl_id)
    assert rec["status"] == "cancelled"
    assert rec["result"] == {"links": []}


def test_recent_urls_order_and_size_cap():
    registry = InMemoryCrawlRegistry()
    handle = registry.start("https://example.com/")

    for i in range(25):
        assert registry.update(handle.crawl_id, current_url=f"https://example.com/page/{i}")

    recent = registry.get(handle.crawl_id)["recent_urls"]
    assert len(recent) == 20
    assert recent[0] == "https://example.com/page/24"
    assert recent[-1] == "https://example.com/page/5"
