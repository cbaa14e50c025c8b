from unittest.mock import MagicMock

import pytest

from linkharvest.domain.crawl_limits import CrawlLimits
from linkharvest.domain.crawl_result import CrawlResult
from linkharvest.domain.http_response import HttpResponse
from linkharvest.domain.skipped_url import SkippedUrl
from linkharvest.exceptions import InvalidSeedUrlError
from linkharvest.services.crawl_engine import CrawlEngine
from linkharvest.services.crawl_service import CrawlService, parse_seed


@pytest.mark.parametrize(
    "value",
    ["", None, "not a url", "/relative/path", "http://", "http://[::1/", "http://a.test:port/"],
)
def test_parse_seed_rejects_malformed(value):
    with pytest.raises(InvalidSeedUrlError):
        parse_seed(value)


def test_parse_seed_returns_value_unchanged():
    assert parse_seed("HTTP://A.test:80/x/#frag") == "HTTP://A.test:80/x/#frag"


def test_invalid_seed_is_a_value_error():
    with pytest.raises(ValueError):
        parse_seed("nope")


def test_invalid_seed_never_starts_crawl():
    engine = MagicMock()
    service = CrawlService(engine)
    with pytest.raises(InvalidSeedUrlError):
        service.crawl("nope", ".jpg")
    engine.crawl.assert_not_called()


def test_crawl_applies_extension_filter():
    engine = MagicMock()
    engine.crawl.return_value = CrawlResult(
        links=["http://a.test/p1", "http://a.test/p2.jpg", "http://a.test/doc.PDF"],
        skipped=[SkippedUrl("http://a.test/dead", "refused")],
        pages_fetched=4,
        stopped=False,
    )
    service = CrawlService(engine)

    result = service.crawl("http://a.test/", ".jpg,.pdf")

    assert result.links == ["http://a.test/p2.jpg", "http://a.test/doc.PDF"]
    assert result.extensions == [".jpg", ".pdf"]
    assert result.discovered_count == 3
    assert result.pages_fetched == 4
    assert result.skipped == [SkippedUrl("http://a.test/dead", "refused")]


def test_crawl_passes_limits_and_stop_event_through():
    engine = MagicMock()
    engine.crawl.return_value = CrawlResult([], [], 0, True)
    service = CrawlService(engine)
    limits = CrawlLimits(max_pages=1)
    stop_event = object()
    callback = object()

    result = service.crawl("http://a.test/", [".jpg"], limits=limits, stop_event=stop_event, progress_callback=callback)

    engine.crawl.assert_called_once_with(
        "http://a.test/", stop_event=stop_event, limits=limits, progress_callback=callback
    )
    assert result.stopped is True


def test_empty_extension_list_returns_nothing():
    engine = MagicMock()
    engine.crawl.return_value = CrawlResult(["http://a.test/p1", "http://a.test/a.jpg"], [], 1, False)
    assert CrawlService(engine).crawl("http://a.test/", "").links == []


def test_end_to_end_with_real_engine():
    pages = {
        "http://a.test/": '<a href="/p1">1</a><a href="p2.jpg">2</a><a href="ftp://a.test/f.jpg">f</a>',
        "http://a.test/p1": '<a href="/img/p3.JPG">3</a><a href="/">home</a>',
    }

    def fetch(url):
        return HttpResponse(200, pages.get(url, ""))

    fetcher = MagicMock()
    fetcher.fetch.side_effect = fetch
    service = CrawlService(CrawlEngine(fetcher=fetcher))

    result = service.crawl("http://a.test/", ".jpg")

    assert result.links == ["http://a.test/p2.jpg", "http://a.test/img/p3.JPG"]
    as_dict = result.to_dict()
    assert as_dict["seed"] == "http://a.test/"
    assert as_dict["discovered_count"] == 4
    assert as_dict["skipped"] == []
