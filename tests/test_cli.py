import json

from dependency_injector import providers

from linkharvest.cli import main
from linkharvest.container import Container
from linkharvest.domain.http_response import HttpResponse
from linkharvest.services.fetcher import CallableFetcher


SITE = {
    "http://a.test/": '<a href="/p1">one</a><a href="/p2.jpg">two</a><a href="ftp://a.test/x.jpg">ftp</a>',
    "http://a.test/p1": '<a href="/img/p3.JPG">three</a><a href="/">home</a>',
    "http://a.test/p2.jpg": "",
    "http://a.test/img/p3.JPG": "",
}


def _container():
    container = Container()
    container.config.LINKHARVEST_MAX_PAGES.from_value(None)
    container.config.LINKHARVEST_MAX_DEPTH.from_value(None)
    container.config.LINKHARVEST_DEADLINE_SECONDS.from_value(None)
    fetcher = CallableFetcher(lambda url: HttpResponse(200, SITE.get(url, "")))
    container.page_fetcher.override(providers.Object(fetcher))
    return container


def test_cli_prints_matching_links(capsys):
    code = main(["http://a.test/", ".jpg"], container=_container())

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["links"] == ["http://a.test/p2.jpg", "http://a.test/img/p3.JPG"]
    assert out["discovered_count"] == 4
    assert out["extensions"] == [".jpg"]


def test_cli_writes_output_file(tmp_path, capsys):
    target = tmp_path / "out" / "links.json"

    code = main(["http://a.test/", ".png", "--out", str(target)], container=_container())

    assert code == 0
    assert capsys.readouterr().out == ""
    assert json.loads(target.read_text(encoding="utf-8"))["links"] == []


def test_cli_max_pages_stops_early(capsys):
    code = main(["http://a.test/", ".jpg", "--max-pages", "1"], container=_container())

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["pages_fetched"] == 1
    assert out["stopped"] is True
    assert out["links"] == ["http://a.test/p2.jpg"]


def test_cli_invalid_url_exits_2(capsys):
    code = main(["not a url", ".jpg"], container=_container())

    assert code == 2
    assert "Invalid URL" in capsys.readouterr().err


def test_cli_verbose_prints_summary(capsys):
    code = main(["http://a.test/", ".jpg", "--verbose"], container=_container())

    assert code == 0
    assert "CRAWL SUMMARY" in capsys.readouterr().err


def test_cli_rejects_zero_workers(capsys):
    code = main(["http://a.test/", ".jpg", "--workers", "0"], container=_container())

    assert code == 2
    assert "workers must be >= 1" in capsys.readouterr().err


def test_cli_rejects_negative_limit(capsys):
    code = main(["http://a.test/", ".jpg", "--max-depth", "-1"], container=_container())

    assert code == 2
    assert "max_depth" in capsys.readouterr().err
