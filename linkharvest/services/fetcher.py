from __future__ import annotations

from typing import Callable, Protocol

from linkharvest.domain.http_response import HttpResponse


class Fetcher(Protocol):
    """Fetch a URL and return a normalized HTTP-like response.

    Implementations raise `HttpFetchError` when the transport fails. The crawl
    engine only needs a readable body on success and a distinguishable error
    on failure.
    """

    def fetch(self, url: str) -> HttpResponse: ...


class HttpServiceFetcher:
    def __init__(self, http_service):
        self._http_service = http_service

    def fetch(self, url: str) -> HttpResponse:
        return self._http_service.fetch(url)


class CallableFetcher:
    """Adapt a plain `url -> HttpResponse` callable to the `Fetcher` protocol."""

    def __init__(self, fetch_fn: Callable[[str], HttpResponse]):
        self._fetch_fn = fetch_fn

    def fetch(self, url: str) -> HttpResponse:
        return self._fetch_fn(url)
