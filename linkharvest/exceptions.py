"""Custom exceptions for LinkHarvest services."""


class InvalidSeedUrlError(ValueError):
    """Raised when the seed URL handed to a crawl cannot be used."""

    def __init__(self, value: str, reason: str = "is not an absolute URL"):
        self.value = value
        self.reason = reason
        super().__init__(f"Seed URL {value!r} {reason}")


class HttpFetchError(Exception):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")
