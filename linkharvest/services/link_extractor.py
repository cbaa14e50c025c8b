import logging
from typing import Callable, Iterator, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, ParserRejectedMarkup

logger = logging.getLogger(__name__)

# Leading/trailing characters a browser strips from an href before resolving it.
_HREF_STRIP = "".join(chr(c) for c in range(0x21))


class LinkExtractor:
    """Pull absolute anchor URLs out of an HTML document.

    Uses the stdlib-backed "html.parser" tree builder with duplicate attributes
    ignored, so when an element carries several `href` attributes the first one
    in source order wins.
    """

    def __init__(self, soup_factory: Optional[Callable[[str], BeautifulSoup]] = None):
        self._soup_factory = soup_factory or (
            lambda html: BeautifulSoup(html, "html.parser", on_duplicate_attribute="ignore")
        )

    def extract(
        self,
        markup: Optional[str],
        base_url: str,
        on_error: Optional[Callable[[str, str], None]] = None,
    ) -> Iterator[str]:
        """Yield each anchor's `href` resolved against `base_url`.

        The sequence is lazy and can be consumed once. An href that cannot be
        resolved is dropped; `on_error(href, reason)` is told about it when given.
        Markup the parser rejects yields nothing and is reported against
        `base_url`.
        """
        if not markup:
            return
        try:
            soup = self._soup_factory(markup)
        except ParserRejectedMarkup as e:
            logger.warning("Markup rejected on %s: %s", base_url, e)
            if on_error is not None:
                on_error(base_url, f"markup rejected: {e}")
            return
        for a in soup.find_all("a"):
            href = a.attrs.get("href")
            if href is None:
                continue
            try:
                link = urljoin(base_url, href.strip(_HREF_STRIP))
            except ValueError as e:
                logger.debug("Dropping unresolvable href %r on %s: %s", href, base_url, e)
                if on_error is not None:
                    on_error(href, str(e))
                continue
            yield link
