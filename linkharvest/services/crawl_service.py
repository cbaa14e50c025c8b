import logging
import threading
from typing import Iterable, Optional, Union
from urllib.parse import urlsplit

from linkharvest.domain.crawl_limits import CrawlLimits
from linkharvest.domain.crawl_result import HarvestResult
from linkharvest.exceptions import InvalidSeedUrlError
from linkharvest.services.crawl_engine import CrawlEngine, ProgressCallback
from linkharvest.services.extension_filter import filter_links, parse_extension_list

logger = logging.getLogger(__name__)


def parse_seed(value: Optional[str]) -> str:
    """Validate a seed URL string and return it unchanged.

    The seed must parse and carry both a scheme and a host. It is not
    normalised: the exact string is what lands in the visited set.
    """
    if not value:
        raise InvalidSeedUrlError(value or "", "is empty")
    try:
        parts = urlsplit(value)
        # accessing .port validates the authority section as well
        parts.port
    except ValueError as e:
        raise InvalidSeedUrlError(value, f"could not be parsed: {e}") from e
    if not parts.scheme or not parts.netloc:
        raise InvalidSeedUrlError(value)
    return value


class CrawlService:
    """Entry point used by the API and the CLI.

    Turns raw caller input (a seed string and an extension list) into a crawl
    and applies the extension allow-list to what the crawl discovered.
    """

    def __init__(self, crawl_engine: CrawlEngine):
        self.crawl_engine = crawl_engine

    def crawl(
        self,
        seed_url: str,
        extensions: Union[str, Iterable[str], None],
        *,
        stop_event: Optional[threading.Event] = None,
        limits: Optional[CrawlLimits] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> HarvestResult:
        seed = parse_seed(seed_url)
        if extensions is None or isinstance(extensions, str):
            allow_list = parse_extension_list(extensions)
        else:
            allow_list = list(extensions)

        result = self.crawl_engine.crawl(
            seed,
            stop_event=stop_event,
            limits=limits,
            progress_callback=progress_callback,
        )
        links = filter_links(result.links, allow_list)
        logger.info(
            "Harvested %s of %s discovered links from %s matching %s",
            len(links),
            len(result.links),
            seed,
            allow_list,
        )
        return HarvestResult(
            seed=seed,
            extensions=allow_list,
            links=links,
            discovered_count=len(result.links),
            pages_fetched=result.pages_fetched,
            skipped=result.skipped,
            stopped=result.stopped,
        )
