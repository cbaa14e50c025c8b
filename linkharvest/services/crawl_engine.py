import logging
import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from linkharvest.domain.crawl_limits import CrawlLimits
from linkharvest.domain.crawl_result import CrawlResult
from linkharvest.domain.crawl_state import CrawlState
from linkharvest.domain.frontier import FrontierEntry
from linkharvest.domain.skipped_url import STAGE_EXTRACT, STAGE_FETCH
from linkharvest.exceptions import HttpFetchError
from linkharvest.services.fetcher import Fetcher
from linkharvest.services.link_extractor import LinkExtractor
from linkharvest.services.scope_filter import ScopeFilter

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, Optional[str]], None]


class PageOutcome(NamedTuple):
    """What fetching and scanning one page produced."""
    url: str
    links: List[str]
    bad_hrefs: List[Tuple[str, str]]
    error: Optional[str] = None


class CrawlEngine:
    """Breadth-first traversal from a seed URL.

    The engine owns the crawl control-flow (frontier, visited checks, limits,
    cancellation). It does not construct its collaborators; the fetcher,
    extractor and scope filter are injected.

    With `workers > 1` pages are fetched on a thread pool. The calling thread
    stays the only writer of the crawl state: it claims each URL in the
    visited set before submitting it and merges worker results itself.
    """

    def __init__(
        self,
        *,
        fetcher: Fetcher,
        link_extractor: Optional[LinkExtractor] = None,
        scope_filter: Optional[ScopeFilter] = None,
        limits: Optional[CrawlLimits] = None,
        workers: int = 1,
    ):
        if workers < 1:
            raise ValueError("workers must be >= 1")
        self.fetcher = fetcher
        self.link_extractor = link_extractor or LinkExtractor()
        self.scope_filter = scope_filter or ScopeFilter()
        self.limits = limits or CrawlLimits()
        self.workers = int(workers)

    def crawl(
        self,
        seed: str,
        stop_event: Optional[threading.Event] = None,
        limits: Optional[CrawlLimits] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> CrawlResult:
        """Crawl from `seed` until the frontier drains, a limit hits, or `stop_event` is set."""
        state = CrawlState(seed, limits=limits or self.limits, stop_event=stop_event)
        logger.info("Starting crawl from %s (workers=%s)", seed, self.workers)

        if self.workers == 1:
            self._crawl_sequential(state, progress_callback)
        else:
            self._crawl_concurrent(state, progress_callback)

        logger.info(
            "Crawl from %s finished: pages_fetched=%s links=%s skipped=%s stopped=%s",
            seed,
            state.pages_fetched,
            len(state.discovered),
            len(state.skipped),
            state.stopped,
        )
        return state.to_result()

    def visit(self, url: str) -> PageOutcome:
        """Fetch `url` and extract its links. Never raises for per-page failures."""
        try:
            response = self.fetcher.fetch(url)
        except HttpFetchError as e:
            logger.warning("Fetch failed for %s: %s", url, e)
            return PageOutcome(url, [], [], error=str(e))
        except Exception as e:
            logger.error("Fetch error for %s: %s", url, e, exc_info=True)
            return PageOutcome(url, [], [], error=f"{type(e).__name__}: {e}")

        logger.info("Fetched %s -> status %s", url, response.status_code)
        if not response.ok:
            logger.warning("Non-success status for %s: %s", url, response.status_code)
        if not response.is_html:
            logger.debug("Not scanning %s: content type %s", url, response.content_type)
            return PageOutcome(url, [], [])

        bad_hrefs: List[Tuple[str, str]] = []
        links = list(
            self.link_extractor.extract(
                response.text,
                url,
                on_error=lambda href, reason: bad_hrefs.append((href, reason)),
            )
        )
        return PageOutcome(url, links, bad_hrefs)

    def _next_entry(self, state: CrawlState) -> Optional[FrontierEntry]:
        """Pop entries until one is unvisited and allowed to be fetched.

        Returns None when the frontier is empty or the crawl has to stop.
        The returned entry is already marked visited.
        """
        while state.frontier:
            entry = state.frontier.pop()
            if state.visited.is_visited(entry.url):
                logger.debug("Skipping (visited) %s", entry.url)
                continue
            reason = state.stop_reason()
            if reason is not None:
                logger.info("Stopping crawl from %s: %s", state.seed, reason)
                state.stopped = True
                return None
            if not state.visited.mark_if_new(entry.url):
                continue
            return entry
        return None

    def _absorb(self, entry: FrontierEntry, outcome: PageOutcome, state: CrawlState) -> None:
        if outcome.error is not None:
            state.record_skipped(outcome.url, outcome.error, STAGE_FETCH)
            return

        for href, reason in outcome.bad_hrefs:
            state.record_skipped(href, reason, STAGE_EXTRACT)

        child_depth = entry.depth + 1
        enqueue = not state.limits.depth_exceeded(child_depth)
        for link in outcome.links:
            if not self.scope_filter.admits(link, state.seed_scheme, state.seed_host):
                continue
            state.record_discovered(link, child_depth, enqueue=enqueue)

    def _report_progress(self, state: CrawlState, url: Optional[str], progress_callback) -> None:
        if progress_callback is None:
            return
        try:
            progress_callback(state.pages_fetched, len(state.discovered), url)
        except Exception as e:
            logger.warning("Failed to report crawl progress: %s", e)

    def _crawl_sequential(self, state: CrawlState, progress_callback) -> None:
        while True:
            entry = self._next_entry(state)
            if entry is None:
                return
            state.increment_pages_fetched()
            outcome = self.visit(entry.url)
            self._absorb(entry, outcome, state)
            self._report_progress(state, entry.url, progress_callback)

    def _crawl_concurrent(self, state: CrawlState, progress_callback) -> None:
        pending: Dict[Future, FrontierEntry] = {}
        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="linkharvest") as pool:
            while True:
                while not state.stopped and len(pending) < self.workers:
                    entry = self._next_entry(state)
                    if entry is None:
                        break
                    state.increment_pages_fetched()
                    pending[pool.submit(self.visit, entry.url)] = entry

                if not pending:
                    return

                done, _ = wait(list(pending), return_when=FIRST_COMPLETED)
                for future in done:
                    entry = pending.pop(future)
                    self._absorb(entry, future.result(), state)
                    self._report_progress(state, entry.url, progress_callback)
