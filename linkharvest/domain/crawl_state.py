import threading
import time
from typing import List, Optional
from urllib.parse import urlsplit

from linkharvest.domain.crawl_limits import CrawlLimits
from linkharvest.domain.crawl_result import CrawlResult
from linkharvest.domain.frontier import Frontier
from linkharvest.domain.skipped_url import STAGE_FETCH, SkippedUrl
from linkharvest.domain.visited_tracker import VisitedTracker


class CrawlState:
    """
    Everything one crawl invocation owns: the frontier, the visited set,
    the discovered links and the diagnostics collected along the way.

    A new state is created per crawl and dropped when the crawl returns, so
    nothing leaks between invocations.
    """

    def __init__(
        self,
        seed: str,
        limits: Optional[CrawlLimits] = None,
        stop_event: Optional[threading.Event] = None,
        clock=time.monotonic,
    ):
        parts = urlsplit(seed)
        self.seed = seed
        self.seed_scheme = parts.scheme
        self.seed_host = parts.hostname
        self.limits = limits or CrawlLimits()
        self.stop_event = stop_event if stop_event is not None else threading.Event()
        self._clock = clock
        self._started_at = clock()

        self.frontier = Frontier(seed)
        self.visited = VisitedTracker()
        self.discovered: List[str] = []
        self.skipped: List[SkippedUrl] = []
        self.pages_fetched: int = 0
        self.stopped: bool = False

    def record_discovered(self, url: str, depth: int, enqueue: bool = True) -> None:
        """Append `url` to the discovered links and, unless told not to, to the frontier."""
        self.discovered.append(url)
        if enqueue:
            self.frontier.push(url, depth)

    def record_skipped(self, url: str, reason: str, stage: str = STAGE_FETCH) -> None:
        self.skipped.append(SkippedUrl(url, reason, stage))

    def increment_pages_fetched(self, count: int = 1) -> None:
        self.pages_fetched += int(count)

    def elapsed(self) -> float:
        return self._clock() - self._started_at

    def is_cancelled(self) -> bool:
        return self.stop_event.is_set()

    def stop_reason(self) -> Optional[str]:
        """Return why the crawl must stop now, or None to keep going."""
        if self.is_cancelled():
            return "cancelled"
        if self.limits.pages_exhausted(self.pages_fetched):
            return "max_pages reached"
        deadline = self.limits.deadline_seconds
        if deadline is not None and self.elapsed() >= deadline:
            return "deadline reached"
        return None

    def to_result(self) -> CrawlResult:
        return CrawlResult(
            links=list(self.discovered),
            skipped=list(self.skipped),
            pages_fetched=self.pages_fetched,
            stopped=self.stopped,
        )
