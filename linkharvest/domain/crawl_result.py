"""Crawl result data models."""
from typing import List, NamedTuple

from linkharvest.domain.skipped_url import SkippedUrl


class CrawlResult(NamedTuple):
    """Result of one traversal.

    Provides feedback about what happened during the crawl,
    enabling callers to log metrics and distinguish completion from a stop.
    """
    links: List[str]
    """Every scope-admitted link in discovery order, duplicates included"""

    skipped: List[SkippedUrl]
    """URLs that failed to fetch or links that failed to resolve"""

    pages_fetched: int
    """Number of fetch attempts made"""

    stopped: bool
    """True if a limit or the stop event ended the crawl before the frontier drained"""


class HarvestResult(NamedTuple):
    """Crawl result after the extension allow-list has been applied."""
    seed: str
    extensions: List[str]
    links: List[str]
    discovered_count: int
    pages_fetched: int
    skipped: List[SkippedUrl]
    stopped: bool

    def to_dict(self) -> dict:
        return {
            "seed": self.seed,
            "extensions": list(self.extensions),
            "links": list(self.links),
            "discovered_count": self.discovered_count,
            "pages_fetched": self.pages_fetched,
            "skipped": [s._asdict() for s in self.skipped],
            "stopped": self.stopped,
        }
