"""Domain objects for LinkHarvest - explicit re-exports to satisfy linters."""
from .crawl_limits import CrawlLimits as CrawlLimits
from .crawl_result import CrawlResult as CrawlResult
from .crawl_result import HarvestResult as HarvestResult
from .crawl_state import CrawlState as CrawlState
from .frontier import Frontier as Frontier
from .http_response import HttpResponse as HttpResponse
from .skipped_url import SkippedUrl as SkippedUrl
from .visited_tracker import VisitedTracker as VisitedTracker

__all__ = [
    "CrawlLimits",
    "CrawlResult",
    "HarvestResult",
    "CrawlState",
    "Frontier",
    "HttpResponse",
    "SkippedUrl",
    "VisitedTracker",
]
