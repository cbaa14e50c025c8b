from .models import CrawlHandle, CrawlRecord
from .registry import InMemoryCrawlRegistry

__all__ = ["CrawlRecord", "CrawlHandle", "InMemoryCrawlRegistry"]
