from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class CrawlLimits:
    """Optional bounds for one crawl. `None` leaves that dimension unbounded."""

    max_pages: Optional[int] = None
    max_depth: Optional[int] = None
    deadline_seconds: Optional[float] = None

    def __post_init__(self):
        if self.max_pages is not None and self.max_pages < 0:
            raise ValueError("max_pages must be >= 0")
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        if self.deadline_seconds is not None and self.deadline_seconds < 0:
            raise ValueError("deadline_seconds must be >= 0")

    @property
    def unbounded(self) -> bool:
        return self.max_pages is None and self.max_depth is None and self.deadline_seconds is None

    def depth_exceeded(self, depth: int) -> bool:
        return self.max_depth is not None and depth > self.max_depth

    def pages_exhausted(self, pages_fetched: int) -> bool:
        return self.max_pages is not None and pages_fetched >= self.max_pages

    def override(
        self,
        max_pages: Optional[int] = None,
        max_depth: Optional[int] = None,
        deadline_seconds: Optional[float] = None,
    ) -> "CrawlLimits":
        """Return a copy with every non-None argument replacing the current value."""
        changes = {
            "max_pages": max_pages,
            "max_depth": max_depth,
            "deadline_seconds": deadline_seconds,
        }
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
