import threading
from typing import Set


class VisitedTracker:
    """
    Tracks which URLs have been dequeued during a crawl.

    URLs are compared as plain strings: no normalisation of trailing slashes,
    default ports or fragments. Entries are never evicted, which is what keeps
    the at-most-once fetch guarantee intact for the lifetime of one crawl.
    """

    def __init__(self):
        self._visited: Set[str] = set()
        self._lock = threading.Lock()

    def is_visited(self, url: str) -> bool:
        """Check if a URL has been visited."""
        with self._lock:
            return url in self._visited

    def mark_if_new(self, url: str) -> bool:
        """Mark `url` visited and return True, or return False if it already was.

        Check and insert happen under one lock so concurrent callers cannot
        both claim the same URL.
        """
        with self._lock:
            if url in self._visited:
                return False
            self._visited.add(url)
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._visited)

    def __contains__(self, url: str) -> bool:
        return self.is_visited(url)
