from __future__ import annotations

import threading
from typing import Dict


class _InMemoryCrawlCancellationManager:
    """Owns one stop event per running crawl."""

    def __init__(self):
        self._stop_events: Dict[str, threading.Event] = {}

    def create(self, crawl_id: str) -> threading.Event:
        ev = threading.Event()
        self._stop_events[crawl_id] = ev
        return ev

    def request_cancel(self, crawl_id: str) -> bool:
        ev = self._stop_events.get(crawl_id)
        if not ev:
            return False
        ev.set()
        return True

    def discard(self, crawl_id: str) -> None:
        # Holders of the event keep their reference; the registry just forgets it.
        self._stop_events.pop(crawl_id, None)
