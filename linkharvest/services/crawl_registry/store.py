from __future__ import annotations

from collections import deque
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional

from .models import STATUS_CANCELLED, STATUS_RUNNING, CrawlRecord


class _InMemoryCrawlRecordStore:
    """Crawl records keyed by id, keeping at most `max_completed_records` finished ones.

    Not thread-safe on its own; the registry serialises access.
    """

    def __init__(self, *, max_completed_records: int):
        if max_completed_records < 0:
            raise ValueError("max_completed_records must be >= 0")
        self._records: Dict[str, CrawlRecord] = {}
        self._max_completed_records = max_completed_records
        self._completed_order: Deque[str] = deque()

    def create_running(self, *, crawl_id: str, seed: str, extensions: List[str], now: datetime) -> CrawlRecord:
        rec = CrawlRecord(
            id=crawl_id,
            seed=seed,
            extensions=list(extensions),
            status=STATUS_RUNNING,
            started_at=now,
            last_seen=now,
        )
        self._records[crawl_id] = rec
        return rec

    def get(self, crawl_id: str) -> Optional[CrawlRecord]:
        return self._records.get(crawl_id)

    def update(
        self,
        crawl_id: str,
        *,
        pages_fetched: Optional[int] = None,
        links_found: Optional[int] = None,
        current_url: Optional[str] = None,
        now: datetime,
    ) -> bool:
        rec = self._records.get(crawl_id)
        if not rec:
            return False

        if pages_fetched is not None:
            rec.pages_fetched = pages_fetched
        if links_found is not None:
            rec.links_found = links_found
        if current_url is not None:
            rec.current_url = current_url
            if current_url and current_url not in rec.recent_urls:
                rec.recent_urls.append(current_url)

        rec.last_seen = now
        return True

    def finish(
        self,
        crawl_id: str,
        *,
        status: str,
        error: Optional[str],
        result: Optional[Dict[str, Any]],
        now: datetime,
    ) -> bool:
        rec = self._records.get(crawl_id)
        if not rec:
            return False
        if result is not None:
            rec.result = result
        if error:
            rec.error = error
        rec.last_seen = now
        # A cancelled crawl keeps its status; the worker only hands over what it gathered.
        if rec.status != STATUS_RUNNING:
            return True
        rec.status = status
        rec.finished_at = now
        self._completed_order.append(crawl_id)
        return True

    def mark_cancelled(self, crawl_id: str, *, now: datetime) -> bool:
        rec = self._records.get(crawl_id)
        if not rec or rec.status != STATUS_RUNNING:
            return False
        rec.status = STATUS_CANCELLED
        rec.finished_at = now
        rec.last_seen = now
        self._completed_order.append(crawl_id)
        return True

    def evict_completed_overflow(self) -> List[str]:
        evicted: List[str] = []
        while len(self._completed_order) > self._max_completed_records:
            oldest = self._completed_order.popleft()
            if self._records.pop(oldest, None) is not None:
                evicted.append(oldest)
        return evicted

    def list_active(self) -> List[CrawlRecord]:
        return [r for r in self._records.values() if r.status == STATUS_RUNNING]
