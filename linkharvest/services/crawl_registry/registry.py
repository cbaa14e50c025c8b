from __future__ import annotations

import threading
import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .cancellation import _InMemoryCrawlCancellationManager
from .models import STATUS_FINISHED, CrawlHandle, CrawlRecord
from .store import _InMemoryCrawlRecordStore


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _record_to_dict(rec: CrawlRecord) -> Dict[str, Any]:
    data = asdict(rec)
    data["recent_urls"] = rec.get_recent_urls()
    return data


class InMemoryCrawlRegistry:
    """Thread-safe in-memory registry for active and recent background crawls.

    It is ephemeral and designed for single-process visibility: records are
    lost on restart and only the newest `max_completed_records` finished
    crawls are retained.
    """

    def __init__(self, *, max_completed_records: int = 100):
        self._lock = threading.Lock()
        self._records = _InMemoryCrawlRecordStore(max_completed_records=max_completed_records)
        self._cancellation = _InMemoryCrawlCancellationManager()

    def start(self, seed: str, extensions: Optional[List[str]] = None) -> CrawlHandle:
        with self._lock:
            cid = str(uuid.uuid4())
            self._records.create_running(
                crawl_id=cid,
                seed=seed,
                extensions=extensions or [],
                now=_utcnow(),
            )
            stop_event = self._cancellation.create(cid)
            return CrawlHandle(crawl_id=cid, stop_event=stop_event)

    def update(self, crawl_id: str, *, pages_fetched: Optional[int] = None, links_found: Optional[int] = None, current_url: Optional[str] = None) -> bool:
        with self._lock:
            return self._records.update(
                crawl_id,
                pages_fetched=pages_fetched,
                links_found=links_found,
                current_url=current_url,
                now=_utcnow(),
            )

    def finish(self, crawl_id: str, *, status: str = STATUS_FINISHED, error: Optional[str] = None, result: Optional[Dict[str, Any]] = None) -> bool:
        with self._lock:
            ok = self._records.finish(crawl_id, status=status, error=error, result=result, now=_utcnow())
            if ok:
                self._cancellation.discard(crawl_id)
                self._evict()
            return ok

    def get(self, crawl_id: str) -> Optional[Dict]:
        with self._lock:
            rec = self._records.get(crawl_id)
            return _record_to_dict(rec) if rec else None

    def cancel(self, crawl_id: str) -> bool:
        """Request cancellation for a running crawl.

        Sets the stop event so the crawl loop exits at its next check, and
        marks the record cancelled straight away.
        """
        with self._lock:
            if not self._cancellation.request_cancel(crawl_id):
                return False
            if not self._records.mark_cancelled(crawl_id, now=_utcnow()):
                return False
            self._cancellation.discard(crawl_id)
            self._evict()
            return True

    def list_active(self) -> List[Dict]:
        with self._lock:
            return [_record_to_dict(r) for r in self._records.list_active()]

    def _evict(self) -> None:
        for evicted_id in self._records.evict_completed_overflow():
            self._cancellation.discard(evicted_id)
