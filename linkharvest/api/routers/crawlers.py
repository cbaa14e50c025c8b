import logging
import threading

from fastapi import APIRouter, BackgroundTasks, HTTPException

from linkharvest.api.routers.crawl import CrawlRequest, limits_for
from linkharvest.domain.crawl_limits import CrawlLimits
from linkharvest.exceptions import InvalidSeedUrlError
from linkharvest.services.crawl_registry import InMemoryCrawlRegistry
from linkharvest.services.crawl_registry.models import STATUS_CANCELLED, STATUS_FAILED, STATUS_FINISHED
from linkharvest.services.crawl_service import CrawlService, parse_seed
from linkharvest.services.extension_filter import parse_extension_list

logger = logging.getLogger(__name__)


def run_and_track(
    crawl_service: CrawlService,
    crawl_registry: InMemoryCrawlRegistry,
    crawl_id: str,
    stop_event: threading.Event,
    req: CrawlRequest,
    limits: CrawlLimits,
) -> None:
    """Run one background crawl and keep its registry record current."""

    def progress(pages_fetched, links_found, current_url):
        crawl_registry.update(
            crawl_id,
            pages_fetched=pages_fetched,
            links_found=links_found,
            current_url=current_url,
        )

    try:
        result = crawl_service.crawl(
            req.url,
            req.extensions,
            stop_event=stop_event,
            limits=limits,
            progress_callback=progress,
        )
    except Exception as e:
        logger.error("Background crawl %s failed: %s", crawl_id, e, exc_info=True)
        crawl_registry.finish(crawl_id, status=STATUS_FAILED, error=str(e))
        raise

    status = STATUS_CANCELLED if stop_event.is_set() else STATUS_FINISHED
    crawl_registry.finish(crawl_id, status=status, result=result.to_dict())


def create_crawlers_router(crawl_service: CrawlService, crawl_registry: InMemoryCrawlRegistry):
    router = APIRouter(prefix="/crawlers", tags=["Crawlers"])

    @router.post("/start", status_code=202)
    def start(req: CrawlRequest, background_tasks: BackgroundTasks):
        try:
            seed = parse_seed(req.url)
        except InvalidSeedUrlError as e:
            logger.info("Rejected crawl request: %s", e)
            raise HTTPException(status_code=400, detail="Invalid URL")

        limits = limits_for(crawl_service, req)
        handle = crawl_registry.start(seed, parse_extension_list(req.extensions))
        background_tasks.add_task(
            run_and_track,
            crawl_service,
            crawl_registry,
            handle.crawl_id,
            handle.stop_event,
            req,
            limits,
        )
        return {"status": "started", "crawl_id": handle.crawl_id}

    @router.get("/active")
    def list_active_crawls():
        return {"active": crawl_registry.list_active()}

    @router.get("/{crawl_id}")
    def get_crawl(crawl_id: str):
        rec = crawl_registry.get(crawl_id)
        if not rec:
            raise HTTPException(status_code=404, detail="crawl not found")
        return rec

    @router.post("/cancel/{crawl_id}")
    def cancel_crawl(crawl_id: str):
        if not crawl_registry.cancel(crawl_id):
            raise HTTPException(status_code=404, detail="crawl not found or cannot cancel")
        return {"status": "cancelling", "crawl_id": crawl_id}

    return router
