import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from linkharvest.exceptions import InvalidSeedUrlError
from linkharvest.services.crawl_service import CrawlService

logger = logging.getLogger(__name__)


class CrawlRequest(BaseModel):
    url: str
    # comma-separated, e.g. ".jpg,.png"
    extensions: str = ""
    max_pages: Optional[int] = Field(default=None, ge=0)
    max_depth: Optional[int] = Field(default=None, ge=0)
    deadline_seconds: Optional[float] = Field(default=None, ge=0)


def limits_for(crawl_service: CrawlService, req: CrawlRequest):
    return crawl_service.crawl_engine.limits.override(
        max_pages=req.max_pages,
        max_depth=req.max_depth,
        deadline_seconds=req.deadline_seconds,
    )


def create_crawl_router(crawl_service: CrawlService):
    router = APIRouter(tags=["Crawl"])

    @router.post("/crawl")
    def crawl(req: CrawlRequest):
        """Crawl from `url` and return the discovered links matching `extensions`.

        Blocks until the crawl finishes; use `/crawlers/start` for long crawls.
        """
        try:
            result = crawl_service.crawl(req.url, req.extensions, limits=limits_for(crawl_service, req))
        except InvalidSeedUrlError as e:
            logger.info("Rejected crawl request: %s", e)
            raise HTTPException(status_code=400, detail="Invalid URL")
        return result.to_dict()

    return router
