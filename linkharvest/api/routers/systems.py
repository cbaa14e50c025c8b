from typing import Optional

from fastapi import APIRouter

from linkharvest.services.crawl_registry import InMemoryCrawlRegistry


def create_systems_router(container_env: dict, crawl_registry: Optional[InMemoryCrawlRegistry] = None):
    """Create systems router exposing health and the effective environment settings."""
    router = APIRouter(prefix="/systems", tags=["System"])

    @router.get("/health")
    def health():
        active = len(crawl_registry.list_active()) if crawl_registry is not None else 0
        return {"status": "ok", "active_crawls": active}

    @router.get("/config")
    def get_config():
        return {
            "environment": {
                key: str(value) if value is not None else None
                for key, value in container_env.items()
            }
        }

    return router
