from fastapi import FastAPI

from linkharvest.api.routers import create_crawl_router, create_crawlers_router, create_systems_router


def create_app(container) -> FastAPI:
    """Build the FastAPI application from a wired `Container`."""
    app = FastAPI(
        title="LinkHarvest",
        description="Crawl a site from a seed URL and list the links matching a set of file extensions.",
    )
    crawl_service = container.crawl_service()
    crawl_registry = container.crawl_registry()

    app.include_router(create_crawl_router(crawl_service))
    app.include_router(create_crawlers_router(crawl_service, crawl_registry))
    app.include_router(create_systems_router(container.config(), crawl_registry))
    app.state.container = container
    return app
