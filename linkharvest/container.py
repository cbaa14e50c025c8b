"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from linkharvest import config as env
from linkharvest.domain.crawl_limits import CrawlLimits
from linkharvest.services.crawl_engine import CrawlEngine
from linkharvest.services.crawl_registry import InMemoryCrawlRegistry
from linkharvest.services.crawl_service import CrawlService
from linkharvest.services.fetcher import HttpServiceFetcher
from linkharvest.services.http_service import HttpService
from linkharvest.services.link_extractor import LinkExtractor
from linkharvest.services.scope_filter import ScopeFilter


# Environment variables used by the container (read via `linkharvest.config` helpers).
#
# USER_AGENT (str, default: "LinkHarvest/0.1")
#   User-Agent header for outbound HTTP requests.
#
# HTTP_TIMEOUT (float seconds, default: 10)
#   Timeout for each outbound HTTP request.
#
# LINKHARVEST_VERIFY_TLS (bool, default: true)
#   Verify TLS certificates. Set to false to crawl hosts with self-signed certificates.
#
# LINKHARVEST_WORKERS (int, default: 1)
#   Number of fetch workers. 1 keeps the crawl single-threaded.
#
# LINKHARVEST_MAX_PAGES (int | optional)
# LINKHARVEST_MAX_DEPTH (int | optional)
# LINKHARVEST_DEADLINE_SECONDS (float | optional)
#   Default crawl limits. Unset means unbounded.
#
# LINKHARVEST_SAME_HOST (bool, default: false)
#   Only follow links on the seed's host (scheme equality is always required).
#
# LINKHARVEST_MAX_COMPLETED_RECORDS (int, default: 100)
#   How many finished background crawls the registry keeps for retrieval.
#
# HOST (str, default: "0.0.0.0"), PORT (int, default: 8080)
#   Bind address of the API server.
#
# LOG_LEVEL (str, default: "INFO")
ENV = {
    "USER_AGENT": env.get_str_env("USER_AGENT", "LinkHarvest/0.1"),
    "HTTP_TIMEOUT": env.get_float_env("HTTP_TIMEOUT", 10.0),
    "LINKHARVEST_VERIFY_TLS": env.get_bool_env("LINKHARVEST_VERIFY_TLS", True),
    "LINKHARVEST_WORKERS": env.get_int_env("LINKHARVEST_WORKERS", 1),
    "LINKHARVEST_MAX_PAGES": env.get_optional_int_env("LINKHARVEST_MAX_PAGES"),
    "LINKHARVEST_MAX_DEPTH": env.get_optional_int_env("LINKHARVEST_MAX_DEPTH"),
    "LINKHARVEST_DEADLINE_SECONDS": env.get_optional_float_env("LINKHARVEST_DEADLINE_SECONDS"),
    "LINKHARVEST_SAME_HOST": env.get_bool_env("LINKHARVEST_SAME_HOST", False),
    "LINKHARVEST_MAX_COMPLETED_RECORDS": env.get_int_env("LINKHARVEST_MAX_COMPLETED_RECORDS", 100),
    "HOST": env.get_str_env("HOST", "0.0.0.0"),
    "PORT": env.get_int_env("PORT", 8080),
    "LOG_LEVEL": env.get_str_env("LOG_LEVEL", "INFO").strip().upper(),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for LinkHarvest."""

    # Configuration
    config = providers.Configuration(default=ENV)

    # Services - Singleton instances
    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(float),
        verify=config.LINKHARVEST_VERIFY_TLS.as_(bool),
    )

    page_fetcher = providers.Singleton(
        HttpServiceFetcher,
        http_service=http_service,
    )

    link_extractor = providers.Singleton(
        LinkExtractor
    )

    scope_filter = providers.Singleton(
        ScopeFilter,
        same_host=config.LINKHARVEST_SAME_HOST.as_(bool),
    )

    crawl_limits = providers.Singleton(
        CrawlLimits,
        max_pages=config.LINKHARVEST_MAX_PAGES,
        max_depth=config.LINKHARVEST_MAX_DEPTH,
        deadline_seconds=config.LINKHARVEST_DEADLINE_SECONDS,
    )

    crawl_registry = providers.Singleton(
        InMemoryCrawlRegistry,
        max_completed_records=config.LINKHARVEST_MAX_COMPLETED_RECORDS.as_(int),
    )

    # The engine keeps no per-crawl state, so one instance serves every request.
    crawl_engine = providers.Singleton(
        CrawlEngine,
        fetcher=page_fetcher,
        link_extractor=link_extractor,
        scope_filter=scope_filter,
        limits=crawl_limits,
        workers=config.LINKHARVEST_WORKERS.as_(int),
    )

    crawl_service = providers.Singleton(
        CrawlService,
        crawl_engine=crawl_engine,
    )
