from linkharvest.api.routers.systems import create_systems_router
from linkharvest.services.crawl_registry import InMemoryCrawlRegistry


def _get_endpoint(router, path: str, method: str):
    for route in router.routes:
        if getattr(route, "path", None) != path:
            continue
        if method.upper() in getattr(route, "methods", set()):
            return route.endpoint
    raise AssertionError(f"No route found for {method} {path}")


def test_health_reports_active_crawls():
    registry = InMemoryCrawlRegistry()
    registry.start("http://a.test/")
    router = create_systems_router({}, registry)
    assert _get_endpoint(router, "/systems/health", "GET")() == {"status": "ok", "active_crawls": 1}


def test_health_without_registry():
    router = create_systems_router({})
    assert _get_endpoint(router, "/systems/health", "GET")()["status"] == "ok"


def test_config_stringifies_values():
    router = create_systems_router({"HTTP_TIMEOUT": 10.0, "LINKHARVEST_MAX_PAGES": None})
    resp = _get_endpoint(router, "/systems/config", "GET")()
    assert resp == {"environment": {"HTTP_TIMEOUT": "10.0", "LINKHARVEST_MAX_PAGES": None}}
