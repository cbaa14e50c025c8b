"""
Test for run.py main() function with dependency injection.
"""
from unittest.mock import patch

from fastapi import FastAPI

from linkharvest.container import Container
from run import main


def test_main_accepts_injected_container():
    container = Container()
    container.config.HOST.from_value("127.0.0.1")
    container.config.PORT.from_value(9999)
    container.config.LOG_LEVEL.from_value("WARNING")

    with patch('run.uvicorn.run') as mock_uvicorn:
        main(container=container)

    assert mock_uvicorn.called
    app = mock_uvicorn.call_args[0][0]
    assert isinstance(app, FastAPI)
    assert mock_uvicorn.call_args[1] == {"host": "127.0.0.1", "port": 9999}
    assert app.state.container is container


def test_app_exposes_crawl_routes():
    with patch('run.uvicorn.run') as mock_uvicorn:
        main(container=Container())

    app = mock_uvicorn.call_args[0][0]
    paths = {getattr(route, "path", None) for route in app.routes}
    assert {"/crawl", "/crawlers/start", "/crawlers/active", "/systems/health"} <= paths
