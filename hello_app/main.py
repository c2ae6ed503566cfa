from __future__ import annotations

from typing import Callable, Dict, Optional

from fastapi import FastAPI

from .config import ServerConfig
from .handlers import CounterHandler, HelloHandler, NotFoundHandler
from .models import CounterState

# Every method reaches the handlers; only the path is used for routing.
METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
CATCH_ALL = "/"


def build_routes(config: ServerConfig, counter: Optional[CounterState] = None) -> Dict[str, Callable]:
    hello = HelloHandler(config.response)
    count = CounterHandler(counter if counter is not None else CounterState())
    not_found = NotFoundHandler()
    return {
        "/hello": hello.handle,
        "/count": count.handle,
        CATCH_ALL: not_found.handle,
    }


def create_app(config: ServerConfig, counter: Optional[CounterState] = None) -> FastAPI:
    """Wire the route table into a FastAPI application.

    The generated docs endpoints are switched off so ``/docs`` and friends
    fall through to the catch-all like any other unknown path.
    """
    app = FastAPI(
        title="Hello OpenTelemetry",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    routes = build_routes(config, counter)
    for path, handler in routes.items():
        if path == CATCH_ALL:
            continue
        app.add_api_route(path, handler, methods=METHODS, include_in_schema=False)
    # registered last so the exact paths above take precedence
    app.add_api_route("/{path:path}", routes[CATCH_ALL], methods=METHODS, include_in_schema=False)
    return app
