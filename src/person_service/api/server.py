"""FastAPI application setup and routing for the Person Service API."""

import logging
import sys
import time
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .. import __version__
from . import health, pages, persons
from .config import Config
from .health import HealthCheckManager
from .metrics import MetricsCollector
from .store import PersonStore

logger = logging.getLogger(__name__)

UNMATCHED_ROUTE = "<unmatched>"


def endpoint_label(request: Request) -> str:
    """Method and path template of the route that served ``request``.

    Requests that matched no route, or matched its path with a method it
    does not serve, share one label so arbitrary requests cannot grow
    the metrics.
    """
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    methods = getattr(route, "methods", None) or ()
    if path is None or request.method not in methods:
        return UNMATCHED_ROUTE
    return f"{request.method} {path}"


def create_app(config: Optional[Config] = None, store: Optional[PersonStore] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        config: Service configuration, loaded from the environment when omitted
        store: Person store to serve, a freshly seeded one when omitted

    Returns:
        Configured application owning exactly one person store
    """
    app = FastAPI(
        title="Person Service API",
        description="CRUD API over an in-memory person collection",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.config = config if config is not None else Config.from_env()
    app.state.store = store if store is not None else PersonStore()
    app.state.metrics_collector = MetricsCollector()
    app.state.health_manager = HealthCheckManager(app.state.store)
    app.state.start_time = time.time()

    # Middleware for metrics collection
    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)

        duration = time.perf_counter() - start_time
        endpoint = endpoint_label(request)
        success = 200 <= response.status_code < 400

        app.state.metrics_collector.record_api_request(endpoint, duration, success)

        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Unparseable JSON is a 400; well-formed JSON of the wrong shape stays 422
        if any(error.get("type") == "json_invalid" for error in exc.errors()):
            return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})
        return await request_validation_exception_handler(request, exc)

    # Include routers
    app.include_router(pages.router, tags=["landing"])
    app.include_router(health.router, tags=["health"])
    app.include_router(persons.router, tags=["persons"])

    @app.get("/metrics", tags=["monitoring"])
    async def get_metrics() -> Dict[str, Any]:
        """Get comprehensive application metrics."""
        return app.state.metrics_collector.get_summary()

    return app


def main():
    """Entry point for person-api command."""
    import uvicorn

    config = Config.from_env()

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info(f"Starting Person Service API on {config.host}:{config.port}")
    logger.info(f"Greeting text: {config.greeting_text}")

    try:
        uvicorn.run(
            create_app(config),
            host=config.host,
            port=config.port,
            log_level=config.log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Server startup failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
