import logging
import time
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from src.api.deps import Settings, get_settings, site_config_for, template_for
from src.api.routes import public_ssr
from src.components.render import RenderError
from src.shell.http.health import (
    HealthCheckRegistry,
    LoaderCheck,
    MetricsCollector,
    ProcessCheck,
    StartupCheck,
    StartupTracker,
    create_health_router,
)

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

ERROR_PAGE = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="UTF-8" /><title>Something went wrong</title></head>
<body><h1>Something went wrong</h1><p>The page could not be rendered.</p></body>
</html>"""


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings

    # Load config and template on startup (fail-fast)
    try:
        config = site_config_for(settings.site_config_path)
        template_for(settings.template_path)
    except Exception:
        logger.critical("Startup failed loading site config or template", exc_info=True)
        raise

    logger.info(
        "Site '%s' ready (template=%s, post prefix=%s)",
        config.site_name,
        settings.template_path,
        config.post_prefix,
    )
    StartupTracker.mark_started()
    yield
    StartupTracker.reset()
    logger.info("Shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Social Preview SSR",
        version=__version__,
        lifespan=lifespan,
        # Every path outside the SSR and health routes renders the 404 page
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings

    registry = HealthCheckRegistry()
    registry.register(ProcessCheck())
    registry.register(StartupCheck())
    registry.register(LoaderCheck("template", lambda: template_for(settings.template_path)))
    registry.register(
        LoaderCheck("site_config", lambda: site_config_for(settings.site_config_path))
    )
    metrics = MetricsCollector()
    app.state.health_registry = registry
    app.state.metrics = metrics

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        metrics.record_request(elapsed_ms, response.status_code)
        logger.info(
            "%s %s -> %d (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    @app.exception_handler(RenderError)
    async def render_error_handler(request: Request, exc: RenderError) -> HTMLResponse:
        logger.error("Render failed for %s: %s", request.url.path, exc)
        return HTMLResponse(content=ERROR_PAGE, status_code=500)

    # --- Routers ---
    app.include_router(create_health_router(registry, metrics, version=__version__))

    if settings.static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")
    else:
        logger.warning(
            "Static directory %s missing; hydration bundle not served", settings.static_dir
        )

    # Catch-all SSR route last so it does not shadow the routes above
    app.include_router(public_ssr.router, prefix="", tags=["SSR"])

    return app


app = create_app()
