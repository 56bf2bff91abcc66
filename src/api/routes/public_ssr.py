"""
Public SSR Routes - server-rendered pages with per-route social metadata.

Serves streamed HTML pages with Open Graph / Twitter meta tags spliced into
the static template so crawlers get link previews without running JS.

Key behaviors:
- GET /               home record
- GET /post/{post_id} post record embedding the id
- anything else       home record, not-found view, 404
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from src.api.deps import get_base_url, get_render_service, get_site_config, get_template
from src.components.document import HtmlTemplate, stream_document
from src.components.render import (
    RenderError,
    RenderPageMetadataInput,
    RenderService,
    RouteKind,
)
from src.components.render import run as run_render
from src.components.views import build_app_state
from src.components.views import run as run_views
from src.config.models import SiteConfig

logger = logging.getLogger(__name__)

router = APIRouter()

HTML_MEDIA_TYPE = "text/html; charset=utf-8"


class RequestSettings:
    """Request-scoped SettingsPort for the render component."""

    def __init__(self, base_url: str) -> None:
        self._base_url = base_url

    def get_base_url(self) -> str:
        return self._base_url


def _log_stream_errors(chunks: Iterable[str], path: str) -> Iterator[str]:
    # Status and headers are already sent once streaming starts
    try:
        yield from chunks
    except Exception:
        logger.exception("SSR stream failed for %s", path)
        raise


def render_page(
    path: str,
    config: SiteConfig,
    template: HtmlTemplate,
    base_url: str,
) -> StreamingResponse:
    """
    Render a request path to a streamed HTML response.

    Metadata is computed and validated before streaming starts so a bad
    record still produces a proper error status.
    """
    output = run_render(
        RenderPageMetadataInput(config=config, path=path),
        settings_port=RequestSettings(base_url),
    )
    if not output.success or output.metadata is None:
        raise RenderError(output.route, output.errors)

    state = build_app_state(config, output.route, output.metadata)
    body_chunks, state_script = run_views(state)

    status_code = 404 if output.route.kind == RouteKind.NOT_FOUND else 200
    logger.debug("SSR %s -> %s (%d)", path, output.route.kind.value, status_code)

    return StreamingResponse(
        _log_stream_errors(
            stream_document(template, output.metadata, body_chunks, state_script),
            path,
        ),
        status_code=status_code,
        media_type=HTML_MEDIA_TYPE,
    )


# --- Metadata-only endpoint (for debugging/testing) ---


@router.get(
    "/meta",
    summary="Get SSR metadata",
    description="Get the metadata computed for a path as JSON.",
)
def get_ssr_metadata(
    path: str = "/",
    render_service: RenderService = Depends(get_render_service),
) -> dict[str, Any]:
    """
    Get SSR metadata for a path.

    Returns metadata as JSON for testing and debugging.
    """
    route = render_service.resolve_route(path)
    metadata = render_service.build_route_metadata(route)

    return {
        "route": route.kind.value,
        "post_id": route.post_id,
        **metadata.to_dict(),
    }


# --- SSR Endpoints ---


@router.get(
    "/",
    response_class=StreamingResponse,
    summary="Homepage SSR",
    description="Server-side rendered homepage with meta tags.",
)
def ssr_homepage(
    config: SiteConfig = Depends(get_site_config),
    template: HtmlTemplate = Depends(get_template),
    base_url: str = Depends(get_base_url),
) -> StreamingResponse:
    """Serve SSR homepage."""
    return render_page("/", config, template, base_url)


@router.get(
    "/post/{post_id}",
    response_class=StreamingResponse,
    summary="Post SSR",
    description="Server-side rendered post page with meta tags embedding the post id.",
)
def ssr_post(
    post_id: str,
    config: SiteConfig = Depends(get_site_config),
    template: HtmlTemplate = Depends(get_template),
    base_url: str = Depends(get_base_url),
) -> StreamingResponse:
    """
    Serve SSR post page.

    Dispatch still goes through the configured prefix, so an id that fails
    validation (or a site with a different post prefix) renders the
    not-found view.
    """
    return render_page(f"/post/{post_id}", config, template, base_url)


@router.get(
    "/{full_path:path}",
    response_class=StreamingResponse,
    summary="Fallback SSR",
    description="Prefix-dispatched render of any other path (404 unless it matches a route).",
)
def ssr_fallback(
    full_path: str,
    config: SiteConfig = Depends(get_site_config),
    template: HtmlTemplate = Depends(get_template),
    base_url: str = Depends(get_base_url),
) -> StreamingResponse:
    """Serve any other path through prefix dispatch."""
    return render_page(f"/{full_path}", config, template, base_url)
