"""
Render component - per-route page metadata.

Builds deterministic page metadata from the request path and site config.

Invariants:
- I1: Home and unknown paths share the home record
- I2: Post record strings embed the post id literally
- I3: Every returned record has non-empty title, description and image
"""

from __future__ import annotations

from src.config.models import SiteConfig

from ._impl import RenderService, validate_page_metadata
from .models import (
    RenderOutput,
    RenderPageMetadataInput,
    RenderRouteMetadataInput,
    Route,
)
from .ports import SettingsPort

DEFAULT_BASE_URL = "http://localhost:3000"


def _create_service(config: SiteConfig, settings_port: SettingsPort | None) -> RenderService:
    """Create render service from ports."""
    base_url = settings_port.get_base_url() if settings_port else DEFAULT_BASE_URL
    return RenderService(config=config, base_url=base_url)


def _finish(service: RenderService, route: Route) -> RenderOutput:
    metadata = service.build_route_metadata(route)
    errors = validate_page_metadata(metadata)
    if errors:
        return RenderOutput(route=route, metadata=None, errors=errors, success=False)
    return RenderOutput(route=route, metadata=metadata, errors=[], success=True)


# --- Component Entry Points ---


def run_page_metadata(
    inp: RenderPageMetadataInput,
    *,
    settings_port: SettingsPort | None = None,
) -> RenderOutput:
    """
    Dispatch a path and build its metadata.

    Args:
        inp: Input containing site config and request path.
        settings_port: Optional settings port for the base URL.

    Returns:
        RenderOutput with the dispatched route and page metadata.
    """
    service = _create_service(inp.config, settings_port)
    return _finish(service, service.resolve_route(inp.path))


def run_route_metadata(
    inp: RenderRouteMetadataInput,
    *,
    settings_port: SettingsPort | None = None,
) -> RenderOutput:
    """Build metadata for a route the caller has already dispatched."""
    service = _create_service(inp.config, settings_port)
    return _finish(service, inp.route)


def run(
    inp: RenderPageMetadataInput | RenderRouteMetadataInput,
    *,
    settings_port: SettingsPort | None = None,
) -> RenderOutput:
    """
    Main entry point for the render component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, RenderPageMetadataInput):
        return run_page_metadata(inp, settings_port=settings_port)
    elif isinstance(inp, RenderRouteMetadataInput):
        return run_route_metadata(inp, settings_port=settings_port)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
