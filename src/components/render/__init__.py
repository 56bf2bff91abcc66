"""
Render component - per-route page metadata builder.
"""

from ._impl import (
    POST_ID_PATTERN,
    RenderService,
    build_canonical_url,
    create_render_service,
    fill_post_template,
    resolve_image_url,
    resolve_route,
    truncate_description,
    validate_page_metadata,
)
from .component import run, run_page_metadata, run_route_metadata
from .models import (
    MetaTag,
    PageMetadata,
    RenderError,
    RenderOutput,
    RenderPageMetadataInput,
    RenderRouteMetadataInput,
    RenderValidationError,
    Route,
    RouteKind,
)
from .ports import SettingsPort

__all__ = [
    # Entry points
    "run",
    "run_page_metadata",
    "run_route_metadata",
    # Input models
    "RenderPageMetadataInput",
    "RenderRouteMetadataInput",
    # Output models
    "MetaTag",
    "PageMetadata",
    "RenderError",
    "RenderOutput",
    "RenderValidationError",
    "Route",
    "RouteKind",
    # Service
    "RenderService",
    "create_render_service",
    # Functions
    "POST_ID_PATTERN",
    "build_canonical_url",
    "fill_post_template",
    "resolve_image_url",
    "resolve_route",
    "truncate_description",
    "validate_page_metadata",
    # Ports
    "SettingsPort",
]
