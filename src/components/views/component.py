"""
Views component - application tree for server rendering.

Invariants:
- I1: Output is a single root container carrying the route kind
- I2: All text and attribute values are HTML-escaped
- I3: Serialised state cannot terminate its script element
"""

from __future__ import annotations

from collections.abc import Iterator

from src.components.render import PageMetadata, Route
from src.config.models import SiteConfig

from ._impl import render_app, render_state_script
from .models import AppState


def build_app_state(config: SiteConfig, route: Route, metadata: PageMetadata) -> AppState:
    """Assemble the tree input from site config and per-request metadata."""
    return AppState(
        route=route,
        metadata=metadata,
        site_name=config.site_name,
        featured_posts=tuple(config.featured_posts),
        post_prefix=config.post_prefix,
    )


def run(state: AppState) -> tuple[Iterator[str], str]:
    """
    Render an application state.

    Returns:
        (body chunk iterator, hydration state script)
    """
    return render_app(state), render_state_script(state)
