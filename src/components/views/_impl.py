"""
Server-side application tree.

Each component is a generator yielding HTML chunks so the caller can stream
the body as it is produced. Components only read from AppState.
"""

from __future__ import annotations

import html
import json
from collections.abc import Iterator

from src.components.render import RouteKind

from .models import AppState

ROOT_ELEMENT_ID = "root"
STATE_ELEMENT_ID = "__APP_STATE__"

# Characters that could close the surrounding <script> or break JS parsers
_JSON_SCRIPT_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _e(text: str) -> str:
    return html.escape(text, quote=True)


# --- Page Components ---


def home_page(state: AppState) -> Iterator[str]:
    yield "<section class=\"home\">"
    yield f"<h1>{_e(state.metadata.title)}</h1>"
    yield f"<p class=\"lead\">{_e(state.metadata.description)}</p>"
    if state.featured_posts:
        yield "<ul class=\"post-list\">"
        for post_id in state.featured_posts:
            yield (
                f"<li><a href=\"{_e(state.post_href(post_id))}\">"
                f"Read post {_e(post_id)}</a></li>"
            )
        yield "</ul>"
    yield "</section>"


def post_page(state: AppState) -> Iterator[str]:
    post_id = state.route.post_id or ""
    metadata = state.metadata
    yield f"<article class=\"post\" data-post-id=\"{_e(post_id)}\">"
    yield f"<h1>{_e(metadata.title)}</h1>"
    yield f"<img src=\"{_e(metadata.image)}\" alt=\"{_e(metadata.title)}\" width=\"600\" />"
    yield f"<p>{_e(metadata.description)}</p>"
    yield "<button type=\"button\" data-action=\"like\" data-count=\"0\">Like (0)</button>"
    yield "<p><a href=\"/\">Back to home</a></p>"
    yield "</article>"


def not_found_page(state: AppState) -> Iterator[str]:
    yield "<section class=\"not-found\">"
    yield "<h1>Page not found</h1>"
    yield f"<p>Nothing lives at <code>{_e(state.route.path)}</code>.</p>"
    yield "<p><a href=\"/\">Back to home</a></p>"
    yield "</section>"


PAGES = {
    RouteKind.HOME: home_page,
    RouteKind.POST: post_page,
    RouteKind.NOT_FOUND: not_found_page,
}


# --- Layout ---


def layout(state: AppState, page: Iterator[str]) -> Iterator[str]:
    yield "<header class=\"site-header\">"
    yield f"<a class=\"brand\" href=\"/\">{_e(state.site_name)}</a>"
    yield "</header>"
    yield "<main>"
    yield from page
    yield "</main>"
    yield f"<footer class=\"site-footer\"><small>{_e(state.site_name)}</small></footer>"


def render_app(state: AppState) -> Iterator[str]:
    """Render the whole tree inside the hydration root container."""
    page = PAGES[state.kind]
    yield f"<div id=\"{ROOT_ELEMENT_ID}\" data-route=\"{_e(state.kind.value)}\">"
    yield from layout(state, page(state))
    yield "</div>"


def render_app_to_string(state: AppState) -> str:
    return "".join(render_app(state))


# --- Hydration State ---


def serialize_state(state: AppState) -> str:
    """JSON for embedding in <script type="application/json">."""
    raw = json.dumps(state.to_dict(), separators=(",", ":"), sort_keys=True)
    for char, escaped in _JSON_SCRIPT_ESCAPES.items():
        raw = raw.replace(char, escaped)
    return raw


def render_state_script(state: AppState) -> str:
    return (
        f"<script id=\"{STATE_ELEMENT_ID}\" type=\"application/json\">"
        f"{serialize_state(state)}</script>"
    )
