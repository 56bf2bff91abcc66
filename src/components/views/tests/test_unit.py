"""
Unit tests for the views component.
"""

from __future__ import annotations

import json
from html.parser import HTMLParser

import pytest

from src.components.render import create_render_service
from src.components.views import (
    AppState,
    build_app_state,
    render_app,
    render_app_to_string,
    render_state_script,
    run,
    serialize_state,
)
from src.config.models import SiteConfig


class TagCollector(HTMLParser):
    """Collects start tags and checks open/close balance."""

    VOID = {"img", "meta", "link", "br", "hr", "input"}

    def __init__(self) -> None:
        super().__init__()
        self.stack: list[str] = []
        self.starts: list[tuple[str, dict[str, str | None]]] = []
        self.balanced = True

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.starts.append((tag, dict(attrs)))
        if tag not in self.VOID:
            self.stack.append(tag)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.starts.append((tag, dict(attrs)))

    def handle_endtag(self, tag: str) -> None:
        if not self.stack or self.stack.pop() != tag:
            self.balanced = False


def _state_for(path: str, config: SiteConfig | None = None) -> AppState:
    config = config or SiteConfig()
    service = create_render_service(config, "https://example.com")
    route = service.resolve_route(path)
    return build_app_state(config, route, service.build_route_metadata(route))


def _parse(markup: str) -> TagCollector:
    parser = TagCollector()
    parser.feed(markup)
    parser.close()
    return parser


class TestRenderApp:
    @pytest.mark.parametrize("path", ["/", "/post/123", "/missing"])
    def test_markup_is_balanced(self, path: str) -> None:
        parser = _parse(render_app_to_string(_state_for(path)))

        assert parser.balanced
        assert parser.stack == []

    def test_root_carries_route_kind(self) -> None:
        parser = _parse(render_app_to_string(_state_for("/post/123")))
        tag, attrs = parser.starts[0]

        assert tag == "div"
        assert attrs["id"] == "root"
        assert attrs["data-route"] == "post"

    def test_home_links_featured_posts(self) -> None:
        markup = render_app_to_string(_state_for("/"))

        assert 'href="/post/1"' in markup
        assert 'href="/post/123"' in markup

    def test_post_page_content(self) -> None:
        markup = render_app_to_string(_state_for("/post/123"))

        assert "<h1>Post 123</h1>" in markup
        assert 'data-post-id="123"' in markup
        assert 'data-action="like"' in markup

    def test_not_found_page_escapes_path(self) -> None:
        markup = render_app_to_string(_state_for("/<b>x</b>"))

        assert "Page not found" in markup
        assert "<b>x</b>" not in markup
        assert "&lt;b&gt;" in markup

    def test_streams_multiple_chunks(self) -> None:
        chunks = list(render_app(_state_for("/")))

        assert len(chunks) > 1
        assert all(isinstance(c, str) for c in chunks)

    def test_run_returns_body_and_state(self) -> None:
        body, script = run(_state_for("/post/5"))

        assert "Post 5" in "".join(body)
        assert script.startswith('<script id="__APP_STATE__"')


class TestSerializeState:
    def test_round_trips_as_json(self) -> None:
        state = _state_for("/post/123")
        data = json.loads(serialize_state(state))

        assert data["route"] == {"kind": "post", "path": "/post/123", "post_id": "123"}
        assert data["metadata"]["title"] == "Post 123"

    def test_cannot_close_script(self) -> None:
        config = SiteConfig.model_validate({"site_name": "</script><script>alert(1)"})
        serialized = serialize_state(_state_for("/", config))

        assert "</script>" not in serialized
        assert "<" not in serialized
        assert json.loads(serialized)["site_name"] == "</script><script>alert(1)"

    def test_state_script_single_element(self) -> None:
        script = render_state_script(_state_for("/"))

        assert script.count("</script>") == 1
