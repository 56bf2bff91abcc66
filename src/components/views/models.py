"""
Views component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.components.render import PageMetadata, Route, RouteKind


@dataclass(frozen=True)
class AppState:
    """
    Single input of the application tree.

    The same state is rendered on the server and serialised into the page
    so the client can hydrate without re-fetching content.
    """

    route: Route
    metadata: PageMetadata
    site_name: str
    featured_posts: tuple[str, ...] = ()
    post_prefix: str = "/post/"

    @property
    def kind(self) -> RouteKind:
        return self.route.kind

    def post_href(self, post_id: str) -> str:
        return f"{self.post_prefix}{post_id}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "route": {
                "kind": self.route.kind.value,
                "path": self.route.path,
                "post_id": self.route.post_id,
            },
            "metadata": self.metadata.to_dict(),
            "site_name": self.site_name,
            "featured_posts": list(self.featured_posts),
            "post_prefix": self.post_prefix,
        }
