"""
Render component input/output models.

The page-metadata record is the only entity produced per request: it lives
for one request/response cycle and is never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from src.config.models import SiteConfig

# --- Routing ---


class RouteKind(str, Enum):
    """Outcome of prefix dispatch on a request path."""

    HOME = "home"
    POST = "post"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Route:
    """A dispatched request path."""

    kind: RouteKind
    path: str
    post_id: str | None = None


# --- Validation Error ---


@dataclass(frozen=True)
class RenderValidationError:
    """Render validation error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class RenderPageMetadataInput:
    """Input for building metadata for an arbitrary request path."""

    config: SiteConfig
    path: str = "/"


@dataclass(frozen=True)
class RenderRouteMetadataInput:
    """Input for building metadata for an already dispatched route."""

    config: SiteConfig
    route: Route


# --- Output Models ---


@dataclass(frozen=True)
class MetaTag:
    """HTML meta tag representation."""

    name: str | None = None
    property: str | None = None  # For OG tags
    content: str = ""


@dataclass(frozen=True)
class PageMetadata:
    """
    Page metadata for one request.

    title, description and image are the record itself; the remaining
    fields are derived from the site config and request context.
    """

    title: str
    description: str
    image: str
    canonical_url: str = ""
    og_type: str = "website"
    site_name: str = ""
    twitter_card: str = "summary_large_image"
    twitter_site: str | None = None

    def to_meta_tags(self) -> list[MetaTag]:
        """Convert to list of MetaTag objects for rendering."""
        tags = [
            MetaTag(name="description", content=self.description),
            MetaTag(property="og:title", content=self.title),
            MetaTag(property="og:description", content=self.description),
            MetaTag(property="og:image", content=self.image),
            MetaTag(property="og:type", content=self.og_type),
        ]

        if self.canonical_url:
            tags.append(MetaTag(property="og:url", content=self.canonical_url))
        if self.site_name:
            tags.append(MetaTag(property="og:site_name", content=self.site_name))

        tags.extend(
            [
                MetaTag(name="twitter:card", content=self.twitter_card),
                MetaTag(name="twitter:title", content=self.title),
                MetaTag(name="twitter:description", content=self.description),
                MetaTag(name="twitter:image", content=self.image),
            ]
        )

        if self.twitter_site:
            tags.append(MetaTag(name="twitter:site", content=self.twitter_site))

        return tags

    def to_dict(self) -> dict[str, str | None]:
        """Plain mapping used by the JSON debug endpoint and hydration state."""
        return {
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "canonical_url": self.canonical_url,
            "og_type": self.og_type,
            "site_name": self.site_name,
            "twitter_card": self.twitter_card,
            "twitter_site": self.twitter_site,
        }


@dataclass(frozen=True)
class RenderOutput:
    """Output containing page metadata for a route."""

    route: Route
    metadata: PageMetadata | None
    errors: list[RenderValidationError] = field(default_factory=list)
    success: bool = True


class RenderError(Exception):
    """Metadata for a route failed validation."""

    def __init__(self, route: Route, errors: list[RenderValidationError]) -> None:
        self.route = route
        self.errors = errors
        fields = ", ".join(e.field or e.code for e in errors)
        super().__init__(f"Invalid page metadata for {route.path}: {fields}")
