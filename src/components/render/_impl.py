"""
RenderService - per-route page metadata builder.

Maps a request path to a page-metadata record by literal prefix dispatch
and derives the Open Graph / Twitter fields from the site config.

Key behaviors:
- "/" is the home page, "<post_prefix><id>" is a post page
- Post strings are the configured templates with {post_id} substituted
- Unknown paths fall back to the home record (served as 404 by the caller)
- Pure function: same inputs always produce same outputs
"""

from __future__ import annotations

import re
from urllib.parse import urljoin

from src.config.models import POST_ID_PLACEHOLDER, MetadataRecord, SiteConfig

from .models import PageMetadata, RenderValidationError, Route, RouteKind

POST_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

MAX_DESCRIPTION_LENGTH = 200


# --- Routing ---


def resolve_route(path: str, post_prefix: str = "/post/") -> Route:
    """
    Dispatch a request path by literal prefix.

    A single trailing slash after the post id is tolerated; anything
    deeper than one segment is not found.
    """
    if path in ("", "/"):
        return Route(kind=RouteKind.HOME, path="/")

    if path.startswith(post_prefix):
        post_id = path[len(post_prefix) :]
        if post_id.endswith("/"):
            post_id = post_id[:-1]
        if POST_ID_PATTERN.match(post_id):
            return Route(kind=RouteKind.POST, path=path, post_id=post_id)

    return Route(kind=RouteKind.NOT_FOUND, path=path)


# --- URL Building ---


def build_canonical_url(base_url: str, path: str) -> str:
    """
    Build canonical URL from base URL and path.

    Ensures proper URL formatting.
    """
    base = base_url.rstrip("/")
    if not path.startswith("/"):
        path = "/" + path

    return f"{base}{path}"


def resolve_image_url(base_url: str, image: str) -> str:
    """Make a relative image URL absolute; crawlers ignore relative og:image."""
    if image.startswith(("http://", "https://")):
        return image
    return urljoin(base_url.rstrip("/") + "/", image.lstrip("/"))


# --- Description Truncation ---


def truncate_description(text: str, max_length: int = MAX_DESCRIPTION_LENGTH) -> str:
    """
    Truncate description to fit meta description limits.

    Breaks at word boundary if possible.
    """
    if len(text) <= max_length:
        return text

    truncated = text[:max_length]
    last_space = truncated.rfind(" ")

    if last_space > max_length * 0.6:  # At least 60% of the text
        truncated = truncated[:last_space]

    return truncated.rstrip() + "..."


def fill_post_template(template: str, post_id: str) -> str:
    """Substitute the post id literally (no str.format on request data)."""
    return template.replace(POST_ID_PLACEHOLDER, post_id)


# --- Validation ---


def validate_page_metadata(metadata: PageMetadata) -> list[RenderValidationError]:
    """Every record field must be a non-empty string."""
    errors: list[RenderValidationError] = []
    for field_name in ("title", "description", "image"):
        value = getattr(metadata, field_name)
        if not isinstance(value, str) or not value.strip():
            errors.append(
                RenderValidationError(
                    code="empty_field",
                    message=f"Page metadata field '{field_name}' is empty",
                    field=field_name,
                )
            )
    return errors


# --- Main Render Service ---


class RenderService:
    """
    Page metadata builder.

    Pure functions: same inputs always produce same outputs.
    """

    def __init__(self, config: SiteConfig, base_url: str) -> None:
        """
        Initialize render service.

        Args:
            config: Site configuration holding the metadata records
            base_url: Site base URL for canonical and image URLs
        """
        self._config = config
        self._base_url = base_url.rstrip("/")

    @property
    def config(self) -> SiteConfig:
        return self._config

    def resolve_route(self, path: str) -> Route:
        """Dispatch a path using the configured post prefix."""
        return resolve_route(path, self._config.post_prefix)

    def build_route_metadata(self, route: Route) -> PageMetadata:
        """
        Build page metadata for a dispatched route.

        Args:
            route: Result of prefix dispatch

        Returns:
            PageMetadata with record and derived social fields
        """
        if route.kind == RouteKind.POST and route.post_id is not None:
            template = self._config.post
            record = MetadataRecord(
                title=fill_post_template(template.title, route.post_id),
                description=fill_post_template(template.description, route.post_id),
                image=fill_post_template(template.image, route.post_id),
            )
            og_type = "article"
            canonical_path = route.path.rstrip("/")
        else:
            record = self._config.home
            og_type = "website"
            canonical_path = "/"

        return PageMetadata(
            title=record.title,
            description=truncate_description(record.description),
            image=resolve_image_url(self._base_url, record.image),
            canonical_url=build_canonical_url(self._base_url, canonical_path),
            og_type=og_type,
            site_name=self._config.site_name,
            twitter_card="summary_large_image",
            twitter_site=self._config.twitter_site,
        )

    def build_page_metadata(self, path: str = "/") -> PageMetadata:
        """Convenience: dispatch and build in one step."""
        return self.build_route_metadata(self.resolve_route(path))


# --- Factory ---


def create_render_service(config: SiteConfig, base_url: str) -> RenderService:
    """
    Create a render service.

    Args:
        config: Site configuration
        base_url: Site base URL

    Returns:
        Configured RenderService
    """
    return RenderService(config, base_url)
