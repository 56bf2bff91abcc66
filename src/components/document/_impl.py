"""
HTML template splicing and document streaming.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from src.components.render import PageMetadata

from .models import BODY_MARKER, HEAD_MARKER, STATE_MARKER, HtmlTemplate, TemplateError

logger = logging.getLogger(__name__)


def _escape_html(text: str) -> str:
    """Escape HTML special characters."""
    return html.escape(text, quote=True)


# --- Template Loading ---


def parse_template(text: str, source: str = "<inline>") -> HtmlTemplate:
    """
    Validate and split template text.

    Raises TemplateError if a marker is missing, duplicated, or the head
    marker is not inside <head>.
    """
    for marker in (HEAD_MARKER, BODY_MARKER, STATE_MARKER):
        count = text.count(marker)
        if count != 1:
            raise TemplateError(f"{source}: expected marker {marker} once, found {count}")

    lowered = text.lower()
    head_close = lowered.find("</head>")
    head_pos = text.index(HEAD_MARKER)
    body_pos = text.index(BODY_MARKER)
    state_pos = text.index(STATE_MARKER)

    if head_close == -1 or head_pos > head_close:
        raise TemplateError(f"{source}: {HEAD_MARKER} must be inside <head>")
    if body_pos < head_close or state_pos < body_pos:
        raise TemplateError(
            f"{source}: {BODY_MARKER} and {STATE_MARKER} must follow </head> in that order"
        )

    head, tail = text.split(BODY_MARKER)
    return HtmlTemplate(head=head, tail=tail, source=source)


def load_template(path: Path) -> HtmlTemplate:
    """Read the static template from disk."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise TemplateError(f"HTML template not found at: {path}") from e

    template = parse_template(text, source=str(path))
    logger.debug("Loaded HTML template from %s", path)
    return template


# --- Head Rendering ---


def render_meta_tags_html(metadata: PageMetadata) -> str:
    """Render PageMetadata to HTML head tag string."""
    html_parts: list[str] = []

    # Title (not a meta tag, but in head)
    html_parts.append(f"<title>{_escape_html(metadata.title)}</title>")

    for tag in metadata.to_meta_tags():
        if tag.property:
            html_parts.append(
                f'<meta property="{_escape_html(tag.property)}" '
                f'content="{_escape_html(tag.content)}" />'
            )
        elif tag.name:
            html_parts.append(
                f'<meta name="{_escape_html(tag.name)}" content="{_escape_html(tag.content)}" />'
            )

    if metadata.canonical_url:
        html_parts.append(
            f'<link rel="canonical" href="{_escape_html(metadata.canonical_url)}" />'
        )

    return "\n    ".join(html_parts)


# --- Streaming ---


def stream_document(
    template: HtmlTemplate,
    metadata: PageMetadata,
    body_chunks: Iterable[str],
    state_script: str = "",
) -> Iterator[str]:
    """
    Yield the complete document: head with tags first, then body, then tail.

    The head section is emitted before any body chunk is pulled so crawlers
    see the tags even on a slow render.
    """
    yield template.head.replace(HEAD_MARKER, render_meta_tags_html(metadata))
    yield from body_chunks
    yield template.tail.replace(STATE_MARKER, state_script)


def render_document(
    template: HtmlTemplate,
    metadata: PageMetadata,
    body_chunks: Iterable[str],
    state_script: str = "",
) -> str:
    return "".join(stream_document(template, metadata, body_chunks, state_script))
