"""
Document component - static template splice and streaming.
"""

from ._impl import (
    load_template,
    parse_template,
    render_document,
    render_meta_tags_html,
    stream_document,
)
from .models import BODY_MARKER, HEAD_MARKER, STATE_MARKER, HtmlTemplate, TemplateError

__all__ = [
    "BODY_MARKER",
    "HEAD_MARKER",
    "STATE_MARKER",
    "HtmlTemplate",
    "TemplateError",
    "load_template",
    "parse_template",
    "render_document",
    "render_meta_tags_html",
    "stream_document",
]
