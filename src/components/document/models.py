"""
Document component models.
"""

from __future__ import annotations

from dataclasses import dataclass

HEAD_MARKER = "<!--app-head-->"
BODY_MARKER = "<!--app-html-->"
STATE_MARKER = "<!--app-state-->"


class TemplateError(Exception):
    """The static HTML template is missing or malformed."""


@dataclass(frozen=True)
class HtmlTemplate:
    """
    Static HTML template split around the body marker.

    head holds everything before the app markup (including the head
    marker), tail everything after it (including the state marker).
    """

    head: str
    tail: str
    source: str = "<inline>"
