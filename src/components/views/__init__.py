"""
Views component - server-rendered application tree.
"""

from ._impl import (
    ROOT_ELEMENT_ID,
    STATE_ELEMENT_ID,
    home_page,
    layout,
    not_found_page,
    post_page,
    render_app,
    render_app_to_string,
    render_state_script,
    serialize_state,
)
from .component import build_app_state, run
from .models import AppState

__all__ = [
    "run",
    "build_app_state",
    "AppState",
    "ROOT_ELEMENT_ID",
    "STATE_ELEMENT_ID",
    "home_page",
    "layout",
    "not_found_page",
    "post_page",
    "render_app",
    "render_app_to_string",
    "render_state_script",
    "serialize_state",
]
