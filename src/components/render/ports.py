"""
Render component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class SettingsPort(Protocol):
    """Port for request-scoped render settings."""

    def get_base_url(self) -> str:
        """Get site base URL used for canonical and image URLs."""
        ...
