"""
Build component port definitions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class RouteSourcePort(Protocol):
    """Source of the page routes the site build emits."""

    def list_routes(self) -> list[str]:
        """List every page route."""
        ...


class ArtifactWriterPort(Protocol):
    """Destination for generated artifacts."""

    def write_text(self, name: str, content: str) -> Path:
        """Write a text artifact and return its path."""
        ...
