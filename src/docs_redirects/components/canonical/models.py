"""
Canonical component models.

The trailing-slash policy is a single global setting applied to every path
the site serves, including redirect destinations.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TrailingSlash(str, Enum):
    """Whether canonical paths end in a slash."""

    ENFORCED = "enforced"
    STRIPPED = "stripped"


@dataclass(frozen=True)
class CanonicalPathPolicy:
    """Canonical path configuration."""

    trailing_slash: TrailingSlash = TrailingSlash.STRIPPED

    def normalize(self, path: str) -> str:
        """Return the canonical form of ``path`` under this policy."""
        from ._impl import normalize_path

        return normalize_path(path, self)

    def toggle(self, path: str) -> str:
        """Return the complementary trailing-slash variant of ``path``."""
        from ._impl import toggle_trailing_slash

        return toggle_trailing_slash(path)


DEFAULT_POLICY = CanonicalPathPolicy()
