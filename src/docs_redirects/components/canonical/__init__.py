"""
Canonical component - trailing-slash policy and path normalization.
"""

from ._impl import is_canonical, normalize_path, split_path, toggle_trailing_slash
from .models import DEFAULT_POLICY, CanonicalPathPolicy, TrailingSlash

__all__ = [
    "CanonicalPathPolicy",
    "DEFAULT_POLICY",
    "TrailingSlash",
    "is_canonical",
    "normalize_path",
    "split_path",
    "toggle_trailing_slash",
]
