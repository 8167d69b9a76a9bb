"""
Canonical path normalization.

Key behaviors:
- The root path "/" never gains or loses a trailing slash
- Every other path gains or loses exactly one trailing slash per policy
- Query strings and fragments are carried verbatim and never normalized
- Normalization is idempotent
"""

from __future__ import annotations

from .models import DEFAULT_POLICY, CanonicalPathPolicy, TrailingSlash


def split_path(path: str) -> tuple[str, str]:
    """
    Split a path into its path part and its query/fragment suffix.

    The suffix keeps its leading "?" or "#" so that ``path + suffix`` rebuilds
    the input.
    """
    cut = len(path)
    for marker in ("?", "#"):
        idx = path.find(marker)
        if idx != -1 and idx < cut:
            cut = idx
    return path[:cut], path[cut:]


def _strip(path: str) -> str:
    return path.rstrip("/") or "/"


def normalize_path(
    path: str,
    policy: CanonicalPathPolicy = DEFAULT_POLICY,
) -> str:
    """
    Normalize a path per the trailing-slash policy.

    - Empty path becomes root
    - Adds leading slash if missing
    - Adds or strips the trailing slash (except root)
    - Leaves the query string and fragment untouched
    """
    bare, suffix = split_path(path)

    if not bare.startswith("/"):
        bare = "/" + bare

    bare = _strip(bare)
    if bare != "/" and policy.trailing_slash is TrailingSlash.ENFORCED:
        bare = bare + "/"

    return bare + suffix


def toggle_trailing_slash(path: str) -> str:
    """Flip the trailing slash of a path. Root is returned unchanged."""
    bare, suffix = split_path(path)
    if bare in ("", "/"):
        return path
    if bare.endswith("/"):
        return _strip(bare) + suffix
    return bare + "/" + suffix


def is_canonical(path: str, policy: CanonicalPathPolicy = DEFAULT_POLICY) -> bool:
    """Check whether a path is already in canonical form."""
    return normalize_path(path, policy) == path
