"""
Public Redirects Routes.

Request-time redirect resolution against the published table.

Key behaviors:
- Permanent redirects answer 301
- The inbound query string is carried over to the Location header
- Paths with no redirect fall through to 404
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse

from docs_redirects.api.deps import get_resolver
from docs_redirects.components.redirects import Redirect, RedirectResolver

router = APIRouter()


# --- Helper Functions ---


def build_location(target_path: str, query_string: str = "") -> str:
    """Append the inbound query string to a redirect target."""
    if not query_string:
        return target_path
    return f"{target_path}?{query_string}"


def resolve_redirect(
    path: str,
    resolver: RedirectResolver,
    query_string: str = "",
) -> tuple[str, int] | None:
    """
    Resolve a redirect for the given path.

    Returns (target_url, status_code) or None if no redirect.
    """
    result = resolver.resolve(path)
    if not isinstance(result, Redirect):
        return None
    return build_location(result.destination, query_string), result.status_code


# --- Routes ---


@router.get("/_redirects/resolve")
async def resolve_path(
    path: str,
    resolver: RedirectResolver = Depends(get_resolver),
) -> dict[str, Any]:
    """Report how a path resolves without redirecting."""
    result = resolver.resolve(path)
    if not isinstance(result, Redirect):
        return {"path": path, "target": None, "permanent": None, "status_code": None}
    return {
        "path": path,
        "target": result.destination,
        "permanent": result.permanent,
        "status_code": result.status_code,
    }


@router.get("/{path:path}")
async def handle_redirect(
    path: str,
    request: Request,
    resolver: RedirectResolver = Depends(get_resolver),
) -> RedirectResponse:
    """
    Handle public redirects.

    Checks if the path has a redirect configured and returns
    the appropriate redirect response.
    """
    if not path.startswith("/"):
        path = "/" + path

    result = resolve_redirect(path, resolver, request.url.query)
    if result is None:
        raise HTTPException(status_code=404, detail="Not found")

    target_url, status_code = result
    return RedirectResponse(url=target_url, status_code=status_code)
