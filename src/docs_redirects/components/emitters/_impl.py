"""
Target emitters - project one redirect table onto deployment artifacts.

Key behaviors:
- Client stubs: one HTML page per legacy path that navigates to the final
  destination, for hosts without edge redirects
- Host rules: one ordered rule list per hosting platform
- Every artifact is derived from the same table, in table order
- Chains are collapsed: each artifact points straight at the final destination
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from html import escape

from docs_redirects.components.redirects._impl import RedirectTable, follow
from docs_redirects.components.redirects.models import RedirectEntry

from .models import HostRule, RedirectStub, UnknownPlatformError

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"
STUB_MARKER = '<meta name="generator" content="docs-redirects">'

STUB_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
    <meta charset="utf-8">
    {marker}
    <title>Redirecting...</title>
    <link rel="canonical" href="{url}">
    <meta name="robots" content="noindex">
    <meta http-equiv="refresh" content="0; url={url}">
    <script>window.location.replace({url_js} + window.location.search + window.location.hash);</script>
</head>
<body>
<p>This page has moved to <a href="{url}">{url}</a>.</p>
</body>
</html>
"""


# --- Host Rules ---


def host_rules(table: RedirectTable) -> list[HostRule]:
    """Flatten a table into ordered, chain-free rules."""
    return [
        HostRule(source=entry.source, destination=follow(table, entry.source), permanent=True)
        for entry in table.entries
    ]


def render_json(rules: list[HostRule]) -> str:
    return json.dumps([rule.as_dict() for rule in rules], indent=2) + "\n"


def render_vercel(rules: list[HostRule]) -> str:
    return json.dumps({"redirects": [rule.as_dict() for rule in rules]}, indent=2) + "\n"


def render_netlify(rules: list[HostRule]) -> str:
    lines = ["# Generated by docs-redirects. Do not edit."]
    width = max((len(rule.source) for rule in rules), default=0)
    for rule in rules:
        lines.append(f"{rule.source.ljust(width)}  {rule.destination}  {rule.status_code}")
    return "\n".join(lines) + "\n"


HOST_RULE_RENDERERS: dict[str, Callable[[list[HostRule]], str]] = {
    "json": render_json,
    "netlify": render_netlify,
    "vercel": render_vercel,
}


def emit_host_rules(table: RedirectTable, platform: str) -> str:
    """
    Serialize a table into a hosting platform's redirect file.

    Raises:
        UnknownPlatformError: no renderer is registered for ``platform``.
    """
    renderer = HOST_RULE_RENDERERS.get(platform)
    if renderer is None:
        raise UnknownPlatformError(platform)
    rules = host_rules(table)
    logger.debug("Rendering %d %s rules", len(rules), platform)
    return renderer(rules)


# --- Client Stubs ---


def stub_path(source: str) -> str:
    """Output file for a legacy path: ``/docs/old`` -> ``docs/old/index.html``."""
    stripped = source.strip("/")
    if not stripped:
        return INDEX_FILE
    return f"{stripped}/{INDEX_FILE}"


def render_stub(destination: str, base_url: str = "") -> str:
    url = base_url.rstrip("/") + destination if base_url else destination
    return STUB_TEMPLATE.format(
        marker=STUB_MARKER,
        url=escape(url, quote=True),
        url_js=json.dumps(url).replace("</", "<\\/"),
    )


def _stub_for(table: RedirectTable, entry: RedirectEntry, base_url: str) -> RedirectStub:
    destination = follow(table, entry.source)
    return RedirectStub(
        path=stub_path(entry.source),
        destination=destination,
        html=render_stub(destination, base_url),
    )


def emit_stubs(table: RedirectTable, base_url: str = "") -> list[RedirectStub]:
    """One stub per output file; slash variants of a path share a file."""
    stubs: dict[str, RedirectStub] = {}
    for entry in table.entries:
        path = stub_path(entry.source)
        if path not in stubs:
            stubs[path] = _stub_for(table, entry, base_url)
    return list(stubs.values())


def is_stub(html: str) -> bool:
    """Check whether an HTML document is a generated redirect stub."""
    return STUB_MARKER in html
