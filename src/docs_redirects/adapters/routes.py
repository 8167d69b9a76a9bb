"""
Route discovery adapters.

The site build emits one HTML file per page. Redirect validation needs the
set of routes those files are served under.
"""

from __future__ import annotations

from pathlib import Path

from docs_redirects.components.emitters import is_stub

INDEX_FILE = "index.html"


def route_for_file(relative: Path) -> str:
    """
    Map a built HTML file to the route it serves.

    ``docs/intro/index.html`` serves ``/docs/intro/``; ``docs/intro.html``
    serves ``/docs/intro``; the top-level ``index.html`` serves ``/``.
    """
    parts = relative.parts
    if parts[-1] == INDEX_FILE:
        if len(parts) == 1:
            return "/"
        return "/" + "/".join(parts[:-1]) + "/"
    return "/" + "/".join((*parts[:-1], relative.stem))


class BuildDirRouteSource:
    """Reads page routes from a built site directory, skipping redirect stubs."""

    def __init__(self, build_dir: str | Path, ignore: tuple[str, ...] = ("404.html",)) -> None:
        self._build_dir = Path(build_dir)
        self._ignore = ignore

    def list_routes(self) -> list[str]:
        if not self._build_dir.is_dir():
            raise FileNotFoundError(f"Build directory not found: {self._build_dir}")

        routes = []
        for html_file in sorted(self._build_dir.rglob("*.html")):
            relative = html_file.relative_to(self._build_dir)
            if relative.as_posix() in self._ignore:
                continue
            if is_stub(html_file.read_text(encoding="utf-8", errors="replace")):
                continue
            routes.append(route_for_file(relative))
        return routes


class RoutesFileSource:
    """Reads page routes from a text file, one route per line."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def list_routes(self) -> list[str]:
        routes = []
        for line in self._path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                routes.append(line)
        return routes


class StaticRouteSource:
    """Fixed route list."""

    def __init__(self, routes: list[str]) -> None:
        self._routes = list(routes)

    def list_routes(self) -> list[str]:
        return list(self._routes)
