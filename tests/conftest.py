from collections.abc import Callable
from pathlib import Path

import pytest

from docs_redirects.components.canonical import CanonicalPathPolicy, TrailingSlash
from docs_redirects.components.redirects import RedirectRule

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def stripped() -> CanonicalPathPolicy:
    return CanonicalPathPolicy(trailing_slash=TrailingSlash.STRIPPED)


@pytest.fixture
def enforced() -> CanonicalPathPolicy:
    return CanonicalPathPolicy(trailing_slash=TrailingSlash.ENFORCED)


@pytest.fixture
def sample_rules() -> list[RedirectRule]:
    return [
        RedirectRule.of("/docs/overview/quickstart", "/docs/get-started/quickstart"),
        RedirectRule.of(
            ["/docs/developer-guide/unit-tests/solitary", "/docs/learn/unit-tests/solitary"],
            "/docs/guides/solitary",
        ),
    ]


def write_page(build_dir: Path, route: str) -> Path:
    """Write a built page for ``route`` the way the site generator lays it out."""
    if route == "/":
        target = build_dir / "index.html"
    else:
        target = build_dir / route.strip("/") / "index.html"
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(f"<html><body>{route}</body></html>", encoding="utf-8")
    return target


@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
    """Built site with the pages the sample rules point at."""
    site = tmp_path / "build"
    for route in (
        "/",
        "/docs/get-started/quickstart",
        "/docs/guides/solitary",
        "/docs/guides/sociable",
    ):
        write_page(site, route)
    return site


@pytest.fixture
def page_writer() -> Callable[[Path, str], Path]:
    return write_page
