"""
Tests for the public redirect routes.

- Legacy paths answer 301 with the final destination
- The query string survives the redirect
- Unknown paths answer 404
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from docs_redirects.api import deps
from docs_redirects.api.main import create_app, lifespan, load_table
from docs_redirects.api.routes.public_redirects import build_location, resolve_redirect
from docs_redirects.components.canonical import CanonicalPathPolicy
from docs_redirects.components.redirects import (
    RedirectResolver,
    RedirectRule,
    RedirectTable,
    build_table,
)
from docs_redirects.rules.loader import RULES_PATH_ENV

RULES = """
redirects:
  - from: /docs/overview/quickstart
    to: /docs/get-started/quickstart
"""


@pytest.fixture
def table(sample_rules: list[RedirectRule], stripped: CanonicalPathPolicy) -> RedirectTable:
    return build_table(sample_rules, stripped)


@pytest.fixture
def client(table: RedirectTable) -> TestClient:
    return TestClient(create_app(table), follow_redirects=False)


@pytest.fixture
def clean_settings() -> Iterator[None]:
    deps.get_settings.cache_clear()
    yield
    deps.get_settings.cache_clear()


# --- Helper Functions ---


class TestBuildLocation:
    def test_without_query(self) -> None:
        assert build_location("/docs/new") == "/docs/new"

    def test_with_query(self) -> None:
        assert build_location("/docs/new", "ref=blog&x=1") == "/docs/new?ref=blog&x=1"


class TestResolveRedirect:
    def test_redirect(self, table: RedirectTable) -> None:
        result = resolve_redirect("/docs/overview/quickstart", RedirectResolver(table), "a=1")
        assert result == ("/docs/get-started/quickstart?a=1", 301)

    def test_no_redirect(self, table: RedirectTable) -> None:
        assert resolve_redirect("/docs/guides/solitary", RedirectResolver(table)) is None


# --- Routes ---


class TestRedirectRoutes:
    def test_permanent_redirect(self, client: TestClient) -> None:
        response = client.get("/docs/overview/quickstart")

        assert response.status_code == 301
        assert response.headers["location"] == "/docs/get-started/quickstart"

    def test_trailing_slash_variant(self, client: TestClient) -> None:
        response = client.get("/docs/overview/quickstart/")

        assert response.status_code == 301
        assert response.headers["location"] == "/docs/get-started/quickstart"

    def test_query_string_preserved(self, client: TestClient) -> None:
        response = client.get("/docs/learn/unit-tests/solitary?ref=blog")

        assert response.status_code == 301
        assert response.headers["location"] == "/docs/guides/solitary?ref=blog"

    def test_unknown_path(self, client: TestClient) -> None:
        assert client.get("/docs/guides/solitary").status_code == 404

    def test_root(self, client: TestClient) -> None:
        assert client.get("/").status_code == 404

    def test_resolve_endpoint(self, client: TestClient) -> None:
        response = client.get("/_redirects/resolve", params={"path": "/docs/overview/quickstart"})

        assert response.status_code == 200
        assert response.json() == {
            "path": "/docs/overview/quickstart",
            "target": "/docs/get-started/quickstart",
            "permanent": True,
            "status_code": 301,
        }

    def test_resolve_endpoint_no_redirect(self, client: TestClient) -> None:
        response = client.get("/_redirects/resolve", params={"path": "/docs/guides/solitary"})

        assert response.json()["target"] is None


# --- Startup ---


class TestStartup:
    def test_table_required(self) -> None:
        client = TestClient(create_app())

        with pytest.raises(RuntimeError):
            client.get("/docs/overview/quickstart")

    def test_apps_keep_their_own_table(self, stripped: CanonicalPathPolicy) -> None:
        app_a = create_app(build_table([RedirectRule.of("/docs/old-a", "/docs/new-a")], stripped))
        app_b = create_app(build_table([RedirectRule.of("/docs/old-b", "/docs/new-b")], stripped))
        client_a = TestClient(app_a, follow_redirects=False)
        client_b = TestClient(app_b, follow_redirects=False)

        assert client_a.get("/docs/old-a").headers["location"] == "/docs/new-a"
        assert client_a.get("/docs/old-b").status_code == 404
        assert client_b.get("/docs/old-b").headers["location"] == "/docs/new-b"
        assert client_b.get("/docs/old-a").status_code == 404

    def test_load_table_from_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, clean_settings: None
    ) -> None:
        path = tmp_path / "redirects.yaml"
        path.write_text(RULES, encoding="utf-8")
        monkeypatch.setenv(RULES_PATH_ENV, str(path))
        monkeypatch.delenv("REDIRECTS_BUILD_DIR", raising=False)

        table = load_table()

        assert table["/docs/overview/quickstart"] == "/docs/get-started/quickstart"

    def test_lifespan_publishes_table(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, clean_settings: None
    ) -> None:
        path = tmp_path / "redirects.yaml"
        path.write_text(RULES, encoding="utf-8")
        monkeypatch.setenv(RULES_PATH_ENV, str(path))
        monkeypatch.delenv("REDIRECTS_BUILD_DIR", raising=False)

        with TestClient(create_app(), follow_redirects=False) as client:
            response = client.get("/docs/overview/quickstart")

        assert response.status_code == 301

    def test_lifespan_fails_fast(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, clean_settings: None
    ) -> None:
        monkeypatch.setenv(RULES_PATH_ENV, str(tmp_path / "missing.yaml"))

        async def start() -> None:
            async with lifespan(FastAPI()):
                pass

        with pytest.raises(SystemExit):
            asyncio.run(start())
