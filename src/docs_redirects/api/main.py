import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from docs_redirects.adapters.routes import BuildDirRouteSource
from docs_redirects.api.deps import get_settings
from docs_redirects.api.routes import public_redirects
from docs_redirects.components.redirects import RedirectError, RedirectTable, build_table
from docs_redirects.rules.loader import RulesLoadError, load_rules

logger = logging.getLogger(__name__)


def load_table() -> RedirectTable:
    """Load the rules file and build the table the app serves."""
    settings = get_settings()
    rules = load_rules(settings.rules_path)

    page_routes = None
    if settings.build_dir is not None:
        page_routes = BuildDirRouteSource(settings.build_dir).list_routes()

    return build_table(
        rules.to_rules(),
        rules.policy,
        page_routes=page_routes,
        max_hops=rules.max_hops,
        on_missing_destination=rules.on_missing_destination,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build and publish the redirect table on startup (fail-fast)."""
    try:
        table = load_table()
    except (FileNotFoundError, RulesLoadError, RedirectError) as e:
        logger.critical("Redirect table load failed: %s", e)
        raise SystemExit(1) from e

    app.state.redirect_table = table
    logger.info("Published redirect table with %d entries", len(table))
    yield


def create_app(table: RedirectTable | None = None) -> FastAPI:
    """
    Create the redirect app.

    With a table, it is published immediately; otherwise the table is built
    from the rules file at startup.
    """
    app = FastAPI(
        title="Docs Redirects",
        version="0.1.0",
        lifespan=None if table is not None else lifespan,
        docs_url=None,
        redoc_url=None,
    )
    if table is not None:
        app.state.redirect_table = table
    app.include_router(public_redirects.router, tags=["Redirects"])
    return app


app = create_app()
