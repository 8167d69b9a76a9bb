import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, Request

from docs_redirects.components.redirects import RedirectResolver, RedirectTable
from docs_redirects.rules.loader import default_rules_path


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.rules_path = default_rules_path()
        build_dir = os.environ.get("REDIRECTS_BUILD_DIR")
        self.build_dir = Path(build_dir) if build_dir else None


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Published Table ---
# Each app holds its own table on app.state, set once at startup.


def get_redirect_table(request: Request) -> RedirectTable:
    table: RedirectTable | None = getattr(request.app.state, "redirect_table", None)
    if table is None:
        raise RuntimeError("Redirect table has not been published")
    return table


def get_resolver(table: RedirectTable = Depends(get_redirect_table)) -> RedirectResolver:
    return RedirectResolver(table)
