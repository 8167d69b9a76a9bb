"""
Build component - turn declared rules into a validated table and artifacts.

Invariants:
- Nothing is written unless the whole table and every target validate
- Host rule files and client stubs come from the same table
- Client stubs never overwrite a real page
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from docs_redirects.components.emitters import emit_host_rules, emit_stubs
from docs_redirects.components.redirects import (
    Redirect,
    RedirectError,
    RedirectResolver,
    RedirectTable,
    TableBuilder,
    build_table,
    iter_table_errors,
)

from .models import (
    BuildProblem,
    BuildRedirectsInput,
    BuildRedirectsOutput,
    CheckOutput,
    InvalidTargetPathError,
    ResolveOutput,
    ResolvePathInput,
)
from .ports import ArtifactWriterPort, RouteSourcePort

logger = logging.getLogger(__name__)


def _problem(error: RedirectError) -> BuildProblem:
    return BuildProblem(code=error.code, message=str(error))


def validate_target_path(path: str) -> None:
    """
    Check that a host rule target stays inside the output directory.

    Raises:
        InvalidTargetPathError: the path is not relative to the output directory.
    """
    target = PurePosixPath(path)
    if not path or target.is_absolute():
        raise InvalidTargetPathError(path, "must be a relative path")
    if ".." in target.parts:
        raise InvalidTargetPathError(path, "must not contain '..'")


def _page_routes(routes: RouteSourcePort | None) -> list[str] | None:
    if routes is None:
        return None
    page_routes = routes.list_routes()
    logger.info("Found %d page routes", len(page_routes))
    return page_routes


# --- Component Entry Points ---


def run_check(
    inp: BuildRedirectsInput,
    *,
    routes: RouteSourcePort | None = None,
) -> CheckOutput:
    """
    Check a rule set and report every problem instead of the first.

    Args:
        inp: Rules and table settings.
        routes: Optional page route source. Enables shadow and
            missing-destination checks.

    Returns:
        CheckOutput with the entry count and all problems found.
    """
    builder = TableBuilder(inp.policy, _page_routes(routes), inp.max_hops)
    problems: list[BuildProblem] = []

    for rule in inp.rules:
        try:
            builder.add(rule)
        except RedirectError as e:
            problems.append(_problem(e))

    table = builder.table()
    problems.extend(
        _problem(e) for e in iter_table_errors(table, builder.pages, inp.on_missing_destination)
    )

    for target in inp.targets:
        try:
            validate_target_path(target.path)
        except RedirectError as e:
            problems.append(_problem(e))

    return CheckOutput(entry_count=len(table), problems=problems)


def run_build(
    inp: BuildRedirectsInput,
    *,
    routes: RouteSourcePort | None = None,
    host_writer: ArtifactWriterPort | None = None,
    stub_writer: ArtifactWriterPort | None = None,
) -> BuildRedirectsOutput:
    """
    Build the redirect table and write every configured artifact.

    Args:
        inp: Rules, table settings and host targets.
        routes: Optional page route source.
        host_writer: Writer for host rule files. Skipped when None.
        stub_writer: Writer rooted at the built site for client stubs.
            Skipped when None, when ``inp.write_stubs`` is false, or when
            there are no page routes to guard against overwriting pages.

    Returns:
        BuildRedirectsOutput with the table and written files, or the
        error that stopped the build.
    """
    try:
        table = build_table(
            inp.rules,
            inp.policy,
            page_routes=_page_routes(routes),
            max_hops=inp.max_hops,
            on_missing_destination=inp.on_missing_destination,
        )
    except RedirectError as e:
        logger.error("Redirect table build failed: %s", e)
        return BuildRedirectsOutput(table=None, errors=[_problem(e)], success=False)

    logger.info(
        "Built redirect table: %d entries from %d rules (trailing_slash=%s)",
        len(table),
        len(inp.rules),
        inp.policy.trailing_slash.value,
    )

    # Validate and render every target before the first write
    try:
        for target in inp.targets:
            validate_target_path(target.path)
        host_files = [(t.path, emit_host_rules(table, t.platform)) for t in inp.targets]
    except RedirectError as e:
        logger.error("Host rule emission failed: %s", e)
        return BuildRedirectsOutput(table=table, errors=[_problem(e)], success=False)

    written: list[Path] = []
    if host_writer is not None:
        for path, content in host_files:
            written.append(host_writer.write_text(path, content))
            logger.info("Wrote host rules %s", path)

    if stub_writer is not None and inp.write_stubs and routes is None:
        logger.warning("Skipping redirect stubs: no page routes to check them against")
    elif stub_writer is not None and inp.write_stubs:
        stubs = emit_stubs(table, inp.base_url)
        for stub in stubs:
            written.append(stub_writer.write_text(stub.path, stub.html))
        logger.info("Wrote %d redirect stubs", len(stubs))

    return BuildRedirectsOutput(table=table, written=written, errors=[], success=True)


def run_resolve(inp: ResolvePathInput, *, table: RedirectTable) -> ResolveOutput:
    """
    Resolve a path against a published table.

    Args:
        inp: Input containing the path to resolve.
        table: Published redirect table.

    Returns:
        ResolveOutput with the redirect, or None when the path does not redirect.
    """
    result = RedirectResolver(table).resolve(inp.path)
    if isinstance(result, Redirect):
        return ResolveOutput(path=inp.path, redirect=result)
    return ResolveOutput(path=inp.path, redirect=None)
