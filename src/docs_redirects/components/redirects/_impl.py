"""
Redirect table construction and resolution.

Key behaviors:
- Every rule expands to one entry per source, both sides normalized
- Each source also gets its complementary trailing-slash variant
- A source mapping to two destinations is a build error
- Sources may not shadow real pages
- Chains are followed for at most ``max_hops`` hops; longer chains and cycles
  are rejected while the table is built, so request-time lookups never fail
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Literal

from docs_redirects.components.canonical import (
    DEFAULT_POLICY,
    CanonicalPathPolicy,
    split_path,
    toggle_trailing_slash,
)

from .models import (
    NO_REDIRECT,
    ConflictingRedirectError,
    EmptySourceError,
    InvalidPathError,
    MissingDestinationError,
    Redirect,
    RedirectChainTooLongError,
    RedirectCycleError,
    RedirectEntry,
    RedirectError,
    RedirectRule,
    RedirectShadowsPageError,
    ResolutionResult,
    SelfRedirectError,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_HOPS = 2

MissingDestinationMode = Literal["ignore", "warn", "error"]


# --- Rule Validation ---


def validate_path(path: str) -> None:
    """Check that a path is root-relative with no query string or fragment."""
    if not path:
        raise InvalidPathError(path, "path is required")
    if not path.startswith("/"):
        raise InvalidPathError(path, "path must start with /")
    if path.startswith("//"):
        raise InvalidPathError(path, "protocol-relative URLs are not paths")
    if "?" in path:
        raise InvalidPathError(path, "path must not contain a query string")
    if "#" in path:
        raise InvalidPathError(path, "path must not contain a fragment")
    if any(ch.isspace() for ch in path):
        raise InvalidPathError(path, "path must not contain whitespace")


def validate_rule(rule: RedirectRule) -> None:
    """
    Validate a single rule.

    Raises:
        EmptySourceError: the rule has no sources.
        InvalidPathError: a source or the destination is malformed.
        SelfRedirectError: the destination is one of the sources.
    """
    if not rule.sources:
        raise EmptySourceError(rule.destination)

    for source in rule.sources:
        validate_path(source)
    validate_path(rule.destination)

    if rule.destination in rule.sources:
        raise SelfRedirectError(rule.destination)


# --- Redirect Table ---


class RedirectTable(Mapping[str, str]):
    """
    Ordered, read-only mapping of normalized source path to destination.

    Built once by ``build_table`` and shared freely afterwards.
    """

    def __init__(
        self,
        entries: Iterable[RedirectEntry],
        policy: CanonicalPathPolicy = DEFAULT_POLICY,
        max_hops: int = DEFAULT_MAX_HOPS,
    ) -> None:
        self._entries = tuple(entries)
        self._lookup = MappingProxyType({e.source: e.destination for e in self._entries})
        self._policy = policy
        self._max_hops = max_hops

    @property
    def entries(self) -> tuple[RedirectEntry, ...]:
        return self._entries

    @property
    def policy(self) -> CanonicalPathPolicy:
        return self._policy

    @property
    def max_hops(self) -> int:
        return self._max_hops

    def canonical_entries(self) -> tuple[RedirectEntry, ...]:
        """Entries whose source is in canonical form (no mirror variants)."""
        return tuple(e for e in self._entries if not e.mirrored)

    def __getitem__(self, source: str) -> str:
        return self._lookup[source]

    def __iter__(self) -> Iterator[str]:
        return iter(self._lookup)

    def __len__(self) -> int:
        return len(self._lookup)

    def __repr__(self) -> str:
        return (
            f"RedirectTable({len(self)} entries, "
            f"trailing_slash={self._policy.trailing_slash.value})"
        )


# --- Resolution ---


def follow(table: RedirectTable, source: str) -> str:
    """
    Walk the redirect chain starting at a normalized source.

    Returns the final destination.

    Raises:
        RedirectCycleError: a hop revisits a path already seen.
        RedirectChainTooLongError: the chain needs more than ``max_hops`` hops.
    """
    normalize = table.policy.normalize
    visited = [source]
    current = normalize(table[source])

    for _ in range(table.max_hops - 1):
        if current in visited:
            raise RedirectCycleError((*visited, current))
        nxt = table.get(current)
        if nxt is None:
            return current
        visited.append(current)
        current = normalize(nxt)

    if current in visited:
        raise RedirectCycleError((*visited, current))
    if current in table:
        nxt = normalize(table[current])
        if nxt in visited:
            raise RedirectCycleError((*visited, current, nxt))
        raise RedirectChainTooLongError((*visited, current, nxt), table.max_hops)
    return current


def resolve(table: RedirectTable, path: str) -> ResolutionResult:
    """
    Resolve an inbound path against a table.

    Only the path part takes part in matching; the query string and fragment
    are ignored here.
    """
    bare, _ = split_path(path)
    normalized = table.policy.normalize(bare)
    if normalized not in table:
        return NO_REDIRECT
    return Redirect(destination=follow(table, normalized), permanent=True)


class RedirectResolver:
    """Stateless resolver over a published table."""

    def __init__(self, table: RedirectTable) -> None:
        self._table = table

    @property
    def table(self) -> RedirectTable:
        return self._table

    def resolve(self, path: str) -> ResolutionResult:
        return resolve(self._table, path)


# --- Table Builder ---


class TableBuilder:
    """
    Accumulates rules into table entries.

    ``add`` raises on the first problem in a rule; callers that want every
    problem catch per rule and keep going.
    """

    def __init__(
        self,
        policy: CanonicalPathPolicy = DEFAULT_POLICY,
        page_routes: Iterable[str] | None = None,
        max_hops: int = DEFAULT_MAX_HOPS,
    ) -> None:
        if max_hops < 1:
            raise ValueError("max_hops must be at least 1")
        self._policy = policy
        self._max_hops = max_hops
        self._pages: frozenset[str] | None = None
        if page_routes is not None:
            self._pages = frozenset(policy.normalize(split_path(p)[0]) for p in page_routes)
        self._rows: dict[str, RedirectEntry] = {}

    @property
    def pages(self) -> frozenset[str] | None:
        return self._pages

    def add(self, rule: RedirectRule) -> None:
        validate_rule(rule)
        destination = self._policy.normalize(rule.destination)

        for raw_source in rule.sources:
            source = self._policy.normalize(raw_source)
            if source == destination:
                raise SelfRedirectError(source)
            if self._pages is not None and source in self._pages:
                raise RedirectShadowsPageError(source)

            self._put(RedirectEntry(source=source, destination=destination))

            mirror = toggle_trailing_slash(source)
            if mirror != source:
                self._put(RedirectEntry(source=mirror, destination=destination, mirrored=True))

    def _put(self, entry: RedirectEntry) -> None:
        existing = self._rows.get(entry.source)
        if existing is None:
            self._rows[entry.source] = entry
            return
        if existing.destination != entry.destination:
            raise ConflictingRedirectError(entry.source, existing.destination, entry.destination)
        logger.debug("Duplicate redirect dropped: %s -> %s", entry.source, entry.destination)

    def table(self) -> RedirectTable:
        return RedirectTable(self._rows.values(), self._policy, self._max_hops)


def check_destination(
    table: RedirectTable,
    entry: RedirectEntry,
    pages: frozenset[str],
    mode: MissingDestinationMode,
) -> None:
    """Report a redirect whose final destination is not a known page."""
    if mode == "ignore":
        return
    final = follow(table, entry.source)
    if final in pages:
        return
    if mode == "error":
        raise MissingDestinationError(entry.source, final)
    logger.warning("Redirect %s points to %s, which is not a known page", entry.source, final)


def iter_table_errors(
    table: RedirectTable,
    pages: frozenset[str] | None = None,
    on_missing_destination: MissingDestinationMode = "warn",
) -> Iterator[RedirectError]:
    """Yield every chain, cycle and missing-destination problem in a table."""
    for entry in table.canonical_entries():
        try:
            follow(table, entry.source)
            if pages is not None:
                check_destination(table, entry, pages, on_missing_destination)
        except RedirectError as e:
            yield e


def build_table(
    rules: Iterable[RedirectRule],
    policy: CanonicalPathPolicy = DEFAULT_POLICY,
    *,
    page_routes: Iterable[str] | None = None,
    max_hops: int = DEFAULT_MAX_HOPS,
    on_missing_destination: MissingDestinationMode = "warn",
) -> RedirectTable:
    """
    Build and validate a redirect table.

    Args:
        rules: Declared redirect rules.
        policy: Trailing-slash policy applied to both sides of every rule.
        page_routes: Routes the site build emits. Enables the shadow and
            missing-destination checks.
        max_hops: Longest chain a lookup may follow.
        on_missing_destination: How to treat redirects ending on a non-page.

    Returns:
        The finished table.

    Raises:
        RedirectError: the first problem found. The build must stop.
    """
    builder = TableBuilder(policy, page_routes, max_hops)
    for rule in rules:
        builder.add(rule)

    table = builder.table()
    for error in iter_table_errors(table, builder.pages, on_missing_destination):
        raise error

    logger.debug("Built redirect table with %d entries", len(table))
    return table
