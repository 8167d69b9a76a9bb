"""
Redirects component models.

Rules are declared once at configuration time and are immutable thereafter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

# --- Errors ---


class RedirectError(Exception):
    """Base class for redirect table validation failures."""

    code: str = "redirect_error"


class EmptySourceError(RedirectError):
    """A rule declares no source paths."""

    code = "empty_source"

    def __init__(self, destination: str) -> None:
        self.destination = destination
        super().__init__(f"Redirect to '{destination}' declares no source paths")


class SelfRedirectError(RedirectError):
    """A rule redirects a path to itself."""

    code = "self_redirect"

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Redirect cannot point to itself: '{path}'")


class InvalidPathError(RedirectError):
    """A source or destination is not a plain root-relative path."""

    code = "invalid_path"

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid redirect path '{path}': {reason}")


class ConflictingRedirectError(RedirectError):
    """One source path maps to two different destinations."""

    code = "conflicting_redirect"

    def __init__(self, source: str, first: str, second: str) -> None:
        self.source = source
        self.first = first
        self.second = second
        super().__init__(
            f"Source '{source}' redirects to both '{first}' and '{second}'"
        )


class RedirectShadowsPageError(RedirectError):
    """A redirect source collides with a real page."""

    code = "shadows_page"

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"Redirect source '{source}' shadows an existing page")


class RedirectChainTooLongError(RedirectError):
    """Resolving a source needs more hops than allowed."""

    code = "chain_too_long"

    def __init__(self, chain: tuple[str, ...], max_hops: int) -> None:
        self.chain = chain
        self.max_hops = max_hops
        super().__init__(
            f"Redirect chain exceeds {max_hops} hops: {' -> '.join(chain)}"
        )


class RedirectCycleError(RedirectError):
    """Resolving a source revisits a path."""

    code = "redirect_cycle"

    def __init__(self, chain: tuple[str, ...]) -> None:
        self.chain = chain
        super().__init__(f"Redirect cycle: {' -> '.join(chain)}")


class MissingDestinationError(RedirectError):
    """A redirect ends on a path that is not a page."""

    code = "missing_destination"

    def __init__(self, source: str, destination: str) -> None:
        self.source = source
        self.destination = destination
        super().__init__(
            f"Redirect '{source}' points to '{destination}', which is not a page"
        )


# --- Rule Model ---


@dataclass(frozen=True)
class RedirectRule:
    """Mapping from one or more legacy paths to one canonical path."""

    sources: tuple[str, ...]
    destination: str

    @classmethod
    def of(cls, sources: str | list[str] | tuple[str, ...], destination: str) -> RedirectRule:
        """Build a rule from a single source or a sequence of sources."""
        if isinstance(sources, str):
            return cls(sources=(sources,), destination=destination)
        return cls(sources=tuple(sources), destination=destination)


@dataclass(frozen=True)
class RedirectEntry:
    """One row of a built redirect table."""

    source: str
    destination: str
    mirrored: bool = False


# --- Resolution Results ---


@dataclass(frozen=True)
class NoRedirect:
    """The path is canonical or unknown."""

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class Redirect:
    """The path redirects to ``destination``."""

    destination: str
    permanent: bool = True

    @property
    def status_code(self) -> int:
        return 301 if self.permanent else 302


NO_REDIRECT: Final = NoRedirect()

ResolutionResult = Redirect | NoRedirect

