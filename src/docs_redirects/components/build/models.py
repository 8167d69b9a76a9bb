"""
Build component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from docs_redirects.components.canonical import DEFAULT_POLICY, CanonicalPathPolicy
from docs_redirects.components.redirects.models import Redirect, RedirectError, RedirectRule

if TYPE_CHECKING:
    from docs_redirects.components.redirects import MissingDestinationMode, RedirectTable


# --- Errors ---


class InvalidTargetPathError(RedirectError):
    """A host rule target path would land outside the output directory."""

    code = "invalid_target_path"

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid target path '{path}': {reason}")


# --- Problems ---


@dataclass(frozen=True)
class BuildProblem:
    """A single problem found while checking a rule set."""

    code: str
    message: str


# --- Input Models ---


@dataclass(frozen=True)
class HostTarget:
    """A host rule file to write."""

    platform: str
    path: str


@dataclass(frozen=True)
class BuildRedirectsInput:
    """Input for building, checking and emitting a redirect table."""

    rules: tuple[RedirectRule, ...]
    policy: CanonicalPathPolicy = DEFAULT_POLICY
    max_hops: int = 2
    on_missing_destination: MissingDestinationMode = "warn"
    base_url: str = ""
    targets: tuple[HostTarget, ...] = ()
    write_stubs: bool = True


@dataclass(frozen=True)
class ResolvePathInput:
    """Input for resolving one path."""

    path: str


# --- Output Models ---


@dataclass(frozen=True)
class CheckOutput:
    """Every problem found in a rule set."""

    entry_count: int = 0
    problems: list[BuildProblem] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.problems


@dataclass(frozen=True)
class BuildRedirectsOutput:
    """Output of a build: the published table and the files written."""

    table: RedirectTable | None
    written: list[Path] = field(default_factory=list)
    errors: list[BuildProblem] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ResolveOutput:
    """Output for resolve operation."""

    path: str
    redirect: Redirect | None = None

    @property
    def target(self) -> str | None:
        return self.redirect.destination if self.redirect else None
