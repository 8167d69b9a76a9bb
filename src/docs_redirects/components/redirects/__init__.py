"""
Redirects component - redirect rules, table construction and resolution.
"""

from ._impl import (
    DEFAULT_MAX_HOPS,
    MissingDestinationMode,
    RedirectResolver,
    RedirectTable,
    TableBuilder,
    build_table,
    follow,
    iter_table_errors,
    resolve,
    validate_path,
    validate_rule,
)
from .models import (
    NO_REDIRECT,
    ConflictingRedirectError,
    EmptySourceError,
    InvalidPathError,
    MissingDestinationError,
    NoRedirect,
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

__all__ = [
    # Table construction and lookup
    "DEFAULT_MAX_HOPS",
    "MissingDestinationMode",
    "RedirectResolver",
    "RedirectTable",
    "TableBuilder",
    "build_table",
    "follow",
    "iter_table_errors",
    "resolve",
    "validate_path",
    "validate_rule",
    # Models
    "NO_REDIRECT",
    "NoRedirect",
    "Redirect",
    "RedirectEntry",
    "RedirectRule",
    "ResolutionResult",
    # Errors
    "ConflictingRedirectError",
    "EmptySourceError",
    "InvalidPathError",
    "MissingDestinationError",
    "RedirectChainTooLongError",
    "RedirectCycleError",
    "RedirectError",
    "RedirectShadowsPageError",
    "SelfRedirectError",
]
