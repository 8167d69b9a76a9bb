"""
Emitters component models.
"""

from __future__ import annotations

from dataclasses import dataclass

from docs_redirects.components.redirects.models import RedirectError


class UnknownPlatformError(RedirectError):
    """No host-rule emitter is registered for a platform."""

    code = "unknown_platform"

    def __init__(self, platform: str) -> None:
        self.platform = platform
        super().__init__(f"Unknown hosting platform: '{platform}'")


@dataclass(frozen=True)
class HostRule:
    """One declarative redirect rule for a hosting platform."""

    source: str
    destination: str
    permanent: bool = True

    @property
    def status_code(self) -> int:
        return 301 if self.permanent else 302

    def as_dict(self) -> dict[str, str | bool]:
        return {
            "source": self.source,
            "destination": self.destination,
            "permanent": self.permanent,
        }


@dataclass(frozen=True)
class RedirectStub:
    """Client-side redirect page for one legacy path."""

    path: str  # output file, relative to the build directory
    destination: str
    html: str
