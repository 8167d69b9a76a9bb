"""
Emitters component - redirect stubs and host rule files from one table.
"""

from ._impl import (
    HOST_RULE_RENDERERS,
    STUB_MARKER,
    emit_host_rules,
    emit_stubs,
    host_rules,
    is_stub,
    render_stub,
    stub_path,
)
from .models import HostRule, RedirectStub, UnknownPlatformError

__all__ = [
    "HOST_RULE_RENDERERS",
    "HostRule",
    "RedirectStub",
    "STUB_MARKER",
    "UnknownPlatformError",
    "emit_host_rules",
    "emit_stubs",
    "host_rules",
    "is_stub",
    "render_stub",
    "stub_path",
]
