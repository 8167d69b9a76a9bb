"""
Build component - validate redirect rules and emit deployment artifacts.
"""

from .component import run_build, run_check, run_resolve, validate_target_path
from .models import (
    BuildProblem,
    BuildRedirectsInput,
    BuildRedirectsOutput,
    CheckOutput,
    HostTarget,
    InvalidTargetPathError,
    ResolveOutput,
    ResolvePathInput,
)
from .ports import ArtifactWriterPort, RouteSourcePort

__all__ = [
    # Entry points
    "run_build",
    "run_check",
    "run_resolve",
    "validate_target_path",
    # Input models
    "BuildRedirectsInput",
    "HostTarget",
    "ResolvePathInput",
    # Errors
    "InvalidTargetPathError",
    # Output models
    "BuildProblem",
    "BuildRedirectsOutput",
    "CheckOutput",
    "ResolveOutput",
    # Ports
    "ArtifactWriterPort",
    "RouteSourcePort",
]
