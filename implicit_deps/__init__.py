"""implicit-deps: flag classes used from dependencies that were never declared."""

__version__ = "0.1.0"

from implicit_deps.config import CheckConfig, load_config
from implicit_deps.engine import (
    Artifact,
    ArtifactIndex,
    ExternalArtifact,
    ImplicitDependencyChecker,
    ModuleCoordinate,
    ProjectArtifact,
    ReconcileOptions,
    check,
    find_undeclared,
)
from implicit_deps.exceptions import (
    ConfigError,
    ImplicitDependencyViolation,
    ImplicitDepsError,
    ReferenceExtractionError,
    ResolutionError,
)

__all__ = [
    "Artifact",
    "ArtifactIndex",
    "CheckConfig",
    "ConfigError",
    "ExternalArtifact",
    "ImplicitDependencyChecker",
    "ImplicitDependencyViolation",
    "ImplicitDepsError",
    "ModuleCoordinate",
    "ProjectArtifact",
    "ReconcileOptions",
    "ReferenceExtractionError",
    "ResolutionError",
    "check",
    "find_undeclared",
    "load_config",
]
