"""Implicit dependency engine — find classes used from undeclared artifacts."""

from implicit_deps.engine.checker import ImplicitDependencyChecker
from implicit_deps.engine.index import ArtifactIndex
from implicit_deps.engine.models import (
    Artifact,
    ArtifactSource,
    CheckResult,
    ExternalArtifact,
    ModuleCoordinate,
    ProjectArtifact,
    ResolvedDependency,
)
from implicit_deps.engine.reconcile import (
    ReconcileOptions,
    check,
    find_undeclared,
    render_suggestion,
)

__all__ = [
    "Artifact",
    "ArtifactIndex",
    "ArtifactSource",
    "CheckResult",
    "ExternalArtifact",
    "ImplicitDependencyChecker",
    "ModuleCoordinate",
    "ProjectArtifact",
    "ReconcileOptions",
    "ResolvedDependency",
    "check",
    "find_undeclared",
    "render_suggestion",
]
